"""Packaging correctness verification for json-schema-core.

Tests validate:
- Base install imports cleanly and exposes the documented API
- py.typed marker is present in the wheel
- Pytest plugin entry point is registered
- Package metadata is correct

These tests inspect the built wheel and current installation rather than
creating temporary virtualenvs (faster, more reliable in CI).
"""

from __future__ import annotations

import subprocess
import zipfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).parent.parent.parent


class TestBaseInstall:
    """Verify the base install works without optional extras."""

    def test_import_json_schema_core(self):  # type: ignore[no-untyped-def]
        """Top-level import succeeds."""
        import json_schema_core

        assert hasattr(json_schema_core, "SchemaLoader")
        assert hasattr(json_schema_core, "SchemaAnalyzer")
        assert hasattr(json_schema_core, "CanonicalSchemaTree")

    def test_load_preloaded_schema(self):  # type: ignore[no-untyped-def]
        """A preloaded schema loads without touching the network."""
        from json_schema_core import LoadingConfiguration, SchemaLoader

        uri = "http://example.com/packaging.json"
        config = LoadingConfiguration.new_builder().preload_schema({"id": uri}).freeze()
        tree = SchemaLoader(config).load(uri)
        assert tree.node == {"id": uri}


class TestWheelContents:
    """Verify the built wheel contains required files."""

    @pytest.fixture(scope="class")
    def wheel_path(self) -> Path:
        """Build a fresh wheel and return its path."""
        dist_dir = PROJECT_ROOT / "dist"
        # Use poetry build since that's the project's build system
        result = subprocess.run(
            ["poetry", "build", "-f", "wheel"],
            cwd=str(PROJECT_ROOT),
            capture_output=True,
            text=True,
        )
        if result.returncode != 0:
            pytest.skip(f"poetry build failed: {result.stderr}")

        wheels = sorted(dist_dir.glob("json_schema_core-*.whl"), key=lambda p: p.stat().st_mtime)
        if not wheels:
            pytest.skip("No wheel found in dist/")
        return wheels[-1]

    def test_py_typed_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """py.typed marker must be included in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
            assert "json_schema_core/py.typed" in names, f"py.typed not in wheel: {names}"

    def test_metaschemas_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """The bundled draft meta-schemas must ship as package data."""
        with zipfile.ZipFile(wheel_path) as zf:
            names = zf.namelist()
        for name in ("draftv3.json", "draftv4.json"):
            assert f"json_schema_core/metaschemas/{name}" in names

    def test_no_pycache_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """__pycache__ directories must not be in the wheel."""
        with zipfile.ZipFile(wheel_path) as zf:
            pycache_files = [n for n in zf.namelist() if "__pycache__" in n]
            assert not pycache_files, f"__pycache__ found in wheel: {pycache_files}"

    def test_all_source_modules_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Every source module under src/ must be present in the wheel."""
        source_root = PROJECT_ROOT / "src"
        expected = sorted(
            path.relative_to(source_root).as_posix()
            for path in (source_root / "json_schema_core").rglob("*.py")
        )
        with zipfile.ZipFile(wheel_path) as zf:
            names = set(zf.namelist())
            missing = [module for module in expected if module not in names]
            assert not missing, f"Modules missing from wheel: {missing}"

    def test_metadata_in_wheel(self, wheel_path: Path):  # type: ignore[no-untyped-def]
        """Wheel metadata must include correct package info."""
        with zipfile.ZipFile(wheel_path) as zf:
            metadata_files = [n for n in zf.namelist() if n.endswith("METADATA")]
            assert metadata_files, "No METADATA found in wheel"
            metadata = zf.read(metadata_files[0]).decode()
            assert "Name: json-schema-core" in metadata
            assert "Version: 0.1.0" in metadata
            assert "Requires-Dist: cachetools" in metadata


class TestPytestPluginDiscovery:
    """Verify the pytest plugin is discoverable."""

    def test_entry_point_registered(self):  # type: ignore[no-untyped-def]
        """pytest11 entry point must be registered for json-schema-core."""
        from importlib.metadata import entry_points

        pytest11_eps = entry_points(group="pytest11")
        values = [ep.value for ep in pytest11_eps]
        assert "json_schema_core.integrations._pytest_plugin" in values, (
            f"No pytest11 entry point found for json-schema-core. "
            f"Available: {[ep.name for ep in pytest11_eps]}"
        )

    def test_fixture_available(self):  # type: ignore[no-untyped-def]
        """assert_schema_syntax fixture must be importable from plugin."""
        import importlib

        mod = importlib.import_module("json_schema_core.integrations._pytest_plugin")
        assert hasattr(mod, "assert_schema_syntax")
        assert callable(mod.assert_schema_syntax)


class TestPackageMetadata:
    """Verify package metadata completeness."""

    def test_version(self):  # type: ignore[no-untyped-def]
        """Package version must be 0.1.0."""
        import json_schema_core

        assert json_schema_core.__version__ == "0.1.0"

    def test_all_exports_resolve(self):  # type: ignore[no-untyped-def]
        """Every name in __all__ must be an attribute of the package."""
        import json_schema_core

        missing = [name for name in json_schema_core.__all__ if not hasattr(json_schema_core, name)]
        assert not missing, f"__all__ names not exported: {missing}"

    def test_core_exports(self):  # type: ignore[no-untyped-def]
        """__all__ must include the documented entry points."""
        import json_schema_core

        expected = {
            "CanonicalSchemaTree",
            "Dereferencing",
            "InlineSchemaTree",
            "JsonPointer",
            "JsonRef",
            "LoadingConfiguration",
            "ProcessorMap",
            "SchemaAnalyzer",
            "SchemaLoader",
            "SyntaxWalker",
            "TreeWalker",
        }
        missing = expected - set(json_schema_core.__all__)
        assert not missing, f"Missing: {missing}"
