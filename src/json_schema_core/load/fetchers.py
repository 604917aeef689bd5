"""Default fetchers for the ``file``, ``http``/``https`` and ``resource`` schemes.

A fetcher turns an absolute URI into raw bytes and raises ``FetchError``
when it cannot; parsing is the loader's job. Any object with a matching
``fetch`` method can be registered instead (see ``protocols.Fetcher``).

``resource:`` URIs name data files shipped inside an importable package:
``resource:/<package>/<path inside the package>``, for instance
``resource:/json_schema_core/schemas/example.json``.
"""

from __future__ import annotations

import logging
import threading
from importlib import resources
from pathlib import Path
from urllib.request import url2pathname

import httpx
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_random_exponential,
)

from json_schema_core.exceptions import FetchError
from json_schema_core.messages import CORE_BUNDLE
from json_schema_core.ref import JsonRef
from json_schema_core.report import LogLevel, ProcessingMessage

__all__ = ["FileFetcher", "HttpFetcher", "ResourceFetcher", "fetch_error"]

logger = logging.getLogger(__name__)


def fetch_error(uri: str, exc: BaseException | None = None) -> FetchError:
    """Build the ``FetchError`` reported when ``uri`` cannot be fetched."""
    message = (
        ProcessingMessage()
        .set_log_level(LogLevel.ERROR)
        .set_message(CORE_BUNDLE.get_message("load.fetchFailure"))
        .put_argument("uri", uri)
    )
    if exc is not None:
        message.put("exceptionClass", type(exc).__name__)
        message.put("exceptionMessage", str(exc))
    return FetchError(message)


class FileFetcher:
    """Reads ``file:`` URIs from the local filesystem."""

    def fetch(self, uri: str) -> bytes:
        path = Path(url2pathname(JsonRef.parse(uri).path))
        logger.debug("reading %s", path)
        try:
            return path.read_bytes()
        except OSError as exc:
            raise fetch_error(uri, exc) from exc

    def __repr__(self) -> str:
        return "FileFetcher()"


def _is_transient(exc: BaseException) -> bool:
    if isinstance(exc, httpx.TransportError):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        status = exc.response.status_code
        return status == 429 or status >= 500
    return False


class HttpFetcher:
    """Fetches ``http:`` and ``https:`` URIs with ``httpx``.

    Transport errors, HTTP 429 and 5xx responses are retried with jittered
    exponential backoff via ``tenacity``; other 4xx responses fail at once.
    The ``httpx.Client`` is created on first use unless one is given.

    Args:
        client: Client to use (tests pass one built on ``httpx.MockTransport``).
            A client given here is not closed by ``close()``.
        timeout: Timeout in seconds for the default client.
        max_attempts: Total attempts per URI, first one included.
        backoff: Backoff multiplier in seconds; ``0`` disables waiting.
    """

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        timeout: float = 10.0,
        max_attempts: int = 3,
        backoff: float = 0.5,
    ) -> None:
        self._client = client
        self._owns_client = client is None
        self._timeout = timeout
        self._lock = threading.Lock()

        _retry = retry(
            retry=retry_if_exception(_is_transient),
            wait=wait_random_exponential(multiplier=backoff, max=backoff * 20),
            stop=stop_after_attempt(max_attempts),
            reraise=True,
        )
        self._get = _retry(self._raw_get)

    def fetch(self, uri: str) -> bytes:
        logger.debug("fetching %s", uri)
        try:
            response = self._get(uri)
        except httpx.HTTPError as exc:
            raise fetch_error(uri, exc) from exc
        return response.content

    def close(self) -> None:
        """Close the client this fetcher created, if any."""
        with self._lock:
            if self._owns_client and self._client is not None:
                self._client.close()
                self._client = None

    def _raw_get(self, uri: str) -> httpx.Response:
        response = self._http().get(uri)
        response.raise_for_status()
        return response

    def _http(self) -> httpx.Client:
        with self._lock:
            if self._client is None:
                self._client = httpx.Client(timeout=self._timeout, follow_redirects=True)
            return self._client

    def __repr__(self) -> str:
        return f"HttpFetcher(timeout={self._timeout!r})"


class ResourceFetcher:
    """Reads ``resource:/<package>/<path>`` URIs from installed packages."""

    def fetch(self, uri: str) -> bytes:
        package, _, name = JsonRef.parse(uri).path.lstrip("/").partition("/")
        if not package or not name:
            raise fetch_error(uri)
        logger.debug("reading resource %s from package %s", name, package)
        try:
            return resources.files(package).joinpath(name).read_bytes()
        except (ModuleNotFoundError, OSError) as exc:
            raise fetch_error(uri, exc) from exc

    def __repr__(self) -> str:
        return "ResourceFetcher()"
