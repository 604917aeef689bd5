"""Load subpackage: from URIs to schema trees.

Re-exports:
- SchemaLoader: fetch, parse, build and cache trees
- LoadingConfiguration / LoadingConfigurationBuilder: loader settings
- URITranslator, URITranslatorConfiguration(+Builder): URI rewriting
- ParserFeature, parse_json: JSON parsing options
- FileFetcher, HttpFetcher, ResourceFetcher: default fetchers
- Dereferencing: kind of tree built (re-exported from ``tree``)
"""

from json_schema_core.load.config import LoadingConfiguration, LoadingConfigurationBuilder
from json_schema_core.load.fetchers import FileFetcher, HttpFetcher, ResourceFetcher
from json_schema_core.load.loader import SchemaLoader
from json_schema_core.load.parser import ParserFeature, parse_json
from json_schema_core.load.translator import (
    URITranslator,
    URITranslatorConfiguration,
    URITranslatorConfigurationBuilder,
)
from json_schema_core.tree import Dereferencing

__all__ = [
    "Dereferencing",
    "FileFetcher",
    "HttpFetcher",
    "LoadingConfiguration",
    "LoadingConfigurationBuilder",
    "ParserFeature",
    "ResourceFetcher",
    "SchemaLoader",
    "URITranslator",
    "URITranslatorConfiguration",
    "URITranslatorConfigurationBuilder",
    "parse_json",
]
