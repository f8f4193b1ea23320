"""File I/O related utilities.

This package groups small modules that read spec documents, check that
referenced resources exist, and write the report artifacts.
"""

from .source_location import SourceLocation, lookup_source, format_source
from .yaml_parser import LoadedDocument, YamlParser, load_mapping
from .resource_resolver import ResourceResolver, FileSystemResolver, StaticResolver
from .report_json import dump_json, save_json, load_json
from .template_renderer import TemplateRenderer

__all__ = [
    "SourceLocation",
    "lookup_source",
    "format_source",
    "LoadedDocument",
    "YamlParser",
    "load_mapping",
    "ResourceResolver",
    "FileSystemResolver",
    "StaticResolver",
    "dump_json",
    "save_json",
    "load_json",
    "TemplateRenderer",
]
