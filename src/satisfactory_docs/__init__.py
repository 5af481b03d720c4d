"""
satisfactory-docs: normalizer for the factory game's Docs.json catalog dump.

Turns the raw dump into per-category entity mappings (items, resources,
buildables, recipes, schematics) keyed by class name, with URL-safe slugs
and sorted variants.
"""

__version__ = "0.1.0"

from .errors import (
    DecodeError,
    DocsParserError,
    DuplicateClassError,
    MalformedInputError,
    MissingFieldError,
    MissingRequiredClassError,
    SortInconsistencyError,
    UnrecognizedClassError,
)
from .parsers import CategoryParsers
from .service import DocsParser, OutputDocument, parse_docs
from .settings import ConfigError, ParserSettings
from .utils.logging_config import setup_logging

__all__ = [
    # Pipeline
    "parse_docs",
    "DocsParser",
    "OutputDocument",
    "CategoryParsers",
    # Settings
    "ParserSettings",
    # Logging
    "setup_logging",
    # Errors
    "DocsParserError",
    "DecodeError",
    "MalformedInputError",
    "MissingFieldError",
    "UnrecognizedClassError",
    "MissingRequiredClassError",
    "SortInconsistencyError",
    "DuplicateClassError",
    "ConfigError",
]
