"""
Settings package for satisfactory-docs.

Plain dataclass configuration with validation. Nothing is persisted:
each pipeline run receives its settings explicitly.

Usage:
    from satisfactory_docs.settings import ParserSettings

    settings = ParserSettings.load("config.json")
    result = settings.validate()
"""

from .core import ParserSettings, DEFAULT_SORT_KEYS, DEFAULT_ENCODINGS
from .logging import LoggingSettings
from .types import ConfigError, ValidationResult

__all__ = [
    "ParserSettings",
    "LoggingSettings",
    "ConfigError",
    "ValidationResult",
    "DEFAULT_SORT_KEYS",
    "DEFAULT_ENCODINGS",
]
