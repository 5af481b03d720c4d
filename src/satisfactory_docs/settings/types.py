"""
Configuration type definitions and exceptions for satisfactory-docs.
"""

from dataclasses import dataclass, field
from typing import List

from ..errors import DocsParserError


class ConfigError(DocsParserError):
    """Raised when configuration is invalid or cannot be loaded."""
    pass


@dataclass
class ValidationResult:
    """Result of configuration validation."""
    is_valid: bool
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)
