"""
Settings validation system for satisfactory-docs.
"""

import logging
import re
from typing import List, TYPE_CHECKING

from .types import ValidationResult

if TYPE_CHECKING:
    from .core import ParserSettings

logger = logging.getLogger(__name__)


class SettingsValidator:
    """Validates parser configuration settings."""

    def __init__(self, settings: "ParserSettings"):
        self.settings = settings

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        errors: List[str] = []
        warnings: List[str] = []

        # Validate encodings
        if not self.settings.encodings:
            errors.append("At least one input encoding is required")
        for encoding in self.settings.encodings:
            try:
                "".encode(encoding)
            except LookupError:
                errors.append(f"Unknown encoding: {encoding}")

        # Validate native class pattern (must compile and capture one group)
        try:
            pattern = re.compile(self.settings.native_class_pattern)
            if pattern.groups < 1:
                errors.append(
                    f"Native class pattern has no capture group: {self.settings.native_class_pattern}"
                )
        except re.error as e:
            errors.append(f"Invalid native class pattern: {e}")

        # Validate sort keys
        for category, key in self.settings.sort_keys.items():
            if category not in self.settings.CATEGORIES:
                warnings.append(f"Sort key given for unknown category: {category}")
            if not key:
                errors.append(f"Empty sort key for category: {category}")

        errors.extend(self.settings.logging.validate_levels())

        return ValidationResult(
            is_valid=len(errors) == 0, errors=errors, warnings=warnings
        )
