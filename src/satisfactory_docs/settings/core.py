"""
Core settings management for satisfactory-docs.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, ClassVar, Dict, Mapping, Tuple, Union

import orjson

from .logging import LoggingSettings, _as_bool
from .types import ConfigError, ValidationResult
from .validation import SettingsValidator

logger = logging.getLogger(__name__)

DEFAULT_ENCODINGS: Tuple[str, ...] = ("utf-16", "utf-8-sig")

# Captures the short class name from e.g.
# /Script/CoreUObject.Class'/Script/FactoryGame.FGItemDescriptor'
DEFAULT_NATIVE_CLASS_PATTERN = r"FactoryGame\.(.+)'$"

DEFAULT_SORT_KEYS: Dict[str, str] = {
    "items": "slug",
    "resources": "item_class",
    "buildables": "slug",
    "productionRecipes": "slug",
    "buildableRecipes": "slug",
    "customizerRecipes": "slug",
    "schematics": "slug",
}


@dataclass
class ParserSettings:
    """
    Configuration for one pipeline run.

    Plain in-memory settings: nothing is persisted between runs. Use
    ``from_dict`` or ``load`` to build settings from a JSON config file.
    """

    CATEGORIES: ClassVar[Tuple[str, ...]] = tuple(DEFAULT_SORT_KEYS)

    encodings: Tuple[str, ...] = DEFAULT_ENCODINGS
    native_class_pattern: str = DEFAULT_NATIVE_CLASS_PATTERN
    sort_keys: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_SORT_KEYS))
    # Duplicate top-level classes overwrite earlier ones unless strict
    strict_duplicates: bool = False
    logging: LoggingSettings = field(default_factory=LoggingSettings)

    def __post_init__(self):
        self._validator = SettingsValidator(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParserSettings":
        """Create settings from a config mapping.

        Args:
            data: Mapping with optional keys ``encodings``,
                ``native_class_pattern``, ``sort_keys``, ``strict_duplicates``
                and ``logging``.

        Returns:
            ParserSettings with defaults for missing keys
        """
        if not isinstance(data, Mapping):
            raise ConfigError("Config root must be an object")

        sort_keys = dict(DEFAULT_SORT_KEYS)
        raw_sort_keys = data.get("sort_keys", {})
        if not isinstance(raw_sort_keys, Mapping):
            raise ConfigError("'sort_keys' must be an object")
        sort_keys.update({str(k): str(v) for k, v in raw_sort_keys.items()})

        encodings = data.get("encodings", DEFAULT_ENCODINGS)
        if isinstance(encodings, str):
            encodings = (encodings,)
        elif not isinstance(encodings, (list, tuple)):
            raise ConfigError("'encodings' must be a string or an array")

        raw_logging = data.get("logging", {})
        if not isinstance(raw_logging, Mapping):
            raise ConfigError("'logging' must be an object")

        return cls(
            encodings=tuple(str(e) for e in encodings),
            native_class_pattern=str(
                data.get("native_class_pattern", DEFAULT_NATIVE_CLASS_PATTERN)
            ),
            sort_keys=sort_keys,
            strict_duplicates=_as_bool(data.get("strict_duplicates"), False),
            logging=LoggingSettings.from_dict(raw_logging),
        )

    @classmethod
    def load(cls, path: Union[str, Path]) -> "ParserSettings":
        """Load settings from a JSON config file."""
        config_path = Path(path)
        try:
            with config_path.open("rb") as f:  # orjson works with bytes
                data = orjson.loads(f.read())
        except OSError as e:
            raise ConfigError(f"Could not read config file {config_path}: {e}") from e
        except orjson.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in config file {config_path}: {e}") from e

        logger.debug(f"Settings loaded from {config_path}")
        return cls.from_dict(data)

    def sort_key_for(self, category: str) -> str:
        """Return the record field used to order the given category."""
        return self.sort_keys.get(category, "slug")

    def validate(self) -> ValidationResult:
        """Validate current configuration."""
        return self._validator.validate()

    def ensure_valid(self) -> None:
        """Raise ConfigError if validation fails; log warnings otherwise."""
        result = self.validate()
        for warning in result.warnings:
            logger.warning(f"Configuration warning: {warning}")
        if not result.is_valid:
            raise ConfigError("; ".join(result.errors))
