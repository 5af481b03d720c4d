"""
Logging-related settings for satisfactory-docs.
"""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

logger = logging.getLogger(__name__)

# Default path for the CSV log file
LOG_FILE_PATH = "logs/satisfactory_docs.csv"

VALID_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def _as_bool(value: Any, default: bool = False) -> bool:
    """Lenient boolean conversion for values read from config files."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.lower() in ("true", "1", "yes")
    return bool(value) if value is not None else default


@dataclass
class LoggingSettings:
    """Console and file logging options."""

    console_logging: bool = True
    console_log_level: str = "INFO"
    console_use_colors: bool = True
    file_logging: bool = False
    log_file_path: str = LOG_FILE_PATH

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "LoggingSettings":
        """Create LoggingSettings from a config mapping.

        Unknown keys are ignored; an invalid level keeps the default and is
        reported by ``validate_levels``.
        """
        defaults = cls()
        return cls(
            console_logging=_as_bool(data.get("console_enabled"), defaults.console_logging),
            console_log_level=str(data.get("console_level", defaults.console_log_level)).upper(),
            console_use_colors=_as_bool(data.get("console_use_colors"), defaults.console_use_colors),
            file_logging=_as_bool(data.get("file_enabled"), defaults.file_logging),
            log_file_path=str(data.get("file_path", defaults.log_file_path)),
        )

    @property
    def log_file_absolute_path(self) -> Path:
        """Get absolute path to log file."""
        return Path(self.log_file_path).resolve()

    def validate_levels(self) -> list[str]:
        """Return error messages for unsupported level names."""
        if self.console_log_level.upper() not in VALID_LEVELS:
            return [f"Invalid console log level: {self.console_log_level}"]
        return []
