"""
Logging configuration for satisfactory-docs.

Console and CSV output both carry the pipeline stage that emitted a record
(``resolver``, ``items``, ``slugs``...), derived from the logger name. The CSV
file also has a category column, filled from the ``category`` extra that
diagnostics and sorting attach to their records.
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional

from ..settings import LoggingSettings

PACKAGE_LOGGER = "satisfactory_docs"

# Subpackages whose next name part is the stage itself
_STAGE_GROUPS = ("docs", "parsers", "settings", "utils")


def pipeline_stage(logger_name: str) -> str:
    """Return the short stage name for a logger.

    ``satisfactory_docs.docs.resolver.TopLevelResolver`` -> ``resolver``,
    ``satisfactory_docs.parsers.items`` -> ``items``,
    ``satisfactory_docs.service.DocsParser`` -> ``service``.
    Loggers outside the package keep their full name.
    """
    parts = logger_name.split(".")
    if parts[0] != PACKAGE_LOGGER:
        return logger_name
    parts = parts[1:]
    if not parts:
        return "main"
    if parts[0] in _STAGE_GROUPS and len(parts) > 1:
        return parts[1]
    return parts[0]


class StageFormatter(logging.Formatter):
    """Formatter that exposes ``%(stage)s`` to the format string."""

    def format(self, record: logging.LogRecord) -> str:
        record.stage = pipeline_stage(record.name)
        return super().format(record)


class ColoredFormatter(StageFormatter):
    """Console formatter: colored level name, and whole line for problems."""

    # ANSI color codes
    COLORS = {
        "DEBUG": "\033[36m",  # Cyan
        "INFO": "\033[32m",  # Green
        "WARNING": "\033[33m",  # Yellow
        "ERROR": "\033[31m",  # Red
        "CRITICAL": "\033[35m",  # Magenta
        "RESET": "\033[0m",  # Reset
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, self.COLORS["RESET"])
        reset = self.COLORS["RESET"]

        formatted = super().format(record)

        # Warnings and errors are colored in full
        if record.levelno >= logging.WARNING:
            return f"{color}{formatted}{reset}"

        if record.levelname in formatted:
            formatted = formatted.replace(
                record.levelname, f"{color}{record.levelname}{reset}", 1
            )
        return formatted


class CSVFormatter(logging.Formatter):
    """CSV-safe formatter for file logging.

    Columns: timestamp; level; elapsed; stage; category; line; message.
    """

    @staticmethod
    def _quote(value: str) -> str:
        return '"' + value.replace('"', '""') + '"'

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, self.datefmt)
        level = record.levelname.ljust(8)
        elapsed = f"{int(record.relativeCreated)} ms"
        stage = pipeline_stage(record.name)
        category = getattr(record, "category", None) or ""
        message = record.getMessage()

        return ";".join(
            [
                self._quote(timestamp),
                level,
                self._quote(elapsed),
                self._quote(stage),
                self._quote(str(category)),
                self._quote(str(record.lineno)),
                self._quote(message),
            ]
        )


def setup_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Setup package logging with console and file handlers.

    Only the package logger is configured, so embedding applications keep
    control of the root logger.

    Args:
        settings: LoggingSettings instance; defaults are used when omitted
    """
    if settings is None:
        settings = LoggingSettings()

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(logging.DEBUG)
    package_logger.propagate = False

    # Clear any existing handlers (setup_logging may be called more than once)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    if settings.console_logging:
        fmt = "%(asctime)s : %(levelname)-8s : %(stage)-10s : %(message)s"
        if settings.console_use_colors:
            console_formatter: logging.Formatter = ColoredFormatter(fmt=fmt, datefmt="%H:%M:%S")
        else:
            console_formatter = StageFormatter(fmt=fmt, datefmt="%H:%M:%S")

        console_handler = logging.StreamHandler()
        console_handler.setLevel(
            getattr(logging, settings.console_log_level.upper(), logging.INFO)
        )
        console_handler.setFormatter(console_formatter)
        package_logger.addHandler(console_handler)

    log_path = None
    if settings.file_logging:
        try:
            log_path = Path(settings.log_file_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                log_path,
                maxBytes=10 * 1024 * 1024,  # 10MB
                backupCount=5,
                encoding="utf-8",
            )
            file_handler.setLevel(logging.DEBUG)  # File always captures DEBUG
            file_handler.setFormatter(CSVFormatter(datefmt="%Y-%m-%d %H:%M:%S"))
            package_logger.addHandler(file_handler)
        except OSError as e:
            # Continue with console logging only
            package_logger.warning(f"Could not setup file logging: {e}")
            log_path = None

    if not package_logger.handlers:
        package_logger.addHandler(logging.NullHandler())

    logger = logging.getLogger(__name__)
    logger.debug("Logging initialized")
    if settings.console_logging:
        logger.debug(
            f"Console logging: {settings.console_log_level} (colors: {settings.console_use_colors})"
        )
    if log_path:
        logger.debug(f"File logging: DEBUG at {log_path.absolute()}")
