"""Unit tests for settings and logging configuration."""

import logging

import orjson
import pytest

from satisfactory_docs.settings import (
    DEFAULT_SORT_KEYS,
    ConfigError,
    LoggingSettings,
    ParserSettings,
)
from satisfactory_docs.docs.diagnostics import Diagnostics, WarningKind
from satisfactory_docs.utils.logging_config import (
    ColoredFormatter,
    CSVFormatter,
    pipeline_stage,
    setup_logging,
)


class TestParserSettings:
    """Test settings defaults, loading and validation."""

    def test_defaults_are_valid(self) -> None:
        """Test default settings pass validation."""
        settings = ParserSettings()
        result = settings.validate()
        assert result.is_valid
        assert result.errors == []
        assert settings.sort_key_for("resources") == "item_class"
        assert settings.sort_key_for("schematics") == "slug"

    def test_unlisted_category_sorts_by_slug(self) -> None:
        """Test categories without a configured key fall back to slug."""
        assert ParserSettings(sort_keys={}).sort_key_for("items") == "slug"

    def test_from_dict(self) -> None:
        """Test config keys override defaults, missing keys keep them."""
        settings = ParserSettings.from_dict(
            {
                "encodings": "utf-8",
                "sort_keys": {"items": "name"},
                "strict_duplicates": True,
                "logging": {"console_level": "debug", "file_enabled": "true"},
            }
        )
        assert settings.encodings == ("utf-8",)
        assert settings.sort_keys["items"] == "name"
        assert settings.sort_keys["resources"] == DEFAULT_SORT_KEYS["resources"]
        assert settings.strict_duplicates is True
        assert settings.logging.console_log_level == "DEBUG"
        assert settings.logging.file_logging is True
        assert settings.logging.console_logging is True

    @pytest.mark.parametrize(
        "data",
        [[], {"sort_keys": []}, {"logging": "INFO"}, {"encodings": 5}, {"encodings": {"utf-8": 1}}],
    )
    def test_from_dict_bad_shape(self, data) -> None:
        """Test config values of the wrong type are rejected."""
        with pytest.raises(ConfigError):
            ParserSettings.from_dict(data)

    @pytest.mark.parametrize(
        "value,expected",
        [("false", False), ("False", False), ("0", False), ("true", True), ("yes", True), (None, False)],
    )
    def test_from_dict_strict_duplicates_strings(self, value, expected) -> None:
        """Test string booleans in a config file are read by their meaning."""
        settings = ParserSettings.from_dict({"strict_duplicates": value})
        assert settings.strict_duplicates is expected

    def test_from_dict_encodings_array(self) -> None:
        """Test an encodings array keeps its order."""
        settings = ParserSettings.from_dict({"encodings": ["utf-8", "latin-1"]})
        assert settings.encodings == ("utf-8", "latin-1")

    def test_load(self, tmp_path) -> None:
        """Test loading a JSON config file."""
        path = tmp_path / "config.json"
        path.write_bytes(orjson.dumps({"sort_keys": {"buildables": "name"}}))
        settings = ParserSettings.load(path)
        assert settings.sort_key_for("buildables") == "name"

    def test_load_missing_file(self, tmp_path) -> None:
        """Test an unreadable config file raises ConfigError."""
        with pytest.raises(ConfigError):
            ParserSettings.load(tmp_path / "missing.json")

    def test_load_invalid_json(self, tmp_path) -> None:
        """Test a config file with invalid JSON raises ConfigError."""
        path = tmp_path / "config.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ConfigError):
            ParserSettings.load(path)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"encodings": ()},
            {"encodings": ("no-such-codec",)},
            {"native_class_pattern": "("},
            {"native_class_pattern": "FactoryGame"},
            {"sort_keys": {"items": ""}},
            {"logging": LoggingSettings(console_log_level="LOUD")},
        ],
    )
    def test_invalid(self, kwargs) -> None:
        """Test each invalid option is reported as an error."""
        settings = ParserSettings(**kwargs)
        assert not settings.validate().is_valid
        with pytest.raises(ConfigError):
            settings.ensure_valid()

    def test_unknown_category_is_a_warning(self) -> None:
        """Test a sort key for an unknown category only warns."""
        result = ParserSettings(sort_keys={"vehicles": "slug"}).validate()
        assert result.is_valid
        assert result.warnings == ["Sort key given for unknown category: vehicles"]


class TestSetupLogging:
    """Test package logging setup."""

    def test_console_handler(self) -> None:
        """Test the console handler honours the configured level."""
        setup_logging(LoggingSettings(console_log_level="WARNING", console_use_colors=False))
        package_logger = logging.getLogger("satisfactory_docs")
        assert len(package_logger.handlers) == 1
        assert package_logger.handlers[0].level == logging.WARNING
        assert package_logger.propagate is False

    def test_repeated_setup_replaces_handlers(self) -> None:
        """Test calling setup twice does not stack handlers."""
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("satisfactory_docs").handlers) == 1

    def test_file_logging(self, tmp_path) -> None:
        """Test the CSV file handler writes records."""
        log_file = tmp_path / "logs" / "run.csv"
        setup_logging(
            LoggingSettings(console_logging=False, file_logging=True, log_file_path=str(log_file))
        )
        logging.getLogger("satisfactory_docs.test").info('Parsed "items"')
        for handler in logging.getLogger("satisfactory_docs").handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert '"Parsed ""items"""' in content

    def test_no_handlers(self) -> None:
        """Test disabling every output leaves a NullHandler."""
        setup_logging(LoggingSettings(console_logging=False, file_logging=False))
        handlers = logging.getLogger("satisfactory_docs").handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_csv_formatter(self) -> None:
        """Test CSV output escapes quotes and separates fields with semicolons."""
        record = logging.LogRecord(
            "satisfactory_docs.parsers.items", logging.INFO, "items.py", 7, 'say "hi"', None, None
        )
        line = CSVFormatter().format(record)
        assert line.endswith(';"items";"";"7";"say ""hi"""')
        assert ";INFO    ;" in line

    def test_csv_category_column(self, tmp_path) -> None:
        """Test diagnostics fill the category column of the log file."""
        log_file = tmp_path / "run.csv"
        setup_logging(
            LoggingSettings(console_logging=False, file_logging=True, log_file_path=str(log_file))
        )
        Diagnostics().warn(WarningKind.INVALID_SLUG, "bad slug", category="schematics")
        for handler in logging.getLogger("satisfactory_docs").handlers:
            handler.flush()

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert ';"diagnostics";"schematics";' in lines[-1]
        assert lines[-1].endswith('"WARNING: bad slug"')

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("satisfactory_docs.docs.resolver.TopLevelResolver", "resolver"),
            ("satisfactory_docs.parsers.recipes", "recipes"),
            ("satisfactory_docs.service.DocsParser", "service"),
            ("satisfactory_docs.cli", "cli"),
            ("satisfactory_docs", "main"),
            ("other.module", "other.module"),
        ],
    )
    def test_pipeline_stage(self, name, expected) -> None:
        """Test logger names shorten to the stage that emitted them."""
        assert pipeline_stage(name) == expected

    def test_colored_formatter(self) -> None:
        """Test warnings are colored in full, info only on the level name."""
        formatter = ColoredFormatter(fmt="%(levelname)s : %(stage)s : %(message)s")
        warning = logging.LogRecord(
            "satisfactory_docs.docs.slugs.SlugValidator", logging.WARNING, "slugs.py", 1, "dup", None, None
        )
        info = logging.LogRecord(
            "satisfactory_docs.parsers.items", logging.INFO, "items.py", 1, "Parsed", None, None
        )
        assert formatter.format(warning) == "\033[33mWARNING : slugs : dup\033[0m"
        assert formatter.format(info) == "\033[32mINFO\033[0m : items : Parsed"
