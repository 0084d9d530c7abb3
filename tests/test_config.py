"""
Tests for tokengov/config and tokengov/logging_config.py

Tests cover:
- Settings defaults and bounds
- Loading from .env files and the environment
- Invalid configuration
- Logging setup and formatters
"""

import json
import logging
import logging.handlers
import os
import sys

import pytest
from pydantic import ValidationError as PydanticValidationError

from tokengov.config import DAY, AppConfig, GovernanceSettings, LoggingConfig, load_settings
from tokengov.errors import ConfigurationError
from tokengov.logging_config import (
    JSONFormatter,
    StructuredFormatter,
    setup_logging,
    setup_logging_from_config,
)


@pytest.fixture(autouse=True)
def clean_env():
    """Isolate TOKENGOV_* variables, including ones loaded from .env files."""
    saved = {k: v for k, v in os.environ.items() if k.startswith("TOKENGOV_")}
    for key in saved:
        del os.environ[key]
    yield
    for key in [k for k in os.environ if k.startswith("TOKENGOV_")]:
        del os.environ[key]
    os.environ.update(saved)


class TestGovernanceSettings:
    """Test settings model bounds."""

    def test_defaults(self):
        settings = GovernanceSettings()
        assert settings.voting_duration == 7 * DAY
        assert settings.proposal_threshold == 1000
        assert settings.quorum_threshold == 10

    @pytest.mark.parametrize("field,value", [
        ("voting_duration", DAY - 1),
        ("voting_duration", 30 * DAY + 1),
        ("proposal_threshold", 0),
        ("quorum_threshold", 0),
        ("quorum_threshold", 101),
    ])
    def test_rejects_out_of_bounds(self, field, value):
        with pytest.raises(PydanticValidationError):
            GovernanceSettings(**{field: value})

    def test_logging_level_pattern(self):
        with pytest.raises(PydanticValidationError):
            LoggingConfig(level="VERBOSE")

    def test_app_config_defaults(self):
        config = AppConfig()
        assert config.governance == GovernanceSettings()
        assert config.logging.level == "INFO"


class TestLoadSettings:
    """Test environment loading."""

    def test_defaults_without_environment(self):
        config = load_settings()
        assert config.governance == GovernanceSettings()

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("TOKENGOV_VOTING_DURATION", str(3 * DAY))
        monkeypatch.setenv("TOKENGOV_QUORUM_THRESHOLD", "25")
        monkeypatch.setenv("TOKENGOV_LOG_LEVEL", "DEBUG")

        config = load_settings()
        assert config.governance.voting_duration == 3 * DAY
        assert config.governance.quorum_threshold == 25
        assert config.governance.proposal_threshold == 1000
        assert config.logging.level == "DEBUG"

    def test_reads_env_file(self, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text(
            "TOKENGOV_PROPOSAL_THRESHOLD=5000\n"
            "TOKENGOV_LOG_JSON=true\n"
        )

        config = load_settings(env_file)
        assert config.governance.proposal_threshold == 5000
        assert config.logging.json_format is True

    def test_environment_wins_over_env_file(self, tmp_path, monkeypatch):
        env_file = tmp_path / ".env"
        env_file.write_text("TOKENGOV_QUORUM_THRESHOLD=50\n")
        monkeypatch.setenv("TOKENGOV_QUORUM_THRESHOLD", "20")

        assert load_settings(env_file).governance.quorum_threshold == 20

    def test_missing_env_file_is_tolerated(self, tmp_path):
        config = load_settings(tmp_path / "missing.env")
        assert config.governance == GovernanceSettings()

    def test_blank_values_are_ignored(self, monkeypatch):
        monkeypatch.setenv("TOKENGOV_QUORUM_THRESHOLD", "  ")
        assert load_settings().governance.quorum_threshold == 10

    @pytest.mark.parametrize("var,value", [
        ("TOKENGOV_VOTING_DURATION", "60"),
        ("TOKENGOV_QUORUM_THRESHOLD", "150"),
        ("TOKENGOV_PROPOSAL_THRESHOLD", "lots"),
        ("TOKENGOV_LOG_LEVEL", "LOUD"),
    ])
    def test_invalid_values_raise_configuration_error(self, monkeypatch, var, value):
        monkeypatch.setenv(var, value)
        with pytest.raises(ConfigurationError) as excinfo:
            load_settings()
        assert excinfo.value.code == "CFG_001"
        assert excinfo.value.details["errors"]


class TestFormatters:
    """Test log formatters."""

    def _record(self, **extra):
        record = logging.LogRecord(
            name="tokengov.governance.engine",
            level=logging.INFO,
            pathname=__file__,
            lineno=10,
            msg="Created proposal %s",
            args=(0,),
            exc_info=None,
        )
        for key, value in extra.items():
            setattr(record, key, value)
        return record

    def test_json_formatter(self):
        data = json.loads(JSONFormatter().format(self._record(extra_data={"proposal_id": 0})))

        assert data["level"] == "INFO"
        assert data["logger"] == "tokengov.governance.engine"
        assert data["message"] == "Created proposal 0"
        assert data["line"] == 10
        assert data["extra"] == {"proposal_id": 0}

    def test_json_formatter_without_extra(self):
        data = json.loads(JSONFormatter().format(self._record()))
        assert "extra" not in data
        assert "exception" not in data

    def test_json_formatter_exception(self):
        try:
            raise ValueError("bad")
        except ValueError:
            record = self._record(exc_info=sys.exc_info())

        data = json.loads(JSONFormatter().format(record))
        assert data["exception"]["type"] == "ValueError"
        assert data["exception"]["message"] == "bad"

    def test_structured_formatter(self):
        text = StructuredFormatter(use_color=False).format(self._record(extra_data={"weight": 5}))
        assert "[INFO]" in text
        assert "[tokengov.governance.engine]" in text
        assert "Created proposal 0" in text
        assert "[weight=5]" in text


class TestSetupLogging:
    """Test logging setup."""

    def test_file_output_is_json(self, tmp_path, restore_logging):
        log_file = tmp_path / "logs" / "tokengov.log"
        setup_logging(level="DEBUG", log_file=log_file, console_output=False)

        logging.getLogger("tokengov.test").info("hello")
        for handler in logging.getLogger().handlers:
            handler.flush()

        line = log_file.read_text().strip().splitlines()[-1]
        assert json.loads(line)["message"] == "hello"
        assert logging.getLogger().level == logging.DEBUG

    def test_console_only(self, restore_logging):
        root = setup_logging(level=logging.WARNING, log_file=None, console_output=True)
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    def test_from_config(self, tmp_path, restore_logging):
        config = LoggingConfig(level="ERROR", json_format=False, file_path=str(tmp_path / "app.log"))
        root = setup_logging_from_config(config)

        assert root.level == logging.ERROR
        file_handlers = [h for h in root.handlers if isinstance(h, logging.handlers.RotatingFileHandler)]
        assert len(file_handlers) == 1
        assert isinstance(file_handlers[0].formatter, StructuredFormatter)
