"""Unit tests for settings and logging configuration."""

from __future__ import annotations

import logging

import pytest


class TestSettings:
    """Tests for Settings defaults and environment loading."""

    def test_defaults(self) -> None:
        from opr_models.settings import Settings

        settings = Settings(_env_file=None)
        assert settings.wrapper_schema_id == "error.result.schema.json"
        assert settings.load_builtin_schemas is True
        assert settings.extra_schema_dir is None
        assert settings.log_level == "INFO"

    def test_env_prefix(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """OPR_-prefixed environment variables populate settings."""
        from opr_models.settings import Settings

        monkeypatch.setenv("OPR_WRAPPER_SCHEMA_ID", "envelope.schema.json")
        monkeypatch.setenv("OPR_LOAD_BUILTIN_SCHEMAS", "false")

        settings = Settings(_env_file=None)
        assert settings.wrapper_schema_id == "envelope.schema.json"
        assert settings.load_builtin_schemas is False

    def test_invalid_log_level_rejected(self) -> None:
        from pydantic import ValidationError

        from opr_models.settings import Settings

        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_get_settings_cached(self) -> None:
        from opr_models.settings import get_settings

        assert get_settings() is get_settings()


class TestLoggingConfig:
    """Tests for configure_logging()."""

    def test_configure_logging_sets_app_level(self) -> None:
        from opr_models.logging_config import APP_LOGGER, configure_logging

        root = logging.getLogger()
        saved_handlers = list(root.handlers)
        saved_level = root.level
        try:
            configure_logging("WARNING")
            assert logging.getLogger(APP_LOGGER).level == logging.WARNING
            assert logging.getLogger("jsonschema").level == logging.WARNING
            assert len(root.handlers) == 1
        finally:
            root.handlers[:] = saved_handlers
            root.setLevel(saved_level)
            logging.getLogger(APP_LOGGER).setLevel(logging.NOTSET)

    def test_get_logger(self) -> None:
        from opr_models.logging_config import get_logger

        assert get_logger("opr_models.test").name == "opr_models.test"
