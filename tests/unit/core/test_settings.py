"""Unit tests for Settings."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from lazyinit.core.accessor import FailurePolicy, Strategy
from lazyinit.core.exceptions import ConstructionFailed
from lazyinit.core.settings import Settings, get_settings


class TestDefaults:
    """Tests for default values."""

    def test_defaults(self):
        settings = get_settings()

        assert settings.environment == ""
        assert settings.default_strategy is Strategy.DOUBLE_CHECKED
        assert settings.failure_policy is FailurePolicy.RETRY
        assert settings.construction_retries == 0
        assert settings.retry_delay == 0.1
        assert settings.retry_backoff == 2.0
        assert settings.error_states_path is None
        assert settings.log_level == "INFO"
        assert settings.logs_path is None

    def test_is_singleton(self):
        assert get_settings() is get_settings()
        assert Settings() is get_settings()


class TestEnvironment:
    """Tests for LAZYINIT_* environment variables."""

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LAZYINIT_ENVIRONMENT", "prod")
        monkeypatch.setenv("LAZYINIT_DEFAULT_STRATEGY", "locked")
        monkeypatch.setenv("LAZYINIT_FAILURE_POLICY", "permanent")
        monkeypatch.setenv("LAZYINIT_CONSTRUCTION_RETRIES", "3")
        monkeypatch.setenv("LAZYINIT_ERROR_STATES_PATH", "dumps")
        monkeypatch.setenv("LAZYINIT_LOG_LEVEL", "debug")

        settings = get_settings()

        assert settings.environment == "prod"
        assert settings.default_strategy is Strategy.LOCKED
        assert settings.failure_policy is FailurePolicy.PERMANENT
        assert settings.construction_retries == 3
        assert settings.error_states_path == Path("dumps")
        assert settings.log_level == "DEBUG"

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text("LAZYINIT_ENVIRONMENT=from-file\n", encoding="utf-8")

        assert get_settings().environment == "from-file"


class TestValidation:
    """Tests for invalid configuration."""

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("LAZYINIT_LOG_LEVEL", "LOUD")

        with pytest.raises(ConstructionFailed) as exc_info:
            get_settings()
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_negative_retries(self, monkeypatch):
        monkeypatch.setenv("LAZYINIT_CONSTRUCTION_RETRIES", "-1")

        with pytest.raises(ConstructionFailed):
            get_settings()

    def test_retry_after_fixing_environment(self, monkeypatch):
        """Test a failed settings load is retried on the next call."""
        monkeypatch.setenv("LAZYINIT_DEFAULT_STRATEGY", "sometimes")
        with pytest.raises(ConstructionFailed):
            get_settings()

        monkeypatch.setenv("LAZYINIT_DEFAULT_STRATEGY", "eager")
        assert get_settings().default_strategy is Strategy.EAGER
