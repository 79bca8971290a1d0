"""Tests for marklinks.config module."""

import logging

import pytest

from marklinks.config import (
    DEFAULT_LOG_FILE,
    ConfigError,
    LoggingConfig,
    ValidatorConfig,
    load_concurrency,
    load_logging_config,
    load_validator_config,
    parse_concurrency,
    parse_log_level,
    parse_status_codes,
    parse_timeout,
    prepare_allowed_statuses,
)


class TestPrepareAllowedStatuses:
    def test_unique_codes(self):
        assert prepare_allowed_statuses(200, 301, 200) == frozenset({200, 301})

    def test_empty(self):
        assert prepare_allowed_statuses() == frozenset()


class TestValidatorConfig:
    def test_defaults(self):
        config = ValidatorConfig()
        assert config.allowed_statuses == frozenset({200})
        assert config.timeout == 3.0
        assert config.follow_redirects is True
        assert config.user_agent.startswith("marklinks/")

    def test_immutable(self):
        config = ValidatorConfig()
        with pytest.raises(AttributeError):
            config.timeout = 10  # type: ignore[misc]


class TestParseStatusCodes:
    def test_single(self):
        assert parse_status_codes("200") == frozenset({200})

    def test_list_with_spaces(self):
        assert parse_status_codes("200, 301 ,302") == frozenset({200, 301, 302})

    def test_invalid_code(self):
        with pytest.raises(ConfigError, match="Invalid status code") as exc_info:
            parse_status_codes("200,abc")
        assert exc_info.value.value == "abc"

    def test_empty_entry(self):
        with pytest.raises(ConfigError):
            parse_status_codes("200,")

    def test_out_of_range(self):
        with pytest.raises(ConfigError, match="out of range"):
            parse_status_codes("999")


class TestParseTimeout:
    def test_integer_string(self):
        assert parse_timeout("5") == 5.0

    def test_float(self):
        assert parse_timeout(0.5) == 0.5

    @pytest.mark.parametrize("value", ["0", "-1", 0])
    def test_non_positive(self, value):
        with pytest.raises(ConfigError, match="positive"):
            parse_timeout(value)

    def test_garbage(self):
        with pytest.raises(ConfigError, match="Invalid timeout"):
            parse_timeout("soon")


class TestParseConcurrency:
    @pytest.mark.parametrize("value", [None, "", "  ", "0", 0])
    def test_unbounded(self, value):
        assert parse_concurrency(value) is None

    def test_bound(self):
        assert parse_concurrency("8") == 8

    def test_negative(self):
        with pytest.raises(ConfigError, match="negative"):
            parse_concurrency("-2")

    def test_garbage(self):
        with pytest.raises(ConfigError):
            parse_concurrency("many")


class TestParseLogLevel:
    @pytest.mark.parametrize(
        "name,level",
        [
            ("debug", logging.DEBUG),
            ("INFO", logging.INFO),
            ("warn", logging.WARNING),
            ("warning", logging.WARNING),
            ("error", logging.ERROR),
            ("verbose", logging.INFO),
            (None, logging.INFO),
        ],
    )
    def test_mapping(self, name, level):
        assert parse_log_level(name) == level


class TestLoadValidatorConfig:
    def test_defaults_without_env(self, monkeypatch):
        monkeypatch.delenv("MARKLINKS_TIMEOUT", raising=False)
        monkeypatch.delenv("MARKLINKS_ALLOWED_STATUSES", raising=False)
        config = load_validator_config()
        assert config.timeout == 3.0
        assert config.allowed_statuses == frozenset({200})

    def test_env_fallback(self, monkeypatch):
        monkeypatch.setenv("MARKLINKS_TIMEOUT", "10")
        monkeypatch.setenv("MARKLINKS_ALLOWED_STATUSES", "200,204")
        config = load_validator_config()
        assert config.timeout == 10.0
        assert config.allowed_statuses == frozenset({200, 204})

    def test_explicit_values_override_env(self, monkeypatch):
        monkeypatch.setenv("MARKLINKS_TIMEOUT", "10")
        config = load_validator_config(timeout="1.5", statuses=[200, 302])
        assert config.timeout == 1.5
        assert config.allowed_statuses == frozenset({200, 302})

    def test_redirects_flag(self):
        config = load_validator_config(timeout=1, statuses="200", follow_redirects=False)
        assert config.follow_redirects is False

    def test_invalid_env_raises(self, monkeypatch):
        monkeypatch.setenv("MARKLINKS_ALLOWED_STATUSES", "ok")
        with pytest.raises(ConfigError):
            load_validator_config()


class TestLoadLoggingConfig:
    def test_stdout_default(self, monkeypatch):
        monkeypatch.delenv("MARKLINKS_LOG_LEVEL", raising=False)
        config = load_logging_config()
        assert config == LoggingConfig(level=logging.INFO)
        assert config.output_to_file is False

    def test_file_and_json(self):
        config = load_logging_config(level="debug", log_file="out.log", use_json=True)
        assert config.level == logging.DEBUG
        assert config.file_path == "out.log"
        assert config.output_to_file is True
        assert config.use_json is True

    def test_empty_file_uses_default(self):
        assert load_logging_config(log_file="").file_path == DEFAULT_LOG_FILE

    def test_env_level(self, monkeypatch):
        monkeypatch.setenv("MARKLINKS_LOG_LEVEL", "error")
        assert load_logging_config().level == logging.ERROR


class TestLoadConcurrency:
    def test_env(self, monkeypatch):
        monkeypatch.setenv("MARKLINKS_CONCURRENCY", "4")
        assert load_concurrency() == 4

    def test_explicit_overrides_env(self, monkeypatch):
        monkeypatch.setenv("MARKLINKS_CONCURRENCY", "4")
        assert load_concurrency("2") == 2

    def test_unset(self, monkeypatch):
        monkeypatch.delenv("MARKLINKS_CONCURRENCY", raising=False)
        assert load_concurrency() is None
