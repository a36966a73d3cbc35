"""Tests for library configuration and initialization."""

from __future__ import annotations

import logging

import pytest
from maybekit import MaybeConfig, get_config, init, reset
from maybekit._config import _detect_check_shapes, _detect_log_level


class TestMaybeConfig:
    """Tests for the MaybeConfig dataclass."""

    def test_default_values(self) -> None:
        config = MaybeConfig()
        assert config.check_shapes is True
        assert config.log_level is None
        assert config.json_logs is True

    def test_custom_values(self) -> None:
        config = MaybeConfig(check_shapes=False, log_level='DEBUG', json_logs=False)
        assert config.check_shapes is False
        assert config.log_level == 'DEBUG'
        assert config.json_logs is False

    def test_config_is_frozen(self) -> None:
        config = MaybeConfig()
        with pytest.raises(AttributeError):
            config.check_shapes = False  # type: ignore[misc]


class TestDetectCheckShapes:
    """Tests for _detect_check_shapes()."""

    def test_default_enabled(self) -> None:
        assert _detect_check_shapes() is True

    @pytest.mark.parametrize('value', ['1', 'true', 'YES', 'on'])
    def test_env_true(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv('MAYBEKIT_CHECK_SHAPES', value)
        assert _detect_check_shapes() is True

    @pytest.mark.parametrize('value', ['0', 'false', 'No', 'OFF'])
    def test_env_false(self, monkeypatch, value: str) -> None:
        monkeypatch.setenv('MAYBEKIT_CHECK_SHAPES', value)
        assert _detect_check_shapes() is False

    def test_unknown_value_warns(self, monkeypatch, caplog) -> None:
        """An unrecognized value logs a warning and keeps checks enabled."""
        monkeypatch.setenv('MAYBEKIT_CHECK_SHAPES', 'sometimes')
        with caplog.at_level(logging.WARNING):
            assert _detect_check_shapes() is True
        assert 'config.unknown_value' in caplog.text
        assert 'MAYBEKIT_CHECK_SHAPES' in caplog.text


class TestDetectLogLevel:
    """Tests for _detect_log_level()."""

    def test_default_silent(self) -> None:
        assert _detect_log_level() is None

    def test_env_case_insensitive(self, monkeypatch) -> None:
        monkeypatch.setenv('MAYBEKIT_LOG_LEVEL', 'debug')
        assert _detect_log_level() == 'DEBUG'

    def test_unknown_level_ignored(self, monkeypatch, caplog) -> None:
        monkeypatch.setenv('MAYBEKIT_LOG_LEVEL', 'loud')
        with caplog.at_level(logging.WARNING):
            assert _detect_log_level() is None
        assert 'MAYBEKIT_LOG_LEVEL' in caplog.text


class TestInit:
    """Tests for init(), get_config() and reset()."""

    def test_init_defaults(self) -> None:
        config = init()
        assert config == MaybeConfig()
        assert get_config() is config

    def test_init_explicit(self) -> None:
        config = init(check_shapes=False)
        assert config.check_shapes is False
        assert get_config().check_shapes is False

    def test_explicit_overrides_env(self, monkeypatch) -> None:
        monkeypatch.setenv('MAYBEKIT_CHECK_SHAPES', 'off')
        assert init(check_shapes=True).check_shapes is True

    def test_env_read_lazily(self, monkeypatch) -> None:
        """get_config() initializes from the environment on first use."""
        monkeypatch.setenv('MAYBEKIT_CHECK_SHAPES', 'off')
        assert get_config().check_shapes is False

    def test_reset(self, monkeypatch) -> None:
        """reset() makes the next get_config() re-read the environment."""
        assert get_config().check_shapes is True
        monkeypatch.setenv('MAYBEKIT_CHECK_SHAPES', 'off')
        assert get_config().check_shapes is True
        reset()
        assert get_config().check_shapes is False

    def test_log_level_configures_logging(self) -> None:
        config = init(log_level='warning')
        assert config.log_level == 'WARNING'
        assert logging.getLogger().level == logging.WARNING

    def test_env_log_level_configures_logging(self, monkeypatch) -> None:
        monkeypatch.setenv('MAYBEKIT_LOG_LEVEL', 'ERROR')
        init()
        assert logging.getLogger().level == logging.ERROR

    def test_no_level_leaves_logging_alone(self) -> None:
        handlers = list(logging.getLogger().handlers)
        init()
        assert logging.getLogger().handlers == handlers
