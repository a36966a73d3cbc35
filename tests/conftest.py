"""Pytest configuration and shared fixtures for maybekit tests."""

import logging

import pytest
import structlog


@pytest.fixture(autouse=True)
def clean_config(monkeypatch):
    """Start every test from an environment-driven default configuration."""
    from maybekit import reset

    monkeypatch.delenv('MAYBEKIT_CHECK_SHAPES', raising=False)
    monkeypatch.delenv('MAYBEKIT_LOG_LEVEL', raising=False)
    reset()
    yield
    reset()


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging() so tests don't leak handlers or levels."""
    from maybekit import clear_log_hooks

    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    clear_log_hooks()
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
    structlog.reset_defaults()


@pytest.fixture
def sample_present():
    """Sample Present Option for testing."""
    from maybekit import Option

    return Option.of(7)


@pytest.fixture
def sample_empty():
    """Sample Empty Option for testing."""
    from maybekit import Option

    return Option.empty(int)
