"""Library configuration: MaybeConfig and initialization."""

from __future__ import annotations

import os
from dataclasses import dataclass

from maybekit._logging import configure_logging, get_logger

__all__ = [
    'MaybeConfig',
    'get_config',
    'init',
    'reset',
]

_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')
_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off')


@dataclass(frozen=True)
class MaybeConfig:
    """Configuration for maybekit.

    Attributes:
        check_shapes: Bind combinator arguments against the success function's
            signature before calling anything, raising ShapeError on mismatch.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
        json_logs: Emit JSON logs when logging is configured.
    """

    check_shapes: bool = True
    log_level: str | None = None
    json_logs: bool = True


# Global configuration (set by init())
_config: MaybeConfig | None = None


def _detect_check_shapes() -> bool:
    """Read MAYBEKIT_CHECK_SHAPES, defaulting to enabled."""
    env_value = os.environ.get('MAYBEKIT_CHECK_SHAPES', '').lower()
    if env_value in _TRUE_VALUES:
        return True
    if env_value in _FALSE_VALUES:
        return False
    if env_value:
        get_logger(__name__).warning(
            'config.unknown_value', variable='MAYBEKIT_CHECK_SHAPES', value=env_value, default=True
        )
    return True


def _detect_log_level() -> str | None:
    """Read MAYBEKIT_LOG_LEVEL, defaulting to silent."""
    env_value = os.environ.get('MAYBEKIT_LOG_LEVEL', '').upper()
    if not env_value:
        return None
    if env_value not in _LEVELS:
        get_logger(__name__).warning(
            'config.unknown_value', variable='MAYBEKIT_LOG_LEVEL', value=env_value, default=None
        )
        return None
    return env_value


def init(
    check_shapes: bool | None = None,
    log_level: str | None = None,
    *,
    json_logs: bool = True,
) -> MaybeConfig:
    """Initialize maybekit with the specified configuration.

    Args:
        check_shapes: Validate combinator call shapes. Read from
            MAYBEKIT_CHECK_SHAPES if None.
        log_level: Logging level ("DEBUG", "INFO", etc.). Read from
            MAYBEKIT_LOG_LEVEL if None; unset means silent.
        json_logs: Emit JSON logs rather than console output.

    Returns:
        The MaybeConfig that was set.

    Example:
        ```python
        import maybekit

        # Environment-driven
        maybekit.init()

        # Explicit configuration
        maybekit.init(check_shapes=False, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    resolved_check_shapes = _detect_check_shapes() if check_shapes is None else check_shapes
    resolved_level = _detect_log_level() if log_level is None else log_level.upper()

    _config = MaybeConfig(
        check_shapes=resolved_check_shapes,
        log_level=resolved_level,
        json_logs=json_logs,
    )

    if resolved_level is not None:
        configure_logging(resolved_level, json_output=json_logs)

    return _config


def get_config() -> MaybeConfig:
    """Get the current configuration, initializing from the environment if needed."""
    if _config is None:
        return init()
    return _config


def reset() -> None:
    """Forget the current configuration; the next get_config() re-reads the environment."""
    global _config  # noqa: PLW0603
    _config = None
