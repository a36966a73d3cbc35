"""maybekit: an Option type and combinators for calling functions across Options.

Flat imports (preferred):
    from maybekit import Option, maybe, empty, apply, match, attempt

Submodule imports (for organization):
    from maybekit.option import Option, is_maybe
    from maybekit.combinators import match, apply, all_valid
    from maybekit.policy import register_sentinel, sentinel_policy
    from maybekit.errors import ShapeError, PayloadTypeError
"""

# Configuration
from maybekit._config import MaybeConfig, get_config, init, reset

# Logging
from maybekit._logging import (
    add_log_hook,
    clear_log_hooks,
    configure_logging,
    get_logger,
    remove_log_hook,
)

# Combinators
from maybekit.combinators import (
    all_valid,
    apply,
    attempt,
    check_shape,
    classify,
    match,
)

# Errors
from maybekit.errors import (
    MaybeError,
    PayloadMismatch,
    PayloadTypeError,
    ShapeError,
    ShapeMismatch,
)

# Option type
from maybekit.option import Option, empty, is_maybe, maybe

# Invalidity policies
from maybekit.policy import (
    SentinelPolicy,
    TaggedPolicy,
    register_sentinel,
    sentinel_policy,
)

__all__ = [
    # Configuration
    'MaybeConfig',
    # Errors
    'MaybeError',
    # Option type
    'Option',
    'PayloadMismatch',
    'PayloadTypeError',
    # Invalidity policies
    'SentinelPolicy',
    'ShapeError',
    'ShapeMismatch',
    'TaggedPolicy',
    # Logging
    'add_log_hook',
    # Combinators
    'all_valid',
    'apply',
    'attempt',
    'check_shape',
    'classify',
    'clear_log_hooks',
    'configure_logging',
    'empty',
    'get_config',
    'get_logger',
    'init',
    'is_maybe',
    'match',
    'maybe',
    'register_sentinel',
    'remove_log_hook',
    'reset',
    'sentinel_policy',
]
