"""match, apply and attempt: call ordinary functions across Option arguments.

A combinator wraps a success function. When called with a mix of plain values
and Options, it unwraps every Option and forwards the payloads, together with
the untouched plain values in their original order, to the success function.
If any Option argument is Empty, the fallback runs instead.

    text = apply(lambda *parts: ''.join(map(str, parts)))
    text(maybe('hi'), 5)       # Option.of('hi5')
    text(6, empty(str))        # Option.empty(object)
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import Any

import wrapt

from maybekit._config import get_config
from maybekit._logging import get_logger
from maybekit.errors import ShapeError, ShapeMismatch
from maybekit.option import Option, _declared_return, is_maybe

__all__ = [
    'all_valid',
    'apply',
    'attempt',
    'check_shape',
    'classify',
    'match',
]

_NONE_TYPE = type(None)

logger = get_logger(__name__)
_stdlib_logger = logging.getLogger(__name__)


def _name(fn: object) -> str:
    return getattr(fn, '__qualname__', None) or getattr(fn, '__name__', None) or repr(fn)


def classify(*args: Any, **kwargs: Any) -> tuple[tuple[bool, ...], dict[str, bool]]:
    """Mark which arguments are Options.

    Returns:
        A flag per positional argument and a flag per keyword argument.

    Example:
        ```python
        classify(maybe(5), 'x', width=empty(int))
        # ((True, False), {'width': True})
        ```
    """
    return tuple(is_maybe(arg) for arg in args), {key: is_maybe(arg) for key, arg in kwargs.items()}


def _missing(args: tuple[Any, ...], kwargs: dict[str, Any]) -> list[int | str]:
    """Positions and keywords of the Empty Option arguments, in order."""
    missing: list[int | str] = [i for i, arg in enumerate(args) if is_maybe(arg) and arg.is_empty()]
    missing.extend(key for key, arg in kwargs.items() if is_maybe(arg) and arg.is_empty())
    return missing


def all_valid(*args: Any, **kwargs: Any) -> bool:
    """Return True if every Option argument is Present. Plain values always pass."""
    return not _missing(args, kwargs)


def _unwrap(args: tuple[Any, ...], kwargs: dict[str, Any]) -> tuple[tuple[Any, ...], dict[str, Any]]:
    # Only called once all_valid() holds, so value_or never yields its fallback.
    return (
        tuple(arg.value_or(None) if is_maybe(arg) else arg for arg in args),
        {key: arg.value_or(None) if is_maybe(arg) else arg for key, arg in kwargs.items()},
    )


def _signature(fn: Callable[..., Any]) -> inspect.Signature | None:
    try:
        return inspect.signature(fn)
    except (TypeError, ValueError):
        return None


def _bind(
    signature: inspect.Signature | None, fn: Callable[..., Any], args: tuple[Any, ...], kwargs: dict[str, Any]
) -> Option[ShapeMismatch]:
    if signature is None:
        return Option.empty(ShapeMismatch)
    try:
        signature.bind(*args, **kwargs)
    except TypeError as exc:
        return Option.of(ShapeMismatch(_name(fn), str(exc)))
    return Option.empty(ShapeMismatch)


def check_shape(fn: Callable[..., Any], /, *args: Any, **kwargs: Any) -> Option[ShapeMismatch]:
    """Check that fn can be called with args and kwargs once they are unwrapped.

    Unwrapping never changes arity or keywords, so Options and plain values
    can be passed as they are.

    Returns:
        Empty if the arguments fit, or if fn's signature cannot be
        introspected; otherwise the mismatch.
    """
    return _bind(_signature(fn), fn, args, kwargs)


def _takes_no_arguments(signature: inspect.Signature | None) -> bool:
    if signature is None:
        return False
    try:
        signature.bind()
    except TypeError:
        return False
    return True


def _declares_no_parameters(signature: inspect.Signature | None) -> bool:
    return signature is not None and not signature.parameters


def _order(
    first: Callable[..., Any], second: Callable[..., Any] | None
) -> tuple[Callable[..., Any], Callable[..., Any] | None]:
    """Return (success, fallback).

    A function declaring no parameters at all is preferred as the fallback
    over one that merely accepts zero arguments, such as ``(*parts)`` or
    ``(x=0)``. Position decides only between two equally good candidates.
    """
    if not callable(first):
        raise ShapeError(_name(first), 'success function is not callable')
    if second is None:
        return first, None
    if not callable(second):
        raise ShapeError(_name(second), 'fallback is not callable')

    first_sig, second_sig = _signature(first), _signature(second)
    for qualifies in (_declares_no_parameters, _takes_no_arguments):
        if qualifies(second_sig):
            return first, second
        if qualifies(first_sig):
            return second, first
    raise ShapeError(
        f'{_name(first)}, {_name(second)}',
        'one of the two functions must be callable without arguments to serve as the fallback',
    )


def _reject(mismatch: ShapeMismatch) -> None:
    raise mismatch.to_exception()


def _dispatch(
    success: Callable[..., Any],
    fallback: Callable[[], Any] | None,
    args: tuple[Any, ...],
    kwargs: dict[str, Any],
    *,
    void: bool,
    result_type: Any,
) -> Option[Any] | None:
    missing = _missing(args, kwargs)
    debug = _stdlib_logger.isEnabledFor(logging.DEBUG)

    if not missing:
        if debug:
            logger.debug('combinator.dispatch', function=_name(success), outcome='success')
        call_args, call_kwargs = _unwrap(args, kwargs)
        value = success(*call_args, **call_kwargs)
        if void:
            return None
        return Option.of(value, result_type)

    if debug:
        logger.debug('combinator.dispatch', function=_name(success), outcome='fallback', missing=missing)
    value = fallback() if fallback is not None else None
    if void:
        if value is not None:
            raise ShapeError(_name(fallback), 'fallback returns a value but the success function returns None')
        return None
    if value is None:
        return Option.empty(object if result_type is None else result_type)
    return Option.of(value, result_type)


def match(
    success: Callable[..., Any],
    fallback: Callable[[], Any] | None = None,
) -> Callable[..., Any]:
    """Wrap success so it accepts Options for any of its arguments.

    When called, every Option argument is unwrapped and success is called
    with the payloads. If any Option argument is Empty, fallback() is called
    instead. The two functions may be given in either order: the one that
    declares no parameters is the fallback.

    If success is annotated ``-> None``, the call returns None. Only the
    annotation counts: an unannotated function that happens to return None,
    such as ``print``, is not void and gives an Empty Option. Otherwise the
    result is an Option: success's result on the valid path; on the invalid
    path, fallback's result, or Empty if fallback returns None or there is no
    fallback.

    Args:
        success: The function to call with unwrapped arguments.
        fallback: Function called with no arguments when an Option is Empty.

    Returns:
        A wrapper around success, usable directly or as a decorator.

    Raises:
        ShapeError: At construction if no fallback can be identified; at call
            time, before anything runs, if the arguments do not fit success.

    Example:
        ```python
        show = match(str, lambda: '<invalid>')
        show(maybe(2))       # Option.of('2')
        show(empty(int))     # Option.of('<invalid>')
        ```
    """
    success, fallback = _order(success, fallback)
    returns = _declared_return(success)
    void = returns == _NONE_TYPE
    result_type = returns.value_or(None)
    signature = _signature(success)
    # Plain functions bound as methods are called with the instance first.
    unbound = inspect.isfunction(success)

    @wrapt.decorator
    def dispatch(
        wrapped: Callable[..., Any],
        instance: Any,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
    ) -> Option[Any] | None:
        if get_config().check_shapes:
            bound_args = (instance, *args) if unbound and instance is not None else args
            _bind(signature, wrapped, bound_args, kwargs).attempt(_reject)
        return _dispatch(wrapped, fallback, args, kwargs, void=void, result_type=result_type)

    return dispatch(success)


def apply(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Wrap fn so it accepts Options, doing nothing if any is Empty.

    Example:
        ```python
        @apply
        def repeat(times: int, char: str) -> str:
            return char * times

        repeat(maybe(3), 'x')      # Option.of('xxx')
        repeat(empty(int), 'x')    # Option.empty(str)
        ```
    """
    return match(fn)


def attempt(fn: Callable[..., Any]) -> Callable[..., Any]:
    """Alias of `apply`."""
    return apply(fn)
