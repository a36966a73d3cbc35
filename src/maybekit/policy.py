"""Invalidity policies and the sentinel trait.

An invalidity policy decides how an Option of a given declared type stores
"no value". Types with a natural invalid value (NaN for floating point, None
for plain references) keep that sentinel in the value slot itself; every other
type carries an explicit present flag next to its storage.

Policies are resolved per declared type through the `sentinel_policy` trait:

    sentinel_policy(float)   # SentinelPolicy(sentinel=nan, nan_like=True)
    sentinel_policy(int)     # TaggedPolicy()

Callers can implement the trait for their own types with `register_sentinel`.
"""

from __future__ import annotations

import math
from collections.abc import Callable
from typing import Any, Generic, TypeVar, get_origin

import msgspec
import wrapt

__all__ = [
    'NAN',
    'NULL',
    'TAGGED',
    'SentinelPolicy',
    'SentinelSlot',
    'TaggedPolicy',
    'TaggedSlot',
    'Trait',
    'register_sentinel',
    'sentinel_policy',
    'trait',
]

F = TypeVar('F', bound=Callable[..., Any])


class TaggedPolicy(msgspec.Struct, frozen=True, gc=False):
    """Policy for types without a natural invalid value."""

    @property
    def nan_like(self) -> bool:
        return False

    def matches(self, value: Any) -> bool:  # noqa: ARG002
        """No value is ever mistaken for Empty under a tagged policy."""
        return False

    def empty_slot(self) -> TaggedSlot:
        return TaggedSlot()

    def slot(self, value: Any) -> TaggedSlot:
        return TaggedSlot(value, present=True)


class SentinelPolicy(msgspec.Struct, frozen=True):
    """Policy that represents Empty by storing an in-domain sentinel value.

    Attributes:
        sentinel: The value standing for "no value".
        nan_like: If True, any value unequal to itself matches, and two Empty
            Options under this policy never compare equal.
    """

    sentinel: Any
    nan_like: bool = False

    def matches(self, value: Any) -> bool:
        """Return True if value is indistinguishable from the sentinel."""
        if self.nan_like:
            return value != value  # noqa: PLR0124
        if value is self.sentinel:
            return True
        return type(value) is type(self.sentinel) and value == self.sentinel

    def empty_slot(self) -> SentinelSlot:
        return SentinelSlot(self.sentinel, self)

    def slot(self, value: Any) -> SentinelSlot:
        return SentinelSlot(value, self)


class TaggedSlot(msgspec.Struct, frozen=True):
    """Storage with an explicit present flag."""

    value: Any = None
    present: bool = False

    @property
    def nan_like(self) -> bool:
        return False

    def is_empty(self) -> bool:
        return not self.present


class SentinelSlot(msgspec.Struct, frozen=True):
    """Storage that is Empty whenever it holds its policy's sentinel."""

    value: Any
    policy: SentinelPolicy

    @property
    def nan_like(self) -> bool:
        return self.policy.nan_like

    def is_empty(self) -> bool:
        return self.policy.matches(self.value)


TAGGED = TaggedPolicy()
NAN = SentinelPolicy(math.nan, nan_like=True)
NULL = SentinelPolicy(None)


class Trait(wrapt.ObjectProxy, Generic[F]):
    """A function over types with per-type implementations.

    Unlike a value-dispatched function, a trait is called with a type and
    dispatches on that type: exact match first, then generic origin
    (``list[int]`` resolves through ``list``), then the type's MRO. ``object``
    is never reached through the MRO, so an implementation registered for
    ``object`` only applies to ``object`` itself.

    Attributes:
        _self_name: The name of the trait function.
        _self_instances: Dictionary mapping types to their implementations.

    Example:
        ```python
        @trait
        def describe(type_) -> str:
            return 'plain'

        @describe.instance(float)
        def describe_float(type_) -> str:
            return 'floating'

        describe(float)
        # 'floating'
        describe(int)
        # 'plain'
        ```
    """

    def __init__(self, default_fn: F) -> None:
        super().__init__(default_fn)
        self._self_name = default_fn.__name__
        self._self_instances: dict[Any, Callable[..., Any]] = {}

    def instance(self, type_: Any) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register an implementation of the trait for a specific type.

        Args:
            type_: The type to register the implementation for.

        Returns:
            A decorator that registers the implementation.
        """

        def decorator(fn: Callable[..., Any]) -> Callable[..., Any]:
            self._self_instances[type_] = fn
            return fn

        return decorator

    def _find_instance(self, type_: Any) -> Callable[..., Any] | None:
        """Find the best matching implementation for a type."""
        if type_ in self._self_instances:
            return self._self_instances[type_]

        origin = get_origin(type_)
        if origin is not None:
            return self._find_instance(origin)

        for base in getattr(type_, '__mro__', ())[1:]:
            if base is not object and base in self._self_instances:
                return self._self_instances[base]

        return None

    def __call__(self, type_: Any, *args: Any, **kwargs: Any) -> Any:
        """Dispatch to the implementation registered for type_."""
        instance_fn = self._find_instance(type_)
        if instance_fn is not None:
            return instance_fn(type_, *args, **kwargs)
        return self.__wrapped__(type_, *args, **kwargs)

    def __repr__(self) -> str:
        return f'<trait {self._self_name} with {len(self._self_instances)} instances>'


def trait(fn: F) -> Trait[F]:
    """Decorator to create a trait whose body is the default implementation."""
    return Trait(fn)


@trait
def sentinel_policy(type_: Any) -> TaggedPolicy | SentinelPolicy:
    """Resolve the invalidity policy for a declared Option type."""
    return TAGGED


@sentinel_policy.instance(float)
@sentinel_policy.instance(complex)
def _nan_policy(type_: Any) -> SentinelPolicy:
    return NAN


@sentinel_policy.instance(object)
@sentinel_policy.instance(type(None))
def _null_policy(type_: Any) -> SentinelPolicy:
    return NULL


def register_sentinel(type_: Any, sentinel: Any, *, nan_like: bool = False) -> SentinelPolicy:
    """Give type_ a sentinel representation for Empty.

    Subclasses of type_ inherit the policy unless they register their own.
    A value equal to the sentinel then becomes indistinguishable from Empty.

    Args:
        type_: The declared type to register.
        sentinel: The in-domain value standing for "no value".
        nan_like: Whether the sentinel behaves like NaN (never equal to itself).

    Returns:
        The registered policy.

    Example:
        ```python
        register_sentinel(UserId, UserId(-1))
        Option.of(UserId(-1)).is_empty()
        # True
        ```
    """
    policy = SentinelPolicy(sentinel, nan_like=nan_like)
    sentinel_policy.instance(type_)(lambda _type: policy)
    return policy
