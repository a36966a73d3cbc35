"""Option type: zero or one value of a declared type."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from types import UnionType
from typing import Any, TypeIs, get_origin, get_type_hints

from maybekit.errors import PayloadMismatch
from maybekit.policy import SentinelSlot, TaggedSlot, sentinel_policy

__all__ = ['Option', 'empty', 'is_maybe', 'maybe']

# Values of these types are accepted where the key type is declared.
_NUMERIC_TOWER: dict[Any, tuple[type, ...]] = {
    float: (int, float),
    complex: (int, float, complex),
}


def _type_name(type_: Any) -> str:
    if isinstance(type_, type) and get_origin(type_) is None:
        return type_.__name__
    return repr(type_)


def _conforms(value: object, type_: Any) -> bool:
    """Check value against a declared type, accepting unclassifiable forms."""
    origin = get_origin(type_)
    target = origin if isinstance(origin, type) and origin is not UnionType else type_
    try:
        return isinstance(value, _NUMERIC_TOWER.get(target, target))
    except TypeError:
        # Any, TypeVars and other forms isinstance() cannot check
        return True


class Option[T]:
    """Zero or one value of the declared type T.

    An Option is either Empty or Present. There is no unchecked accessor: the
    payload is only reachable through `attempt`, `map`, `filter`, `value_or`
    and iteration, so an Empty Option never hands out a value.

    How Empty is stored depends on the invalidity policy of T (see
    `maybekit.policy`). For types with a sentinel, such as ``float`` (NaN) and
    ``object`` (None), constructing an Option from the sentinel yields an Empty
    Option. Two Empty Options of a NaN-bearing type never compare equal.

    Options are immutable; copies share their payload.

    Examples:
        >>> Option.of(7) == 7
        True
        >>> Option.of(7).filter(lambda x: x != 7)
        Option.empty(int)
        >>> Option.empty(int).value_or(-1)
        -1
        >>> list(Option.of('hi'))
        [(0, 'h'), (1, 'i')]
    """

    __slots__ = ('_slot', '_type')

    def __init__(self, type_: Any = object) -> None:
        """Create an Empty Option of the declared type."""
        self._type = type_
        self._slot: TaggedSlot | SentinelSlot = sentinel_policy(type_).empty_slot()

    @classmethod
    def empty(cls, type_: Any = object) -> Option[Any]:
        """Return an Empty Option of the declared type."""
        return cls(type_)

    @classmethod
    def of[V](cls, value: V, type_: Any = None) -> Option[V]:
        """Return an Option holding value.

        Args:
            value: The payload.
            type_: The declared type. Defaults to ``type(value)``.

        Returns:
            A Present Option, or an Empty one when value is the declared
            type's sentinel.

        Raises:
            PayloadTypeError: If value does not conform to type_.
        """
        if type_ is None:
            type_ = type(value)
        policy = sentinel_policy(type_)
        if not policy.matches(value) and not _conforms(value, type_):
            raise PayloadMismatch(_type_name(type_), _type_name(type(value))).to_exception()
        option = cls.__new__(cls)
        option._type = type_
        option._slot = policy.slot(value)
        return option

    @property
    def type(self) -> Any:
        """The declared type of the payload."""
        return self._type

    def is_empty(self) -> bool:
        """Return True if the Option holds no value."""
        return self._slot.is_empty()

    def is_present(self) -> bool:
        """Return True if the Option holds a value."""
        return not self._slot.is_empty()

    def equals(self, other: Option[T] | T) -> bool:
        """Compare with another Option or a plain value.

        Two Present Options are equal when their payloads are. Two Empty
        Options are equal, except when either is of a NaN-bearing type. A
        plain value is compared as ``Option.of(other)``.
        """
        if not isinstance(other, Option):
            other = Option.of(other)
        if self.is_empty() and other.is_empty():
            return not (self._slot.nan_like or other._slot.nan_like)
        if self.is_empty() or other.is_empty():
            return False
        return bool(self._slot.value == other._slot.value)

    def attempt(self, f: Callable[[T], object]) -> bool:
        """Call f with the payload if Present.

        Returns:
            Whether f was called.
        """
        if self.is_empty():
            return False
        f(self._slot.value)
        return True

    def map[U](self, f: Callable[[T], U], type_: Any = None) -> Option[U]:
        """Apply f to the payload, wrapping the result in a new Option.

        The result's declared type is type_, else f's return annotation, else
        the type of the produced value. f is not called on an Empty Option.
        """
        declared = type_ if type_ is not None else _declared_return(f).value_or(None)
        if self.is_empty():
            return Option.empty(object if declared is None else declared)
        return Option.of(f(self._slot.value), declared)

    def filter(self, predicate: Callable[[T], bool]) -> Option[T]:
        """Return self if Present and predicate holds, else an Empty Option."""
        if self.is_present() and predicate(self._slot.value):
            return self
        return Option.empty(self._type)

    def value_or(self, fallback: T) -> T:
        """Return the payload, or fallback if Empty.

        fallback is not validated, so ``value_or(None)`` is an explicit way
        to leave the Option world. Prefer `attempt` or `map` where possible.
        """
        if self.is_empty():
            return fallback
        return self._slot.value

    def __iter__(self) -> Iterator[tuple[int, Any]]:
        """Iterate (index, element) pairs of a Present sequence payload."""
        if self.is_empty():
            return iter(())
        return enumerate(self._slot.value)

    def elements(self) -> Iterator[Any]:
        """Iterate the elements of a Present sequence payload."""
        if self.is_empty():
            return iter(())
        return iter(self._slot.value)

    def __eq__(self, other: object) -> bool:
        return self.equals(other)

    def __hash__(self) -> int:
        if self.is_empty():
            return hash(None)
        return hash(self._slot.value)

    def __repr__(self) -> str:
        if self.is_empty():
            return f'Option.empty({_type_name(self._type)})'
        return f'Option.of({self._slot.value!r})'


def maybe[V](value: V, type_: Any = None) -> Option[V]:
    """Shorthand for `Option.of`."""
    return Option.of(value, type_)


def empty(type_: Any = object) -> Option[Any]:
    """Shorthand for `Option.empty`."""
    return Option.empty(type_)


def is_maybe(obj: object) -> TypeIs[Option[Any]]:
    """Return True if obj is an Option."""
    return isinstance(obj, Option)


def _declared_return(fn: Callable[..., Any]) -> Option[Any]:
    """Return the declared result type of fn, Empty when it declares none.

    Calling a class produces an instance of it, so classes declare themselves.
    """
    if isinstance(fn, type):
        return Option.of(fn, object)
    try:
        hints = get_type_hints(fn)
    except (AttributeError, NameError, TypeError):
        return Option.empty(object)
    if 'return' not in hints:
        return Option.empty(object)
    return Option.of(hints['return'], object)
