"""Error types: dual struct+exception for Option-based and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'MaybeError',
    'PayloadMismatch',
    'PayloadTypeError',
    'ShapeError',
    'ShapeMismatch',
]


class MaybeError(Exception):
    """Base exception class for maybekit errors.

    Attributes:
        message (str): A human-readable description of the error.
        code (str | None): An optional error code for programmatic error handling.

    Example:
        ```python
        from maybekit import MaybeError, apply

        try:
            apply(len)(1, 2)
        except MaybeError as e:
            print(e.code)  # 'shape'
        ```
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message: str = message
        self.code: str | None = code

    def __str__(self) -> str:
        """Return a string representation of the error."""
        if self.code:
            return f'[{self.code}] {self.message}'
        return self.message


# --- Shape Errors ---


class ShapeMismatch(msgspec.Struct, frozen=True, gc=False):
    """Arguments do not fit a combinator's functions - struct variant."""

    function: str
    reason: str

    def to_exception(self) -> ShapeError:
        """Convert to exception for raise-based code."""
        return ShapeError(self.function, self.reason)


class ShapeError(MaybeError, TypeError):
    """Arguments do not fit a combinator's functions - exception variant.

    Raised before any user callback runs.
    """

    def __init__(self, function: str, reason: str) -> None:
        self.function = function
        self.reason = reason
        super().__init__(f'{function}: {reason}', code='shape')

    def to_struct(self) -> ShapeMismatch:
        """Convert to struct for Option-based code."""
        return ShapeMismatch(self.function, self.reason)


# --- Payload Errors ---


class PayloadMismatch(msgspec.Struct, frozen=True, gc=False):
    """Value does not conform to an Option's declared type - struct variant."""

    expected: str
    actual: str

    def to_exception(self) -> PayloadTypeError:
        """Convert to exception for raise-based code."""
        return PayloadTypeError(self.expected, self.actual)


class PayloadTypeError(MaybeError, TypeError):
    """Value does not conform to an Option's declared type - exception variant."""

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f'expected a {expected} payload, got {actual}', code='payload-type')

    def to_struct(self) -> PayloadMismatch:
        """Convert to struct for Option-based code."""
        return PayloadMismatch(self.expected, self.actual)
