"""Interval bracket notation, fixed-width integer types, and retry bounds."""

from __future__ import annotations

import math
from enum import StrEnum
from typing import TYPE_CHECKING

import msgspec

from klaw_distributions._config import get_config
from klaw_distributions._logging import get_logger
from klaw_distributions.errors import OverflowError, RangeError, RetryLimitError

if TYPE_CHECKING:
    from collections.abc import Iterator

__all__ = [
    'INT8',
    'INT16',
    'INT32',
    'INT64',
    'UINT8',
    'UINT16',
    'UINT32',
    'UINT64',
    'IntType',
    'Interval',
    'attempts',
    'check_bounds',
    'check_finite',
    'common_int_type',
    'retry_limit',
]

log = get_logger(__name__)


class Interval(StrEnum):
    """Open/closed boundary configuration for a sampling range.

    Values are the bracket notation of the interval, so `Interval('[]')`
    and `Interval.CLOSED_CLOSED` name the same member.
    """

    CLOSED_CLOSED = '[]'
    """Both bounds inclusive."""

    CLOSED_OPEN = '[)'
    """Lower inclusive, upper exclusive (the default)."""

    OPEN_CLOSED = '(]'
    """Lower exclusive, upper inclusive."""

    OPEN_OPEN = '()'
    """Both bounds exclusive."""

    @classmethod
    def parse(cls, value: Interval | str) -> Interval:
        """Return the member for `value`, accepting members or bracket strings.

        Raises:
            ValueError: If `value` is not one of '[]', '[)', '(]', '()'.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            msg = f"Invalid interval {value!r}; expected one of '[]', '[)', '(]', '()'"
            raise ValueError(msg) from None

    @property
    def lower_open(self) -> bool:
        return self.value[0] == '('

    @property
    def upper_open(self) -> bool:
        return self.value[1] == ')'

    def contains(self, a: float, b: float, value: float) -> bool:
        """Check `value` against the bounds `a`, `b` under this interval's semantics."""
        above = value > a if self.lower_open else value >= a
        below = value < b if self.upper_open else value <= b
        return above and below

    def describe(self, a: object, b: object) -> str:
        return f'{self.value[0]}{a}, {b}{self.value[1]}'


class IntType(msgspec.Struct, frozen=True, gc=False):
    """A fixed-width integer working type.

    Attributes:
        name: Display name, e.g. "int32".
        bits: Width in bits.
        signed: Whether values use two's-complement signed representation.
    """

    name: str
    bits: int
    signed: bool

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    @property
    def word_max(self) -> int:
        """Largest value of the unsigned counterpart."""
        return (1 << self.bits) - 1

    @property
    def unsigned(self) -> IntType:
        """The unsigned type of the same width."""
        if not self.signed:
            return self
        return _UNSIGNED_BY_BITS[self.bits]

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def from_unsigned(self, word: int) -> int:
        """Reinterpret an unsigned word of this width as a value of this type."""
        if self.signed and word > self.max:
            return word - (1 << self.bits)
        return word


INT8 = IntType('int8', 8, True)
INT16 = IntType('int16', 16, True)
INT32 = IntType('int32', 32, True)
INT64 = IntType('int64', 64, True)
UINT8 = IntType('uint8', 8, False)
UINT16 = IntType('uint16', 16, False)
UINT32 = IntType('uint32', 32, False)
UINT64 = IntType('uint64', 64, False)

_UNSIGNED_BY_BITS = {8: UINT8, 16: UINT16, 32: UINT32, 64: UINT64}

# Candidate working types for bounds given without an explicit type, narrowest first.
_INFERENCE_ORDER = (INT32, INT64, UINT64)


def common_int_type(a: int, b: int) -> IntType:
    """Return the narrowest default working type holding both `a` and `b`.

    Raises:
        OverflowError: If no 64-bit type can represent both bounds.
    """
    for dtype in _INFERENCE_ORDER:
        if dtype.contains(a) and dtype.contains(b):
            return dtype
    msg = f'Bounds {a}, {b} do not fit a common 64-bit integer type'
    raise OverflowError(msg)


def check_bounds(a: int, b: int, dtype: IntType) -> None:
    """Ensure both bounds are representable in `dtype`.

    Raises:
        OverflowError: If either bound lies outside `dtype`.
    """
    for bound in (a, b):
        if not dtype.contains(bound):
            msg = f'Bound {bound} is outside [{dtype.min}, {dtype.max}]'
            raise OverflowError(msg, dtype.name)


def check_finite(*values: float, what: str = 'bound') -> None:
    """Reject NaN and infinite parameters.

    Raises:
        RangeError: If any value is not finite.
    """
    for value in values:
        if not math.isfinite(value):
            msg = f'Non-finite {what}: {value}'
            raise RangeError(msg)


def retry_limit() -> int | None:
    """Return the configured `max_retries`, read once per sampler call."""
    return get_config().max_retries


def attempts(operation: str, limit: int | None) -> Iterator[int]:
    """Yield attempt numbers for a rejection loop.

    Args:
        operation: Name reported when the loop gives up.
        limit: Maximum number of attempts, usually `retry_limit()`. None is unbounded.

    Raises:
        RetryLimitError: Once `limit` attempts are used up.
    """
    attempt = 0
    while limit is None or attempt < limit:
        yield attempt
        attempt += 1
    error = RetryLimitError(operation, limit)
    log.warning('retry limit exhausted', error=msgspec.to_builtins(error.to_struct()))
    raise error
