"""Scalar samplers: one value per call, drawn from a borrowed uniform source.

All samplers validate their parameters before touching the source, so a
call that raises `RangeError`, `OverflowError` or `WeightError` leaves the
source exactly where it was.

Functions:
    uniform_word(dtype, source): Full-domain value of a fixed-width integer type.
    uniform_int(a, b, source, interval): Unbiased integer in a range.
    uniform_char(a, b, source, interval): Single character in a code point range.
    uniform_float(a, b, source, interval): Float in a range with open/closed bounds.
    uniform(a, b, interval, source): Dispatching front end, default source optional.
    uniform01(source): Float in [0, 1).
    dice(weights, source): Index chosen with probability proportional to its weight.
"""

from __future__ import annotations

import itertools
import math
import numbers
import operator
from typing import TYPE_CHECKING, overload

from klaw_distributions._numeric import (
    UINT32,
    IntType,
    Interval,
    attempts,
    check_bounds,
    check_finite,
    common_int_type,
    retry_limit,
)
from klaw_distributions.errors import OverflowError, RangeError, WeightError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from klaw_distributions.sources import UniformSource

__all__ = [
    'check_weights',
    'dice',
    'uniform',
    'uniform01',
    'uniform_char',
    'uniform_float',
    'uniform_int',
    'uniform_word',
]


def _source_width(source: UniformSource) -> tuple[int, int, bool]:
    """Return (min word, usable bits per word, whether every word is usable)."""
    low = source.min()
    span = source.max() - low + 1
    if span < 2:
        msg = f'Source must produce at least two distinct words, got [{low}, {source.max()}]'
        raise RangeError(msg)
    width = span.bit_length() - 1
    return low, width, span == 1 << width


def uniform_word(dtype: IntType, source: UniformSource) -> int:
    """Generate a value uniformly distributed over the whole of `dtype`.

    Source words are concatenated, first word in the high bits, until
    `dtype.bits` bits are gathered; the low `dtype.bits` bits are kept. A
    source whose span is not a power of two contributes only its largest
    power-of-two prefix, and words beyond it are redrawn.

    Args:
        dtype: The fixed-width integer type to fill.
        source: Uniform source to draw from.

    Returns:
        A value in `[dtype.min, dtype.max]`.

    Example:
        ```python
        src = RandomSource(seed=1)           # 32-bit words
        uniform_word(UINT64, src)            # consumes two words
        uniform_word(INT8, src)              # consumes one word, keeps 8 bits
        ```
    """
    return _gather_word(dtype, source, retry_limit())


def _gather_word(dtype: IntType, source: UniformSource, retries: int | None) -> int:
    low, width, exact = _source_width(source)
    bound = 1 << width
    word = 0
    gathered = 0
    while gathered < dtype.bits:
        for _ in attempts('uniform_word', retries):
            bits = source.current() - low
            source.advance()
            if exact or bits < bound:
                break
        word = (word << width) | bits
        gathered += width
    return dtype.from_unsigned(word & dtype.word_max)


def _as_int(value: object) -> int:
    if isinstance(value, bool):
        msg = f'Boolean bounds are not supported: {value!r}'
        raise TypeError(msg)
    return operator.index(value)  # type: ignore[arg-type]


def uniform_int(
    a: int,
    b: int,
    source: UniformSource,
    interval: Interval | str = Interval.CLOSED_OPEN,
    dtype: IntType | None = None,
) -> int:
    """Generate an integer uniformly distributed between `a` and `b`.

    Rejection sampling removes modulo bias: a full-domain word `r` of the
    working type is drawn and `r % span` accepted unless `r` falls in the
    final, incomplete bucket of the word range.

    Args:
        a: Lower bound.
        b: Upper bound.
        source: Uniform source to draw from.
        interval: Boundary semantics, '[)' by default.
        dtype: Working integer type. Defaults to the narrowest of int32,
            int64, uint64 holding both bounds.

    Returns:
        An integer respecting `interval` with respect to `a` and `b`.

    Raises:
        RangeError: If the normalized interval is empty.
        OverflowError: If a bound is not representable in `dtype`.

    Example:
        ```python
        src = RandomSource(seed=3)
        uniform_int(0, 6, src)            # 0..5
        uniform_int(1, 6, src, '[]')      # a die roll
        uniform_int(-2, 2, src, '()')     # -1, 0 or 1
        ```
    """
    interval = Interval.parse(interval)
    a = _as_int(a)
    b = _as_int(b)
    if dtype is None:
        dtype = common_int_type(a, b)
    else:
        check_bounds(a, b, dtype)

    lower = a
    if interval.lower_open:
        if a >= dtype.max:
            msg = f'Invalid left bound {a} in {interval.describe(a, b)} for {dtype.name}'
            raise RangeError(msg)
        lower = a + 1

    if interval.upper_open:
        if lower >= b:
            msg = f'Invalid bounding interval {interval.describe(a, b)}'
            raise RangeError(msg)
        span = b - lower
    else:
        if lower > b:
            msg = f'Invalid bounding interval {interval.describe(a, b)}'
            raise RangeError(msg)
        if lower == dtype.min and b == dtype.max:
            return uniform_word(dtype, source)
        span = b - lower + 1

    if span == 1:
        return lower

    word_type = dtype.unsigned
    # Words at or above this threshold fall in the last, incomplete bucket.
    last_bucket = word_type.word_max - (span - 1)
    retries = retry_limit()
    for _ in attempts('uniform_int', retries):
        r = _gather_word(word_type, source, retries)
        offset = r % span
        if r - offset <= last_bucket:
            return lower + offset
    raise AssertionError('unreachable')


def uniform_char(
    a: str,
    b: str,
    source: UniformSource,
    interval: Interval | str = Interval.CLOSED_OPEN,
) -> str:
    """Generate a single character with code point between those of `a` and `b`.

    Example:
        ```python
        uniform_char('a', 'z', src, '[]')  # any lowercase ASCII letter
        ```
    """
    if len(a) != 1 or len(b) != 1:
        msg = f'Character bounds must be single characters, got {a!r}, {b!r}'
        raise TypeError(msg)
    return chr(uniform_int(ord(a), ord(b), source, interval, UINT32))


def uniform_float(
    a: float,
    b: float,
    source: UniformSource,
    interval: Interval | str = Interval.CLOSED_OPEN,
) -> float:
    """Generate a float uniformly distributed between `a` and `b`.

    Open bounds are first moved to the adjacent representable value inside
    the interval. One source word is rescaled linearly onto the adjusted
    bounds; a result that rounds onto a bound excluded by `interval` is
    discarded and redrawn.

    Args:
        a: Lower bound.
        b: Upper bound.
        source: Uniform source to draw from.
        interval: Boundary semantics, '[)' by default.

    Returns:
        A float respecting `interval` with respect to `a` and `b`.

    Raises:
        RangeError: If a bound is not finite or the adjusted interval is empty.
        OverflowError: If `b - a` is not representable as a finite float.
    """
    interval = Interval.parse(interval)
    a = float(a)
    b = float(b)
    check_finite(a, b)

    lower = math.nextafter(a, math.inf) if interval.lower_open else a
    upper = math.nextafter(b, -math.inf) if interval.upper_open else b
    if lower > upper:
        msg = f'Invalid bounding interval {interval.describe(a, b)}'
        raise RangeError(msg)
    width = upper - lower
    if math.isinf(width):
        msg = f'Width of {interval.describe(a, b)} overflows'
        raise OverflowError(msg, 'float')

    low, _, _ = _source_width(source)
    scale = source.max() - low
    for _ in attempts('uniform_float', retry_limit()):
        word = source.current()
        source.advance()
        result = lower + width * ((word - low) / scale)
        if interval.contains(a, b, result):
            return result
    raise AssertionError('unreachable')


def uniform01(source: UniformSource) -> float:
    """Generate a float in [0, 1) from a single source word per attempt.

    The word offset is scaled by `1 / (max - min + 1)`. For wide sources the
    product can round to exactly 1.0; such draws are discarded and the next
    word is used.

    Raises:
        RangeError: If the source produces fewer than two distinct words.
    """
    low, _, _ = _source_width(source)
    factor = 1.0 / (source.max() - low + 1.0)
    for _ in attempts('uniform01', retry_limit()):
        result = (source.current() - low) * factor
        source.advance()
        if result < 1.0:
            return result
    raise AssertionError('unreachable')


@overload
def uniform(
    a: str,
    b: str,
    interval: Interval | str = ...,
    source: UniformSource | None = ...,
    *,
    dtype: None = ...,
) -> str: ...
@overload
def uniform(
    a: int,
    b: int,
    interval: Interval | str = ...,
    source: UniformSource | None = ...,
    *,
    dtype: IntType | None = ...,
) -> int: ...
@overload
def uniform(
    a: float,
    b: float,
    interval: Interval | str = ...,
    source: UniformSource | None = ...,
    *,
    dtype: None = ...,
) -> float: ...
def uniform(
    a: float | str,
    b: float | str,
    interval: Interval | str = Interval.CLOSED_OPEN,
    source: UniformSource | None = None,
    *,
    dtype: IntType | None = None,
) -> float | str:
    """Generate a value between `a` and `b`, choosing the sampler from the bound types.

    Two single-character strings sample characters, a float bound samples
    floats, and integer bounds sample integers. Without `source` the
    process-wide default source is used.

    Example:
        ```python
        from klaw_distributions import uniform

        uniform(0, 1024)            # integer in [0, 1024)
        uniform(0.0, 1.0, '()')     # float in (0, 1)
        uniform('a', 'z', '[]')     # lowercase letter
        ```
    """
    if source is None:
        from klaw_distributions._default import default_source

        source = default_source()
    if isinstance(a, str) and isinstance(b, str):
        return uniform_char(a, b, source, interval)
    if isinstance(a, str) or isinstance(b, str):
        msg = f'Cannot mix character and numeric bounds: {a!r}, {b!r}'
        raise TypeError(msg)
    if isinstance(a, float) or isinstance(b, float):
        return uniform_float(a, b, source, interval)
    return uniform_int(a, b, source, interval, dtype)  # type: ignore[arg-type]


def check_weights(weights: Iterable[float]) -> tuple[list[float], bool]:
    """Validate a weight sequence.

    Returns:
        The weights as a list (ints when every weight is integral, floats
        otherwise) and whether they are integral.

    Raises:
        TypeError: If a weight is not a real number.
        WeightError: If the sequence is empty, a weight is negative or not
            finite, or every weight is zero.
    """
    values: list[float] = []
    for index, weight in enumerate(weights):
        if not isinstance(weight, numbers.Real):
            msg = f'Weight at index {index} is not a real number: {weight!r}'
            raise TypeError(msg)
        value = int(weight) if isinstance(weight, numbers.Integral) else float(weight)
        if not math.isfinite(value):
            raise WeightError('Non-finite weight', index)
        if value < 0:
            raise WeightError('Negative weight', index)
        values.append(value)
    if not values:
        raise WeightError('Empty weight sequence')
    integral = all(isinstance(value, int) for value in values)
    if not integral:
        values = [float(value) for value in values]
    if not any(values):
        raise WeightError('All weights are zero')
    return values, integral


def dice(weights: Iterable[float], source: UniformSource) -> int:
    """Roll a die with relative face probabilities given by `weights`.

    A single point is drawn uniformly in `[0, total)` and the faces are
    scanned linearly until the running mass exceeds it. Use a
    `DiscreteStream` for repeated draws from the same weights.

    Args:
        weights: Non-negative weights; any iterable, consumed once.
        source: Uniform source to draw from.

    Returns:
        The index of the chosen face.

    Raises:
        WeightError: If the weights cannot define a distribution.
        OverflowError: If the total weight overflows.

    Example:
        ```python
        dice([70, 20, 10], src)  # 0 with probability 0.7
        ```
    """
    values, integral = check_weights(weights)
    running = list(itertools.accumulate(values))
    total = running[-1]
    if integral:
        point: float = uniform_int(0, total, source, dtype=common_int_type(0, total))
    else:
        if math.isinf(total):
            raise OverflowError('Total weight overflows', 'float')
        point = uniform_float(0.0, total, source)

    for index, mass in enumerate(running):
        if point < mass:
            return index
    raise AssertionError('unreachable')
