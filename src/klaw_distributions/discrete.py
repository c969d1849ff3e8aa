"""Cumulative-weight discrete distributions.

A weight sequence is accumulated once into a sorted tuple of running
totals. Each draw picks a point uniformly in `[0, total)` and returns the
index of the first running total strictly greater than the point, which
is found by a configurable search (binary by default, O(log n)).

Zero weights produce repeated running totals, and the strict comparison
skips them, so a zero-weight index is never returned.
"""

from __future__ import annotations

import bisect
import math
from typing import TYPE_CHECKING

import msgspec

from klaw_distributions._config import SearchPolicy
from klaw_distributions._logging import get_logger
from klaw_distributions._numeric import UINT64, IntType
from klaw_distributions.errors import OverflowError, WeightError
from klaw_distributions.samplers import check_weights, uniform_float, uniform_int

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from klaw_distributions.sources import UniformSource

__all__ = ['CumulativeWeights', 'SearchPolicy', 'cumulative_weights', 'search']

log = get_logger(__name__)


class CumulativeWeights(msgspec.Struct, frozen=True):
    """Immutable running totals of a weight sequence.

    Construction checks that the totals are finite and non-decreasing with a
    positive total, whether built by `cumulative_weights()`, by hand, or by
    msgspec decoding.

    Attributes:
        values: Running totals, ascending; the last entry is the total weight.
        integral: Whether the totals are exact integers.
        accumulator: Working type of integral totals.

    Raises:
        WeightError: If the totals are empty, non-finite, start negative, or
            end at zero.
        OverflowError: If the totals decrease or leave `accumulator`.
    """

    values: tuple[float, ...]
    integral: bool
    accumulator: IntType = msgspec.field(default_factory=lambda: UINT64)

    def __post_init__(self) -> None:
        if not self.values:
            raise WeightError('Empty weight sequence')
        type_name = self.accumulator.name if self.integral else 'float'
        previous: float = 0
        for index, value in enumerate(self.values):
            if not self.integral and not math.isfinite(value):
                raise WeightError('Non-finite cumulative weight', index)
            if value < previous:
                if index == 0:
                    raise WeightError('Negative weight', index)
                msg = f'Cumulative weights decrease at index {index}'
                raise OverflowError(msg, type_name)
            if self.integral and not self.accumulator.contains(value):
                msg = f'Cumulative weight overflows at index {index}'
                raise OverflowError(msg, type_name)
            previous = value
        if previous <= 0:
            raise WeightError('All weights are zero')

    @property
    def total(self) -> float:
        return self.values[-1]

    def __len__(self) -> int:
        return len(self.values)

    def draw(
        self,
        source: UniformSource,
        policy: SearchPolicy | str = SearchPolicy.BINARY,
    ) -> int:
        """Draw one index with probability proportional to its weight."""
        if self.integral:
            point: float = uniform_int(0, int(self.total), source, dtype=self.accumulator)
        else:
            point = uniform_float(0.0, self.total, source)
        return search(self.values, point, policy)


def cumulative_weights(
    weights: Iterable[float],
    accumulator: IntType = UINT64,
) -> CumulativeWeights:
    """Accumulate `weights` into a `CumulativeWeights`.

    Args:
        weights: Non-negative weights, at least one positive.
        accumulator: Working type for integral weights.

    Returns:
        The running totals.

    Raises:
        WeightError: If the weights cannot define a distribution.
        OverflowError: If an integral running total leaves `accumulator`, a
            float running total becomes infinite, or a positive float weight
            is lost to rounding.

    Example:
        ```python
        cw = cumulative_weights([25, 50, 25])
        cw.values  # (25, 75, 100)
        ```
    """
    values, integral = check_weights(weights)
    running: list[float] = []
    total: float = 0
    for index, weight in enumerate(values):
        subtotal = total + weight
        if integral:
            if not accumulator.contains(subtotal):
                msg = f'Cumulative weight overflows at index {index}'
                raise OverflowError(msg, accumulator.name)
        elif math.isinf(subtotal):
            msg = f'Cumulative weight overflows at index {index}'
            raise OverflowError(msg, 'float')
        elif weight > 0 and subtotal <= total:
            msg = f'Weight at index {index} is lost to rounding'
            raise OverflowError(msg, 'float')
        total = subtotal
        running.append(subtotal)

    log.debug('cumulative weights built', size=len(running), total=total, integral=integral)
    return CumulativeWeights(tuple(running), integral, accumulator)


def search(
    values: Sequence[float],
    point: float,
    policy: SearchPolicy | str = SearchPolicy.BINARY,
) -> int:
    """Return the index of the first entry of sorted `values` greater than `point`.

    Args:
        values: Ascending running totals.
        point: The sampled point.
        policy: LINEAR scans from the front, BINARY bisects the whole
            sequence, GALLOP probes exponentially growing prefixes before
            bisecting, which favours points near the front.

    Returns:
        An index in `[0, len(values)]`.
    """
    policy = SearchPolicy(policy)
    if policy is SearchPolicy.LINEAR:
        for index, value in enumerate(values):
            if value > point:
                return index
        return len(values)
    if policy is SearchPolicy.GALLOP:
        size = len(values)
        lo = hi = 0
        step = 1
        while hi < size and values[hi] <= point:
            lo = hi + 1
            hi += step
            step <<= 1
        return bisect.bisect_right(values, point, lo, min(hi, size))
    return bisect.bisect_right(values, point)
