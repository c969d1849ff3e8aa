"""Distribution streams: infinite sequences of samples over an owned source.

A stream computes its current value at construction and after every
`advance()`, so `current()` is free of side effects and never recomputes
a value for the same position. Streams never end; they also implement the
Python iterator protocol, where `next()` returns the current value and then
advances.

A stream holds the source it was given. Two streams share randomness only
when the caller passes them the same source instance; `duplicate()` gives
the copy its own duplicated source.

Example:
    ```python
    from itertools import islice

    from klaw_distributions import NormalStream, RandomSource

    stream = NormalStream(0.0, 1.0, RandomSource(seed=42))
    samples = list(islice(stream, 1000))
    ```
"""

from __future__ import annotations

import copy
import functools
from abc import abstractmethod
from typing import TYPE_CHECKING, Protocol, Self

import msgspec

from klaw_distributions._config import SearchPolicy, get_config
from klaw_distributions._numeric import IntType, Interval, check_bounds, common_int_type
from klaw_distributions.discrete import CumulativeWeights, cumulative_weights
from klaw_distributions.errors import NotDuplicableError
from klaw_distributions.normal import NormalEngine, check_sigma
from klaw_distributions.samplers import uniform01, uniform_char, uniform_float, uniform_int
from klaw_distributions.sources import DuplicableSource

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

    from klaw_distributions.sources import UniformSource

__all__ = [
    'DiscreteStream',
    'DuplicableStream',
    'NormalParams',
    'NormalStream',
    'Stream',
    'Uniform01Stream',
    'UniformParams',
    'UniformStream',
]


# -----------------------------------------------------------------------------
# Parameters
# -----------------------------------------------------------------------------


class UniformParams(msgspec.Struct, frozen=True, gc=False):
    """Parameters of a uniform stream.

    Attributes:
        a: Lower bound.
        b: Upper bound.
        interval: Boundary semantics.
        dtype: Working integer type; None for float and character bounds.
    """

    a: float | str
    b: float | str
    interval: Interval = Interval.CLOSED_OPEN
    dtype: IntType | None = None


class NormalParams(msgspec.Struct, frozen=True, gc=False):
    """Parameters of a normal stream, validated on construction."""

    mu: float = 0.0
    sigma: float = 1.0

    def __post_init__(self) -> None:
        check_sigma(self.mu, self.sigma)


# -----------------------------------------------------------------------------
# Protocols
# -----------------------------------------------------------------------------


class Stream[T](Protocol):
    """Protocol for an infinite stream of samples.

    Type Parameters:
        T: The type of values produced.
    """

    @abstractmethod
    def current(self) -> T:
        """Return the value at the current position without side effects."""
        ...

    @abstractmethod
    def advance(self) -> None:
        """Move to the next position, drawing from the source."""
        ...

    @abstractmethod
    def is_exhausted(self) -> bool:
        """Always False: distribution streams never end."""
        ...

    @abstractmethod
    def __iter__(self) -> Iterator[T]: ...

    @abstractmethod
    def __next__(self) -> T: ...


class DuplicableStream[T](Stream[T], Protocol):
    """Protocol for streams that can be copied at their current position."""

    @abstractmethod
    def duplicate(self) -> Self:
        """Return an independent copy at the same position.

        The copy owns a duplicate of the source and of any engine state;
        from here on the original and the copy evolve independently and,
        advanced equally, produce the same values.

        Raises:
            NotDuplicableError: If the source does not implement
                `DuplicableSource`.
        """
        ...


# -----------------------------------------------------------------------------
# Implementations
# -----------------------------------------------------------------------------


class _SourceStream[T](DuplicableStream[T]):
    """Shared position and caching logic; subclasses provide `_compute()`."""

    def __init__(self, source: UniformSource) -> None:
        self._source = source
        self._position = 0
        self._value = self._compute()

    @abstractmethod
    def _compute(self) -> T:
        """Draw the value for the next position."""
        ...

    @property
    def source(self) -> UniformSource:
        return self._source

    @property
    def position(self) -> int:
        """Number of advances since construction."""
        return self._position

    def current(self) -> T:
        return self._value

    def advance(self) -> None:
        self._value = self._compute()
        self._position += 1

    def is_exhausted(self) -> bool:
        return False

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        value = self._value
        self.advance()
        return value

    def duplicate(self) -> Self:
        if not isinstance(self._source, DuplicableSource):
            raise NotDuplicableError(type(self._source).__name__)
        twin = copy.copy(self)
        twin._source = self._source.duplicate()
        self._copy_state(twin)
        return twin

    def _copy_state(self, twin: Self) -> None:
        """Give `twin` its own copy of mutable engine state."""


class UniformStream(_SourceStream[float | str]):
    """Stream of uniform samples between `a` and `b`.

    The sampler is chosen from the bound types as in `uniform()`.

    Args:
        a: Lower bound.
        b: Upper bound.
        source: Uniform source owned by the stream.
        interval: Boundary semantics, '[)' by default.
        dtype: Working integer type for integer bounds.

    Raises:
        RangeError: If the normalized interval is empty.
        OverflowError: If a bound does not fit the working type.
    """

    def __init__(
        self,
        a: float | str,
        b: float | str,
        source: UniformSource,
        interval: Interval | str = Interval.CLOSED_OPEN,
        dtype: IntType | None = None,
    ) -> None:
        interval = Interval.parse(interval)
        self._sampler: Callable[..., float | str]
        if isinstance(a, str) and isinstance(b, str):
            self._sampler = uniform_char
        elif isinstance(a, str) or isinstance(b, str):
            msg = f'Cannot mix character and numeric bounds: {a!r}, {b!r}'
            raise TypeError(msg)
        elif isinstance(a, float) or isinstance(b, float):
            self._sampler = uniform_float
        else:
            if dtype is None:
                dtype = common_int_type(a, b)
            else:
                check_bounds(a, b, dtype)
            self._sampler = functools.partial(uniform_int, dtype=dtype)
        self.params = UniformParams(a, b, interval, dtype)
        super().__init__(source)

    def _compute(self) -> float | str:
        params = self.params
        return self._sampler(params.a, params.b, self._source, params.interval)

    def __repr__(self) -> str:
        params = self.params
        return f'UniformStream({params.interval.describe(params.a, params.b)})'


class Uniform01Stream(_SourceStream[float]):
    """Stream of floats in [0, 1)."""

    def _compute(self) -> float:
        return uniform01(self._source)

    def __repr__(self) -> str:
        return 'Uniform01Stream()'


class NormalStream(_SourceStream[float]):
    """Stream of normal variates using a private Box-Muller engine.

    Consecutive values come in pairs from one transform: advancing from a
    cosine variate to its sine partner consumes no source words. The pair
    state travels with `duplicate()`.

    Raises:
        RangeError: If `sigma <= 0` or a parameter is not finite.
    """

    def __init__(self, mu: float, sigma: float, source: UniformSource) -> None:
        self.params = NormalParams(mu, sigma)
        self._engine = NormalEngine()
        super().__init__(source)

    @property
    def engine(self) -> NormalEngine:
        return self._engine

    def _compute(self) -> float:
        return self._engine(self.params.mu, self.params.sigma, self._source)

    def _copy_state(self, twin: NormalStream) -> None:
        twin._engine = self._engine.copy()

    def __repr__(self) -> str:
        return f'NormalStream(mu={self.params.mu}, sigma={self.params.sigma})'


class DiscreteStream(_SourceStream[int]):
    """Stream of indices drawn with probability proportional to their weights.

    The running totals are computed once; each draw costs one uniform point
    plus a search over them. Duplicates share the same immutable totals.

    Args:
        weights: Non-negative weights, or a prebuilt `CumulativeWeights`.
        source: Uniform source owned by the stream.
        policy: Search strategy. Defaults to the configured search policy.

    Raises:
        WeightError: If the weights cannot define a distribution.
        OverflowError: If accumulating the weights overflows.

    Example:
        ```python
        stream = DiscreteStream([25, 50, 25], RandomSource(seed=1))
        stream.current()  # 0, 1 or 2
        ```
    """

    def __init__(
        self,
        weights: Iterable[float] | CumulativeWeights,
        source: UniformSource,
        policy: SearchPolicy | str | None = None,
    ) -> None:
        if isinstance(weights, CumulativeWeights):
            self.weights = weights
        else:
            self.weights = cumulative_weights(weights)
        self.policy = get_config().search_policy if policy is None else SearchPolicy(policy)
        super().__init__(source)

    def _compute(self) -> int:
        return self.weights.draw(self._source, self.policy)

    def __repr__(self) -> str:
        return f'DiscreteStream(size={len(self.weights)}, policy={self.policy.value})'
