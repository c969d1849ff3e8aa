"""Uniform source protocols and the reference Mersenne Twister source.

Every sampler in this package consumes randomness through the narrow
`UniformSource` interface: a stateful stream of integer words with known
inclusive bounds. Engines opt into duplication by subclassing
`DuplicableSource`; streams rely on that declaration, not on probing
for a `duplicate` attribute.

Type Parameters:
    Sources are not generic over the word type: Python integers are
    unbounded, so the word width is fully described by `min()`/`max()`.
"""

from __future__ import annotations

import random
from abc import abstractmethod
from typing import Protocol, Self, runtime_checkable

import msgspec

from klaw_distributions.types import WordBits

__all__ = ['DuplicableSource', 'RandomSource', 'UniformSource']


class UniformSource(Protocol):
    """Protocol for a stateful source of uniformly distributed integer words.

    The source is single-owner and not internally synchronized. Passing one
    instance to several samplers or streams interleaves their draws.
    """

    @abstractmethod
    def current(self) -> int:
        """Return the current word without consuming it.

        Repeated calls without an intervening `advance()` return the same word.
        """
        ...

    @abstractmethod
    def advance(self) -> None:
        """Consume the current word and move to the next one."""
        ...

    @abstractmethod
    def min(self) -> int:
        """Smallest word `current()` can return. Constant per instance."""
        ...

    @abstractmethod
    def max(self) -> int:
        """Largest word `current()` can return. Constant per instance."""
        ...


@runtime_checkable
class DuplicableSource(UniformSource, Protocol):
    """Protocol for sources that can be copied for reproducible branching."""

    @abstractmethod
    def duplicate(self) -> Self:
        """Return an independent copy positioned at the same word.

        The copy and the original share no further mutation: advancing one
        never changes the other.

        Example:
            ```python
            src = RandomSource(seed=7)
            twin = src.duplicate()
            assert src.current() == twin.current()
            src.advance()
            twin.advance()
            assert src.current() == twin.current()
            ```
        """
        ...


class RandomSource(DuplicableSource):
    """Mersenne Twister source backed by a private `random.Random`.

    Words are `getrandbits(bits)`, so `min() == 0` and `max() == 2**bits - 1`.

    Args:
        seed: Initial seed. None seeds from OS entropy.
        bits: Word width, 1 to 64 (default 32, matching MT19937's native output).
    """

    def __init__(self, seed: int | None = None, bits: int = 32) -> None:
        self._bits = msgspec.convert(bits, type=WordBits)
        self._rng = random.Random(seed)
        self._front = self._rng.getrandbits(self._bits)

    def current(self) -> int:
        return self._front

    def advance(self) -> None:
        self._front = self._rng.getrandbits(self._bits)

    def min(self) -> int:
        return 0

    def max(self) -> int:
        return (1 << self._bits) - 1

    @property
    def bits(self) -> int:
        return self._bits

    def seed(self, value: int | None = None) -> None:
        """Re-seed the generator and refresh the current word."""
        self._rng.seed(value)
        self._front = self._rng.getrandbits(self._bits)

    def duplicate(self) -> RandomSource:
        twin = RandomSource.__new__(RandomSource)
        twin._bits = self._bits
        twin._rng = random.Random()
        twin._rng.setstate(self._rng.getstate())
        twin._front = self._front
        return twin

    def __repr__(self) -> str:
        return f'RandomSource(bits={self._bits})'
