"""Normal variates via the Box-Muller transform.

Each transform turns two uniform draws into two independent normal
variates. `NormalEngine` returns the first immediately and keeps the
polar pair so the second call can return its partner without touching
the source.
"""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from klaw_distributions._numeric import check_finite
from klaw_distributions.errors import RangeError
from klaw_distributions.samplers import uniform01

if TYPE_CHECKING:
    from klaw_distributions.sources import UniformSource

__all__ = ['NormalEngine', 'check_sigma', 'normal']


def check_sigma(mu: float, sigma: float) -> None:
    """Validate normal parameters.

    Raises:
        RangeError: If `mu` or `sigma` is not finite, or `sigma <= 0`.
    """
    check_finite(mu, sigma, what='normal parameter')
    if sigma <= 0:
        msg = f'Standard deviation must be positive, got {sigma}'
        raise RangeError(msg)


class NormalEngine:
    """Box-Muller engine with a one-variate spare.

    States:
        Empty: the next call draws two uniforms, caches the polar pair,
            and returns the cosine variate.
        HasSpare: the next call returns the sine variate of the cached
            pair and consumes no randomness.

    Two engines in the same state, fed sources in the same state, produce
    identical output sequences.
    """

    __slots__ = ('_angle', '_radius', '_valid')

    def __init__(self) -> None:
        self._valid = False
        self._angle = 0.0
        self._radius = 0.0

    @property
    def has_spare(self) -> bool:
        return self._valid

    def __call__(self, mu: float, sigma: float, source: UniformSource) -> float:
        """Return the next normal variate with mean `mu` and deviation `sigma`.

        Raises:
            RangeError: If the parameters are invalid. The engine and the
                source are left untouched.
        """
        check_sigma(mu, sigma)
        if self._valid:
            self._valid = False
            return self._radius * math.sin(self._angle) * sigma + mu

        u1 = uniform01(source)
        u2 = uniform01(source)
        self._radius = math.sqrt(-2.0 * math.log(1.0 - u2))
        self._angle = 2.0 * math.pi * u1
        self._valid = True
        return self._radius * math.cos(self._angle) * sigma + mu

    def reset(self) -> None:
        """Discard any cached spare."""
        self._valid = False

    def copy(self) -> NormalEngine:
        """Return an engine in the same state, including the cached pair."""
        twin = NormalEngine()
        twin._valid = self._valid
        twin._angle = self._angle
        twin._radius = self._radius
        return twin

    def __repr__(self) -> str:
        return f'NormalEngine(has_spare={self._valid})'


def normal(
    mu: float = 0.0,
    sigma: float = 1.0,
    source: UniformSource | None = None,
    engine: NormalEngine | None = None,
) -> float:
    """Generate a normal variate.

    Without `source`, the process-wide default source and default engine are
    used, so consecutive calls share spares. With an explicit `source` and no
    `engine`, a fresh engine is used and its spare is discarded; pass an
    engine (or use a `NormalStream`) to keep pairs.

    Example:
        ```python
        normal(10.0, 2.0)                         # default source
        engine = NormalEngine()
        a = normal(0.0, 1.0, src, engine)         # consumes two words
        b = normal(0.0, 1.0, src, engine)         # consumes none
        ```
    """
    if source is None:
        from klaw_distributions._default import default_engine, default_source

        source = default_source()
        if engine is None:
            engine = default_engine()
    elif engine is None:
        engine = NormalEngine()
    return engine(mu, sigma, source)
