"""Process-wide default source used by the convenience wrappers.

The default source is a `RandomSource` created lazily on first use. It is
seeded from `SamplingConfig.default_seed` when one is configured and from
OS entropy otherwise; callers never see the seed. Like every source it is
single-owner: sharing it between threads needs external locking.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from klaw_distributions._config import get_config
from klaw_distributions._logging import get_logger
from klaw_distributions.sources import RandomSource

if TYPE_CHECKING:
    from klaw_distributions.normal import NormalEngine

__all__ = ['default_engine', 'default_source', 'reset_default_source']

log = get_logger(__name__)

_source: RandomSource | None = None
_engine: NormalEngine | None = None


def default_source() -> RandomSource:
    """Return the process-wide default source, creating it on first use."""
    global _source  # noqa: PLW0603

    if _source is None:
        seed = get_config().default_seed
        # get_config() may have run init(), which resets the source.
        _source = RandomSource(seed)
        log.debug('default source created', seeded=seed is not None)
    return _source


def default_engine() -> NormalEngine:
    """Return the normal engine paired with the default source."""
    global _engine  # noqa: PLW0603

    if _engine is None:
        from klaw_distributions.normal import NormalEngine

        _engine = NormalEngine()
    return _engine


def reset_default_source() -> None:
    """Drop the default source and engine; the next use re-creates them."""
    global _source, _engine  # noqa: PLW0603

    _source = None
    _engine = None
