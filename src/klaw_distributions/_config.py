"""Sampling configuration: SearchPolicy enum, SamplingConfig, and initialization."""

from __future__ import annotations

import os
from dataclasses import dataclass
from enum import StrEnum

import msgspec

from klaw_distributions._logging import configure_logging, get_logger
from klaw_distributions.types import LogLevel, RetryLimit, Seed

__all__ = [
    'SamplingConfig',
    'SearchPolicy',
    'get_config',
    'init',
]

log = get_logger(__name__)


class SearchPolicy(StrEnum):
    """Lookup strategy for locating a point among cumulative weights."""

    LINEAR = 'linear'
    BINARY = 'binary'
    GALLOP = 'gallop'


@dataclass(frozen=True)
class SamplingConfig:
    """Configuration for klaw-distributions.

    Attributes:
        search_policy: Default lookup strategy for discrete distributions.
        max_retries: Upper bound on rejection-loop attempts. None = unbounded.
        default_seed: Seed for the process-wide default source. None = OS entropy.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = silent.
    """

    search_policy: SearchPolicy = SearchPolicy.BINARY
    max_retries: int | None = None
    default_seed: int | None = None
    log_level: str | None = None


# Global sampling configuration (set by init() or lazily by get_config())
_config: SamplingConfig | None = None


def _detect_search_policy() -> SearchPolicy:
    """Read KLAW_DIST_SEARCH_POLICY, defaulting to binary search."""
    env_policy = os.environ.get('KLAW_DIST_SEARCH_POLICY', '').lower()
    if not env_policy:
        return SearchPolicy.BINARY
    try:
        return SearchPolicy(env_policy)
    except ValueError:
        log.warning('unknown KLAW_DIST_SEARCH_POLICY, defaulting to binary', value=env_policy)
        return SearchPolicy.BINARY


def _detect_max_retries() -> int | None:
    """Read KLAW_DIST_MAX_RETRIES; unset means unbounded."""
    raw = os.environ.get('KLAW_DIST_MAX_RETRIES')
    if raw is None or raw == '':
        return None
    return msgspec.convert(raw, type=RetryLimit, strict=False)


def _detect_seed() -> int | None:
    """Read KLAW_DIST_SEED; unset means the default source seeds from OS entropy."""
    raw = os.environ.get('KLAW_DIST_SEED')
    if raw is None or raw == '':
        return None
    return msgspec.convert(raw, type=Seed, strict=False)


def init(
    search_policy: SearchPolicy | str | None = None,
    max_retries: int | None = None,
    default_seed: int | None = None,
    log_level: str | None = None,
) -> SamplingConfig:
    """Initialize klaw-distributions with the given configuration.

    Fields left as None are detected from the environment
    (KLAW_DIST_SEARCH_POLICY, KLAW_DIST_MAX_RETRIES, KLAW_DIST_SEED).
    The default source is reset so that a new seed takes effect on next use.

    Args:
        search_policy: Default discrete-distribution lookup. Can be a
            SearchPolicy or a string ("linear", "binary", "gallop").
        max_retries: Bound on rejection-loop attempts (1..1,000,000).
        default_seed: Seed for the default source (>= 0).
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The SamplingConfig that was set.

    Raises:
        ValueError: If `search_policy` names no known policy.
        msgspec.ValidationError: If a numeric setting is out of range.

    Example:
        ```python
        from klaw_distributions import init

        # Detect everything from the environment
        init()

        # Reproducible default source, bounded retries
        init(default_seed=42, max_retries=1000, log_level='DEBUG')
        ```
    """
    global _config  # noqa: PLW0603

    if search_policy is None:
        resolved_policy = _detect_search_policy()
    elif isinstance(search_policy, str):
        resolved_policy = SearchPolicy(search_policy.lower())
    else:
        resolved_policy = search_policy

    if max_retries is None:
        resolved_retries = _detect_max_retries()
    else:
        resolved_retries = msgspec.convert(max_retries, type=RetryLimit)

    if default_seed is None:
        resolved_seed = _detect_seed()
    else:
        resolved_seed = msgspec.convert(default_seed, type=Seed)

    if log_level is not None:
        log_level = msgspec.convert(log_level, type=LogLevel)

    _config = SamplingConfig(
        search_policy=resolved_policy,
        max_retries=resolved_retries,
        default_seed=resolved_seed,
        log_level=log_level,
    )

    if log_level is not None:
        configure_logging(log_level)

    from klaw_distributions._default import reset_default_source

    reset_default_source()

    log.debug(
        'sampling config initialized',
        search_policy=resolved_policy.value,
        max_retries=resolved_retries,
        seeded=resolved_seed is not None,
    )
    return _config


def get_config() -> SamplingConfig:
    """Get the current configuration, initializing from the environment on first use.

    Example:
        ```python
        from klaw_distributions import init, get_config

        init(max_retries=64)
        get_config().max_retries  # 64
        ```
    """
    if _config is None:
        return init()
    return _config
