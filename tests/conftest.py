"""Pytest configuration and shared fixtures for klaw-distributions tests."""

from __future__ import annotations

import os
from collections.abc import Generator
from unittest.mock import patch

import pytest
from hypothesis import settings

from klaw_distributions import RandomSource, reset_default_source
from klaw_distributions import _config as config_module
from klaw_distributions._logging import clear_log_hooks
from tests.sources import CountingSource

settings.register_profile('ci', max_examples=200, deadline=None)
settings.register_profile('dev', max_examples=50, deadline=None)
settings.load_profile(os.environ.get('HYPOTHESIS_PROFILE', 'dev'))

_ENV_VARS = ('KLAW_DIST_SEARCH_POLICY', 'KLAW_DIST_MAX_RETRIES', 'KLAW_DIST_SEED')


@pytest.fixture(autouse=True)
def fresh_state() -> Generator[None]:
    """Run every test with no configuration, default source, or log hooks."""
    env = {key: value for key, value in os.environ.items() if key not in _ENV_VARS}
    with patch.dict(os.environ, env, clear=True):
        config_module._config = None
        reset_default_source()
        clear_log_hooks()
        yield
        config_module._config = None
        reset_default_source()
        clear_log_hooks()


@pytest.fixture
def source() -> RandomSource:
    """Seeded 32-bit Mersenne Twister source."""
    return RandomSource(seed=20240611)


@pytest.fixture
def byte_source() -> CountingSource:
    """8-bit source cycling through every word."""
    return CountingSource(bits=8)
