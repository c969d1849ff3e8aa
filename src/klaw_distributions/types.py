"""Constrained type aliases for configuration validation.

Values read from the environment or passed to `init()` are validated
against these aliases with `msgspec.convert`, so a misconfiguration is
rejected when the configuration is built rather than deep inside a
sampling loop.

Usage:
    >>> import msgspec
    >>> from klaw_distributions.types import RetryLimit
    >>>
    >>> msgspec.convert(100, type=RetryLimit)
    100
    >>> msgspec.convert(0, type=RetryLimit)
    # ValidationError: Expected `int` >= 1

See Also:
    - https://jcristharif.com/msgspec/constraints.html
"""

from __future__ import annotations

from typing import Annotated

import msgspec

__all__ = [
    'LogLevel',
    'RetryLimit',
    'Seed',
    'WordBits',
]

# -----------------------------------------------------------------------------
# Numeric Constraints
# -----------------------------------------------------------------------------

RetryLimit = Annotated[int, msgspec.Meta(ge=1, le=1_000_000)]
"""Maximum attempts for a rejection-sampling loop.

Valid range: 1 to 1,000,000 (inclusive)

Rejection loops terminate almost surely in a handful of attempts; a bound
only matters when a caller needs a hard worst-case latency.
"""

Seed = Annotated[int, msgspec.Meta(ge=0)]
"""Seed for the default source.

Valid: 0, 42, 2**64 - 1
Invalid: -1, 2**64 (beyond the 64-bit integer range)
"""

WordBits = Annotated[int, msgspec.Meta(ge=1, le=64)]
"""Width in bits of the words produced by a reference source.

Valid range: 1 to 64 (inclusive)
"""

# -----------------------------------------------------------------------------
# String Constraints
# -----------------------------------------------------------------------------

LogLevel = Annotated[
    str,
    msgspec.Meta(pattern=r'^(?i:debug|info|warning|error|critical)$'),
]
"""Standard library logging level name, case-insensitive.

Valid: "DEBUG", "info", "Warning"
Invalid: "", "verbose", "10"
"""
