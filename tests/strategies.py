"""Hypothesis strategies for property-based testing of klaw-distributions."""

from hypothesis import strategies as st

from klaw_distributions import INT8, INT16, INT32, INT64, UINT8, UINT16, UINT32, UINT64, Interval

# -----------------------------------------------------------------------------
# Basic value strategies
# -----------------------------------------------------------------------------

seeds = st.integers(min_value=0, max_value=2**32 - 1)

intervals = st.sampled_from(list(Interval))

int_types = st.sampled_from([INT8, INT16, INT32, INT64, UINT8, UINT16, UINT32, UINT64])

finite_floats = st.floats(
    min_value=-1e12,
    max_value=1e12,
    allow_nan=False,
    allow_infinity=False,
)

# -----------------------------------------------------------------------------
# Range strategies
# -----------------------------------------------------------------------------


@st.composite
def int_ranges(draw: st.DrawFn) -> tuple[int, int, Interval]:
    """Generate (a, b, interval) triples whose normalized range is non-empty."""
    interval = draw(intervals)
    a = draw(st.integers(min_value=-(2**40), max_value=2**40))
    # Each open side removes one value from the range.
    gap = int(interval.lower_open) + int(interval.upper_open)
    b = a + gap + draw(st.integers(min_value=0, max_value=2**20))
    return a, b, interval


@st.composite
def float_ranges(draw: st.DrawFn) -> tuple[float, float, Interval]:
    """Generate (a, b, interval) triples with a < b."""
    a = draw(finite_floats)
    width = draw(st.floats(min_value=1e-3, max_value=1e6, allow_nan=False))
    return a, a + width, draw(intervals)


# -----------------------------------------------------------------------------
# Weight strategies
# -----------------------------------------------------------------------------

int_weights = st.lists(st.integers(min_value=0, max_value=1000), min_size=1, max_size=30).filter(
    any
)

# Multiples of 1/8 keep every running total exact.
float_weights = st.lists(
    st.integers(min_value=0, max_value=8000).map(lambda n: n / 8),
    min_size=1,
    max_size=30,
).filter(any)
