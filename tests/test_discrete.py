"""Tests for cumulative weights and search policies."""

from __future__ import annotations

import bisect
import math
from collections import Counter

import msgspec
import pytest
from hypothesis import given
from hypothesis import strategies as st

from klaw_distributions import (
    INT64,
    UINT8,
    CumulativeWeights,
    DiscreteStream,
    OverflowError,
    RandomSource,
    SearchPolicy,
    WeightError,
    cumulative_weights,
    search,
)
from tests.sources import CountingSource, ScriptedSource
from tests.strategies import float_weights, int_weights, seeds

sorted_totals = st.lists(st.integers(min_value=0, max_value=500), min_size=1, max_size=40).map(
    sorted
)


class TestCumulativeWeights:
    """Tests for building running totals."""

    def test_integral_totals(self) -> None:
        cw = cumulative_weights([25, 50, 25])
        assert cw.values == (25, 75, 100)
        assert cw.integral
        assert cw.total == 100
        assert len(cw) == 3

    def test_float_totals(self) -> None:
        cw = cumulative_weights([0.5, 0.25, 0.25])
        assert cw.values == (0.5, 0.75, 1.0)
        assert not cw.integral

    def test_mixed_weights_become_floats(self) -> None:
        cw = cumulative_weights([1, 0.5])
        assert cw.values == (1.0, 1.5)
        assert all(isinstance(value, float) for value in cw.values)

    def test_zero_weights_repeat_totals(self) -> None:
        assert cumulative_weights([0, 3, 0, 2]).values == (0, 3, 3, 5)

    def test_is_immutable(self) -> None:
        cw = cumulative_weights([1, 2])
        with pytest.raises(AttributeError):
            cw.values = (9,)  # type: ignore[misc]

    def test_integral_overflow(self) -> None:
        with pytest.raises(OverflowError) as exc_info:
            cumulative_weights([200, 100], accumulator=UINT8)
        assert exc_info.value.type_name == 'uint8'

    def test_default_accumulator_overflow(self) -> None:
        with pytest.raises(OverflowError):
            cumulative_weights([2**63, 2**63])

    def test_signed_accumulator(self) -> None:
        cw = cumulative_weights([2**62, 2**62 - 1], accumulator=INT64)
        assert cw.total == 2**63 - 1
        assert cw.accumulator == INT64

    def test_float_overflow(self) -> None:
        with pytest.raises(OverflowError):
            cumulative_weights([1e308, 1e308])

    def test_weight_lost_to_rounding(self) -> None:
        with pytest.raises(OverflowError, match='rounding'):
            cumulative_weights([1e20, 1.0])

    @pytest.mark.parametrize('weights', [[], [0], [0.0, 0.0], [3, -1]])
    def test_invalid_weights(self, weights: list[float]) -> None:
        with pytest.raises(WeightError):
            cumulative_weights(weights)

    @given(weights=int_weights)
    def test_totals_are_sorted_and_sum(self, weights: list[int]) -> None:
        cw = cumulative_weights(weights)
        assert list(cw.values) == sorted(cw.values)
        assert cw.total == sum(weights)

    @given(weights=float_weights)
    def test_totals_strictly_increase_on_positive_weights(self, weights: list[float]) -> None:
        cw = cumulative_weights(weights)
        previous = 0.0
        for weight, total in zip(weights, cw.values, strict=True):
            if weight > 0:
                assert total > previous
            else:
                assert total == previous
            previous = total


class TestSearch:
    """Tests for locating a point among running totals."""

    @pytest.mark.parametrize('policy', list(SearchPolicy))
    @pytest.mark.parametrize(
        ('point', 'expected'),
        [(0, 1), (2, 1), (3, 3), (4.5, 3), (5, 4), (9, 4)],
    )
    def test_first_entry_greater_than_point(
        self, policy: SearchPolicy, point: float, expected: int
    ) -> None:
        assert search((0, 3, 3, 5), point, policy) == expected

    @given(values=sorted_totals, point=st.integers(min_value=-1, max_value=501))
    def test_policies_agree(self, values: list[int], point: int) -> None:
        expected = bisect.bisect_right(values, point)
        for policy in SearchPolicy:
            assert search(values, point, policy) == expected

    def test_accepts_policy_strings(self) -> None:
        assert search([1, 2, 3], 1, 'gallop') == 1
        assert search([1, 2, 3], 1, 'linear') == 1

    def test_unknown_policy(self) -> None:
        with pytest.raises(ValueError):
            search([1, 2, 3], 1, 'ternary')


class TestDraw:
    """Tests for drawing indices from running totals."""

    def test_zero_weight_index_never_drawn(self, source: RandomSource) -> None:
        cw = cumulative_weights([0, 100])
        assert {cw.draw(source) for _ in range(5_000)} == {1}

    @given(weights=float_weights, seed=seeds)
    def test_drawn_index_has_positive_weight(self, weights: list[float], seed: int) -> None:
        index = cumulative_weights(weights).draw(RandomSource(seed))
        assert weights[index] > 0

    @pytest.mark.parametrize('policy', list(SearchPolicy))
    def test_policies_draw_identically(self, policy: SearchPolicy) -> None:
        cw = cumulative_weights([3, 0, 1, 4, 2])
        src, baseline = RandomSource(seed=5), RandomSource(seed=5)
        drawn = [cw.draw(src, policy) for _ in range(200)]
        assert drawn == [cw.draw(baseline) for _ in range(200)]

    def test_integral_draw_is_exact(self) -> None:
        # Totals (1, 3, 4); each uint64 point is built from four 16-bit words.
        cw = cumulative_weights([1, 2, 1])
        src = ScriptedSource([0, 0, 0, 0, 0, 0, 0, 1, 0, 0, 0, 2, 0, 0, 0, 3], high=0xFFFF)
        assert [cw.draw(src) for _ in range(4)] == [0, 1, 1, 2]
        assert src.draws == 16

    @pytest.mark.statistical
    def test_frequencies(self, source: RandomSource) -> None:
        cw = cumulative_weights([25, 50, 25])
        counts = Counter(cw.draw(source) for _ in range(100_000))
        for index, expected in enumerate((0.25, 0.5, 0.25)):
            assert counts[index] / 100_000 == pytest.approx(expected, abs=0.02)

    def test_json_round_trip(self) -> None:
        cw = cumulative_weights([1, 2, 1])
        decoded = msgspec.json.decode(msgspec.json.encode(cw), type=CumulativeWeights)
        assert decoded == cw
        assert decoded.accumulator.name == 'uint64'
        assert decoded.draw(ScriptedSource([0, 0, 0, 0, 0, 0, 0, 3], high=255)) == 2


class TestHandBuiltWeights:
    """Tests for validation of directly constructed running totals."""

    def test_valid_totals(self) -> None:
        cw = CumulativeWeights((1, 3, 3, 4), True)
        assert cw.accumulator.name == 'uint64'
        assert cw == cumulative_weights([1, 2, 0, 1])

    @pytest.mark.parametrize(
        'values',
        [(), (0,), (0, 0), (-1, 2)],
        ids=['empty', 'zero', 'all-zero', 'negative-start'],
    )
    def test_invalid_totals_raise_weight_error(self, values: tuple[int, ...]) -> None:
        with pytest.raises(WeightError):
            CumulativeWeights(values, True)

    @pytest.mark.parametrize('value', [math.nan, math.inf])
    def test_non_finite_totals_raise(self, value: float) -> None:
        with pytest.raises(WeightError):
            CumulativeWeights((1.0, value), False)

    def test_decreasing_totals_raise(self) -> None:
        with pytest.raises(OverflowError, match='decrease at index 1'):
            CumulativeWeights((5, 3, 9), True)

    def test_totals_outside_accumulator_raise(self) -> None:
        with pytest.raises(OverflowError) as exc_info:
            CumulativeWeights((100, 300), True, UINT8)
        assert exc_info.value.type_name == 'uint8'

    def test_stream_rejects_before_drawing(self) -> None:
        src = CountingSource(bits=8)
        with pytest.raises(OverflowError):
            DiscreteStream(CumulativeWeights((5, 3, 9), True), src)
        assert src.draws == 0

    def test_decoding_validates(self) -> None:
        payload = b'{"values": [5, 3, 9], "integral": true}'
        with pytest.raises(OverflowError):
            msgspec.json.decode(payload, type=CumulativeWeights)
