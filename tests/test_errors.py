"""Tests for the struct and exception error variants."""

from __future__ import annotations

import builtins

import msgspec
import pytest

from klaw_distributions import (
    DistributionError,
    InvalidRange,
    InvalidWeights,
    NotDuplicable,
    NotDuplicableError,
    Overflow,
    OverflowError,
    RangeError,
    RetryLimit,
    RetryLimitError,
    WeightError,
)

EXCEPTIONS = [
    RangeError('Invalid bounding interval [3, 3)'),
    OverflowError('Bound 300 is outside [0, 255]', 'uint8'),
    WeightError('Negative weight', 2),
    RetryLimitError('uniform_int', 10),
    NotDuplicableError('PlainSource'),
]


class TestHierarchy:
    """Tests for the exception hierarchy."""

    @pytest.mark.parametrize('error', EXCEPTIONS, ids=lambda error: type(error).__name__)
    def test_all_share_base(self, error: DistributionError) -> None:
        assert isinstance(error, DistributionError)

    def test_overflow_is_not_builtin(self) -> None:
        assert not issubclass(OverflowError, builtins.OverflowError)
        assert not issubclass(OverflowError, ArithmeticError)

    def test_can_catch_base(self) -> None:
        with pytest.raises(DistributionError):
            raise WeightError('All weights are zero')


class TestConversion:
    """Tests for to_struct() and to_exception()."""

    @pytest.mark.parametrize('error', EXCEPTIONS, ids=lambda error: type(error).__name__)
    def test_round_trip(self, error: DistributionError) -> None:
        struct = error.to_struct()  # type: ignore[attr-defined]
        again = struct.to_exception()
        assert type(again) is type(error)
        assert str(again) == str(error)
        assert again.to_struct() == struct

    def test_structs_encode_to_json(self) -> None:
        encoded = msgspec.json.encode(WeightError('Negative weight', 2).to_struct())
        assert msgspec.json.decode(encoded) == {'message': 'Negative weight', 'index': 2}

    def test_struct_defaults(self) -> None:
        assert Overflow('boom').type_name is None
        assert InvalidWeights('empty').index is None


class TestMessages:
    """Tests for exception messages and attributes."""

    def test_range_error(self) -> None:
        error = RangeError('Invalid bounding interval [3, 3)')
        assert str(error) == 'Invalid bounding interval [3, 3)'
        assert error.to_struct() == InvalidRange('Invalid bounding interval [3, 3)')

    def test_overflow_names_type(self) -> None:
        assert str(OverflowError('too big', 'int8')) == 'too big (int8)'
        assert str(OverflowError('too big')) == 'too big'

    def test_weight_error_names_index(self) -> None:
        assert str(WeightError('Negative weight', 4)) == 'Negative weight at index 4'
        assert str(WeightError('Empty weight sequence')) == 'Empty weight sequence'

    def test_retry_limit(self) -> None:
        error = RetryLimitError('uniform01', 5)
        assert error.operation == 'uniform01'
        assert error.limit == 5
        assert str(error) == 'uniform01: no accepted draw after 5 attempts'
        assert error.to_struct() == RetryLimit('uniform01', 5)

    def test_not_duplicable(self) -> None:
        error = NotDuplicableError('PlainSource')
        assert "'PlainSource'" in str(error)
        assert error.to_struct() == NotDuplicable('PlainSource')
