"""Sampling error types: dual struct+exception for structured logs and raise-based code."""

from __future__ import annotations

import msgspec

__all__ = [
    'DistributionError',
    'InvalidRange',
    'InvalidWeights',
    'NotDuplicable',
    'NotDuplicableError',
    'Overflow',
    'OverflowError',
    'RangeError',
    'RetryLimit',
    'RetryLimitError',
    'WeightError',
]


class DistributionError(Exception):
    """Base class for every error raised by klaw-distributions."""


# --- Range Errors ---


class InvalidRange(msgspec.Struct, frozen=True, gc=False):
    """Empty or inverted sampling range - struct variant."""

    message: str

    def to_exception(self) -> RangeError:
        """Convert to exception for raise-based code."""
        return RangeError(self.message)


class RangeError(DistributionError):
    """Empty or inverted sampling range - exception variant."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def to_struct(self) -> InvalidRange:
        """Convert to struct for structured logging."""
        return InvalidRange(self.message)


# --- Overflow Errors ---


class Overflow(msgspec.Struct, frozen=True, gc=False):
    """Arithmetic left the working numeric type - struct variant."""

    message: str
    type_name: str | None = None

    def to_exception(self) -> OverflowError:
        """Convert to exception for raise-based code."""
        return OverflowError(self.message, self.type_name)


class OverflowError(DistributionError):  # noqa: A001
    """Arithmetic left the working numeric type - exception variant."""

    def __init__(self, message: str, type_name: str | None = None) -> None:
        self.message = message
        self.type_name = type_name
        msg = message
        if type_name:
            msg = f'{message} ({type_name})'
        super().__init__(msg)

    def to_struct(self) -> Overflow:
        """Convert to struct for structured logging."""
        return Overflow(self.message, self.type_name)


# --- Weight Errors ---


class InvalidWeights(msgspec.Struct, frozen=True, gc=False):
    """Weight sequence cannot define a distribution - struct variant."""

    message: str
    index: int | None = None

    def to_exception(self) -> WeightError:
        """Convert to exception for raise-based code."""
        return WeightError(self.message, self.index)


class WeightError(DistributionError):
    """Weight sequence cannot define a distribution - exception variant."""

    def __init__(self, message: str, index: int | None = None) -> None:
        self.message = message
        self.index = index
        msg = message
        if index is not None:
            msg = f'{message} at index {index}'
        super().__init__(msg)

    def to_struct(self) -> InvalidWeights:
        """Convert to struct for structured logging."""
        return InvalidWeights(self.message, self.index)


# --- Retry Errors ---


class RetryLimit(msgspec.Struct, frozen=True, gc=False):
    """Rejection loop ran out of attempts - struct variant."""

    operation: str
    limit: int

    def to_exception(self) -> RetryLimitError:
        """Convert to exception for raise-based code."""
        return RetryLimitError(self.operation, self.limit)


class RetryLimitError(DistributionError):
    """Rejection loop ran out of attempts - exception variant."""

    def __init__(self, operation: str, limit: int) -> None:
        self.operation = operation
        self.limit = limit
        super().__init__(f'{operation}: no accepted draw after {limit} attempts')

    def to_struct(self) -> RetryLimit:
        """Convert to struct for structured logging."""
        return RetryLimit(self.operation, self.limit)


# --- Capability Errors ---


class NotDuplicable(msgspec.Struct, frozen=True, gc=False):
    """Source cannot be duplicated - struct variant."""

    source_type: str

    def to_exception(self) -> NotDuplicableError:
        """Convert to exception for raise-based code."""
        return NotDuplicableError(self.source_type)


class NotDuplicableError(DistributionError):
    """Source cannot be duplicated - exception variant."""

    def __init__(self, source_type: str) -> None:
        self.source_type = source_type
        super().__init__(f"Source '{source_type}' does not support duplicate()")

    def to_struct(self) -> NotDuplicable:
        """Convert to struct for structured logging."""
        return NotDuplicable(self.source_type)
