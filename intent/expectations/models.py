"""
Expectation result models.

This module defines the outcome of evaluating an expectation and the
aggregation policies for compound expectations.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from ..errors import ExpectationFailedError


class ExpectationStatus(str, Enum):
    """Status of an evaluated expectation."""
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"  # the value under test could not be computed


class CompoundPolicy(str, Enum):
    """How a compound expectation aggregates its inner results."""
    ALL = "all"  # evaluate everything, combine every non-passed message
    FIRST_FAILURE = "first_failure"  # sequential, stop at first non-pass


@dataclass(frozen=True)
class ExpectationResult:
    """
    Result of evaluating one expectation.

    Attributes:
        status: Whether the expectation passed, failed, or errored
        message: Human-readable failure description (empty when passed)
        cause: The exception behind an ERROR result
        expected: Formatted expected value, when a matcher produced one
        actual: Formatted actual value, when a matcher produced one
    """
    status: ExpectationStatus
    message: str = ""
    cause: BaseException | None = None
    expected: str | None = None
    actual: str | None = None

    @property
    def passed(self) -> bool:
        return self.status == ExpectationStatus.PASSED

    @property
    def failed(self) -> bool:
        return self.status == ExpectationStatus.FAILED

    @property
    def errored(self) -> bool:
        return self.status == ExpectationStatus.ERROR

    def __str__(self) -> str:
        if self.passed:
            return "PASSED"
        return f"{self.status.value.upper()}: {self.message}"

    def raise_for_status(self) -> None:
        """
        Raise if the expectation did not pass.

        Raises:
            ExpectationFailedError: For a FAILED result
            BaseException: The original cause of an ERROR result
        """
        if self.failed:
            raise ExpectationFailedError(self.message)
        if self.errored:
            if self.cause is not None:
                raise self.cause
            raise ExpectationFailedError(self.message)

    @classmethod
    def passed_result(cls) -> ExpectationResult:
        """Create a passing result."""
        return cls(status=ExpectationStatus.PASSED)

    @classmethod
    def failed_result(
        cls,
        message: str,
        expected: str | None = None,
        actual: str | None = None,
    ) -> ExpectationResult:
        """Create a failing result."""
        return cls(
            status=ExpectationStatus.FAILED,
            message=message,
            expected=expected,
            actual=actual,
        )

    @classmethod
    def error_result(
        cls,
        cause: BaseException,
        message: str | None = None,
    ) -> ExpectationResult:
        """Create an error result (the expectation couldn't be evaluated)."""
        return cls(
            status=ExpectationStatus.ERROR,
            message=message if message is not None else f"{type(cause).__name__}: {cause}",
            cause=cause,
        )
