"""
Expectation engine

Expectations are deferred, awaitable judgments about a value. They are
built from an Expect handle by calling a matcher, and evaluate to an
ExpectationResult that is passed, failed (with a message) or errored.

Supported matchers:
    - equals: the value equals an expected value
    - contains: an iterable value has an element equal to an expected value
    - completes_with: an awaitable resolves to an expected value

Any handle can be negated with ``not_()`` before the matcher is called.

Usage:
    from intent.expectations import all_of, expect

    result = await expect(5).equals(5)
    result = await expect([1, 2, 3]).not_().contains(9)
    result = await all_of(
        expect(total).equals(10),
        expect(fetch_total()).completes_with(10),
    )

    if not result.passed:
        print(result)  # FAILED: Expected 10 but found 9
"""

# Models
from .models import CompoundPolicy, ExpectationResult, ExpectationStatus

# Engine
from .engine import (
    DEFAULT_CONTAINS_LIMIT,
    CompletesWithExpectation,
    CompoundExpectation,
    ContainsExpectation,
    EqualsExpectation,
    Expect,
    Expectation,
    MatcherExpectation,
    # Convenience functions
    all_of,
    expect,
    expect_call,
)

__all__ = [
    # Models
    "CompoundPolicy",
    "ExpectationResult",
    "ExpectationStatus",
    # Engine
    "DEFAULT_CONTAINS_LIMIT",
    "CompletesWithExpectation",
    "CompoundExpectation",
    "ContainsExpectation",
    "EqualsExpectation",
    "Expect",
    "Expectation",
    "MatcherExpectation",
    # Convenience functions
    "all_of",
    "expect",
    "expect_call",
]
