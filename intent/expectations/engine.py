"""
Expectation engine.

An Expect handle wraps a deferred value. Calling a matcher on it binds
the equality and formatting strategies for the expected value's type
and returns an Expectation: an awaitable judgment that resolves to one
ExpectationResult.
"""

from __future__ import annotations

import asyncio
import functools
import inspect
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Generator, Iterable, Sequence
from typing import Any, Generic, TypeVar

from ..errors import MissingStrategyError
from ..strategies import Equality, Formatter, StrategyRegistry, default_registry
from .models import CompoundPolicy, ExpectationResult, ExpectationStatus

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Formatted elements kept for a containment failure message
DEFAULT_CONTAINS_LIMIT = 20


class Expectation(ABC):
    """
    A deferred judgment. Nothing is computed until evaluate() is awaited.

    Each call to evaluate() produces exactly one ExpectationResult.
    Expectations are awaitable, so ``await expectation`` is the same as
    ``await expectation.evaluate()``.
    """

    @abstractmethod
    async def evaluate(self) -> ExpectationResult:
        pass

    def __await__(self) -> Generator[Any, None, ExpectationResult]:
        return self.evaluate().__await__()


class Expect(Generic[T]):
    """
    Handle on a deferred value, plus a negation flag.

    Handles are immutable: negate() returns a new handle and never forces
    the deferred value.

    Example:
        await Expect.of(5).equals(5)                      # passed
        await Expect.of(5).not_().equals(5)               # failed
        await Expect(lambda: fetch_ids()).contains(42)
        await Expect.of(fetch_user(1)).completes_with(user)
    """

    def __init__(
        self,
        thunk: Callable[[], T],
        *,
        negated: bool = False,
        registry: StrategyRegistry | None = None,
        contains_limit: int = DEFAULT_CONTAINS_LIMIT,
    ):
        self._thunk = thunk
        self._negated = negated
        self.registry = registry if registry is not None else default_registry()
        self.contains_limit = contains_limit

    @classmethod
    def of(cls, value: T, **options: Any) -> Expect[T]:
        """Wrap an already computed value."""
        return cls(lambda: value, **options)

    @property
    def is_negated(self) -> bool:
        return self._negated

    def evaluate(self) -> T:
        """Force the deferred value."""
        return self._thunk()

    def negate(self) -> Expect[T]:
        """Return a copy of this handle with the negation flag flipped."""
        return Expect(
            self._thunk,
            negated=not self._negated,
            registry=self.registry,
            contains_limit=self.contains_limit,
        )

    def not_(self) -> Expect[T]:
        return self.negate()

    # ─────────────────────────────────────────────────────────────────────
    # Matchers
    # ─────────────────────────────────────────────────────────────────────

    def equals(self, expected: Any, *, as_type: Any = None) -> Expectation:
        """
        Expect the value to equal ``expected``.

        Args:
            expected: The expected value
            as_type: Strategy key; defaults to ``type(expected)``

        Raises:
            MissingStrategyError: If no strategy is registered for the key
        """
        equality, formatter = self.registry.bind(_strategy_key(expected, as_type))
        return EqualsExpectation(self, expected, equality, formatter)

    def contains(self, expected: Any, *, as_type: Any = None) -> Expectation:
        """
        Expect the (iterable) value to contain an element equal to ``expected``.

        Args:
            expected: The element to look for
            as_type: Strategy key for the elements; defaults to ``type(expected)``

        Raises:
            MissingStrategyError: If no strategy is registered for the key
        """
        equality, formatter = self.registry.bind(_strategy_key(expected, as_type))
        return ContainsExpectation(self, expected, equality, formatter, self.contains_limit)

    def completes_with(self, expected: Any, *, as_type: Any = None) -> Expectation:
        """
        Expect the wrapped awaitable to resolve to ``expected``.

        The handle may wrap an awaitable, or a callable returning one, in
        which case every evaluation awaits a fresh computation.

        Raises:
            MissingStrategyError: If no strategy is registered for the key
                or for exceptions
        """
        equality, formatter = self.registry.bind(_strategy_key(expected, as_type))
        error_formatter = self.registry.formatter(BaseException)
        return CompletesWithExpectation(self, expected, equality, formatter, error_formatter)


def _strategy_key(expected: Any, as_type: Any) -> Any:
    return as_type if as_type is not None else type(expected)


# ─────────────────────────────────────────────────────────────────────────────
# Matcher expectations
# ─────────────────────────────────────────────────────────────────────────────

class MatcherExpectation(Expectation):
    """Common state of the comparing matchers."""

    def __init__(
        self,
        expect: Expect[Any],
        expected: Any,
        equality: Equality,
        formatter: Formatter,
    ):
        self.expect = expect
        self.expected = expected
        self.equality = equality
        self.formatter = formatter

    def _judge(self, actual: Any) -> ExpectationResult:
        """Compare, apply negation, and describe a mismatch."""
        matched = self.equality.are_equal(actual, self.expected)
        if self.expect.is_negated:
            matched = not matched
        if matched:
            return ExpectationResult.passed_result()

        actual_str = self._format_actual(actual)
        expected_str = self.formatter.format(self.expected)
        return ExpectationResult.failed_result(
            message=self._describe(actual_str, expected_str),
            expected=expected_str,
            actual=actual_str,
        )

    def _format_actual(self, value: Any) -> str:
        """
        Format a value found at evaluation time.

        Values of the expected value's type use the bound formatter. Other
        values use the strategy registered for their own type, or repr()
        when there is none.
        """
        if type(value) is type(self.expected):
            return self.formatter.format(value)
        try:
            return self.expect.registry.formatter(type(value)).format(value)
        except MissingStrategyError:
            return repr(value)

    @abstractmethod
    def _describe(self, actual_str: str, expected_str: str) -> str:
        """Build the failure message from the formatted values."""


class EqualsExpectation(MatcherExpectation):
    """Deferred value vs. expected value."""

    async def evaluate(self) -> ExpectationResult:
        try:
            actual = self.expect.evaluate()
            return self._judge(actual)
        except Exception as e:
            logger.debug(f"equals errored: {type(e).__name__}: {e}")
            return ExpectationResult.error_result(e)

    def _describe(self, actual_str: str, expected_str: str) -> str:
        if self.expect.is_negated:
            return f"Expected {actual_str} to not equal {expected_str}"
        return f"Expected {expected_str} but found {actual_str}"


class CompletesWithExpectation(MatcherExpectation):
    """
    Awaited computation vs. expected value.

    A computation that raises is a regular outcome of this matcher, not
    an error: it fails the expectation, or satisfies it when negated.
    """

    def __init__(
        self,
        expect: Expect[Any],
        expected: Any,
        equality: Equality,
        formatter: Formatter,
        error_formatter: Formatter,
    ):
        super().__init__(expect, expected, equality, formatter)
        self.error_formatter = error_formatter

    async def evaluate(self) -> ExpectationResult:
        try:
            pending = self.expect.evaluate()
            if callable(pending) and not inspect.isawaitable(pending):
                pending = pending()
        except Exception as e:
            return self._rejected(e)

        if not inspect.isawaitable(pending):
            return ExpectationResult.error_result(
                TypeError(f"Expected an awaitable but found {type(pending).__name__}")
            )

        try:
            actual = await pending
        except Exception as e:
            return self._rejected(e)

        try:
            return self._judge(actual)
        except Exception as e:
            logger.debug(f"completes_with errored: {type(e).__name__}: {e}")
            return ExpectationResult.error_result(e)

    def _rejected(self, cause: Exception) -> ExpectationResult:
        if self.expect.is_negated:
            return ExpectationResult.passed_result()
        try:
            expected_str = self.formatter.format(self.expected)
            error_str = self.error_formatter.format(cause)
        except Exception as e:
            return ExpectationResult.error_result(e)
        return ExpectationResult.failed_result(
            message=(
                f"Expected awaitable to be completed with {expected_str} "
                f"but it failed with {error_str}"
            ),
            expected=expected_str,
            actual=error_str,
        )

    def _describe(self, actual_str: str, expected_str: str) -> str:
        if self.expect.is_negated:
            return f"Expected awaitable not to be completed with {expected_str}"
        return f"Expected awaitable to be completed with {expected_str} but found {actual_str}"


class ContainsExpectation(MatcherExpectation):
    """
    Iterable value vs. an element it should (not) contain.

    At most ``limit`` elements are formatted for the failure message.
    Scanning stops once the verdict is known and the diagnostic is full.
    """

    def __init__(
        self,
        expect: Expect[Any],
        expected: Any,
        equality: Equality,
        formatter: Formatter,
        limit: int = DEFAULT_CONTAINS_LIMIT,
    ):
        super().__init__(expect, expected, equality, formatter)
        self.limit = limit

    async def evaluate(self) -> ExpectationResult:
        negated = self.expect.is_negated
        try:
            actual = self.expect.evaluate()
            seen, truncated, found = self._scan(actual, stop_when_found=not negated)
            if found != negated:
                return ExpectationResult.passed_result()

            items = seen + ["..."] if truncated else seen
            actual_str = f"{type(actual).__name__}({', '.join(items)})"
            expected_str = self.formatter.format(self.expected)
        except Exception as e:
            logger.debug(f"contains errored: {type(e).__name__}: {e}")
            return ExpectationResult.error_result(e)

        return ExpectationResult.failed_result(
            self._describe(actual_str, expected_str),
            expected=expected_str,
            actual=actual_str,
        )

    def _describe(self, actual_str: str, expected_str: str) -> str:
        if self.expect.is_negated:
            return f"Expected {actual_str} to not contain {expected_str}"
        return f"Expected {actual_str} to contain {expected_str}"

    def _scan(self, actual: Iterable[Any], stop_when_found: bool) -> tuple[list[str], bool, bool]:
        seen: list[str] = []
        truncated = False
        found = False
        for item in actual:
            if len(seen) >= self.limit:
                truncated = True
                if found:
                    break
            else:
                seen.append(self._format_actual(item))
            if not found and self.equality.are_equal(item, self.expected):
                found = True
                if stop_when_found:
                    break
        return seen, truncated, found


# ─────────────────────────────────────────────────────────────────────────────
# Compound expectations
# ─────────────────────────────────────────────────────────────────────────────

class CompoundExpectation(Expectation):
    """
    Aggregates several expectations into one result.

    With CompoundPolicy.ALL every inner expectation is evaluated
    concurrently. The result passes only if all of them pass; it is an
    ERROR if any inner result errored, otherwise FAILED, and its message
    lists every non-passed inner message in declaration order.

    With CompoundPolicy.FIRST_FAILURE the inner expectations run one at a
    time in declaration order and the first non-passed result is returned
    unchanged. Later expectations are not evaluated.
    """

    def __init__(
        self,
        inner: Sequence[Expectation],
        policy: CompoundPolicy = CompoundPolicy.ALL,
    ):
        self.inner = tuple(inner)
        self.policy = policy

    async def evaluate(self) -> ExpectationResult:
        if self.policy == CompoundPolicy.FIRST_FAILURE:
            for expectation in self.inner:
                result = await _evaluate_safely(expectation)
                if not result.passed:
                    return result
            return ExpectationResult.passed_result()

        results = await asyncio.gather(*(_evaluate_safely(e) for e in self.inner))
        return _combine(list(results))


async def _evaluate_safely(expectation: Expectation) -> ExpectationResult:
    # User-defined expectations may break the never-raise contract
    try:
        return await expectation.evaluate()
    except Exception as e:
        return ExpectationResult.error_result(e)


def _combine(results: list[ExpectationResult]) -> ExpectationResult:
    not_passed = [r for r in results if not r.passed]
    if not not_passed:
        return ExpectationResult.passed_result()

    lines = [f"{len(not_passed)} of {len(results)} expectations did not pass:"]
    lines.extend(f"  - {r.message}" for r in not_passed)
    message = "\n".join(lines)

    errored = next((r for r in not_passed if r.errored), None)
    if errored is not None:
        return ExpectationResult(ExpectationStatus.ERROR, message=message, cause=errored.cause)
    return ExpectationResult.failed_result(message)


# ─────────────────────────────────────────────────────────────────────────────
# Convenience functions
# ─────────────────────────────────────────────────────────────────────────────

def expect(value: T) -> Expect[T]:
    """Wrap a value using the default strategy registry."""
    return Expect.of(value)


def expect_call(fn: Callable[..., T], *args: Any, **kwargs: Any) -> Expect[T]:
    """Wrap a call that runs only when the expectation is evaluated."""
    return Expect(functools.partial(fn, *args, **kwargs))


def all_of(
    *expectations: Expectation,
    policy: CompoundPolicy = CompoundPolicy.ALL,
) -> CompoundExpectation:
    """Combine expectations into one that passes only if all of them pass."""
    return CompoundExpectation(expectations, policy=policy)
