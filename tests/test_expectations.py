"""Tests for Expect handles and the equals / contains / completes_with matchers."""

import asyncio
import itertools
from typing import Optional

import pytest

from intent.errors import ExpectationFailedError, MissingStrategyError
from intent.expectations import (
    Expect,
    Expectation,
    ExpectationResult,
    ExpectationStatus,
    MatcherExpectation,
    expect,
    expect_call,
)


class Point:
    def __init__(self, x, y):
        self.x = x
        self.y = y


async def answer():
    return 42


async def explode():
    raise ValueError("boom")


class CountingThunk:
    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


# --- equals ---


@pytest.mark.asyncio
async def test_equals_pass():
    result = await expect(5).equals(5).evaluate()
    assert result.status == ExpectationStatus.PASSED
    assert result.passed is True


@pytest.mark.asyncio
async def test_equals_fail_message():
    result = await expect(5).equals(6).evaluate()
    assert result.status == ExpectationStatus.FAILED
    assert result.message == "Expected 6 but found 5"
    assert result.expected == "6"
    assert result.actual == "5"


@pytest.mark.asyncio
async def test_negated_equals_pass():
    result = await expect(5).not_().equals(6).evaluate()
    assert result.passed is True


@pytest.mark.asyncio
async def test_negated_equals_fail_message():
    result = await expect(5).not_().equals(5).evaluate()
    assert result.failed is True
    assert result.message == "Expected 5 to not equal 5"


@pytest.mark.asyncio
async def test_equals_uses_explicit_type():
    result = await expect(None).equals(7, as_type=Optional[int])
    assert result.message == "Expected Some(7) but found None"


@pytest.mark.asyncio
async def test_equals_with_strings():
    result = await expect("ada").equals("bob")
    assert result.message == "Expected 'bob' but found 'ada'"


@pytest.mark.asyncio
async def test_equals_with_registered_type(registry):
    registry.register(
        Point,
        equality=lambda a, b: (a.x, a.y) == (b.x, b.y),
        formatter=lambda p: f"Point({p.x}, {p.y})",
    )
    handle = Expect.of(Point(1, 2), registry=registry)

    assert (await handle.equals(Point(1, 2))).passed
    result = await handle.equals(Point(2, 2))
    assert result.message == "Expected Point(2, 2) but found Point(1, 2)"


@pytest.mark.asyncio
async def test_equals_thunk_raising_is_an_error():
    def broken():
        raise RuntimeError("no value")

    result = await expect_call(broken).equals(1)
    assert result.status == ExpectationStatus.ERROR
    assert isinstance(result.cause, RuntimeError)
    assert "no value" in result.message


@pytest.mark.asyncio
async def test_equals_strategy_raising_is_an_error(registry):
    def refuse(a, b):
        raise TypeError("cannot compare")

    registry.register(Point, equality=refuse)
    result = await Expect.of(Point(0, 0), registry=registry).equals(Point(0, 0))
    assert result.errored is True
    assert isinstance(result.cause, TypeError)


@pytest.mark.asyncio
async def test_equals_formats_actual_with_its_own_type():
    result = await expect(5).equals(None)
    assert result.message == "Expected None but found 5"

    result = await expect("5").equals(5)
    assert result.message == "Expected 5 but found '5'"
    assert result.expected == "5"
    assert result.actual == "'5'"


@pytest.mark.asyncio
async def test_equals_formats_unregistered_actual_with_repr():
    point = Point(1, 2)
    result = await expect(point).equals(3)
    assert result.message == f"Expected 3 but found {point!r}"


@pytest.mark.asyncio
async def test_equals_on_plain_containers():
    assert (await expect([1, 2]).equals([1, 2])).passed
    assert (await expect((1, "a")).equals((1, "a"))).passed

    result = await expect([1, 2]).equals([1, 3])
    assert result.message == "Expected [1, 3] but found [1, 2]"


# --- binding ---


def test_missing_strategy_fails_at_matcher_construction():
    thunk = CountingThunk(Point(0, 0))
    handle = Expect(thunk)

    with pytest.raises(MissingStrategyError):
        handle.equals(Point(0, 0))
    with pytest.raises(MissingStrategyError):
        handle.contains(Point(0, 0))
    with pytest.raises(MissingStrategyError):
        handle.completes_with(Point(0, 0))

    assert thunk.calls == 0


def test_matcher_construction_does_not_evaluate():
    thunk = CountingThunk(5)
    Expect(thunk).equals(5)
    assert thunk.calls == 0


# --- negation ---


def test_negate_returns_new_handle():
    handle = expect(5)
    negated = handle.not_()

    assert negated is not handle
    assert handle.is_negated is False
    assert negated.is_negated is True
    assert negated.negate().is_negated is False


def test_negate_does_not_force_value():
    thunk = CountingThunk(5)
    Expect(thunk).not_().not_().negate()
    assert thunk.calls == 0


@pytest.mark.asyncio
async def test_double_negation_is_identity():
    cases = [
        lambda h: h.equals(5),
        lambda h: h.equals(6),
    ]
    for build in cases:
        plain = await build(expect(5))
        twice = await build(expect(5).not_().not_())
        assert (plain.status, plain.message) == (twice.status, twice.message)

    for needle in (2, 9):
        plain = await expect([1, 2, 3]).contains(needle)
        twice = await expect([1, 2, 3]).not_().not_().contains(needle)
        assert (plain.status, plain.message) == (twice.status, twice.message)

    for target in (42, 41):
        plain = await expect_call(answer).completes_with(target)
        twice = await expect_call(answer).not_().not_().completes_with(target)
        assert (plain.status, plain.message) == (twice.status, twice.message)


# --- contains ---


@pytest.mark.asyncio
async def test_contains_pass():
    result = await expect([1, 2, 3]).contains(2)
    assert result.passed is True


@pytest.mark.asyncio
async def test_contains_fail_lists_elements():
    result = await expect([1, 2, 3]).contains(9)
    assert result.failed is True
    assert "1, 2, 3" in result.message
    assert result.message == "Expected list(1, 2, 3) to contain 9"


@pytest.mark.asyncio
async def test_negated_contains():
    assert (await expect([1, 2, 3]).not_().contains(9)).passed

    result = await expect([1, 2, 3]).not_().contains(2)
    assert result.failed is True
    assert result.message == "Expected list(1, 2, 3) to not contain 2"


@pytest.mark.asyncio
async def test_contains_truncates_diagnostics():
    handle = Expect.of(list(range(10)), contains_limit=3)
    result = await handle.contains(99)
    assert result.message == "Expected list(0, 1, 2, ...) to contain 99"


@pytest.mark.asyncio
async def test_contains_stops_on_infinite_iterable_once_found():
    assert (await expect(itertools.count()).contains(5)).passed


@pytest.mark.asyncio
async def test_negated_contains_stops_once_diagnostics_are_full():
    handle = Expect.of(itertools.count(), contains_limit=3)
    result = await handle.not_().contains(5)
    assert result.message == "Expected count(0, 1, 2, ...) to not contain 5"


@pytest.mark.asyncio
async def test_contains_empty_iterable():
    result = await expect([]).contains(1)
    assert result.message == "Expected list() to contain 1"


@pytest.mark.asyncio
async def test_contains_on_non_iterable_is_an_error():
    result = await expect(5).contains(5)
    assert result.errored is True
    assert isinstance(result.cause, TypeError)


@pytest.mark.asyncio
async def test_contains_optional_elements():
    result = await expect([1, None]).contains(3, as_type=Optional[int])
    assert result.message == "Expected list(Some(1), None) to contain Some(3)"


@pytest.mark.asyncio
async def test_contains_formats_mixed_elements_by_their_type():
    result = await expect([1, "1", None]).contains(2)
    assert result.message == "Expected list(1, '1', None) to contain 2"


# --- completes_with ---


@pytest.mark.asyncio
async def test_completes_with_pass():
    assert (await expect_call(answer).completes_with(42)).passed
    assert (await expect(answer()).completes_with(42)).passed
    assert (await expect(answer).completes_with(42)).passed


@pytest.mark.asyncio
async def test_completes_with_future():
    future = asyncio.get_running_loop().create_future()
    future.set_result(42)
    assert (await expect(future).completes_with(42)).passed


@pytest.mark.asyncio
async def test_completes_with_wrong_value():
    result = await expect_call(answer).completes_with(41)
    assert result.failed is True
    assert result.message == "Expected awaitable to be completed with 41 but found 42"


@pytest.mark.asyncio
async def test_completes_with_rejection_fails_with_cause():
    result = await expect_call(explode).completes_with(42)
    assert result.status == ExpectationStatus.FAILED
    assert "boom" in result.message
    assert result.message == (
        "Expected awaitable to be completed with 42 but it failed with ValueError: boom"
    )


@pytest.mark.asyncio
async def test_negated_completes_with_rejection_passes():
    assert (await expect_call(explode).not_().completes_with(42)).passed


@pytest.mark.asyncio
async def test_negated_completes_with():
    assert (await expect_call(answer).not_().completes_with(41)).passed

    result = await expect_call(answer).not_().completes_with(42)
    assert result.message == "Expected awaitable not to be completed with 42"


@pytest.mark.asyncio
async def test_completes_with_non_awaitable_is_an_error():
    result = await expect(42).completes_with(42)
    assert result.errored is True
    assert isinstance(result.cause, TypeError)


@pytest.mark.asyncio
async def test_completes_with_callable_runs_fresh_each_time():
    calls = []

    async def counted():
        calls.append(1)
        return 1

    expectation = expect_call(counted).completes_with(1)
    assert (await expectation).passed
    assert (await expectation).passed
    assert len(calls) == 2


# --- results ---


@pytest.mark.asyncio
async def test_expectation_is_awaitable():
    expectation = expect(1).equals(1)
    assert isinstance(expectation, Expectation)
    assert isinstance(await expectation, ExpectationResult)


@pytest.mark.asyncio
async def test_raise_for_status():
    (await expect(1).equals(1)).raise_for_status()

    with pytest.raises(ExpectationFailedError, match="Expected 2 but found 1"):
        (await expect(1).equals(2)).raise_for_status()

    with pytest.raises(AssertionError):
        (await expect(1).equals(2)).raise_for_status()


@pytest.mark.asyncio
async def test_raise_for_status_reraises_cause():
    def broken():
        raise KeyError("missing")

    result = await expect_call(broken).equals(1)
    with pytest.raises(KeyError):
        result.raise_for_status()


def test_result_str():
    assert str(ExpectationResult.passed_result()) == "PASSED"
    assert str(ExpectationResult.failed_result("nope")) == "FAILED: nope"


def test_matcher_must_describe_failures():
    class Silent(MatcherExpectation):
        async def evaluate(self):
            return self._judge(self.expect.evaluate())

    handle = expect(1)
    equality, formatter = handle.registry.bind(int)
    with pytest.raises(TypeError):
        Silent(handle, 2, equality, formatter)
