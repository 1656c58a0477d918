"""
Declarative test-suite builder.

A Suite collects test cases. Tests are declared inside nested blocks;
each block pushes a named setup part (optionally transforming the
state) and every test remembers the blocks that enclosed it.
"""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator
from contextlib import AbstractContextManager
from typing import Any, Generic, TypeVar, overload

from ..config import EngineSettings
from ..expectations import CompoundExpectation, Expect, Expectation
from ..strategies import StrategyRegistry, default_registry
from .models import SetupPart, TestCase, identity
from .stack import SetupStack

logger = logging.getLogger(__name__)

S = TypeVar("S")
T = TypeVar("T")

Block = Callable[[], Any]
Body = Callable[[S], Any]


class Suite(Generic[S]):
    """
    Builder for a collection of test cases sharing a state type.

    Blocks can be opened with a callable or as a context manager; the
    setup part is popped when the block exits, even if it raised.

    Example:
        suite = Suite(empty_state=dict)

        def with_user():
            @suite.test("has a name")
            def _(state):
                return suite.expect(state["user"]).equals("ada")

            with suite.given("logged out", lambda s: {**s, "session": None}):
                suite.test("has no session", lambda s: suite.expect(s["session"]).equals(None))

        suite.given("a user", lambda s: {**s, "user": "ada"}, with_user)

        [case.display_name for case in suite]
        # ["a user > has a name", "a user > logged out > has no session"]
    """

    def __init__(
        self,
        empty_state: Callable[[], S] | None = None,
        *,
        registry: StrategyRegistry | None = None,
        settings: EngineSettings | None = None,
    ):
        self._empty_state = empty_state if empty_state is not None else _no_state
        self.registry = registry if registry is not None else default_registry()
        self.settings = settings if settings is not None else EngineSettings()
        self._stack = SetupStack()
        self._test_cases: list[TestCase[S]] = []

    def empty_state(self) -> S:
        """The state every test's setup chain starts from."""
        return self._empty_state()

    @property
    def test_cases(self) -> tuple[TestCase[S], ...]:
        return tuple(self._test_cases)

    @property
    def depth(self) -> int:
        """Number of currently open blocks."""
        return self._stack.depth

    def __iter__(self) -> Iterator[TestCase[S]]:
        return iter(self.test_cases)

    def __len__(self) -> int:
        return len(self._test_cases)

    # ─────────────────────────────────────────────────────────────────────
    # Blocks
    # ─────────────────────────────────────────────────────────────────────

    @overload
    def group(self, name: str) -> AbstractContextManager[SetupPart[S]]: ...

    @overload
    def group(self, name: str, block: Block) -> None: ...

    def group(self, name: str, block: Block | None = None) -> Any:
        """
        Open a named block that does not change the state.

        Args:
            name: Block name, becomes part of every enclosed test's name
            block: Declarations to run inside the block; when omitted a
                context manager is returned instead
        """
        return self._open(SetupPart(name, identity), block)

    @overload
    def given(self, name: str, transform: Callable[[S], S]) -> AbstractContextManager[SetupPart[S]]: ...

    @overload
    def given(self, name: str, transform: Callable[[S], S], block: Block) -> None: ...

    def given(self, name: str, transform: Callable[[S], S], block: Block | None = None) -> Any:
        """
        Open a named block whose tests see ``transform`` applied to the state.

        Args:
            name: Block name
            transform: Maps the enclosing state to the state of this block
            block: Declarations to run inside the block; when omitted a
                context manager is returned instead
        """
        return self._open(SetupPart(name, transform), block)

    def via(self, transform: Callable[[S], S], name: str, block: Block | None = None) -> Any:
        """Same as given(), with the transform first."""
        return self.given(name, transform, block)

    def _open(self, part: SetupPart[S], block: Block | None) -> Any:
        if block is None:
            return self._stack.scope(part)
        with self._stack.scope(part):
            block()
        return None

    # ─────────────────────────────────────────────────────────────────────
    # Tests
    # ─────────────────────────────────────────────────────────────────────

    @overload
    def test(self, name: str) -> Callable[[Body[S]], Body[S]]: ...

    @overload
    def test(self, name: str, body: Body[S]) -> TestCase[S]: ...

    def test(self, name: str, body: Body[S] | None = None) -> Any:
        """
        Register a test inside the currently open blocks.

        Called with a body, returns the registered TestCase. Called with
        only a name, returns a decorator that registers the function and
        hands it back unchanged.
        """
        if body is None:
            def decorator(fn: Body[S]) -> Body[S]:
                self.test(name, fn)
                return fn
            return decorator

        case = TestCase(
            setup_chain=self._stack.snapshot(),
            name=name,
            body=body,
            empty_state=self.empty_state,
        )
        self._test_cases.append(case)
        logger.debug(f"Registered test '{case.display_name}'")
        return case

    # ─────────────────────────────────────────────────────────────────────
    # Expectations
    # ─────────────────────────────────────────────────────────────────────

    def expect(self, value: T) -> Expect[T]:
        """Wrap a value with this suite's strategies and settings."""
        return Expect.of(
            value,
            registry=self.registry,
            contains_limit=self.settings.contains_diagnostic_limit,
        )

    def expect_call(self, fn: Callable[..., T], *args: Any, **kwargs: Any) -> Expect[T]:
        """Wrap a call that runs only when the expectation is evaluated."""
        return Expect(
            functools.partial(fn, *args, **kwargs),
            registry=self.registry,
            contains_limit=self.settings.contains_diagnostic_limit,
        )

    def all_of(self, *expectations: Expectation) -> CompoundExpectation:
        """Combine expectations using this suite's compound policy."""
        return CompoundExpectation(expectations, policy=self.settings.compound_policy)


class Intent(Suite[S], ABC):
    """
    Subclass-style suite: declare tests in ``declare()``.

    Example:
        class CounterIntent(Intent[int]):
            def empty_state(self) -> int:
                return 0

            def declare(self) -> None:
                with self.given("incremented", lambda n: n + 1):
                    self.test("is one", lambda n: self.expect(n).equals(1))
    """

    def __init__(
        self,
        *,
        registry: StrategyRegistry | None = None,
        settings: EngineSettings | None = None,
    ):
        super().__init__(registry=registry, settings=settings)
        self.declare()

    @abstractmethod
    def empty_state(self) -> S:
        pass

    @abstractmethod
    def declare(self) -> None:
        pass


def _no_state() -> Any:
    return None
