"""
Declaration-time data structures.

A SetupPart is one named step that transforms the shared test state.
A TestCase captures the setup chain in effect when it was declared,
and replays it each time it runs.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, Protocol, TypeVar, runtime_checkable

S = TypeVar("S")


def identity(state: S) -> S:
    """Transform used by pure grouping blocks."""
    return state


@dataclass(frozen=True)
class SetupPart(Generic[S]):
    """
    One named setup step.

    Attributes:
        name: Display name of the enclosing block
        transform: Maps the state built so far to the next state
    """
    name: str
    transform: Callable[[S], S] = identity


@runtime_checkable
class RunnableCase(Protocol):
    """What a test runner needs from a registered test."""

    @property
    def name_parts(self) -> tuple[str, ...]: ...

    def run(self) -> Any: ...


@dataclass(frozen=True)
class TestCase(Generic[S]):
    """
    A registered test.

    Attributes:
        setup_chain: Setup parts in effect at declaration, outer to inner
        name: The test's own name
        body: Called with the folded state
        empty_state: Produces the state the setup chain starts from
    """
    __test__ = False  # not a pytest test class

    setup_chain: tuple[SetupPart[S], ...]
    name: str
    body: Callable[[S], Any]
    empty_state: Callable[[], S]

    @property
    def name_parts(self) -> tuple[str, ...]:
        return tuple(part.name for part in self.setup_chain)

    @property
    def display_name(self) -> str:
        return " > ".join((*self.name_parts, self.name))

    def build_state(self) -> S:
        """Fold the setup chain over a fresh empty state."""
        state = self.empty_state()
        for part in self.setup_chain:
            state = part.transform(state)
        return state

    def run(self) -> Any:
        """
        Replay the setup chain, then call the body with the result.

        Exceptions from a transform or the body propagate. Whatever the
        body returns (for example an Expectation) is returned.
        """
        return self.body(self.build_state())
