"""
Setup and test-case declaration

Tests are declared inside nested, named setup blocks. Each block
contributes one setup part; a test snapshots the parts in effect when
it is declared and replays them, outer to inner, every time it runs.

Usage:
    from intent.declaration import Suite

    suite = Suite(empty_state=list)

    with suite.given("one item", lambda items: items + [1]):
        with suite.given("two items", lambda items: items + [2]):
            suite.test("keeps order", lambda items: suite.expect(items).equals([1, 2], as_type=list[int]))

    case = suite.test_cases[0]
    case.name_parts  # ("one item", "two items")
    case.run()       # Expectation to evaluate
"""

# Models
from .models import RunnableCase, SetupPart, TestCase, identity

# Stack
from .stack import SetupStack

# Builder
from .suite import Intent, Suite

__all__ = [
    # Models
    "RunnableCase",
    "SetupPart",
    "TestCase",
    "identity",
    # Stack
    "SetupStack",
    # Builder
    "Intent",
    "Suite",
]
