"""
Intent - composable test specifications and expectations

This package lets you declare tests inside nested, named setup blocks
that build a shared state, and check results with awaitable,
negatable expectations whose comparison and formatting are chosen per
value type.

Subpackages:
    - strategies: Per-type equality and formatting strategies
    - expectations: Expect handles, matchers and compound expectations
    - declaration: Setup stack, Suite builder and TestCase records
    - reporting: Run reports for executed suites

Usage:
    from intent import Suite, run_suite

    suite = Suite(empty_state=lambda: 0)

    with suite.given("one added", lambda n: n + 1):
        suite.test("is one", lambda n: suite.expect(n).equals(1))
        suite.test("is not two", lambda n: suite.expect(n).not_().equals(2))

    report = asyncio.run(run_suite(suite, name="counter"))
    print(report.to_json())
"""

__version__ = "0.1.0"

from .errors import (
    ExpectationFailedError,
    IntentError,
    MissingStrategyError,
    SetupStackError,
)

# Re-export strategies for convenience
from .strategies import (
    Equality,
    Formatter,
    OptionalEquality,
    OptionalFormatter,
    StrategyRegistry,
    ThrowableFormatter,
    default_registry,
)

# Re-export expectations for convenience
from .expectations import (
    CompoundExpectation,
    CompoundPolicy,
    Expect,
    Expectation,
    ExpectationResult,
    ExpectationStatus,
    all_of,
    expect,
    expect_call,
)

# Re-export declaration for convenience
from .declaration import (
    Intent,
    RunnableCase,
    SetupPart,
    SetupStack,
    Suite,
    TestCase,
)

from .config import EngineSettings, load_settings

# Re-export reporting for convenience
from .reporting import CaseRecord, CaseStatus, Reporter, RunReport, RunStatus

from .runner import run_case, run_suite

__all__ = [
    # Package info
    "__version__",
    # Errors
    "ExpectationFailedError",
    "IntentError",
    "MissingStrategyError",
    "SetupStackError",
    # Strategies
    "Equality",
    "Formatter",
    "OptionalEquality",
    "OptionalFormatter",
    "StrategyRegistry",
    "ThrowableFormatter",
    "default_registry",
    # Expectations
    "CompoundExpectation",
    "CompoundPolicy",
    "Expect",
    "Expectation",
    "ExpectationResult",
    "ExpectationStatus",
    "all_of",
    "expect",
    "expect_call",
    # Declaration
    "Intent",
    "RunnableCase",
    "SetupPart",
    "SetupStack",
    "Suite",
    "TestCase",
    # Config
    "EngineSettings",
    "load_settings",
    # Reporting
    "CaseRecord",
    "CaseStatus",
    "Reporter",
    "RunReport",
    "RunStatus",
    # Runner
    "run_case",
    "run_suite",
]
