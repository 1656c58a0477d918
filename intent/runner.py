"""
Reference runner for registered test cases.

Runs the cases of one suite in declaration order and turns each into a
single ExpectationResult, recorded in a RunReport. Exceptions escaping
a case are classified here: AssertionError is a failure, anything else
an error.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Iterable
from typing import Any

from .declaration import RunnableCase, Suite
from .expectations import CompoundExpectation, CompoundPolicy, Expectation, ExpectationResult
from .reporting import Reporter, RunReport

logger = logging.getLogger(__name__)


async def resolve_outcome(
    outcome: Any,
    policy: CompoundPolicy = CompoundPolicy.ALL,
) -> ExpectationResult:
    """
    Turn whatever a test body returned into one result.

    None passes; an Expectation is evaluated; a list or tuple of
    expectations is evaluated as a compound; an ExpectationResult is
    taken as is; any other awaitable is awaited and resolved again.
    """
    if isinstance(outcome, Expectation):
        return await outcome.evaluate()
    if inspect.isawaitable(outcome):
        return await resolve_outcome(await outcome, policy)
    if outcome is None:
        return ExpectationResult.passed_result()
    if isinstance(outcome, ExpectationResult):
        return outcome
    if isinstance(outcome, (list, tuple)) and all(isinstance(e, Expectation) for e in outcome):
        return await CompoundExpectation(outcome, policy=policy).evaluate()
    return ExpectationResult.error_result(
        TypeError(f"Test body returned an unsupported value of type {type(outcome).__name__}")
    )


async def run_case(
    case: RunnableCase,
    policy: CompoundPolicy = CompoundPolicy.ALL,
) -> ExpectationResult:
    """
    Run one case and classify its outcome.

    Args:
        case: The test case to run
        policy: Aggregation policy for bodies returning several expectations

    Returns:
        The case's ExpectationResult; this function does not raise for
        exceptions coming from the case itself
    """
    try:
        return await resolve_outcome(case.run(), policy)
    except AssertionError as e:
        return ExpectationResult.failed_result(str(e) or type(e).__name__)
    except Exception as e:
        return ExpectationResult.error_result(e)


async def run_suite(
    suite: Suite[Any] | Iterable[RunnableCase],
    name: str | None = None,
    policy: CompoundPolicy | None = None,
) -> RunReport:
    """
    Run every case of a suite sequentially and report the outcomes.

    Args:
        suite: A Suite, or any iterable of runnable cases
        name: Suite name for the report (defaults to the Suite class name,
            or "" for a plain iterable of cases)
        policy: Compound policy (defaults to the suite's settings)

    Returns:
        The completed RunReport
    """
    cases = list(suite)
    if policy is None:
        settings = getattr(suite, "settings", None)
        policy = settings.compound_policy if settings is not None else CompoundPolicy.ALL

    if name is None:
        name = type(suite).__name__ if isinstance(suite, Suite) else ""
    reporter = Reporter.from_cases(cases, suite_name=name)
    reporter.start_run()
    logger.info(f"Running {len(cases)} test case(s) of {reporter.report.suite_name}")

    for index, case in enumerate(cases):
        case_id = str(index)
        reporter.start_case(case_id)
        result = await run_case(case, policy)

        if result.passed:
            reporter.complete_case_success(case_id)
        elif result.failed:
            reporter.complete_case_failure(
                case_id,
                failure_message=result.message,
                expected_value=result.expected,
                actual_value=result.actual,
            )
        else:
            reporter.complete_case_error(case_id, result.message)

        record = reporter.report.get_case(case_id)
        logger.debug(f"{record.display_name}: {result.status.value}")

    report = reporter.finish_run()
    logger.info(
        f"Finished {report.suite_name}: {report.passed_cases} passed, "
        f"{report.failed_cases} failed, {report.error_cases} errors"
    )
    return report
