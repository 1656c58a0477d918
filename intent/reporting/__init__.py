"""
Reporting for suite runs

This package records what happened when the test cases of a suite were
run: one record per case with its status, timing and message.

Usage:
    from intent.reporting import Reporter

    reporter = Reporter.from_cases(suite.test_cases, suite_name="accounts")
    reporter.start_run()

    reporter.start_case("0")
    reporter.complete_case_success("0")

    report = reporter.finish_run()
    reporter.save_json("reports/accounts.json")
"""

# Models
from .models import CaseRecord, CaseStatus, RunReport, RunStatus

# Reporter
from .reporter import Reporter

__all__ = [
    # Models
    "CaseRecord",
    "CaseStatus",
    "RunReport",
    "RunStatus",
    # Reporter
    "Reporter",
]
