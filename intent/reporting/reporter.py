"""
Reporter for building run reports.

This module provides the Reporter class which records the outcome of
each test case of a suite into a RunReport.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from ..declaration import RunnableCase
from .models import CaseRecord, CaseStatus, RunReport


class Reporter:
    """
    Builds and manages run reports.

    Example:
        reporter = Reporter.from_cases(suite.test_cases, suite_name="accounts")
        reporter.start_run()

        reporter.start_case("0")
        reporter.complete_case_failure("0", failure_message="Expected 6 but found 5")

        report = reporter.finish_run()
        reporter.save_json("reports/accounts.json")
    """

    def __init__(self, report: RunReport):
        """
        Initialize with a RunReport.

        Use Reporter.from_cases() for the typical case.
        """
        self.report = report

    @classmethod
    def from_cases(
        cls,
        cases: Iterable[RunnableCase],
        suite_name: str = "",
        run_id: str | None = None,
    ) -> Reporter:
        """
        Create a Reporter with one pending record per case.

        Case IDs are the positions of the cases, as strings.

        Args:
            cases: The registered test cases, in declaration order
            suite_name: Name to record for the run
            run_id: Optional custom run ID (auto-generated if not provided)
        """
        report = RunReport(suite_name=suite_name)
        if run_id:
            report.run_id = run_id

        for index, case in enumerate(cases):
            report.add_case(CaseRecord(
                case_id=str(index),
                name=getattr(case, "name", ""),
                name_parts=list(case.name_parts),
            ))

        return cls(report)

    def start_run(self) -> None:
        """Mark the run as started."""
        self.report.start()

    def finish_run(self) -> RunReport:
        """
        Mark the run as completed and return the final report.

        Returns:
            The completed RunReport with summary stats
        """
        self.report.complete()
        return self.report

    def start_case(self, case_id: str) -> CaseRecord | None:
        """Mark a case as started. Returns None if the case is unknown."""
        case = self.report.get_case(case_id)
        if case:
            case.start()
        return case

    def complete_case_success(self, case_id: str) -> CaseRecord | None:
        """Mark a case as passed."""
        case = self.report.get_case(case_id)
        if case:
            case.complete(CaseStatus.PASSED)
        return case

    def complete_case_failure(
        self,
        case_id: str,
        failure_message: str,
        expected_value: str | None = None,
        actual_value: str | None = None,
    ) -> CaseRecord | None:
        """
        Mark a case as failed.

        Args:
            case_id: The ID of the case
            failure_message: Human-readable failure description
            expected_value: Formatted expected value
            actual_value: Formatted actual value
        """
        case = self.report.get_case(case_id)
        if case:
            case.failure_message = failure_message
            case.expected_value = expected_value
            case.actual_value = actual_value
            case.complete(CaseStatus.FAILED)
        return case

    def complete_case_error(self, case_id: str, error_message: str) -> CaseRecord | None:
        """Mark a case as errored (it crashed rather than failing a check)."""
        case = self.report.get_case(case_id)
        if case:
            case.error_message = error_message
            case.complete(CaseStatus.ERROR)
        return case

    def save_json(self, path: str | Path) -> None:
        """
        Save the report to a JSON file.

        Args:
            path: Path to save the JSON file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.report.to_json())
