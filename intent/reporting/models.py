"""
Report data models for suite runs.

This module defines the data structures for capturing a run of a
suite: run metadata, one record per test case, and timing.
"""

from __future__ import annotations

import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class CaseStatus(str, Enum):
    """Status of an individual test case."""
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


class RunStatus(str, Enum):
    """Overall status of a suite run."""
    PENDING = "pending"
    RUNNING = "running"
    PASSED = "passed"
    FAILED = "failed"
    ERROR = "error"


@dataclass
class CaseRecord:
    """
    Record of a single test case execution.

    Captures the case's hierarchical name, its outcome, how long it
    took, and the failure or error message if any.
    """
    case_id: str
    name: str
    name_parts: list[str] = field(default_factory=list)
    status: CaseStatus = CaseStatus.PENDING

    # Timing
    started_at: datetime | None = None
    ended_at: datetime | None = None
    duration_ms: float | None = None

    # Formatted values from the matcher, when there is one
    expected_value: str | None = None
    actual_value: str | None = None

    # Errors and messages
    failure_message: str | None = None
    error_message: str | None = None

    @property
    def display_name(self) -> str:
        return " > ".join([*self.name_parts, self.name])

    def start(self) -> None:
        """Mark the case as started."""
        self.status = CaseStatus.RUNNING
        self.started_at = datetime.now(timezone.utc)

    def complete(self, status: CaseStatus) -> None:
        """Mark the case as completed with given status."""
        self.status = status
        self.ended_at = datetime.now(timezone.utc)
        if self.started_at:
            delta = self.ended_at - self.started_at
            self.duration_ms = delta.total_seconds() * 1000

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "case_id": self.case_id,
            "name": self.name,
            "name_parts": list(self.name_parts),
            "status": self.status.value,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "duration_ms": self.duration_ms,
            "expected_value": self.expected_value,
            "actual_value": self.actual_value,
            "failure_message": self.failure_message,
            "error_message": self.error_message,
        }


@dataclass
class RunReport:
    """
    Complete record of one suite run.

    Contains metadata about the run and a record for each test case,
    in declaration order.
    """
    # Run identification
    run_id: str = field(default_factory=lambda: str(uuid.uuid4()))
    suite_name: str = ""

    # Timing
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    ended_at: datetime | None = None
    duration_ms: float | None = None

    # Overall status
    status: RunStatus = RunStatus.PENDING

    # Case records
    cases: list[CaseRecord] = field(default_factory=list)

    # Summary stats
    total_cases: int = 0
    passed_cases: int = 0
    failed_cases: int = 0
    error_cases: int = 0

    def start(self) -> None:
        """Mark the run as started."""
        self.status = RunStatus.RUNNING
        self.started_at = datetime.now(timezone.utc)

    def complete(self) -> None:
        """Mark the run as completed and calculate final status."""
        self.ended_at = datetime.now(timezone.utc)
        delta = self.ended_at - self.started_at
        self.duration_ms = delta.total_seconds() * 1000

        self.total_cases = len(self.cases)
        self.passed_cases = sum(1 for c in self.cases if c.status == CaseStatus.PASSED)
        self.failed_cases = sum(1 for c in self.cases if c.status == CaseStatus.FAILED)
        self.error_cases = sum(1 for c in self.cases if c.status == CaseStatus.ERROR)

        if self.error_cases > 0:
            self.status = RunStatus.ERROR
        elif self.failed_cases > 0:
            self.status = RunStatus.FAILED
        else:
            self.status = RunStatus.PASSED

    def add_case(self, case: CaseRecord) -> None:
        """Add a case record to the run."""
        self.cases.append(case)

    def get_case(self, case_id: str) -> CaseRecord | None:
        """Get a case record by ID."""
        for case in self.cases:
            if case.case_id == case_id:
                return case
        return None

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "run_id": self.run_id,
            "suite_name": self.suite_name,
            "started_at": self.started_at.isoformat() if self.started_at else None,
            "ended_at": self.ended_at.isoformat() if self.ended_at else None,
            "duration_ms": self.duration_ms,
            "status": self.status.value,
            "summary": {
                "total": self.total_cases,
                "passed": self.passed_cases,
                "failed": self.failed_cases,
                "errors": self.error_cases,
            },
            "cases": [case.to_dict() for case in self.cases],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)
