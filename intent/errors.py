"""
Exception hierarchy for the intent engine.

Matcher outcomes are reported as ExpectationResult data. The exceptions
here cover the cases that are raised instead: strategy binding failures,
explicit status checks and misuse of the setup stack.
"""

from __future__ import annotations

from typing import Any


class IntentError(Exception):
    """Base class for all errors raised by intent."""


class MissingStrategyError(IntentError, LookupError):
    """No equality or formatter strategy is registered for a type."""

    def __init__(self, kind: str, key: Any):
        self.kind = kind
        self.key = key
        super().__init__(f"No {kind} strategy registered for {_describe_key(key)}")


class ExpectationFailedError(IntentError, AssertionError):
    """Raised by ExpectationResult.raise_for_status() for a failed result."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class SetupStackError(IntentError):
    """The setup stack was popped more times than it was pushed."""


def _describe_key(key: Any) -> str:
    if isinstance(key, type):
        return key.__qualname__
    return repr(key)
