"""
Equality and formatting strategies.

A strategy decides, for one value type, how two values are compared
(Equality) or how a value is rendered in a failure message (Formatter).
Composite strategies wrap the strategy of an inner type, so the
strategy for ``Optional[int]`` is built from the one for ``int``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from typing import Any, Generic, Optional, TypeVar

T = TypeVar("T")


# ─────────────────────────────────────────────────────────────────────────────
# Base interfaces
# ─────────────────────────────────────────────────────────────────────────────

class Equality(ABC, Generic[T]):
    """Decides whether two values of one type are equal."""

    @abstractmethod
    def are_equal(self, left: T, right: T) -> bool:
        pass


class Formatter(ABC, Generic[T]):
    """Renders a value of one type for a failure message."""

    @abstractmethod
    def format(self, value: T) -> str:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Built-in strategies
# ─────────────────────────────────────────────────────────────────────────────

class NaturalEquality(Equality[Any]):
    """Equality through the ``==`` operator."""

    def are_equal(self, left: Any, right: Any) -> bool:
        return bool(left == right)


class StrFormatter(Formatter[Any]):
    """Formats with ``str()``. Used for numbers, where str and repr agree."""

    def format(self, value: Any) -> str:
        return str(value)


class ReprFormatter(Formatter[Any]):
    """Formats with ``repr()`` so strings keep their quotes."""

    def format(self, value: Any) -> str:
        return repr(value)


class ThrowableFormatter(Formatter[BaseException]):
    """
    Formats an exception as ``<kind>: <message>``.

    Builtin exceptions use their bare class name, everything else the
    module-qualified name, e.g. ``ValueError: boom`` or
    ``myapp.errors.QuotaExceeded: limit reached``.
    """

    def format(self, value: BaseException) -> str:
        cls = type(value)
        if cls.__module__ == "builtins":
            kind = cls.__qualname__
        else:
            kind = f"{cls.__module__}.{cls.__qualname__}"
        return f"{kind}: {value}"


class FunctionEquality(Equality[T]):
    """Adapts a plain ``(T, T) -> bool`` callable."""

    def __init__(self, fn: Callable[[T, T], bool]):
        self.fn = fn

    def are_equal(self, left: T, right: T) -> bool:
        return bool(self.fn(left, right))


class FunctionFormatter(Formatter[T]):
    """Adapts a plain ``(T) -> str`` callable."""

    def __init__(self, fn: Callable[[T], str]):
        self.fn = fn

    def format(self, value: T) -> str:
        return self.fn(value)


# ─────────────────────────────────────────────────────────────────────────────
# Composite strategies
# ─────────────────────────────────────────────────────────────────────────────

class OptionalFormatter(Formatter[Optional[T]]):
    """Formats present values as ``Some(<inner>)`` and None as ``None``."""

    def __init__(self, inner: Formatter[T]):
        self.inner = inner

    def format(self, value: T | None) -> str:
        if value is None:
            return "None"
        return f"Some({self.inner.format(value)})"


class OptionalEquality(Equality[Optional[T]]):
    """Two absent values are equal; a present and an absent value never are."""

    def __init__(self, inner: Equality[T]):
        self.inner = inner

    def are_equal(self, left: T | None, right: T | None) -> bool:
        if left is None or right is None:
            return left is None and right is None
        return self.inner.are_equal(left, right)


class SequenceFormatter(Formatter[Sequence[T]]):
    """Formats each element with the inner formatter between brackets."""

    def __init__(self, inner: Formatter[T], open: str = "[", close: str = "]"):
        self.inner = inner
        self.open = open
        self.close = close

    def format(self, value: Sequence[T]) -> str:
        parts = ", ".join(self.inner.format(item) for item in value)
        return f"{self.open}{parts}{self.close}"


class SequenceEquality(Equality[Sequence[T]]):
    """Element-wise equality; sequences of different length are unequal."""

    def __init__(self, inner: Equality[T]):
        self.inner = inner

    def are_equal(self, left: Sequence[T], right: Sequence[T]) -> bool:
        if len(left) != len(right):
            return False
        return all(self.inner.are_equal(a, b) for a, b in zip(left, right))
