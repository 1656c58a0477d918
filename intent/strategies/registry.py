"""
Type-indexed registry of equality and formatting strategies.

Matchers look their strategies up here when they are constructed, so a
value type without a registered strategy fails at the assertion call
site rather than during evaluation.
"""

from __future__ import annotations

import logging
import types
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Any, Optional, Union, get_args, get_origin

from ..errors import MissingStrategyError
from .models import (
    Equality,
    Formatter,
    FunctionEquality,
    FunctionFormatter,
    NaturalEquality,
    OptionalEquality,
    OptionalFormatter,
    ReprFormatter,
    SequenceEquality,
    SequenceFormatter,
    StrFormatter,
    ThrowableFormatter,
)

logger = logging.getLogger(__name__)

NoneType = type(None)


class StrategyKind(str, Enum):
    """The two kinds of strategy a matcher binds."""
    EQUALITY = "equality"
    FORMATTER = "formatter"


@dataclass(frozen=True)
class CompositeStrategy:
    """
    Factories that build a strategy for a generic alias from the
    strategies of its type arguments.

    Attributes:
        equality_factory: Called with the inner Equality strategies
        formatter_factory: Called with the inner Formatter strategies
        arity: Number of type arguments the factories take (None for any)
    """
    equality_factory: Callable[..., Equality] | None = None
    formatter_factory: Callable[..., Formatter] | None = None
    arity: int | None = 1

    def factory_for(self, kind: StrategyKind) -> Callable[..., Any] | None:
        if kind == StrategyKind.EQUALITY:
            return self.equality_factory
        return self.formatter_factory


class StrategyRegistry:
    """
    Lookup table of Equality and Formatter strategies keyed by type.

    Keys are classes (``int``), or generic aliases whose origin has a
    composite strategy registered (``Optional[int]``, ``int | None``,
    ``list[int]``, ``tuple[int, ...]``). A class without a direct entry
    falls back to the closest registered base class in its MRO.

    A registry created with ``extend()`` sees every strategy of its
    parent but registers new ones only on itself.

    Example:
        registry = default_registry().extend()
        registry.register(Point, formatter=lambda p: f"Point({p.x}, {p.y})")

        registry.formatter(Optional[int]).format(7)   # "Some(7)"
        registry.formatter(Point)                      # the lambda above
        registry.formatter(set)                        # MissingStrategyError
    """

    def __init__(self, parent: StrategyRegistry | None = None):
        self._parent = parent
        self._equalities: dict[Any, Equality] = {}
        self._formatters: dict[Any, Formatter] = {}
        self._composites: dict[Any, CompositeStrategy] = {}

    # ─────────────────────────────────────────────────────────────────────
    # Registration
    # ─────────────────────────────────────────────────────────────────────

    def register_equality(
        self, key: Any, equality: Equality | Callable[[Any, Any], bool]
    ) -> StrategyRegistry:
        """Register an Equality (or a plain two-argument callable) for a key."""
        if not isinstance(equality, Equality):
            equality = FunctionEquality(equality)
        self._equalities[key] = equality
        logger.debug(f"Registered equality for {key!r}: {type(equality).__name__}")
        return self

    def register_formatter(
        self, key: Any, formatter: Formatter | Callable[[Any], str]
    ) -> StrategyRegistry:
        """Register a Formatter (or a plain one-argument callable) for a key."""
        if not isinstance(formatter, Formatter):
            formatter = FunctionFormatter(formatter)
        self._formatters[key] = formatter
        logger.debug(f"Registered formatter for {key!r}: {type(formatter).__name__}")
        return self

    def register(
        self,
        key: Any,
        *,
        equality: Equality | Callable[[Any, Any], bool] | None = None,
        formatter: Formatter | Callable[[Any], str] | None = None,
    ) -> StrategyRegistry:
        """
        Register both strategies for a key in one call.

        Args:
            key: The value type
            equality: Equality strategy; defaults to ``==``
            formatter: Formatter strategy; defaults to ``repr()``

        Returns:
            The registry, for chaining
        """
        self.register_equality(key, equality if equality is not None else NaturalEquality())
        self.register_formatter(key, formatter if formatter is not None else ReprFormatter())
        return self

    def register_composite(
        self,
        origin: Any,
        *,
        equality_factory: Callable[..., Equality] | None = None,
        formatter_factory: Callable[..., Formatter] | None = None,
        arity: int | None = 1,
    ) -> StrategyRegistry:
        """
        Register how to build strategies for a generic alias.

        Args:
            origin: The alias origin, e.g. ``list``; use ``typing.Optional``
                for optional values
            equality_factory: Builds an Equality from the inner Equalities
            formatter_factory: Builds a Formatter from the inner Formatters
            arity: Number of type arguments the alias must have; aliases
                with a different count have no strategy
        """
        self._composites[origin] = CompositeStrategy(equality_factory, formatter_factory, arity)
        logger.debug(f"Registered composite strategy for {origin!r}")
        return self

    def extend(self) -> StrategyRegistry:
        """Create a child registry layered over this one."""
        return StrategyRegistry(parent=self)

    # ─────────────────────────────────────────────────────────────────────
    # Lookup
    # ─────────────────────────────────────────────────────────────────────

    def equality(self, key: Any) -> Equality:
        """
        Look up the Equality strategy for a key.

        Raises:
            MissingStrategyError: If no strategy can be resolved
        """
        return self._resolve(StrategyKind.EQUALITY, key)

    def formatter(self, key: Any) -> Formatter:
        """
        Look up the Formatter strategy for a key.

        Raises:
            MissingStrategyError: If no strategy can be resolved
        """
        return self._resolve(StrategyKind.FORMATTER, key)

    def bind(self, key: Any) -> tuple[Equality, Formatter]:
        """Look up both strategies a comparing matcher needs."""
        return self.equality(key), self.formatter(key)

    def keys(self, kind: StrategyKind) -> list[Any]:
        """All keys with a direct entry of the given kind, parents included."""
        seen: dict[Any, None] = {}
        registry: StrategyRegistry | None = self
        while registry is not None:
            for key in registry._table(kind):
                seen.setdefault(key, None)
            registry = registry._parent
        return list(seen)

    def composite_origins(self) -> list[Any]:
        """All origins with a composite strategy, parents included."""
        seen: dict[Any, None] = {}
        registry: StrategyRegistry | None = self
        while registry is not None:
            for origin in registry._composites:
                seen.setdefault(origin, None)
            registry = registry._parent
        return list(seen)

    def _table(self, kind: StrategyKind) -> dict[Any, Any]:
        if kind == StrategyKind.EQUALITY:
            return self._equalities
        return self._formatters

    def _find(self, kind: StrategyKind, key: Any) -> Any:
        registry: StrategyRegistry | None = self
        while registry is not None:
            table = registry._table(kind)
            if key in table:
                return table[key]
            registry = registry._parent
        return None

    def _find_composite(self, origin: Any) -> CompositeStrategy | None:
        registry: StrategyRegistry | None = self
        while registry is not None:
            if origin in registry._composites:
                return registry._composites[origin]
            registry = registry._parent
        return None

    def _resolve(self, kind: StrategyKind, key: Any) -> Any:
        try:
            strategy = self._find(kind, key)
        except TypeError:
            # Unhashable keys can never be registered
            raise MissingStrategyError(kind.value, key) from None
        if strategy is not None:
            return strategy

        alias = _split_alias(key)
        if alias is not None:
            origin, inner_keys = alias
            composite = self._find_composite(origin)
            factory = composite.factory_for(kind) if composite else None
            if factory is not None and composite.arity in (None, len(inner_keys)):
                inner = [self._resolve(kind, inner_key) for inner_key in inner_keys]
                return factory(*inner)
        elif isinstance(key, type):
            for base in key.__mro__[1:]:
                if base is object:
                    break
                strategy = self._find(kind, base)
                if strategy is not None:
                    return strategy

        logger.debug(f"No {kind.value} strategy for {key!r}")
        raise MissingStrategyError(kind.value, key)


def _split_alias(key: Any) -> tuple[Any, tuple[Any, ...]] | None:
    """
    Split a generic alias into (origin, inner keys).

    ``Optional[T]`` and ``T | None`` normalize to ``(Optional, (T,))``
    and ``tuple[T, ...]`` to ``(tuple, (T,))``. Returns None for keys
    that are not aliases. Unions of several types map to an origin with
    no composite strategy, so they fail lookup.
    """
    origin = get_origin(key)
    if origin is None:
        return None
    args = get_args(key)

    if origin is Union or origin is types.UnionType:
        present = tuple(arg for arg in args if arg is not NoneType)
        if len(present) == 1 and len(args) == 2:
            return Optional, present
        return Union, args

    if origin is tuple and len(args) == 2 and args[1] is Ellipsis:
        return tuple, (args[0],)

    return origin, args


def _tuple_formatter(inner: Formatter) -> Formatter:
    return SequenceFormatter(inner, open="(", close=")")


def build_default_registry() -> StrategyRegistry:
    """Create a fresh registry holding the built-in strategies."""
    registry = StrategyRegistry()

    for numeric in (int, float, complex, bool, Decimal, Fraction):
        registry.register(numeric, equality=NaturalEquality(), formatter=StrFormatter())

    registry.register(str)
    registry.register(bytes)
    # Unparameterized containers; use list[T] or tuple[T, ...] for per-element strategies
    registry.register(list)
    registry.register(tuple)
    registry.register(NoneType, formatter=FunctionFormatter(lambda _: "None"))
    registry.register(BaseException, formatter=ThrowableFormatter())

    registry.register_composite(
        Optional,
        equality_factory=OptionalEquality,
        formatter_factory=OptionalFormatter,
    )
    registry.register_composite(
        list,
        equality_factory=SequenceEquality,
        formatter_factory=SequenceFormatter,
    )
    registry.register_composite(
        Sequence,
        equality_factory=SequenceEquality,
        formatter_factory=SequenceFormatter,
    )
    registry.register_composite(
        tuple,
        equality_factory=SequenceEquality,
        formatter_factory=_tuple_formatter,
    )
    return registry


_default_registry: StrategyRegistry | None = None


def default_registry() -> StrategyRegistry:
    """Return the shared registry of built-in strategies."""
    global _default_registry
    if _default_registry is None:
        _default_registry = build_default_registry()
    return _default_registry
