"""
Strategy registry for value comparison and formatting

Every matcher needs to know, for the value type it checks, how to
compare two values and how to render them in a failure message. This
package holds those per-type strategies.

Built-in strategies:
    - int, float, complex, bool, Decimal, Fraction: ``==`` and ``str()``
    - str, bytes: ``==`` and ``repr()``
    - BaseException and subclasses: ``<kind>: <message>``
    - Optional[T]: ``Some(<inner>)`` / ``None``
    - list[T], Sequence[T], tuple[T, ...]: element-wise

Usage:
    from intent.strategies import default_registry

    registry = default_registry().extend()
    registry.register(Money, formatter=lambda m: f"{m.amount} {m.currency}")

    equality, formatter = registry.bind(Optional[Money])
"""

# Models
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

# Registry
from .registry import (
    CompositeStrategy,
    StrategyKind,
    StrategyRegistry,
    build_default_registry,
    default_registry,
)

__all__ = [
    # Models
    "Equality",
    "Formatter",
    "FunctionEquality",
    "FunctionFormatter",
    "NaturalEquality",
    "OptionalEquality",
    "OptionalFormatter",
    "ReprFormatter",
    "SequenceEquality",
    "SequenceFormatter",
    "StrFormatter",
    "ThrowableFormatter",
    # Registry
    "CompositeStrategy",
    "StrategyKind",
    "StrategyRegistry",
    "build_default_registry",
    "default_registry",
]
