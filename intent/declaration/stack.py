"""
Setup stack used while tests are being declared.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from ..errors import SetupStackError
from .models import SetupPart

logger = logging.getLogger(__name__)


class SetupStack:
    """
    Ordered setup parts mirroring the nesting of open blocks.

    Each suite owns one stack; it is not safe to share a stack between
    threads declaring tests at the same time.
    """

    def __init__(self) -> None:
        self._parts: list[SetupPart[Any]] = []

    def __len__(self) -> int:
        return len(self._parts)

    @property
    def depth(self) -> int:
        return len(self._parts)

    @property
    def is_empty(self) -> bool:
        return not self._parts

    def push(self, part: SetupPart[Any]) -> None:
        self._parts.append(part)
        logger.debug(f"Entered block '{part.name}' (depth {len(self._parts)})")

    def pop(self) -> SetupPart[Any]:
        if not self._parts:
            raise SetupStackError("pop from an empty setup stack")
        part = self._parts.pop()
        logger.debug(f"Left block '{part.name}' (depth {len(self._parts)})")
        return part

    def snapshot(self) -> tuple[SetupPart[Any], ...]:
        """The current parts, outer to inner, as an immutable tuple."""
        return tuple(self._parts)

    @contextmanager
    def scope(self, part: SetupPart[Any]) -> Iterator[SetupPart[Any]]:
        """Push ``part`` for the duration of the block, popping it even on error."""
        self.push(part)
        try:
            yield part
        finally:
            self.pop()
