"""Shared, mutable variable cells read by compiled expressions."""

from __future__ import annotations

from typing import Any


class Variable:
    """A mutable numeric storage location owned by the caller.

    Compiled trees keep a reference to the cell, not a copy of its value, so
    writes made after parsing show up on the next evaluation.  Any number of
    expressions may share one cell.
    """

    __slots__ = ("value",)

    def __init__(self, value: Any = 0.0) -> None:
        self.value = value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Variable({self.value!r})"


def create_variable(initial: Any = 0.0) -> Variable:
    """Create a new cell holding *initial*."""
    return Variable(initial)


def set_variable(cell: Variable, value: Any) -> None:
    """Overwrite *cell*; bound expressions see it on their next ``eval()``."""
    cell.value = value
