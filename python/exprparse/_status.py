"""Status codes reported by registration, parsing, and evaluation."""

from __future__ import annotations

from enum import Enum


class Status(Enum):
    """Result code for every fallible operation on an expression.

    ``Status.SUCCESS`` is the only non-error member.  Everything else is a
    recoverable, caller-handled condition; nothing here is raised unless the
    caller asks for it via :meth:`raise_for_status`.
    """

    SUCCESS = "success"

    VARIABLE_ALREADY_REGISTERED = "variable already registered"
    FUNCTION_ALREADY_REGISTERED = "function already registered"
    VARIABLE_FUNCTION_NAME_CLASH = "variable/function name clash"
    NOT_COMPILED = "expression not compiled"
    DIVISION_BY_ZERO = "division by zero"
    UNREGISTERED_SYMBOL = "unregistered symbol"
    SYNTAX_ERROR = "syntax error"
    UNKNOWN = "unknown error"

    @property
    def ok(self) -> bool:
        return self is Status.SUCCESS

    def raise_for_status(self, context: str | None = None) -> None:
        """Raise :class:`ExpressionError` unless this is ``SUCCESS``."""
        if self is not Status.SUCCESS:
            raise ExpressionError(self, context)

    def __str__(self) -> str:
        return self.value


class ExpressionError(ValueError):
    """A non-success :class:`Status` surfaced as an exception."""

    def __init__(self, status: Status, context: str | None = None) -> None:
        self.status = status
        self.context = context
        if context:
            super().__init__(f"{status.value}: {context!r}")
        else:
            super().__init__(status.value)
