"""Expression: parse once, evaluate many times against live variables."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

import numpy as np

from exprparse._nodes import Node, evaluate
from exprparse._parser import ExpressionParser, normalize
from exprparse._protocol import EvalResult, UnaryFunction
from exprparse._status import Status
from exprparse._symbols import SymbolTable
from exprparse._variable import Variable

logger = logging.getLogger(__name__)


def _floating_dtype(dtype: Any) -> np.dtype:
    """Coerce *dtype* to a numpy dtype, rejecting anything but floating types."""
    resolved = np.dtype(dtype)
    if not np.issubdtype(resolved, np.floating):
        raise TypeError(f"Expression element type must be floating-point, not {resolved}")
    return resolved


class Expression:
    """A compiled arithmetic expression bound to caller-owned variables.

    Usage::

        x = create_variable(3.0)
        expr = Expression()
        expr.register_variable("x", x)
        expr.register_function("sqrt", np.sqrt)
        expr.parse("sqrt(x * x + 16)")
        value, status = expr.eval()   # 5.0, Status.SUCCESS
        set_variable(x, 0.0)
        value, status = expr.eval()   # 4.0, no reparse needed

    Registering a name only affects later ``parse()`` calls.  A failed
    ``parse()`` leaves the expression uncompiled, even if an earlier one
    succeeded.
    """

    def __init__(self, dtype: Any = np.float64) -> None:
        self._dtype = _floating_dtype(dtype)
        self._symbols = SymbolTable()
        self._tree: Optional[Node] = None
        self._text: Optional[str] = None

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_variable(self, name: str, cell: Variable) -> Status:
        return self._symbols.register_variable(name, cell)

    def register_function(self, name: str, func: UnaryFunction) -> Status:
        return self._symbols.register_function(name, func)

    def register_functions(self, functions: Mapping[str, UnaryFunction]) -> dict[str, Status]:
        """Register each entry of *functions*; returns the status per name."""
        return {name: self._symbols.register_function(name, func) for name, func in functions.items()}

    # ------------------------------------------------------------------
    # Compile / evaluate
    # ------------------------------------------------------------------

    def parse(self, text: str) -> Status:
        """Compile *text*, replacing any previous tree.

        On failure the expression becomes uncompiled.
        """
        self._tree = None
        self._text = None
        parser = ExpressionParser(self._symbols, self._dtype)
        try:
            tree, status = parser.parse(text)
        except RecursionError:
            logger.warning("Expression nested too deeply to parse (%d chars)", len(text))
            return Status.UNKNOWN

        if not status.ok:
            logger.debug("Parse of %r failed: %s", text, status)
            return status
        self._tree = tree
        self._text = normalize(text)
        return Status.SUCCESS

    def eval(self) -> EvalResult:
        """Evaluate the compiled tree with the variables' current values."""
        if self._tree is None:
            return EvalResult(self._dtype.type(0), Status.NOT_COMPILED)
        try:
            return evaluate(self._tree, self._dtype)
        except RecursionError:
            logger.warning("Expression nested too deeply to evaluate: %r", self._text)
            return EvalResult(self._dtype.type(0), Status.UNKNOWN)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def is_compiled(self) -> bool:
        return self._tree is not None

    @property
    def tree(self) -> Optional[Node]:
        return self._tree

    @property
    def text(self) -> Optional[str]:
        """Whitespace-stripped source of the compiled tree."""
        return self._text

    @property
    def symbols(self) -> SymbolTable:
        return self._symbols

    def __repr__(self) -> str:
        state = repr(self._text) if self._tree is not None else "uncompiled"
        return f"Expression({state}, dtype={self._dtype})"


def compile_expression(
    text: str,
    variables: Mapping[str, Variable] | None = None,
    functions: Mapping[str, UnaryFunction] | None = None,
    dtype: Any = np.float64,
) -> Expression:
    """Build, register, and parse an expression in one call.

    Raises :class:`ExpressionError` on the first non-success status.
    """
    expr = Expression(dtype)
    for name, cell in (variables or {}).items():
        expr.register_variable(name, cell).raise_for_status(name)
    for name, func in (functions or {}).items():
        expr.register_function(name, func).raise_for_status(name)
    expr.parse(text).raise_for_status(text)
    return expr
