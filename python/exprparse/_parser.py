"""Expression parser: recursive top-level operator splitting.

The input is stripped of whitespace once, then each span is handled as:

1. Reject if its brackets do not balance.
2. Split at the *leftmost* ``+``/``-`` at bracket depth 0, otherwise at the
   leftmost ``*``/``/``.  Both halves are parsed recursively.
3. A span with no top-level operator is an atom: a bracketed group, a
   numeric literal, a variable name, or ``name(argument)``.

Splitting at the leftmost operator groups chains to the right, so
``10-3-2`` is ``10-(3-2)`` and ``8/4/2`` is ``8/(4/2)``.
"""

from __future__ import annotations

import logging
import re
from typing import Optional

import numpy as np

from exprparse._nodes import Constant, FunctionCall, Node, Operator, OperatorKind, VariableRef
from exprparse._status import Status
from exprparse._symbols import SymbolTable

logger = logging.getLogger(__name__)

ParseResult = tuple[Optional[Node], Status]

# ---------------------------------------------------------------------------
# Span helpers
# ---------------------------------------------------------------------------

# Decimal literal: 3, 2.5, .5, 5., 1e3, 2.5E10 (signs are operators)
_NUMBER_RE = re.compile(r"(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][0-9]+)?")

_ADDITIVE = ("+", "-")
_MULTIPLICATIVE = ("*", "/")


def normalize(text: str) -> str:
    """Drop every whitespace character; no token contains a space."""
    return "".join(text.split())


def _brackets_balanced(span: str) -> bool:
    depth = 0
    for ch in span:
        if ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
    return depth == 0


def _find_top_level_operator(span: str) -> int:
    """Index of the leftmost lowest-precedence operator at depth 0, or -1.

    Precedence (lowest first)::

        1. additive       (+, -)
        2. multiplicative (*, /)
    """
    for ops in (_ADDITIVE, _MULTIPLICATIVE):
        depth = 0
        for i, ch in enumerate(span):
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth -= 1
            elif depth == 0 and ch in ops:
                return i
    return -1


def _match_function_call(span: str) -> tuple[str, str] | None:
    """If *span* looks like ``name(argument)``, return ``(name, argument)``."""
    if not span.endswith(")"):
        return None
    open_idx = span.find("(")
    if open_idx <= 0:
        return None
    return span[:open_idx], span[open_idx + 1 : -1]


def parse_number(span: str, dtype: np.dtype) -> object | None:
    """Parse *span* as a literal of *dtype*, or return None."""
    if not _NUMBER_RE.fullmatch(span):
        return None
    return dtype.type(span)


# ---------------------------------------------------------------------------
# Parser
# ---------------------------------------------------------------------------


class ExpressionParser:
    """Builds an expression tree from text against a :class:`SymbolTable`.

    Usage::

        parser = ExpressionParser(symbols, np.dtype(np.float64))
        tree, status = parser.parse("2 * x + 1")
    """

    def __init__(self, symbols: SymbolTable, dtype: np.dtype) -> None:
        self._symbols = symbols
        self._dtype = dtype

    def parse(self, text: str) -> ParseResult:
        """Parse *text*; returns ``(tree, SUCCESS)`` or ``(None, error)``."""
        return self.parse_span(normalize(text))

    def parse_span(self, span: str) -> ParseResult:
        """Parse an already-normalized span.

        Dispatch order (first match wins):

        1. Bracket balance check
        2. Binary split (additive, then multiplicative)
        3. Bracketed group ``(...)``
        4. Numeric literal
        5. Variable name
        6. Function call ``name(argument)``
        """
        if not _brackets_balanced(span):
            logger.debug("Unbalanced brackets in %r", span)
            return None, Status.SYNTAX_ERROR

        op_idx = _find_top_level_operator(span)
        if op_idx >= 0:
            return self._parse_binary(span, op_idx)

        return self._parse_atom(span)

    def _parse_binary(self, span: str, op_idx: int) -> ParseResult:
        symbol = span[op_idx]
        left_str = span[:op_idx]
        right_str = span[op_idx + 1 :]

        if not left_str:
            if symbol != "-":
                logger.debug("Missing left operand for %r in %r", symbol, span)
                return None, Status.SYNTAX_ERROR
            left: Node | None = Constant(self._dtype.type(0))
            left_status = Status.SUCCESS
        else:
            left, left_status = self.parse_span(left_str)

        # Both sides are always parsed; the last failure is reported.
        right, right_status = self.parse_span(right_str)
        if not right_status.ok:
            return None, right_status
        if not left_status.ok:
            return None, left_status
        return Operator(OperatorKind.from_symbol(symbol), left, right), Status.SUCCESS

    def _parse_atom(self, span: str) -> ParseResult:
        if span.startswith("(") and span.endswith(")"):
            inner = span[1:-1]
            if not inner:
                return Constant(self._dtype.type(0)), Status.SUCCESS
            return self.parse_span(inner)

        value = parse_number(span, self._dtype)
        if value is not None:
            return Constant(value), Status.SUCCESS

        cell = self._symbols.variable(span)
        if cell is not None:
            return VariableRef(span, cell), Status.SUCCESS

        call = _match_function_call(span)
        if call is not None:
            return self._parse_call(*call)

        logger.debug("Cannot parse %r", span)
        return None, Status.SYNTAX_ERROR

    def _parse_call(self, name: str, arg_str: str) -> ParseResult:
        symbol = self._symbols.resolve(name)
        if symbol is None:
            logger.debug("Unregistered function %r", name)
            return None, Status.UNREGISTERED_SYMBOL
        func = self._symbols.function(name)
        if func is None:
            logger.debug("Variable %r used as a function", name)
            return None, Status.SYNTAX_ERROR

        arg, status = self.parse_span(arg_str)
        if not status.ok:
            return None, status
        return FunctionCall(name, func, arg), Status.SUCCESS
