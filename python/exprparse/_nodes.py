"""Expression tree nodes and the tree-walking evaluator.

A compiled expression is a strict hierarchy of four immutable node types.
:func:`evaluate` is the single place that knows how each one computes; a new
node type must be added there or evaluation raises ``TypeError``.

Failures short-circuit: once a subtree reports a non-success status, its
siblings to the right are not evaluated and the status travels straight up
to the root with a zero value.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Union

import numpy as np

from exprparse._protocol import EvalResult, UnaryFunction
from exprparse._status import Status
from exprparse._variable import Variable

logger = logging.getLogger(__name__)


class OperatorKind(Enum):
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"

    @classmethod
    def from_symbol(cls, symbol: str) -> OperatorKind:
        return cls(symbol)


@dataclass(frozen=True)
class Constant:
    value: Any


@dataclass(frozen=True)
class VariableRef:
    name: str
    cell: Variable


@dataclass(frozen=True)
class Operator:
    kind: OperatorKind
    left: Node
    right: Node


@dataclass(frozen=True)
class FunctionCall:
    name: str
    function: UnaryFunction
    argument: Node


Node = Union[Constant, VariableRef, Operator, FunctionCall]


def _failure(dtype: np.dtype, status: Status) -> EvalResult:
    return EvalResult(dtype.type(0), status)


def _apply_operator(kind: OperatorKind, left: Any, right: Any, dtype: np.dtype) -> EvalResult:
    """Combine two already-evaluated operands."""
    if kind is OperatorKind.ADD:
        return EvalResult(dtype.type(left + right))
    if kind is OperatorKind.SUB:
        return EvalResult(dtype.type(left - right))
    if kind is OperatorKind.MUL:
        return EvalResult(dtype.type(left * right))
    if kind is OperatorKind.DIV:
        if right == 0:
            logger.debug("Division by zero: %r / %r", left, right)
            return _failure(dtype, Status.DIVISION_BY_ZERO)
        return EvalResult(dtype.type(left / right))
    raise TypeError(f"unsupported operator kind: {kind!r}")


def evaluate(node: Node, dtype: np.dtype) -> EvalResult:
    """Evaluate *node* reading live variable values, in element type *dtype*."""
    if isinstance(node, Constant):
        return EvalResult(dtype.type(node.value))

    if isinstance(node, VariableRef):
        return EvalResult(dtype.type(node.cell.value))

    if isinstance(node, Operator):
        left = evaluate(node.left, dtype)
        if not left.ok:
            return left
        right = evaluate(node.right, dtype)
        if not right.ok:
            return right
        return _apply_operator(node.kind, left.value, right.value, dtype)

    if isinstance(node, FunctionCall):
        arg = evaluate(node.argument, dtype)
        if not arg.ok:
            return arg
        return EvalResult(dtype.type(node.function(arg.value)))

    raise TypeError(f"unsupported node type: {type(node).__name__}")
