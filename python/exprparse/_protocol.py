"""Evaluation result type and callable aliases."""

from __future__ import annotations

from typing import Any, Callable, NamedTuple

from exprparse._status import Status

# A registered function: one numeric argument in, one numeric result out.
UnaryFunction = Callable[[Any], Any]


class EvalResult(NamedTuple):
    """Outcome of evaluating a compiled expression.

    Unpacks like a pair so callers can write ``value, status = expr.eval()``.
    A failed result always carries a zero of the expression's dtype.
    """

    value: Any  # numpy floating scalar of the expression's dtype
    status: Status = Status.SUCCESS

    @property
    def ok(self) -> bool:
        return self.status is Status.SUCCESS
