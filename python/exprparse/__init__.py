"""exprparse - compile arithmetic expressions once, evaluate them many times.

Usage::

    from exprparse import Expression, create_variable, set_variable

    x = create_variable(5.0)
    expr = Expression()
    expr.register_variable("x", x)
    expr.parse("x * 2")
    value, status = expr.eval()   # 10.0, Status.SUCCESS

    set_variable(x, 7.0)
    value, status = expr.eval()   # 14.0
"""

from exprparse._expression import Expression, compile_expression
from exprparse._functions import math_functions
from exprparse._nodes import Constant, FunctionCall, Node, Operator, OperatorKind, VariableRef, evaluate
from exprparse._parser import ExpressionParser
from exprparse._protocol import EvalResult, UnaryFunction
from exprparse._status import ExpressionError, Status
from exprparse._symbols import SymbolTable
from exprparse._variable import Variable, create_variable, set_variable

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Constant",
    "EvalResult",
    "Expression",
    "ExpressionError",
    "ExpressionParser",
    "FunctionCall",
    "Node",
    "Operator",
    "OperatorKind",
    "Status",
    "SymbolTable",
    "UnaryFunction",
    "Variable",
    "VariableRef",
    "compile_expression",
    "create_variable",
    "evaluate",
    "math_functions",
    "set_variable",
]
