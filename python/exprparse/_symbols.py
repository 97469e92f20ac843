"""Per-expression symbol table with disjoint variable and function names."""

from __future__ import annotations

import logging
from typing import Union

from exprparse._protocol import UnaryFunction
from exprparse._status import Status
from exprparse._variable import Variable

logger = logging.getLogger(__name__)

Symbol = Union[Variable, UnaryFunction]


class SymbolTable:
    """Registry mapping names to variable cells and to unary functions.

    A name lives in at most one of the two namespaces.  Registrations are
    append-only: there is no removal and no overwrite.
    """

    __slots__ = ("_variables", "_functions")

    def __init__(self) -> None:
        # name -> caller-owned cell
        self._variables: dict[str, Variable] = {}
        # name -> callable taking and returning one number
        self._functions: dict[str, UnaryFunction] = {}

    def register_variable(self, name: str, cell: Variable) -> Status:
        if not isinstance(name, str):
            raise TypeError(f"variable name must be str, not {type(name).__name__}")
        if not isinstance(cell, Variable):
            raise TypeError(f"expected a Variable cell, not {type(cell).__name__}")
        if name in self._functions:
            logger.debug("Cannot register variable %r: name is a function", name)
            return Status.VARIABLE_FUNCTION_NAME_CLASH
        if name in self._variables:
            logger.debug("Variable %r already registered", name)
            return Status.VARIABLE_ALREADY_REGISTERED
        self._variables[name] = cell
        return Status.SUCCESS

    def register_function(self, name: str, func: UnaryFunction) -> Status:
        if not isinstance(name, str):
            raise TypeError(f"function name must be str, not {type(name).__name__}")
        if not callable(func):
            raise TypeError(f"function {name!r} is not callable")
        if name in self._variables:
            logger.debug("Cannot register function %r: name is a variable", name)
            return Status.VARIABLE_FUNCTION_NAME_CLASH
        if name in self._functions:
            logger.debug("Function %r already registered", name)
            return Status.FUNCTION_ALREADY_REGISTERED
        self._functions[name] = func
        return Status.SUCCESS

    def resolve(self, name: str) -> Symbol | None:
        """Look *name* up as a variable first, then as a function."""
        cell = self._variables.get(name)
        if cell is not None:
            return cell
        return self._functions.get(name)

    def variable(self, name: str) -> Variable | None:
        return self._variables.get(name)

    def function(self, name: str) -> UnaryFunction | None:
        return self._functions.get(name)

    @property
    def variable_names(self) -> frozenset[str]:
        return frozenset(self._variables)

    @property
    def function_names(self) -> frozenset[str]:
        return frozenset(self._functions)

    def __contains__(self, name: object) -> bool:
        return name in self._variables or name in self._functions

    def __len__(self) -> int:
        return len(self._variables) + len(self._functions)
