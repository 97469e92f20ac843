"""Tests for exprparse expression parser and span helpers."""

from __future__ import annotations

import math

import numpy as np
import pytest

from exprparse._nodes import Constant, FunctionCall, Operator, OperatorKind, VariableRef
from exprparse._parser import (
    ExpressionParser,
    _find_top_level_operator,
    _match_function_call,
    normalize,
    parse_number,
)
from exprparse._status import Status
from exprparse._symbols import SymbolTable
from exprparse._variable import Variable

F64 = np.dtype(np.float64)


def _parser(**variables: float) -> tuple[ExpressionParser, SymbolTable]:
    symbols = SymbolTable()
    for name, value in variables.items():
        symbols.register_variable(name, Variable(value))
    return ExpressionParser(symbols, F64), symbols


class TestNormalize:
    def test_spaces_removed(self) -> None:
        assert normalize(" 3 + 4 ") == "3+4"

    def test_tabs_and_newlines_removed(self) -> None:
        assert normalize("2\t*\n(x +\r\n1)") == "2*(x+1)"

    def test_empty(self) -> None:
        assert normalize("   ") == ""


class TestFindTopLevelOperator:
    def test_leftmost_additive(self) -> None:
        assert _find_top_level_operator("10-3-2") == 2

    def test_additive_before_multiplicative(self) -> None:
        assert _find_top_level_operator("2*3+4") == 3
        assert _find_top_level_operator("2+3*4") == 1

    def test_multiplicative_when_no_additive(self) -> None:
        assert _find_top_level_operator("8/4*2") == 1

    def test_bracketed_operators_skipped(self) -> None:
        assert _find_top_level_operator("(1+2)*3") == 5

    def test_leading_minus(self) -> None:
        assert _find_top_level_operator("-x") == 0

    def test_no_operator(self) -> None:
        assert _find_top_level_operator("(1+2)") == -1
        assert _find_top_level_operator("sin(x-1)") == -1
        assert _find_top_level_operator("x") == -1


class TestMatchFunctionCall:
    def test_simple_call(self) -> None:
        assert _match_function_call("sin(x)") == ("sin", "x")

    def test_nested_call(self) -> None:
        assert _match_function_call("f(g(1)+2)") == ("f", "g(1)+2")

    def test_empty_argument(self) -> None:
        assert _match_function_call("f()") == ("f", "")

    def test_bracketed_group_is_not_a_call(self) -> None:
        assert _match_function_call("(x)") is None

    def test_no_trailing_bracket(self) -> None:
        assert _match_function_call("x") is None
        assert _match_function_call("f(x)y") is None


class TestParseNumber:
    @pytest.mark.parametrize(
        ("text", "expected"),
        [("3", 3.0), ("2.5", 2.5), (".5", 0.5), ("5.", 5.0), ("1e3", 1000.0), ("2.5E2", 250.0)],
    )
    def test_literals(self, text: str, expected: float) -> None:
        assert parse_number(text, F64) == expected

    @pytest.mark.parametrize("text", ["", ".", "x", "1.2.3", "inf", "nan", "1e", "0x10", "1_000"])
    def test_not_literals(self, text: str) -> None:
        assert parse_number(text, F64) is None

    def test_uses_requested_dtype(self) -> None:
        value = parse_number("1.5", np.dtype(np.float32))
        assert isinstance(value, np.float32)


class TestParseTree:
    def test_single_constant(self) -> None:
        parser, _ = _parser()
        tree, status = parser.parse("42")
        assert status is Status.SUCCESS
        assert tree == Constant(42.0)

    def test_whitespace_ignored(self) -> None:
        parser, _ = _parser()
        tree, status = parser.parse("  3 \t+ 4 ")
        assert status is Status.SUCCESS
        assert tree == Operator(OperatorKind.ADD, Constant(3.0), Constant(4.0))

    def test_precedence(self) -> None:
        parser, _ = _parser()
        tree, _ = parser.parse("2+3*4")
        assert tree == Operator(
            OperatorKind.ADD,
            Constant(2.0),
            Operator(OperatorKind.MUL, Constant(3.0), Constant(4.0)),
        )

    def test_chained_minus_groups_right(self) -> None:
        """10-3-2 splits at the leftmost minus: 10-(3-2)."""
        parser, _ = _parser()
        tree, _ = parser.parse("10-3-2")
        assert tree == Operator(
            OperatorKind.SUB,
            Constant(10.0),
            Operator(OperatorKind.SUB, Constant(3.0), Constant(2.0)),
        )

    def test_chained_divide_groups_right(self) -> None:
        parser, _ = _parser()
        tree, _ = parser.parse("8/4/2")
        assert tree == Operator(
            OperatorKind.DIV,
            Constant(8.0),
            Operator(OperatorKind.DIV, Constant(4.0), Constant(2.0)),
        )

    def test_brackets_override_grouping(self) -> None:
        parser, _ = _parser()
        tree, _ = parser.parse("(10-3)-2")
        assert tree == Operator(
            OperatorKind.SUB,
            Operator(OperatorKind.SUB, Constant(10.0), Constant(3.0)),
            Constant(2.0),
        )

    def test_unary_minus_becomes_zero_minus(self) -> None:
        parser, symbols = _parser(x=1.0)
        tree, status = parser.parse("-x")
        assert status is Status.SUCCESS
        assert tree == Operator(OperatorKind.SUB, Constant(0.0), VariableRef("x", symbols.variable("x")))

    def test_double_negation(self) -> None:
        parser, _ = _parser()
        tree, status = parser.parse("--3")
        assert status is Status.SUCCESS
        assert tree == Operator(
            OperatorKind.SUB,
            Constant(0.0),
            Operator(OperatorKind.SUB, Constant(0.0), Constant(3.0)),
        )

    def test_variable_ref_holds_cell(self) -> None:
        parser, symbols = _parser(x=2.0)
        tree, _ = parser.parse("x")
        assert isinstance(tree, VariableRef)
        assert tree.cell is symbols.variable("x")

    def test_empty_brackets_are_zero(self) -> None:
        parser, _ = _parser()
        tree, status = parser.parse("()")
        assert status is Status.SUCCESS
        assert tree == Constant(0.0)

    def test_nested_empty_brackets(self) -> None:
        parser, _ = _parser()
        tree, status = parser.parse("((()))")
        assert status is Status.SUCCESS
        assert tree == Constant(0.0)

    def test_function_call(self) -> None:
        parser, symbols = _parser(x=0.0)
        symbols.register_function("sin", math.sin)
        tree, status = parser.parse("sin(x)")
        assert status is Status.SUCCESS
        assert tree == FunctionCall("sin", math.sin, VariableRef("x", symbols.variable("x")))

    def test_function_argument_is_expression(self) -> None:
        parser, symbols = _parser()
        symbols.register_function("f", abs)
        tree, status = parser.parse("f(1+2)*3")
        assert status is Status.SUCCESS
        assert tree == Operator(
            OperatorKind.MUL,
            FunctionCall("f", abs, Operator(OperatorKind.ADD, Constant(1.0), Constant(2.0))),
            Constant(3.0),
        )


class TestParseErrors:
    @pytest.mark.parametrize("text", ["(1+2", "1+2)", "((x)", "f(1"])
    def test_unbalanced_brackets(self, text: str) -> None:
        parser, _ = _parser(x=1.0)
        assert parser.parse(text) == (None, Status.SYNTAX_ERROR)

    @pytest.mark.parametrize("text", ["+3", "*3", "/3"])
    def test_missing_left_operand(self, text: str) -> None:
        parser, _ = _parser()
        assert parser.parse(text) == (None, Status.SYNTAX_ERROR)

    def test_missing_right_operand(self) -> None:
        parser, _ = _parser()
        assert parser.parse("1+") == (None, Status.SYNTAX_ERROR)

    def test_empty_input(self) -> None:
        parser, _ = _parser()
        assert parser.parse("") == (None, Status.SYNTAX_ERROR)

    def test_minus_after_operator_is_rejected(self) -> None:
        """1*-2 splits at '-' first, leaving '1*' with no right operand."""
        parser, _ = _parser()
        assert parser.parse("1*-2") == (None, Status.SYNTAX_ERROR)

    def test_negative_exponent_is_split(self) -> None:
        parser, _ = _parser()
        assert parser.parse("1e-5") == (None, Status.SYNTAX_ERROR)

    def test_unknown_identifier(self) -> None:
        parser, _ = _parser()
        assert parser.parse("x") == (None, Status.SYNTAX_ERROR)

    def test_unregistered_function(self) -> None:
        parser, _ = _parser()
        assert parser.parse("foo(1)") == (None, Status.UNREGISTERED_SYMBOL)

    def test_variable_called_as_function(self) -> None:
        parser, _ = _parser(x=1.0)
        assert parser.parse("x(2)") == (None, Status.SYNTAX_ERROR)

    def test_function_with_empty_argument(self) -> None:
        parser, symbols = _parser()
        symbols.register_function("f", abs)
        assert parser.parse("f()") == (None, Status.SYNTAX_ERROR)

    def test_adjacent_groups(self) -> None:
        parser, _ = _parser()
        assert parser.parse("(1)(2)") == (None, Status.SYNTAX_ERROR)

    def test_error_inside_function_argument(self) -> None:
        parser, symbols = _parser()
        symbols.register_function("f", abs)
        assert parser.parse("f(g(1))") == (None, Status.UNREGISTERED_SYMBOL)

    def test_last_failure_reported(self) -> None:
        """Both operands are parsed; the right-hand failure wins."""
        parser, _ = _parser()
        assert parser.parse("foo(1)+x") == (None, Status.SYNTAX_ERROR)
        assert parser.parse("x+foo(1)") == (None, Status.UNREGISTERED_SYMBOL)

    def test_left_failure_kept_when_right_succeeds(self) -> None:
        parser, _ = _parser()
        assert parser.parse("foo(1)*2") == (None, Status.UNREGISTERED_SYMBOL)
