"""Opt-in unary math functions for registration on an expression."""

from __future__ import annotations

import numpy as np

from exprparse._protocol import UnaryFunction

# ---------------------------------------------------------------------------
# Builtins - numpy ufuncs, so they keep the operand's floating dtype.
# Organized by category for readability.
# ---------------------------------------------------------------------------

_BUILTINS: dict[str, UnaryFunction] = {
    # Trigonometric
    "sin": np.sin,
    "cos": np.cos,
    "tan": np.tan,
    "asin": np.arcsin,
    "acos": np.arccos,
    "atan": np.arctan,
    # Hyperbolic
    "sinh": np.sinh,
    "cosh": np.cosh,
    "tanh": np.tanh,
    # Exponential / logarithmic
    "exp": np.exp,
    "log": np.log,
    "log10": np.log10,
    "log2": np.log2,
    "sqrt": np.sqrt,
    # Rounding / sign
    "abs": np.abs,
    "floor": np.floor,
    "ceil": np.ceil,
}


def math_functions() -> dict[str, UnaryFunction]:
    """Return a fresh name -> function mapping of the builtin math functions.

    Nothing is registered implicitly; pass the mapping (or a subset of it) to
    ``Expression.register_functions``.
    """
    return dict(_BUILTINS)
