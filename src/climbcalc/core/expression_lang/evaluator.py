"""
Expression evaluator for the climbcalc expression language.

Folds an expression AST into a 32-bit signed integer. Pure evaluation with
no I/O and no shared state: every result is range-checked, so overflow is
reported rather than wrapped. Division truncates toward zero.
"""

from __future__ import annotations

import logging

from climbcalc.core.errors import (
    DivisionByZeroError,
    EvalError,
    IntegerOverflowError,
    NegativeExponentError,
    UnsupportedOperatorError,
)
from climbcalc.core.ir.expressions import (
    I32_MAX,
    I32_MIN,
    BinOp,
    Expr,
    Num,
    OperatorKind,
    Paren,
    UnaryOp,
    unwind_left,
)
from climbcalc.core.ir.span import Span

logger = logging.getLogger(__name__)

_ARITHMETIC = frozenset(
    {
        OperatorKind.ADD,
        OperatorKind.SUB,
        OperatorKind.MUL,
        OperatorKind.DIV,
        OperatorKind.POW,
    }
)


def evaluate(expr: Expr) -> int:
    """Evaluate an expression to a 32-bit signed integer.

    Args:
        expr: Parsed expression AST.

    Returns:
        The computed value.

    Raises:
        DivisionByZeroError: Right operand of '/' is zero.
        NegativeExponentError: Right operand of '**' is negative.
        IntegerOverflowError: A result leaves the 32-bit range.
        UnsupportedOperatorError: A reserved operator (== != && || !) is reached.
    """
    result = _interpret(expr)
    logger.debug("Evaluated %s to %d", expr, result)
    return result


def _interpret(expr: Expr) -> int:
    """Dispatch evaluation to the appropriate handler."""
    if isinstance(expr, Num):
        return expr.value

    if isinstance(expr, Paren):
        return _interpret(expr.inner)

    if isinstance(expr, BinOp):
        return _interpret_binary(expr)

    if isinstance(expr, UnaryOp):
        return _interpret_unary(expr)

    raise EvalError(f"Unknown expression type: {type(expr).__name__}")


def _interpret_binary(expr: BinOp) -> int:
    """Evaluate a binary expression, folding its left chain in a loop."""
    leaf, chain = unwind_left(expr)
    # Outermost first, so the reported operator matches a top-down walk
    for node in reversed(chain):
        if node.op not in _ARITHMETIC:
            raise UnsupportedOperatorError(node.op, node.span)

    value = _interpret(leaf)
    for node in chain:
        value = _apply(node, value, _interpret(node.right))
    return value


def _apply(expr: BinOp, left: int, right: int) -> int:
    """Apply an arithmetic operator to already-evaluated operands."""
    if expr.op == OperatorKind.ADD:
        return _checked(left + right, expr.span)
    if expr.op == OperatorKind.SUB:
        return _checked(left - right, expr.span)
    if expr.op == OperatorKind.MUL:
        return _checked(left * right, expr.span)
    if expr.op == OperatorKind.DIV:
        if right == 0:
            raise DivisionByZeroError(expr.span)
        return _checked(_truncating_div(left, right), expr.span)
    return _checked_pow(left, right, expr.span)


def _interpret_unary(expr: UnaryOp) -> int:
    """Evaluate a prefix expression."""
    if expr.op == OperatorKind.ADD:
        # Unary plus is accepted and is a no-op
        return _interpret(expr.operand)
    if expr.op == OperatorKind.SUB:
        return _checked(-_interpret(expr.operand), expr.span)
    raise UnsupportedOperatorError(expr.op, expr.span)


def _checked(value: int, span: Span) -> int:
    """Return value if it fits in 32 bits, else raise IntegerOverflowError."""
    if value < I32_MIN or value > I32_MAX:
        raise IntegerOverflowError(span)
    return value


def _truncating_div(left: int, right: int) -> int:
    """Integer division rounding toward zero (Python's // floors)."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


def _checked_pow(base: int, exponent: int, span: Span) -> int:
    """Raise base to a non-negative exponent without building huge ints."""
    if exponent < 0:
        raise NegativeExponentError(span, exponent)
    if base in (0, 1):
        return 1 if exponent == 0 else base
    if base == -1:
        return 1 if exponent % 2 == 0 else -1
    # |base| >= 2, so anything past 2**32 is out of range
    if exponent > 32:
        raise IntegerOverflowError(span)
    return _checked(base**exponent, span)
