"""
climbcalc intermediate representation.

Span-annotated expression tree shared by the parser, the evaluator and
the printers.
"""

from climbcalc.core.ir.expressions import (
    I32_MAX,
    I32_MIN,
    Associativity,
    BinOp,
    Expr,
    Num,
    OperatorKind,
    Paren,
    UnaryOp,
    unwind_left,
)
from climbcalc.core.ir.span import Span, locate

__all__ = [
    "I32_MAX",
    "I32_MIN",
    "Associativity",
    "BinOp",
    "Expr",
    "Num",
    "OperatorKind",
    "Paren",
    "Span",
    "UnaryOp",
    "locate",
    "unwind_left",
]
