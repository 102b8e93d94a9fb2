"""
Span-annotated printing for climbcalc expressions.

``str(expr)`` already reproduces a canonical source form (see the IR
models). The helpers here show where each piece came from:

    >>> dump_expr(parse_expression("1 +\\n 2"))
    '<[line: 1, col: 1, "1"] [line: 1, col: 3, "+"] [line: 2, col: 2, "2"]>'
"""

from __future__ import annotations

import json

from climbcalc.core.ir.expressions import BinOp, Expr, Num, Paren, unwind_left
from climbcalc.core.ir.span import Span


def dump_span(span: Span) -> str:
    """Render a span as ``[line: N, col: M, "text"]``."""
    return f"[line: {span.line}, col: {span.column}, {json.dumps(span.text)}]"


def dump_expr(expr: Expr) -> str:
    """Render an expression tree with the span of every literal and operator.

    Binary and prefix operations are wrapped in ``<...>``; groups keep
    their parentheses.
    """
    if isinstance(expr, Num):
        return dump_span(expr.span)
    if isinstance(expr, Paren):
        return f"({dump_expr(expr.inner)})"
    if isinstance(expr, BinOp):
        leaf, chain = unwind_left(expr)
        tail = "".join(f" {dump_span(node.op_span)} {dump_expr(node.right)}>" for node in chain)
        return "<" * len(chain) + dump_expr(leaf) + tail
    return f"<{dump_span(expr.op_span)} {dump_expr(expr.operand)}>"
