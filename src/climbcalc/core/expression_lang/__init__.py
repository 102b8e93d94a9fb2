"""
climbcalc expression language.

Tokenizer, precedence-climbing parser, evaluator, and span printers for
integer arithmetic expressions.

Usage:
    from climbcalc.core.expression_lang import parse_expression, evaluate

    expr = parse_expression("(1 + 2) * 3")
    result = evaluate(expr)
    # result == 9
"""

from climbcalc.core.expression_lang.evaluator import evaluate
from climbcalc.core.expression_lang.parser import parse, parse_expression
from climbcalc.core.expression_lang.printer import dump_expr, dump_span
from climbcalc.core.expression_lang.tokenizer import tokenize

__all__ = ["dump_expr", "dump_span", "evaluate", "parse", "parse_expression", "tokenize"]
