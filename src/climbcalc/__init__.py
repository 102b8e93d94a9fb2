"""
climbcalc - span-tracking integer expression engine.

A tokenizer, precedence-climbing parser, and checked 32-bit evaluator for
small arithmetic expressions, with exact source locations on every node.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import ClimbcalcError, EvalError, LexError, ParseError
from .core.expression_lang import evaluate, parse_expression

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "ClimbcalcError",
    "LexError",
    "ParseError",
    "EvalError",
    "evaluate",
    "parse_expression",
]
