"""
Precedence-climbing parser for the climbcalc expression language.

Grammar:
    expr   → atom (binop expr)*        folded by precedence climbing
    atom   → NUMBER
           | GROUP                     "(" expr ")", already matched by the tokenizer
           | prefix_op atom            binds above every binary operator

Two mutually recursive methods do the work:

    parse_atom(cursor)        consumes exactly one operand
    climb(cursor, min_prec)   parses an atom, then folds in every binary
                              operator whose precedence is >= min_prec,
                              recursing for the right operand at
                              prec + 1 (left-assoc) or prec (right-assoc)

After climb(cursor, p) returns, every operator at the top of the tree it
built has precedence >= p.
"""

from __future__ import annotations

import logging

from climbcalc.core.errors import (
    MaxDepthExceededError,
    TrailingInputError,
    UnexpectedTokenError,
)
from climbcalc.core.expression_lang.precedence import (
    LOWEST_PRECEDENCE,
    UNARY_PRECEDENCE,
    is_binary,
    is_prefix,
    next_min_precedence,
    precedence,
)
from climbcalc.core.expression_lang.tokenizer import (
    GroupToken,
    NumberToken,
    OperatorToken,
    Token,
    tokenize,
)
from climbcalc.core.ir.expressions import BinOp, Expr, Num, Paren, UnaryOp
from climbcalc.core.ir.span import Span, locate
from climbcalc.core.settings import get_settings

logger = logging.getLogger(__name__)


class _TokenCursor:
    """Read position over one level of tokens (top level or a group's inside)."""

    def __init__(self, tokens: list[Token], end_span: Span) -> None:
        self.tokens = tokens
        self.pos = 0
        # Zero-width span reported when input runs out at this level
        self.end_span = end_span

    @property
    def current(self) -> Token | None:
        if self.pos < len(self.tokens):
            return self.tokens[self.pos]
        return None

    def advance(self) -> Token:
        tok = self.tokens[self.pos]
        self.pos += 1
        return tok

    def at_end(self) -> bool:
        return self.pos >= len(self.tokens)

    def current_span(self) -> Span:
        tok = self.current
        return tok.span if tok is not None else self.end_span


class _Parser:
    """Precedence-climbing parser over a grouped token stream."""

    def __init__(self, source: str, max_depth: int) -> None:
        self.source = source
        self.max_depth = max_depth
        self.depth = 0

    # -- Grammar rules --

    def parse_atom(self, cursor: _TokenCursor) -> Expr:
        """NUMBER | GROUP | prefix_op atom"""
        tok = cursor.current

        if tok is None:
            raise UnexpectedTokenError("expected an operand, found end of input", cursor.end_span)

        if isinstance(tok, NumberToken):
            cursor.advance()
            return Num(value=tok.value, span=tok.span)

        if isinstance(tok, GroupToken):
            cursor.advance()
            return self._parse_group(tok)

        if isinstance(tok, OperatorToken) and is_prefix(tok.kind):
            cursor.advance()
            operand = self.climb(cursor, UNARY_PRECEDENCE)
            return UnaryOp(
                op=tok.kind,
                operand=operand,
                span=tok.span.merge(operand.span, self.source),
                op_span=tok.span,
            )

        raise UnexpectedTokenError(f"expected an operand, found {tok.span.text!r}", tok.span)

    def climb(self, cursor: _TokenCursor, min_prec: int) -> Expr:
        """atom (binop climb)* for every binop with precedence >= min_prec"""
        self.depth += 1
        try:
            if self.depth > self.max_depth:
                raise MaxDepthExceededError(cursor.current_span(), self.max_depth)

            lhs = self.parse_atom(cursor)

            while True:
                tok = cursor.current
                if not isinstance(tok, OperatorToken) or not is_binary(tok.kind):
                    break
                prec, _ = precedence(tok.kind)
                if prec < min_prec:
                    break
                cursor.advance()
                rhs = self.climb(cursor, next_min_precedence(tok.kind))
                lhs = BinOp(
                    op=tok.kind,
                    left=lhs,
                    right=rhs,
                    span=lhs.span.merge(rhs.span, self.source),
                    op_span=tok.span,
                )

            return lhs
        finally:
            self.depth -= 1

    def _parse_group(self, group: GroupToken) -> Paren:
        """Parse a group's inner tokens as a complete sub-expression."""
        # End of a group's inner tokens sits on its closing ')'
        close_span = locate(self.source, group.span.end - 1)
        inner_cursor = _TokenCursor(group.inner, close_span)
        inner = self.climb(inner_cursor, LOWEST_PRECEDENCE)
        self.expect_end(inner_cursor)
        return Paren(inner=inner, span=group.span)

    def expect_end(self, cursor: _TokenCursor) -> None:
        if not cursor.at_end():
            raise TrailingInputError(cursor.current_span())


def parse(tokens: list[Token], source: str, max_depth: int | None = None) -> Expr:
    """Parse a token stream produced from ``source`` into an AST.

    Args:
        tokens: Output of ``tokenize(source)``.
        source: The original text, used to slice merged spans.
        max_depth: Nesting limit; defaults to the configured setting.

    Returns:
        Parsed expression AST covering every token.

    Raises:
        UnexpectedTokenError: An operand was required but not found.
        TrailingInputError: Tokens remain after a complete expression.
        MaxDepthExceededError: Nesting exceeds ``max_depth``.
    """
    if max_depth is None:
        max_depth = get_settings().max_depth

    parser = _Parser(source, max_depth)
    cursor = _TokenCursor(tokens, locate(source, len(source)))
    expr = parser.climb(cursor, LOWEST_PRECEDENCE)

    # Ensure all tokens consumed
    parser.expect_end(cursor)

    logger.debug("Parsed %r into %s", source, expr)
    return expr


def parse_expression(source: str, max_depth: int | None = None) -> Expr:
    """Tokenize and parse an expression string into an AST.

    Args:
        source: Expression string (e.g., "(1 + 2) * 3")
        max_depth: Nesting limit; defaults to the configured setting.

    Returns:
        Parsed expression AST.

    Raises:
        LexError: If tokenization fails.
        ParseError: If the expression is invalid.
    """
    return parse(tokenize(source), source, max_depth=max_depth)
