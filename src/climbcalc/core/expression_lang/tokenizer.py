"""
Tokenizer for the climbcalc expression language.

Converts an expression string into a sequence of located tokens.
Parentheses are resolved here: everything between a matching '(' and ')'
is collected into a single GroupToken, so the parser never has to balance
brackets itself.
"""

from __future__ import annotations

import logging

from climbcalc.core.errors import NotAnIntegerError, UnexpectedCharError, UnmatchedParenError
from climbcalc.core.ir.expressions import I32_MAX, OperatorKind
from climbcalc.core.ir.span import Span

logger = logging.getLogger(__name__)


class Token:
    """Base class for tokens; every token knows its source span."""

    __slots__ = ("span",)

    def __init__(self, span: Span) -> None:
        self.span = span


class NumberToken(Token):
    """A decimal integer literal."""

    __slots__ = ("value",)

    def __init__(self, value: int, span: Span) -> None:
        super().__init__(span)
        self.value = value

    def __repr__(self) -> str:
        return f"NumberToken({self.value}, pos={self.span.offset})"


class OperatorToken(Token):
    """An operator symbol; its binary/prefix role is decided by the parser."""

    __slots__ = ("kind",)

    def __init__(self, kind: OperatorKind, span: Span) -> None:
        super().__init__(span)
        self.kind = kind

    def __repr__(self) -> str:
        return f"OperatorToken({self.kind.value!r}, pos={self.span.offset})"


class GroupToken(Token):
    """A matched '(' ... ')' pair and the tokens between them.

    The span covers both brackets.
    """

    __slots__ = ("inner",)

    def __init__(self, inner: list[Token], span: Span) -> None:
        super().__init__(span)
        self.inner = inner

    def __repr__(self) -> str:
        return f"GroupToken({self.inner!r}, pos={self.span.offset})"


# Longest symbols first so '**' wins over '*', '!=' over '!'
_OPERATORS: list[tuple[str, OperatorKind]] = sorted(
    ((kind.value, kind) for kind in OperatorKind),
    key=lambda item: -len(item[0]),
)

_WHITESPACE = " \t\n\r\f\v"
_DIGITS = "0123456789"


class _Cursor:
    """Walks the source, keeping line and column in step with the offset."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1

    def at_end(self) -> bool:
        return self.pos >= len(self.source)

    def take(self, length: int) -> Span:
        """Consume ``length`` characters and return their span."""
        span = Span(
            offset=self.pos,
            line=self.line,
            column=self.column,
            text=self.source[self.pos : self.pos + length],
        )
        for c in span.text:
            if c == "\n":
                self.line += 1
                self.column = 1
            else:
                self.column += 1
        self.pos += length
        return span


def tokenize(source: str) -> list[Token]:
    """Tokenize an expression string into a list of tokens.

    Raises:
        NotAnIntegerError: A digit run exceeds the 32-bit signed range.
        UnmatchedParenError: Unbalanced '(' or ')'.
        UnexpectedCharError: Any other character outside the language.
    """
    cursor = _Cursor(source)
    # Stack of (open-paren span, tokens collected so far at that level)
    stack: list[tuple[Span | None, list[Token]]] = [(None, [])]

    while not cursor.at_end():
        c = source[cursor.pos]

        # Skip whitespace
        if c in _WHITESPACE:
            cursor.take(1)
            continue

        # Numbers: maximal digit run
        if c in _DIGITS:
            end = cursor.pos
            while end < len(source) and source[end] in _DIGITS:
                end += 1
            span = cursor.take(end - cursor.pos)
            # Length check first: int() refuses very long digit strings
            significant = span.text.lstrip("0")
            if len(significant) > len(str(I32_MAX)) or int(span.text) > I32_MAX:
                raise NotAnIntegerError(span)
            value = int(span.text)
            stack[-1][1].append(NumberToken(value, span))
            continue

        # Grouping
        if c == "(":
            stack.append((cursor.take(1), []))
            continue
        if c == ")":
            close = cursor.take(1)
            open_span, inner = stack.pop()
            if open_span is None:
                raise UnmatchedParenError(close)
            group_span = Span(
                offset=open_span.offset,
                line=open_span.line,
                column=open_span.column,
                text=source[open_span.offset : close.end],
            )
            stack[-1][1].append(GroupToken(inner, group_span))
            continue

        # Operators, longest match first
        for symbol, kind in _OPERATORS:
            if source.startswith(symbol, cursor.pos):
                stack[-1][1].append(OperatorToken(kind, cursor.take(len(symbol))))
                break
        else:
            raise UnexpectedCharError(cursor.take(1))

    if len(stack) > 1:
        open_span, _ = stack[-1]
        if open_span is not None:
            raise UnmatchedParenError(open_span)

    tokens = stack[0][1]
    logger.debug("Tokenized %d top-level tokens from %r", len(tokens), source)
    return tokens
