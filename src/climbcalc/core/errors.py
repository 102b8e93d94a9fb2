"""
Error types for climbcalc tokenizing, parsing, and evaluation.
"""

from __future__ import annotations

from dataclasses import dataclass

from climbcalc.core.ir.expressions import OperatorKind
from climbcalc.core.ir.span import Span


class ClimbcalcError(Exception):
    """Base exception for all climbcalc errors."""

    def __init__(self, message: str, span: Span | None = None):
        self.message = message
        self.span = span
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with its location if available."""
        if self.span is not None:
            return f"{self.span}: {self.message}"
        return self.message


class ConfigError(ClimbcalcError):
    """Raised when settings cannot be loaded or are out of range."""

    pass


# =============================================================================
# Tokenizer errors
# =============================================================================


class LexError(ClimbcalcError):
    """
    Raised when source text cannot be tokenized.

    The tokenizer never recovers: the first error aborts.
    """

    pass


class NotAnIntegerError(LexError):
    """A digit run does not fit in a 32-bit signed integer."""

    def __init__(self, span: Span):
        super().__init__(f"{span.text!r} is not a 32-bit integer", span)


class UnmatchedParenError(LexError):
    """A '(' without its ')' before end of input, or a ')' with no '('."""

    def __init__(self, span: Span):
        if span.text == "(":
            message = "unclosed '(' before end of input"
        else:
            message = "unexpected ')' without matching '('"
        super().__init__(message, span)


class UnexpectedCharError(LexError):
    """A character that starts no number, operator, or bracket."""

    def __init__(self, span: Span):
        super().__init__(f"unexpected character {span.text!r}", span)


# =============================================================================
# Parser errors
# =============================================================================


class ParseError(ClimbcalcError):
    """
    Raised when a token sequence is not a well-formed expression.

    Examples:
    - A binary-only operator where an operand is required
    - Tokens left over after a complete expression
    - Nesting deeper than the configured limit
    """

    pass


class UnexpectedTokenError(ParseError):
    """The next token (or end of input) cannot start an operand."""

    pass


class TrailingInputError(ParseError):
    """A complete expression was parsed but tokens remain."""

    def __init__(self, span: Span):
        super().__init__(f"unexpected {span.text!r} after complete expression", span)


class MaxDepthExceededError(ParseError):
    """Expression nesting exceeds the configured maximum depth."""

    def __init__(self, span: Span, max_depth: int):
        self.max_depth = max_depth
        super().__init__(f"expression nested deeper than {max_depth} levels", span)


# =============================================================================
# Evaluation errors
# =============================================================================


class EvalError(ClimbcalcError):
    """
    Raised when a well-formed expression has no integer value.

    The span always points at the operator node that failed.
    """

    pass


class DivisionByZeroError(EvalError):
    """Right operand of '/' evaluated to zero."""

    def __init__(self, span: Span):
        super().__init__("division by zero", span)


class NegativeExponentError(EvalError):
    """Right operand of '**' evaluated negative."""

    def __init__(self, span: Span, exponent: int):
        self.exponent = exponent
        super().__init__(f"negative exponent {exponent}", span)


class IntegerOverflowError(EvalError):
    """An intermediate result left the 32-bit signed range."""

    def __init__(self, span: Span):
        super().__init__("integer overflow", span)


class UnsupportedOperatorError(EvalError):
    """Operator is parsed but has no evaluation semantics."""

    def __init__(self, op: OperatorKind, span: Span):
        self.op = op
        super().__init__(f"operator '{op.value}' is not supported in evaluation", span)


# =============================================================================
# Diagnostics
# =============================================================================


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        line: Line number (1-indexed)
        column: Column number (1-indexed)
        width: Number of characters to underline
        snippet: Optional source lines surrounding the error
        origin: Optional name of where the source came from
    """

    line: int
    column: int
    width: int = 1
    snippet: str | None = None
    origin: str | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "<expr>:1:5" followed by a marked snippet
        """
        location = f"{self.origin or '<expr>'}:{self.line}:{self.column}"
        if self.snippet is not None:
            return f"{location}\n{self._format_snippet()}"
        return location

    def _format_snippet(self) -> str:
        """Format code snippet with line numbers and error marker."""
        if self.snippet is None:
            return ""

        lines = self.snippet.split("\n")
        formatted = []

        # Snippet shows up to 2 lines before the error line
        start_line = max(1, self.line - 2)

        for i, line in enumerate(lines):
            line_num = start_line + i
            prefix = f"{line_num:4d} | "
            formatted.append(prefix + line)

            if line_num == self.line:
                marker_pos = len(prefix) + self.column - 1
                formatted.append(" " * marker_pos + "^" * max(1, self.width))

        return "\n".join(formatted)


def make_error_context(source: str, span: Span, origin: str | None = None) -> ErrorContext:
    """
    Build an ErrorContext showing the lines around ``span``.

    Multi-line spans are underlined up to the end of their first line.
    """
    lines = source.split("\n")
    start = max(0, span.line - 3)
    snippet = "\n".join(lines[start : span.line])
    first_line_text = span.text.split("\n", 1)[0]
    return ErrorContext(
        line=span.line,
        column=span.column,
        width=len(first_line_text),
        snippet=snippet,
        origin=origin,
    )


def format_diagnostic(source: str, error: ClimbcalcError, origin: str | None = None) -> str:
    """
    Render an error against its source as a multi-line diagnostic.

    Args:
        source: The text that was tokenized
        error: Any climbcalc error
        origin: Optional name shown instead of ``<expr>``

    Returns:
        "error: message" followed by location and a marked snippet
    """
    header = f"error: {error.message}"
    if error.span is None:
        return header
    context = make_error_context(source, error.span, origin)
    return f"{header}\n{context.format()}"
