"""Tests for the error taxonomy and diagnostic rendering."""

from __future__ import annotations

import pytest

from climbcalc.core.errors import (
    ClimbcalcError,
    ConfigError,
    DivisionByZeroError,
    ErrorContext,
    EvalError,
    IntegerOverflowError,
    LexError,
    MaxDepthExceededError,
    NegativeExponentError,
    NotAnIntegerError,
    ParseError,
    TrailingInputError,
    UnexpectedCharError,
    UnexpectedTokenError,
    UnmatchedParenError,
    UnsupportedOperatorError,
    format_diagnostic,
)
from climbcalc.core.expression_lang import evaluate, parse_expression


class TestTaxonomy:
    """Every error belongs to exactly one stage."""

    @pytest.mark.parametrize(
        ("error_type", "stage"),
        [
            (NotAnIntegerError, LexError),
            (UnmatchedParenError, LexError),
            (UnexpectedCharError, LexError),
            (UnexpectedTokenError, ParseError),
            (TrailingInputError, ParseError),
            (MaxDepthExceededError, ParseError),
            (DivisionByZeroError, EvalError),
            (NegativeExponentError, EvalError),
            (IntegerOverflowError, EvalError),
            (UnsupportedOperatorError, EvalError),
        ],
    )
    def test_hierarchy(self, error_type: type, stage: type) -> None:
        assert issubclass(error_type, stage)
        assert issubclass(error_type, ClimbcalcError)
        others = {LexError, ParseError, EvalError} - {stage}
        assert not any(issubclass(error_type, other) for other in others)

    def test_message_includes_location(self) -> None:
        with pytest.raises(UnexpectedCharError) as exc_info:
            parse_expression("1 +\n  $")
        assert str(exc_info.value) == "line 2, column 3: unexpected character '$'"

    def test_error_without_span(self) -> None:
        error = ConfigError("bad value")
        assert error.span is None
        assert str(error) == "bad value"


class TestErrorContext:
    """ErrorContext formats location and marked snippets."""

    def test_location_only(self) -> None:
        assert ErrorContext(line=3, column=7).format() == "<expr>:3:7"

    def test_origin(self) -> None:
        ctx = ErrorContext(line=1, column=2, origin="calc.txt")
        assert ctx.format() == "calc.txt:1:2"

    def test_snippet_marker(self) -> None:
        ctx = ErrorContext(line=1, column=3, width=2, snippet="1 ** 2")
        assert ctx.format() == "<expr>:1:3\n   1 | 1 ** 2\n         ^^"


class TestFormatDiagnostic:
    """format_diagnostic points at the exact offending source."""

    def test_lex_error(self) -> None:
        source = "1 + 2147483648"
        with pytest.raises(NotAnIntegerError) as exc_info:
            parse_expression(source)
        assert format_diagnostic(source, exc_info.value) == (
            "error: '2147483648' is not a 32-bit integer\n"
            "<expr>:1:5\n"
            "   1 | 1 + 2147483648\n"
            "           ^^^^^^^^^^"
        )

    def test_eval_error_on_later_line(self) -> None:
        source = "1 +\n2 +\n3 / 0"
        with pytest.raises(DivisionByZeroError) as exc_info:
            evaluate(parse_expression(source))
        assert format_diagnostic(source, exc_info.value) == (
            "error: division by zero\n"
            "<expr>:3:1\n"
            "   1 | 1 +\n"
            "   2 | 2 +\n"
            "   3 | 3 / 0\n"
            "       ^^^^^"
        )

    def test_end_of_input_gets_single_marker(self) -> None:
        source = "1 +"
        with pytest.raises(UnexpectedTokenError) as exc_info:
            parse_expression(source)
        rendered = format_diagnostic(source, exc_info.value)
        assert rendered.endswith("   1 | 1 +\n          ^")

    def test_multiline_span_underlines_first_line(self) -> None:
        source = "(1 +\n 2) ** -1"
        with pytest.raises(NegativeExponentError) as exc_info:
            evaluate(parse_expression(source))
        rendered = format_diagnostic(source, exc_info.value, origin="input")
        assert rendered == (
            "error: negative exponent -1\n"
            "input:1:1\n"
            "   1 | (1 +\n"
            "       ^^^^"
        )

    def test_no_span(self) -> None:
        assert format_diagnostic("1", ConfigError("oops")) == "error: oops"
