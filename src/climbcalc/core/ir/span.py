"""
Source spans for climbcalc.

A span names a contiguous slice of the original source text. Spans are
created once by the tokenizer and only copied or merged afterwards; they
carry no evaluation semantics and exist purely for diagnostics.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Span(BaseModel):
    """
    Location of a contiguous slice of source text.

    Attributes:
        offset: 0-based offset of the first character
        line: 1-based line number of the first character
        column: 1-based column number of the first character
        text: The exact source substring covered by the span
    """

    offset: int = Field(ge=0, description="0-based start offset")
    line: int = Field(ge=1, description="1-based line number")
    column: int = Field(ge=1, description="1-based column number")
    text: str = Field(default="", description="Covered source substring")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"

    @property
    def end(self) -> int:
        """Offset one past the last covered character."""
        return self.offset + len(self.text)

    def encloses(self, other: Span) -> bool:
        """True when ``other`` lies entirely inside this span."""
        return self.offset <= other.offset and other.end <= self.end

    def merge(self, other: Span, source: str) -> Span:
        """Smallest span covering both this span and ``other``.

        The start position (and so line/column) comes from whichever span
        starts first; the text is re-sliced from ``source`` so that any
        whitespace between the two is included.
        """
        first = self if self.offset <= other.offset else other
        end = max(self.end, other.end)
        return Span(
            offset=first.offset,
            line=first.line,
            column=first.column,
            text=source[first.offset : end],
        )


def locate(source: str, offset: int, length: int = 0) -> Span:
    """Build a span for ``source[offset:offset + length]``.

    Line and column are computed by scanning the text before ``offset``.
    Used for positions the tokenizer never visits, such as end of input.
    """
    offset = min(offset, len(source))
    line = source.count("\n", 0, offset) + 1
    line_start = source.rfind("\n", 0, offset) + 1
    return Span(
        offset=offset,
        line=line,
        column=offset - line_start + 1,
        text=source[offset : offset + length],
    )
