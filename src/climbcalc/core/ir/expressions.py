"""
Expression types for the climbcalc IR.

Every node carries the span of the source it was parsed from. The tree is
strictly owned: nodes are frozen pydantic models, each child belongs to
exactly one parent, and no node is shared or cyclic.

Supports:
- Integer literals: 42
- Explicit grouping: (1 + 2)
- Binary operators: + - * / ** (and the reserved == != && ||)
- Prefix operators: + - (and the reserved !)
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from climbcalc.core.ir.span import Span

# ---------------------------------------------------------------------------
# Numeric domain
# ---------------------------------------------------------------------------

I32_MIN = -(2**31)
I32_MAX = 2**31 - 1


# ---------------------------------------------------------------------------
# Operators
# ---------------------------------------------------------------------------


class OperatorKind(StrEnum):
    """Every operator the tokenizer recognizes, keyed by its source symbol.

    The kind alone does not decide binary vs. prefix role; the parser
    decides that from position.
    """

    EQ = "=="
    NEQ = "!="
    AND = "&&"
    OR = "||"
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "**"
    NOT = "!"


class Associativity(StrEnum):
    """Grouping direction for chains of equal-precedence operators."""

    LEFT = "left"
    RIGHT = "right"


# ---------------------------------------------------------------------------
# AST node types
# ---------------------------------------------------------------------------


class Num(BaseModel):
    """A 32-bit signed integer literal."""

    value: int = Field(ge=I32_MIN, le=I32_MAX, description="Literal value")
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.value)


class Paren(BaseModel):
    """
    Explicit grouping: ( inner ).

    Kept in the tree rather than collapsed so printers can reproduce the
    original grouping. Evaluates exactly like ``inner``.
    """

    inner: Expr
    span: Span

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"({self.inner})"


class BinOp(BaseModel):
    """Binary operation: left op right."""

    op: OperatorKind
    left: Expr
    right: Expr
    span: Span
    op_span: Span = Field(description="Span of the operator token itself")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        leaf, chain = unwind_left(self)
        parts = [str(leaf)]
        for node in chain:
            parts.append(f"{node.op.value} {node.right}")
        return " ".join(parts)


class UnaryOp(BaseModel):
    """Prefix operation: op operand."""

    op: OperatorKind
    operand: Expr
    span: Span
    op_span: Span = Field(description="Span of the operator token itself")

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.op.value}{self.operand}"


# ---------------------------------------------------------------------------
# Union type
# ---------------------------------------------------------------------------

Expr = Num | Paren | BinOp | UnaryOp

# Rebuild models for recursive forward references
Paren.model_rebuild()
BinOp.model_rebuild()
UnaryOp.model_rebuild()



def unwind_left(expr: BinOp) -> tuple[Expr, list[BinOp]]:
    """Split a left-leaning chain of binary operations.

    Left-associative chains such as ``1 + 2 + ... + n`` grow one level per
    operator down the left side, with no nesting limit, so tree walks step
    down that side in a loop instead of recursing.

    Returns:
        The leftmost operand that is not a BinOp, and the BinOps from the
        innermost (applied first) to ``expr`` itself.
    """
    chain: list[BinOp] = []
    node: Expr = expr
    while isinstance(node, BinOp):
        chain.append(node)
        node = node.left
    chain.reverse()
    return node, chain
