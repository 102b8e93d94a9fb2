"""
Operator precedence table for the climbcalc expression language.

Binary operators (lowest to highest):
    == != && || + -    1  left     (== != && || are reserved: parsed, not evaluated)
    * /                2  left
    **                 3  right

Prefix operators (+ - !) bind at UNARY_PRECEDENCE, above every binary
operator, so a prefix operator always captures the tightest operand.
"""

from __future__ import annotations

from climbcalc.core.ir.expressions import Associativity, OperatorKind

_BINARY: dict[OperatorKind, tuple[int, Associativity]] = {
    OperatorKind.EQ: (1, Associativity.LEFT),
    OperatorKind.NEQ: (1, Associativity.LEFT),
    OperatorKind.AND: (1, Associativity.LEFT),
    OperatorKind.OR: (1, Associativity.LEFT),
    OperatorKind.ADD: (1, Associativity.LEFT),
    OperatorKind.SUB: (1, Associativity.LEFT),
    OperatorKind.MUL: (2, Associativity.LEFT),
    OperatorKind.DIV: (2, Associativity.LEFT),
    OperatorKind.POW: (3, Associativity.RIGHT),
}

_PREFIX: frozenset[OperatorKind] = frozenset(
    {OperatorKind.ADD, OperatorKind.SUB, OperatorKind.NOT}
)

UNARY_PRECEDENCE = max(prec for prec, _ in _BINARY.values()) + 1

LOWEST_PRECEDENCE = 0


def precedence(op: OperatorKind) -> tuple[int, Associativity]:
    """Return (precedence, associativity) for a binary operator.

    Raises:
        KeyError: ``op`` has no binary role (only '!').
    """
    return _BINARY[op]


def is_binary(op: OperatorKind) -> bool:
    """True if ``op`` may appear between two operands."""
    return op in _BINARY


def is_prefix(op: OperatorKind) -> bool:
    """True if ``op`` may appear before a single operand."""
    return op in _PREFIX


def next_min_precedence(op: OperatorKind) -> int:
    """Minimum precedence for the right operand of ``op``.

    Left-associative operators demand strictly tighter operators on their
    right, so equal-precedence chains fold to the left; right-associative
    operators accept their own level and fold to the right.
    """
    prec, assoc = _BINARY[op]
    return prec + 1 if assoc is Associativity.LEFT else prec
