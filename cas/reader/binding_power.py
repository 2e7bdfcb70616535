"""Binding powers driving the Pratt parser.

The parser compares the *left* power of a pending operator with the minimum
power of the current call: an operator whose left power is below the minimum
ends the operand. With left < right an operator groups to the left; with
left > right (Pow) it groups to the right, so 2^3^2 is 2^(3^2).
Open and Close have no power: they are handled structurally by the parser.
"""

from __future__ import annotations

from typing import Optional

from cas.types.op import Op, CallOp, Operator

# Power of a named call such as `sin x`
CALL_PREFIX_BP = 10

PREFIX_BP: dict[Op, int] = {
    Op.ADD: 13,
    Op.SUB: 13,
}

INFIX_BP: dict[Op, tuple[int, int]] = {
    Op.DEF: (2, 1),
    Op.LIST: (4, 3),
    Op.EQ: (5, 6),
    Op.NEQ: (5, 6),
    Op.LESS: (5, 6),
    Op.MORE: (5, 6),
    Op.LESS_EQ: (5, 6),
    Op.MORE_EQ: (5, 6),
    Op.MOD: (8, 6),
    Op.ADD: (9, 10),
    Op.SUB: (9, 10),
    Op.MUL: (11, 12),
    Op.DIV: (11, 12),
    Op.POW: (14, 13),
    Op.CHILD: (15, 16),
}

POSTFIX_BP: dict[Op, int] = {
    Op.FACT: 15,
}


def prefix_bp(op: Operator) -> Optional[int]:
    if isinstance(op, CallOp):
        return CALL_PREFIX_BP
    return PREFIX_BP.get(op)


def infix_bp(op: Operator) -> Optional[tuple[int, int]]:
    if isinstance(op, CallOp):
        return None
    return INFIX_BP.get(op)


def postfix_bp(op: Operator) -> Optional[int]:
    if isinstance(op, CallOp):
        return None
    return POSTFIX_BP.get(op)
