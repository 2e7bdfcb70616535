"""Operators: the closed set of operator tokens plus named calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from cas.types.symbol import Symbol


class Op(Enum):
    # Arithmetic
    ADD = "+"
    SUB = "-"
    MUL = "*"
    DIV = "/"
    POW = "^"
    MOD = "%"
    FACT = "!"
    # Comparison
    EQ = "="
    NEQ = "!="
    LESS = "<"
    MORE = ">"
    LESS_EQ = "<="
    MORE_EQ = ">="
    # Structural
    DEF = ":="
    LIST = ","
    CHILD = "_"
    OPEN = "("
    CLOSE = ")"

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class CallOp:
    """Invocation of the function or built-in bound to `name`."""
    name: Symbol

    def __str__(self):
        return str(self.name)


Operator = Op | CallOp

# Characters that start an operator token
OP_BEGIN = frozenset("+-*/:^%()[]{},;_<>!~=")

# Two-character operators; any other pair is read as two tokens
COMPOUND_OPS = frozenset({"==", "!=", "~=", ":=", "<=", ">="})

OPERATORS: dict[str, Op] = {
    "+": Op.ADD,
    "-": Op.SUB,
    "*": Op.MUL,
    "/": Op.DIV,
    ":": Op.DIV,
    "^": Op.POW,
    "!": Op.FACT,
    "%": Op.MOD,
    "<": Op.LESS,
    ">": Op.MORE,
    "_": Op.CHILD,
    ",": Op.LIST,
    ";": Op.LIST,
    "(": Op.OPEN,
    "[": Op.OPEN,
    "{": Op.OPEN,
    ")": Op.CLOSE,
    "]": Op.CLOSE,
    "}": Op.CLOSE,
    "=": Op.EQ,
    "==": Op.EQ,
    "!=": Op.NEQ,
    "~=": Op.NEQ,
    ":=": Op.DEF,
    "<=": Op.LESS_EQ,
    ">=": Op.MORE_EQ,
}
