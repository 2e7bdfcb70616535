"""What a Symbol resolves to in an Environment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from io import StringIO
from typing import Optional

from cas import Expression
from cas.errors import CasTypeError
from cas.types.symbol import Symbol

# Smallest argument count accepted by a variadic built-in
VARIADIC_MIN = 3


class Builtin(Enum):
    """Closed set of native functions, each with its name and arity (None: variadic)."""

    ABS = ("abs", 1)
    SIGNUM = ("signum", 1)
    CEIL = ("ceil", 1)
    FLOOR = ("floor", 1)
    ROUND = ("round", 1)
    TRUNC = ("trunc", 1)
    FRACT = ("fract", 1)
    SIN = ("sin", 1)
    ASIN = ("asin", 1)
    SINH = ("sinh", 1)
    ASINH = ("asinh", 1)
    COS = ("cos", 1)
    ACOS = ("acos", 1)
    COSH = ("cosh", 1)
    ACOSH = ("acosh", 1)
    TAN = ("tan", 1)
    ATAN = ("atan", 1)
    TANH = ("tanh", 1)
    ATANH = ("atanh", 1)
    LN = ("ln", 1)
    LG = ("lg", 1)
    EXP = ("exp", 1)
    SQRT = ("sqrt", 1)
    CBRT = ("cbrt", 1)
    ROOT = ("root", 2)
    LOG = ("log", 2)
    ANGLE = ("angle", 2)
    MOD = ("mod", 2)
    GCD = ("gcd", 2)
    LCM = ("lcm", 2)
    SUM = ("sum", None)

    def __init__(self, label: str, arity: Optional[int]):
        self.label = label
        self.arity = arity

    @property
    def symbol(self) -> Symbol:
        return Symbol(self.label)

    def accepts(self, count: int) -> bool:
        if self.arity is None:
            return count >= VARIADIC_MIN
        return count == self.arity

    def describe_arity(self) -> str:
        if self.arity is None:
            return f"{VARIADIC_MIN} or more arguments"
        return f"{self.arity} argument{'s' if self.arity != 1 else ''}"

    @classmethod
    def from_name(cls, name: str) -> Builtin:
        for member in cls:
            if member.label == name:
                return member
        raise CasTypeError(f"`{name}` is not a built-in function")


@dataclass(frozen=True)
class ValueDef:
    """A symbol standing for an (unevaluated) expression, e.g. `x := 2*y`."""
    expr: Expression


@dataclass(frozen=True)
class FunctionDef:
    """A user function `f(params) := body`."""
    params: tuple[Symbol, ...]
    body: Expression

    def __str__(self) -> str:
        with StringIO() as buffer:
            buffer.write("(")
            buffer.write(", ".join(str(p) for p in self.params))
            buffer.write(") -> ")
            buffer.write(str(self.body))
            return buffer.getvalue()

    # --- Evaluation helpers ---
    def bind(self, name: Symbol, args, outer=None):
        """
        Bind `args` to this function's parameters and return the scope holding
        the bindings; see cas.types.bind.bind_arguments.
        """
        from cas.types.bind import bind_arguments
        return bind_arguments(name, self.params, list(args), outer)


@dataclass(frozen=True)
class BuiltinDef:
    """A native function dispatched by its `Builtin` member, no body."""
    builtin: Builtin

    def __post_init__(self):
        if not isinstance(self.builtin, Builtin):
            raise CasTypeError(f"{self.builtin!r} is not a built-in function")


Definition = ValueDef | FunctionDef | BuiltinDef
