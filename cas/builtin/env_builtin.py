"""Default bindings of a CAS Environment.

Seeds an Environment with the numeric constants and binds every built-in
function name to its Builtin member. Names are resolved to members once, here,
so evaluation never matches on raw text.
"""
from __future__ import annotations

import math

from cas.types.definition import Builtin, BuiltinDef, ValueDef
from cas.types.environment import Environment
from cas.types.number import Number
from cas.types.symbol import Symbol

CONSTANTS: dict[str, float] = {
    "true": 1.0,
    "false": 0.0,
    "pi": math.pi,
    "π": math.pi,
    "tau": math.tau,
    "τ": math.tau,
    "e": math.e,
    "inf": math.inf,
    "NaN": math.nan,
}


def register_constants(env: Environment) -> None:
    """Bind every constant as a value definition."""
    env.update({Symbol(name): ValueDef(Number(value)) for name, value in CONSTANTS.items()})


def register_builtins(env: Environment, names: list[str] | None = None) -> None:
    """Bind built-in functions; `names` restricts the set (default: all of them).

    Raises CasTypeError for a name that is not a built-in.
    """
    if names is None:
        members = list(Builtin)
    else:
        members = [Builtin.from_name(name) for name in names]
    env.update({member.symbol: BuiltinDef(member) for member in members})


def register(env: Environment) -> None:
    """Register all constants and built-in functions into the given environment."""
    register_constants(env)
    register_builtins(env)
