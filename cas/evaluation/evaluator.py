"""Evaluator for CAS expression trees.

Two entry points:
- evaluate(): one reduction step of a Call (substitution of a user function,
  application of a built-in or an operator, or a definition).
- number(): full numeric reduction, resolving symbols through the Environment.

Only `:=` mutates the Environment; everything else reads it. Nesting is bounded
by the configured maximum depth (cas.config.get_max_depth), so runaway
recursion such as `x := x+1` surfaces as a CasRecursionError.
"""

from __future__ import annotations

from typing import Optional

from cas import Expression
from cas.config import get_max_depth
from cas.errors import (
    CasArityError,
    CasIndexError,
    CasRecursionError,
    CasTypeError,
)
from cas.evaluation.apply import apply
from cas.types.definition import BuiltinDef, FunctionDef, ValueDef
from cas.types.environment import Environment
from cas.types.expr import Call, flatten
from cas.types.number import Number
from cas.types.op import CallOp, Op
from cas.types.symbol import Symbol, truth

# Argument counts each operator is defined for, used in error messages
OP_ARITIES: dict[Op, tuple[int, ...]] = {
    Op.ADD: (1, 2),
    Op.SUB: (1, 2),
    Op.FACT: (1,),
    Op.MUL: (2,),
    Op.DIV: (2,),
    Op.POW: (2,),
    Op.MOD: (2,),
    Op.EQ: (2,),
    Op.NEQ: (2,),
    Op.LESS: (2,),
    Op.MORE: (2,),
    Op.LESS_EQ: (2,),
    Op.MORE_EQ: (2,),
    Op.DEF: (2,),
    Op.CHILD: (2,),
}

ARITHMETIC = {
    Op.ADD: lambda a, b: a + b,
    Op.SUB: lambda a, b: a - b,
    Op.MUL: lambda a, b: a * b,
    Op.DIV: lambda a, b: a / b,
    Op.POW: lambda a, b: a ** b,
    Op.MOD: lambda a, b: a % b,
}

COMPARISON = {
    Op.EQ: lambda a, b: a == b,
    Op.NEQ: lambda a, b: a != b,
    Op.LESS: lambda a, b: a < b,
    Op.MORE: lambda a, b: a > b,
    Op.LESS_EQ: lambda a, b: a <= b,
    Op.MORE_EQ: lambda a, b: a >= b,
}


def evaluate(expr: Expression, env: Environment, max_depth: Optional[int] = None) -> Expression:
    """
    One reduction step of `expr` against `env`.
    Atoms are returned unchanged.
    """
    if max_depth is None:
        max_depth = get_max_depth()
    try:
        return evaluate0(expr, env, 0, max_depth)
    except RecursionError:
        raise CasRecursionError("expression nests too deeply to evaluate") from None


def number(expr: Expression, env: Environment, max_depth: Optional[int] = None) -> Number:
    """
    Reduce `expr` completely to a Number against `env`.
    Raises CasUnboundSymbol or CasTypeError if any part does not resolve to a number.
    """
    if max_depth is None:
        max_depth = get_max_depth()
    try:
        return number0(expr, env, 0, max_depth)
    except RecursionError:
        raise CasRecursionError("expression nests too deeply to evaluate") from None


def _check_depth(depth: int, max_depth: int) -> None:
    if depth > max_depth:
        raise CasRecursionError(f"maximum evaluation depth of {max_depth} exceeded")


def number0(expr: Expression, env: Environment, depth: int, max_depth: int) -> Number:
    """Core of number(): tracks the nesting depth."""
    _check_depth(depth, max_depth)

    match expr:
        case Number():
            return expr
        case Symbol():
            definition = env.lookup(expr)
            if isinstance(definition, ValueDef):
                return number0(definition.expr, env, depth + 1, max_depth)
            raise CasTypeError(f"`{expr}` is a function, not a number")
        case Call():
            reduced = evaluate0(expr, env, depth + 1, max_depth)
            return number0(reduced, env, depth + 1, max_depth)

    raise CasTypeError(f"`{expr!r}` is not an expression")


def evaluate0(expr: Expression, env: Environment, depth: int, max_depth: int) -> Expression:
    """Core of evaluate(): dispatch on operator kind and argument count."""
    _check_depth(depth, max_depth)

    if not isinstance(expr, Call):
        return expr

    def num(arg: Expression) -> Number:
        return number0(arg, env, depth + 1, max_depth)

    def number_fn(arg: Expression, scope: Environment) -> Number:
        return number0(arg, scope, depth + 1, max_depth)

    op, args = expr.op, expr.args

    # --- Named calls: user functions and built-ins ---
    if isinstance(op, CallOp):
        return apply(op.name, env.get(op.name), args, env, number_fn)

    # --- `f(x)` lexed before `f` was a function: Mul(f, x) ---
    if op is Op.MUL and len(args) == 2 and isinstance(args[0], Symbol):
        definition = env.get(args[0])
        if isinstance(definition, (FunctionDef, BuiltinDef)):
            return apply(args[0], definition, flatten(args[1]), env, number_fn)

    match args:
        case (x,):
            if op is Op.SUB:
                return -num(x)
            if op is Op.ADD:
                return x
            if op is Op.FACT:
                return num(x).fact()

        case (x, y):
            if op in ARITHMETIC:
                return ARITHMETIC[op](num(x), num(y))
            if op in COMPARISON:
                return truth(COMPARISON[op](num(x), num(y)))
            if op is Op.DEF:
                return define(x, y, env)
            if op is Op.CHILD:
                return child(x, y, env, depth, max_depth)

    raise _undefined(op, len(args))


def _undefined(op: Op, count: int) -> CasArityError:
    arities = OP_ARITIES.get(op, ())
    if op is Op.LIST:
        hint = "a list can only be passed as function arguments or indexed with `_`"
    elif arities:
        hint = "it may be defined for " + " or ".join(f"{n} argument(s)" for n in arities)
    else:
        hint = "it cannot be evaluated"
    return CasArityError(f"operator `{op}` is not defined for {count} argument(s); {hint}")


# -------------------------------
# Definitions
# -------------------------------
def define(target: Expression, value: Expression, env: Environment) -> Symbol:
    """
    x := value        binds x to the unevaluated value
    f(x, y) := body   binds f to a user function
    Returns the defined symbol.
    """
    if isinstance(target, Symbol):
        env.define(target, ValueDef(value))
        return target

    match target:
        case Call(op=Op.MUL, args=(Symbol() as name, params)):
            env.define(name, FunctionDef(_parameters(name, flatten(params)), value))
            return name
        case Call(op=CallOp(name=name), args=params):
            env.define(name, FunctionDef(_parameters(name, params), value))
            return name

    raise CasTypeError(
        f"cannot define `{target}`; expected a symbol such as `x` or a function such as `f(x)`"
    )


def _parameters(name: Symbol, params) -> tuple[Symbol, ...]:
    for param in params:
        if not isinstance(param, Symbol):
            raise CasTypeError(f"parameter `{param}` of `{name}` must be a symbol")
    repeated = sorted({p for p in params if params.count(p) > 1})
    if repeated:
        listed = ", ".join(str(p) for p in repeated)
        raise CasTypeError(f"parameters of `{name}` must be distinct, repeated: {listed}")
    return tuple(params)


# -------------------------------
# Indexing
# -------------------------------
def child(
    target: Expression, index: Expression, env: Environment, depth: int, max_depth: int
) -> Expression:
    """`list_i`: the element at 0-based position i of the flattened list."""
    items = _as_list(target, env, depth + 1, max_depth)
    position = number0(index, env, depth + 1, max_depth)
    if not position.is_integral():
        raise CasIndexError(f"index `{position}` is not an integer")
    i = int(position.value)
    if not 0 <= i < len(items):
        raise CasIndexError(
            f"index {i} is out of bounds for a list of {len(items)} element(s)"
        )
    return items[i]


def _as_list(expr: Expression, env: Environment, depth: int, max_depth: int) -> tuple[Expression, ...]:
    """Resolve `expr` until it is a List (or cannot be reduced further) and flatten it."""
    while True:
        _check_depth(depth, max_depth)
        if isinstance(expr, Symbol):
            definition = env.get(expr)
            if not isinstance(definition, ValueDef):
                break
            expr = definition.expr
        elif isinstance(expr, Call) and expr.op is not Op.LIST:
            expr = evaluate0(expr, env, depth, max_depth)
        else:
            break
        depth += 1
    return flatten(expr)
