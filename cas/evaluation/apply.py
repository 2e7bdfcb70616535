"""Application engine for named calls.

This module centralizes what happens when `f(args)` is evaluated:
- User functions are applied by lexical substitution: the parameters are bound
  to the (unevaluated) argument expressions in a disposable scope and replaced
  throughout the body. Free variables of the body are left untouched.
- Built-ins check their arity, reduce every argument to a Number and call the
  numeric implementation of their Builtin member.

Keeping this logic in one place keeps the evaluator a plain dispatch on
operator and argument count.
"""

from __future__ import annotations

from typing import Callable, Sequence

from cas import Expression
from cas.errors import CasArityError, CasTypeError, CasUnboundSymbol
from cas.evaluation.builtins import implementation
from cas.types.definition import Builtin, BuiltinDef, Definition, FunctionDef, ValueDef
from cas.types.environment import Environment
from cas.types.expr import Call
from cas.types.number import Number
from cas.types.symbol import Symbol

# Reduces an expression to a Number against an Environment
NumberFn = Callable[[Expression, Environment], Number]


def substitute(expr: Expression, scope: Environment) -> Expression:
    """Replace every Symbol bound in `scope`'s own frame by its bound expression."""
    if isinstance(expr, Symbol):
        definition = scope.local(expr)
        if isinstance(definition, ValueDef):
            return definition.expr
        return expr
    if isinstance(expr, Call):
        return Call(expr.op, [substitute(arg, scope) for arg in expr.args])
    return expr


def apply_function(
    name: Symbol,
    fn: FunctionDef,
    args: Sequence[Expression],
    env: Environment,
) -> Expression:
    """Expand a call to the user function `fn`: its body with the arguments substituted.

    The scope holding the parameter bindings lives only for this call.
    Too few or too many arguments raise a CasArityError.
    """
    scope = fn.bind(name, args, env)
    return substitute(fn.body, scope)


def apply_builtin(
    name: Symbol,
    builtin: Builtin,
    args: Sequence[Expression],
    env: Environment,
    number_fn: NumberFn,
) -> Number:
    """Reduce `args` to Numbers and apply the numeric implementation of `builtin`."""
    if not builtin.accepts(len(args)):
        raise CasArityError(
            f"`{name}` is not defined for {len(args)} argument(s); "
            f"it is defined for {builtin.describe_arity()}"
        )
    values = [number_fn(arg, env).value for arg in args]
    return Number(implementation(builtin)(*values))


def apply(
    name: Symbol,
    definition: Definition | None,
    args: Sequence[Expression],
    env: Environment,
    number_fn: NumberFn,
) -> Expression:
    """Apply whatever `name` is bound to.

    - For a FunctionDef, defer to apply_function (one substitution step).
    - For a BuiltinDef, defer to apply_builtin (full numeric reduction).
    - Otherwise, raise an error naming the symbol.
    """
    if isinstance(definition, FunctionDef):
        return apply_function(name, definition, args, env)
    if isinstance(definition, BuiltinDef):
        return apply_builtin(name, definition.builtin, args, env, number_fn)
    if definition is None:
        raise CasUnboundSymbol(f"`{name}` is undefined")
    raise CasTypeError(f"`{name}` is not a function, cannot apply it to {len(args)} argument(s)")
