from __future__ import annotations

from typing import List, Optional

from cas import Expression
from cas.errors import CasArityError, CasTypeError
from cas.types.definition import ValueDef
from cas.types.environment import Environment
from cas.types.symbol import Symbol


def bind_arguments(
    name: Symbol,
    formals: tuple[Symbol, ...],
    supplied_args: List[Expression],
    outer: Optional[Environment] = None,
) -> Environment:
    """
    Bind the actual argument expressions of a call to `name` to its formal
    parameters, positionally.

    Returns a new Environment whose outer is `outer` (may be None), holding one
    ValueDef per parameter. The arguments are bound unevaluated.
    """
    formals = list(formals)
    supplied = list(supplied_args)
    local_env = outer.child() if outer is not None else Environment()

    if len(supplied) < len(formals):
        missing = formals[len(supplied):]
        raise CasArityError(
            f"`{name}` takes {len(formals)} argument(s), got {len(supplied)}; "
            f"missing parameter(s): {[str(s) for s in missing]}"
        )
    if len(supplied) > len(formals):
        extra = supplied[len(formals):]
        raise CasArityError(
            f"`{name}` takes {len(formals)} argument(s), got {len(supplied)}; "
            f"too many arguments: {[str(e) for e in extra]}"
        )

    for formal, arg in zip(formals, supplied):
        if not isinstance(formal, Symbol):
            raise CasTypeError(f"parameter `{formal}` of `{name}` is not a symbol")
        local_env.define(formal, ValueDef(arg))

    return local_env
