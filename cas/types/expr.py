"""Expression tree nodes.

An expression is a Number, a Symbol or a `Call` applying an operator to an
ordered tuple of child expressions. Trees own their children; no node is shared
and there are no cycles.
"""

from __future__ import annotations

from io import StringIO
from typing import Optional

from cas import Expression
from cas.types.number import Number
from cas.types.op import Op, CallOp, Operator
from cas.reader.binding_power import prefix_bp, infix_bp, postfix_bp


class Call:
    """Application of `op` to `args`."""

    __slots__ = ("op", "args")

    def __init__(self, op: Operator, args):
        self.op: Operator = op
        self.args: tuple[Expression, ...] = tuple(args)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Call) and self.op == other.op and self.args == other.args

    def __hash__(self) -> int:
        return hash((self.op, self.args))

    def __repr__(self):
        return f"Call({self.op!r}, {list(self.args)!r})"

    def __str__(self):
        with StringIO() as buffer:
            _write(buffer, self)
            return buffer.getvalue()

    # --- Evaluation helpers ---
    def eval(self, env) -> Expression:
        """One reduction step against `env`; see cas.evaluation.evaluator.evaluate."""
        from cas.evaluation.evaluator import evaluate
        return evaluate(self, env)

    def number(self, env) -> Number:
        """Full numeric reduction against `env`; see cas.evaluation.evaluator.number."""
        from cas.evaluation.evaluator import number
        return number(self, env)


def flatten(expr: Expression) -> tuple[Expression, ...]:
    """Unchain a right-nested List: `a,b,c` == List(a, List(b, c)) -> (a, b, c)."""
    items: list[Expression] = []
    while isinstance(expr, Call) and expr.op is Op.LIST and len(expr.args) == 2:
        items.append(expr.args[0])
        expr = expr.args[1]
    items.append(expr)
    return tuple(items)


# --- Rendering ---
# Parentheses are emitted only where re-parsing the text would group differently.

def _trailing_bp(expr: Expression) -> Optional[int]:
    """Power at which the last operand of `expr` was parsed, None if closed."""
    if isinstance(expr, Number):
        return prefix_bp(Op.SUB) if expr.value < 0 else None
    if not isinstance(expr, Call):
        return None
    if isinstance(expr.op, CallOp):
        return prefix_bp(expr.op)
    if len(expr.args) == 2 and infix_bp(expr.op):
        return infix_bp(expr.op)[1]
    if len(expr.args) == 1 and prefix_bp(expr.op):
        return prefix_bp(expr.op)
    return None


def _leading_bp(expr: Expression) -> Optional[int]:
    """Left power of the operator that follows the first operand of `expr`."""
    if not isinstance(expr, Call) or isinstance(expr.op, CallOp):
        return None
    if len(expr.args) == 2 and infix_bp(expr.op):
        return infix_bp(expr.op)[0]
    if len(expr.args) == 1 and postfix_bp(expr.op):
        return postfix_bp(expr.op)
    return None


def _write_operand(buffer: StringIO, expr: Expression, wrap: bool) -> None:
    if wrap:
        buffer.write("(")
        _write(buffer, expr)
        buffer.write(")")
    else:
        _write(buffer, expr)


def _write_lhs(buffer: StringIO, expr: Expression, left_bp: int) -> None:
    trailing = _trailing_bp(expr)
    _write_operand(buffer, expr, trailing is not None and left_bp >= trailing)


def _write_rhs(buffer: StringIO, expr: Expression, right_bp: int) -> None:
    leading = _leading_bp(expr)
    _write_operand(buffer, expr, leading is not None and leading < right_bp)


def _write_call(buffer: StringIO, call: Call) -> None:
    buffer.write(f"{call.op}(")
    for i, arg in enumerate(call.args):
        if i:
            buffer.write(", ")
        _write(buffer, arg)
    buffer.write(")")


def _write(buffer: StringIO, expr: Expression) -> None:
    if not isinstance(expr, Call):
        buffer.write(str(expr))
        return

    op, args = expr.op, expr.args
    if isinstance(op, CallOp):
        _write_call(buffer, expr)
    elif len(args) == 1 and postfix_bp(op):
        _write_lhs(buffer, args[0], postfix_bp(op))
        buffer.write(str(op))
    elif len(args) == 1 and prefix_bp(op):
        buffer.write(str(op))
        _write_rhs(buffer, args[0], prefix_bp(op))
    elif len(args) == 2 and infix_bp(op):
        left_bp, right_bp = infix_bp(op)
        _write_lhs(buffer, args[0], left_bp)
        if op is Op.LIST:
            buffer.write(", ")
        elif op is Op.DEF:
            buffer.write(" := ")
        else:
            buffer.write(str(op))
        _write_rhs(buffer, args[1], right_bp)
    else:
        _write_call(buffer, expr)
