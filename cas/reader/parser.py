"""
  Pratt parser for algebraic expressions

Builds an expression tree from the Lexer's tokens, driven by the binding
powers in cas.reader.binding_power:

    1+2*3^(4+5)   -> Add(1, Mul(2, Pow(3, Add(4, 5))))
    2x            -> Mul(2, x)          (implicit multiplication)
    sin(a, b)     -> sin(a, b)          (named call over a flattened List)
    n!            -> Fact(n)
"""

from __future__ import annotations

from typing import Optional

from cas import Expression, Token
from cas.errors import CasLexError, CasEndOfInput, CasSyntaxError, CasEmptyInput
from cas.types.environment import Environment
from cas.types.expr import Call, flatten
from cas.types.number import Number
from cas.types.op import Op, CallOp
from cas.types.symbol import Symbol
from cas.reader.binding_power import prefix_bp, infix_bp, postfix_bp
from cas.reader.lexer import Lexer, TokenStream


def parse(source: str, env: Optional[Environment] = None) -> Expression:
    """Parse one expression from `source`.

    Raises CasEmptyInput if `source` holds no token, CasSyntaxError otherwise.
    """
    stream = Lexer(source, env)
    try:
        if _peek(stream) is None:
            raise CasEmptyInput()
        expr = parse_bp(stream, 0)
        trailing = _peek(stream)
    except RecursionError:
        raise CasSyntaxError("expression is nested too deeply") from None
    if trailing is not None:
        raise CasSyntaxError(f"unexpected token `{trailing}` after expression")
    return expr


def _peek(stream: TokenStream) -> Optional[Token]:
    try:
        return stream.peek()
    except CasLexError as err:
        raise CasSyntaxError(err.message, err.position) from err


def _advance(stream: TokenStream, expected: str) -> Token:
    try:
        return stream.advance()
    except CasEndOfInput:
        raise CasSyntaxError(f"expected {expected}, but reached end of input") from None
    except CasLexError as err:
        raise CasSyntaxError(err.message, err.position) from err


def _is_atom(token: Token) -> bool:
    return isinstance(token, (Number, Symbol))


def parse_bp(stream: TokenStream, min_bp: int) -> Expression:
    """Parse an expression whose operators all bind at least as tight as `min_bp`."""
    token = _advance(stream, "an expression")

    # ------------------------
    # Left-hand side
    # ------------------------
    if _is_atom(token):
        lhs = token

    elif token is Op.OPEN:
        lhs = parse_bp(stream, 0)
        closing = _advance(stream, f"`{Op.CLOSE}`")
        if closing is not Op.CLOSE:
            raise CasSyntaxError(f"expected `{Op.CLOSE}`, found `{closing}`")

    elif (right_bp := prefix_bp(token)) is not None:
        try:
            rhs = parse_bp(stream, right_bp)
        except CasSyntaxError as err:
            raise CasSyntaxError(f"expected operand of `{token}`, but {err.message}", err.position) from err
        if isinstance(token, CallOp):
            lhs = Call(token, flatten(rhs))
        else:
            lhs = Call(token, (rhs,))

    else:
        raise CasSyntaxError(f"unexpected token `{token}`")

    # ------------------------
    # Postfix and infix operators
    # ------------------------
    while True:
        token = _peek(stream)
        if token is None:
            break

        # A value or a group right after an operand multiplies it: 2x, (a)(b)
        implicit = _is_atom(token) or token is Op.OPEN
        op = Op.MUL if implicit else token

        left_bp = postfix_bp(op)
        if left_bp is not None:
            if left_bp < min_bp:
                break
            stream.advance()
            lhs = Call(op, (lhs,))
            continue

        powers = infix_bp(op)
        if powers is not None:
            left_bp, right_bp = powers
            if left_bp < min_bp:
                break
            if not implicit:
                stream.advance()
            try:
                rhs = parse_bp(stream, right_bp)
            except CasSyntaxError as err:
                raise CasSyntaxError(f"expected rhs of `{op}`, but {err.message}", err.position) from err
            lhs = Call(op, (lhs, rhs))
            continue

        break

    return lhs
