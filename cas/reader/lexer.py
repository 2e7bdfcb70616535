"""
  Lexer for algebraic expressions

- Streaming, lazy tokenization: one token is produced per request
- Environment-aware: an identifier bound to a function or built-in in the
  current Environment is emitted as a CallOp, any other identifier as a Symbol

Tokens are plain Python objects:

    - decimal numbers -> Number
    - identifiers     -> Symbol, or CallOp(Symbol) when bound to a function
    - operators       -> Op
"""

from __future__ import annotations

import string
from typing import Iterator, Optional

from cas import Token
from cas.errors import CasLexError, CasEndOfInput
from cas.types.environment import Environment
from cas.types.number import Number
from cas.types.op import CallOp, OP_BEGIN, COMPOUND_OPS, OPERATORS
from cas.types.symbol import Symbol

WHITESPACE = frozenset(" \t\n")
DIGITS = frozenset(string.digits)
ASCII_LETTERS = frozenset(string.ascii_letters)


def is_greek(c: str) -> bool:
    return "α" <= c <= "ω" or "Α" <= c <= "Ω"


def _byte_offset(source: str, pos: int) -> int:
    return len(source[:pos].encode("utf-8"))


def lex(source: str, env: Optional[Environment] = None) -> Iterator[Token]:
    """Token generator: yields Number, Symbol, Op and CallOp tokens.

    Raises CasLexError, carrying the byte offset, on malformed input.
    """
    pos = 0
    n = len(source)

    def eat(taste) -> str:
        nonlocal pos
        start = pos
        while pos < n and taste(source[pos]):
            pos += 1
        return source[start:pos]

    def fail(message: str, at: int) -> CasLexError:
        return CasLexError(message, _byte_offset(source, at))

    while pos < n:
        current_char = source[pos]

        # ----------------------
        # Whitespace
        # ----------------------
        if current_char in WHITESPACE:
            eat(lambda c: c in WHITESPACE)
            continue

        start = pos

        # ----------------------
        # Operators, one or two characters
        # ----------------------
        if current_char in OP_BEGIN:
            text = current_char
            if source[pos:pos + 2] in COMPOUND_OPS:
                text = source[pos:pos + 2]
            pos += len(text)
            op = OPERATORS.get(text)
            if op is None:
                raise fail(f"operator `{text}` is unknown", start)
            yield op
            continue

        # ----------------------
        # Decimal numbers: digits [. digits] [e|E [+-] digits]
        # ----------------------
        if current_char in DIGITS or current_char == ".":
            text = eat(lambda c: c in DIGITS)
            if pos < n and source[pos] == ".":
                pos += 1
                text += "." + eat(lambda c: c in DIGITS)
            if pos < n and source[pos] in "eE":
                text += source[pos]
                pos += 1
                text += eat(lambda c: c in "+-")
                text += eat(lambda c: c in DIGITS)
            try:
                yield Number.parse(text)
            except ValueError:
                raise fail(f"could not parse `{text}` as a number", start) from None
            continue

        # ----------------------
        # Symbols: one Greek letter, or a run of ASCII letters
        # ----------------------
        if current_char in ASCII_LETTERS or is_greek(current_char):
            if is_greek(current_char):
                pos += 1
                symbol = Symbol(current_char)
            else:
                symbol = Symbol(eat(lambda c: c in ASCII_LETTERS))
            if env is not None and env.is_callable(symbol):
                yield CallOp(symbol)
            else:
                yield symbol
            continue

        raise fail(f"found unknown character `{current_char}`", start)


class TokenStream:
    """One-token lookahead over a token iterator."""

    def __init__(self, token_iter: Iterator[Token]):
        self.tokens = iter(token_iter)
        self.buffer: list[Token] = []

    def peek(self) -> Optional[Token]:
        """Next token without consuming it, or None at end of input."""
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Token:
        """Consume and return the next token; raises CasEndOfInput at end of input."""
        if self.buffer:
            return self.buffer.pop(0)
        try:
            return next(self.tokens)
        except StopIteration:
            raise CasEndOfInput() from None

    def at_end(self) -> bool:
        return self.peek() is None

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        try:
            return self.advance()
        except CasEndOfInput:
            raise StopIteration from None


class Lexer(TokenStream):
    """TokenStream over `source`, classifying identifiers against `env`."""

    def __init__(self, source: str, env: Optional[Environment] = None):
        super().__init__(lex(source, env))
        self.source = source
        self.env = env
