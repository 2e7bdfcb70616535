from __future__ import annotations


class CasError(Exception):
    """ Base class for all CAS errors"""
    pass


class CasLexError(CasError):
    """ Raised when the source text cannot be split into tokens"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        # UTF-8 byte offset of the offending character
        self.position = position

    def __str__(self):
        if self.position is None:
            return self.message
        return f"{self.message} (at byte {self.position})"


class CasEndOfInput(CasLexError):
    """ Raised when the lexer has no more tokens. Not a failure"""

    def __init__(self, position: int | None = None):
        super().__init__("reached end of input", position)


class CasSyntaxError(CasError):
    """ Raised when the tokens do not form a valid expression"""

    def __init__(self, message: str, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.position = position

    def __str__(self):
        if self.position is None:
            return self.message
        return f"{self.message} (at byte {self.position})"


class CasEmptyInput(CasSyntaxError):
    """ Raised when the input holds no token at all. Not a failure"""

    def __init__(self):
        super().__init__("empty input")


class CasTypeError(CasError):
    """ Raised when an expression cannot be evaluated"""


class CasUnboundSymbol(CasTypeError):
    """ Raised when a symbol is used before it is defined"""


class CasArityError(CasTypeError):
    """ Raised when an operator or function is applied to the wrong number of arguments"""


class CasIndexError(CasTypeError):
    """ Raised when a child index is out of bounds"""


class CasRecursionError(CasTypeError):
    """ Raised when evaluation nests deeper than the configured maximum depth"""
