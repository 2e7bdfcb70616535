# Core type aliases for the CAS data model.
# Numbers and Symbols are expression leaves in their own right; the only
# composite node is `cas.types.expr.Call`. No separate Atom wrapper exists.
#
# Naming guidance:
# - Token:      Use in lexer/parser code for the items produced by the reader.
# - Expression: Use in parser/evaluator code for nodes of the expression tree.
# Both aliases resolve to `Any` to keep this module free of imports, so that
# every submodule can import them without cycles.

from typing import Any, Callable

# Parsed or evaluated expression tree node: Number | Symbol | Call
Expression = Any
# Lexer output: Number | Symbol | Op | CallOp
Token = Any

# Numeric implementation of a built-in: takes plain floats, returns a float
NumericFn = Callable[..., float]
