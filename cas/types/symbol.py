from __future__ import annotations
import sys


class Symbol:
    """
    Identifier of the expression language.

    The lexer produces a Symbol from a run of ASCII letters (`abc`) or from a
    single Greek letter (`α`), so `xα` is two symbols. Symbols are the keys of
    an Environment and, like Numbers, leaves of an expression tree.
    """

    __slots__ = ("id",)

    def __init__(self, name: str):
        # Intern to ensure fast equality/hash; Environment keys are Symbols
        self.id = sys.intern(name)

    def __lt__(self, other: Symbol) -> bool:
        return self.id < other.id

    # --- Evaluation helpers ---
    def eval(self, env):
        """A symbol is already reduced: returns itself."""
        from cas.evaluation.evaluator import evaluate
        return evaluate(self, env)

    def number(self, env):
        """The Number this symbol stands for in `env`."""
        from cas.evaluation.evaluator import number
        return number(self, env)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Symbol) and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __repr__(self):
        return f"Symbol({self.id!r})"

    def __str__(self):
        return self.id


TRUE = Symbol("true")
FALSE = Symbol("false")
ANS = Symbol("ans")


def truth(value: bool) -> Symbol:
    return TRUE if value else FALSE
