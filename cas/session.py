from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

from cas import Expression
from cas.config import get_definitions_path
from cas.errors import CasEmptyInput, CasError, CasTypeError
from cas.builtin.env_builtin import register
from cas.evaluation.evaluator import evaluate, number
from cas.reader.parser import parse
from cas.types.definition import ValueDef
from cas.types.environment import Environment
from cas.types.expr import Call
from cas.types.number import Number
from cas.types.symbol import Symbol, ANS

logger = logging.getLogger(__name__)


class Session:
    """
    Orchestrates parsing and evaluating expressions against one Environment.
    Definitions persist across calls, and the result of `eval` is kept as `ans`.
    """

    def __init__(
        self,
        definitions: str | Path | None | Literal['auto'] = 'auto',
        *,
        max_depth: Optional[int] = None,
    ):
        self.env: Environment = Environment()
        register(self.env)
        self.max_depth = max_depth

        if definitions is None:
            pass  # explicit: no definitions file
        elif definitions == 'auto':
            path = get_definitions_path()
            if path is not None:
                # Lazy import to avoid circular imports
                from cas.modules.definitions_loader import load_definitions
                load_definitions(self, path)
        else:
            from cas.modules.definitions_loader import load_definitions
            load_definitions(self, Path(definitions))

    def parse(self, code: str) -> Expression:
        return parse(code, self.env)

    def eval(self, code: str) -> Expression:
        """Parse `code`, reduce it one step and remember the result as `ans`."""
        result = evaluate(self.parse(code), self.env, self.max_depth)
        self._remember(result)
        return result

    def number(self, code: str) -> Number:
        """Parse `code` and reduce it to a Number."""
        return number(self.parse(code), self.env, self.max_depth)

    def eval_definitions(self, text: str) -> int:
        """Evaluate every non-empty line of `text` for its side effect.

        Returns the number of evaluated lines. The first failing line aborts
        the load with its error.
        """
        count = 0
        for lineno, line in enumerate(text.splitlines(), start=1):
            try:
                evaluate(parse(line, self.env), self.env, self.max_depth)
            except CasEmptyInput:
                continue
            except CasError as err:
                logger.debug("definition on line %d failed: %s", lineno, err)
                raise
            count += 1
        return count

    def _remember(self, result: Expression) -> None:
        try:
            value: Expression = number(result, self.env, self.max_depth)
        except CasTypeError:
            # Keep symbolic results, unless they would make `ans` refer to itself
            if _mentions(result, ANS):
                return
            value = result
        self.env.define(ANS, ValueDef(value))
        logger.debug("ans := %s", value)


def _mentions(expr: Expression, symbol: Symbol) -> bool:
    if isinstance(expr, Symbol):
        return expr == symbol
    if isinstance(expr, Call):
        return any(_mentions(arg, symbol) for arg in expr.args)
    return False
