from __future__ import annotations

import logging
from pathlib import Path
from typing import Protocol

logger = logging.getLogger(__name__)


class _HasEvalDefinitions(Protocol):
    def eval_definitions(self, text: str) -> int: ...


# Definitions file: one statement per line, e.g.
#   g := 9.81
#   f(x, y) := sqrt(x^2 + y^2)
# Empty lines are skipped; the first line that fails aborts the load.

def load_definitions(session: _HasEvalDefinitions, path: str | Path) -> int:
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Cannot find definitions file '{p}'")
    code = p.read_text(encoding='utf-8')
    count = session.eval_definitions(code)
    logger.debug("loaded %d definition(s) from %s", count, p)
    return count
