from __future__ import annotations
import os
from pathlib import Path
from typing import Optional


_DEFAULT_MAX_DEPTH = 500


def path_from_env(var: str, default: Optional[Path] = None) -> Optional[Path]:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    return Path(raw.strip())


def int_from_env(var: str, default: int) -> int:
    raw = os.environ.get(var)
    if not raw or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        raise ValueError(f"{var} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{var} must be positive, got {value}")
    return value


def get_definitions_path() -> Optional[Path]:
    """Definitions file loaded by a Session created with definitions='auto'."""
    return path_from_env('CAS_DEFINITIONS_PATH')


def get_max_depth() -> int:
    return int_from_env('CAS_MAX_DEPTH', _DEFAULT_MAX_DEPTH)
