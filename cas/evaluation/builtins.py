"""Numeric implementations of the built-in functions.

Each Builtin member maps to a plain function over floats. Domain errors follow
IEEE 754: they return nan (or a signed infinity at a pole) instead of raising.
"""

from __future__ import annotations

import functools
import math

from cas import NumericFn
from cas.errors import CasTypeError
from cas.types.definition import Builtin


def _ieee(fn: NumericFn) -> NumericFn:
    @functools.wraps(fn)
    def wrapper(*args: float) -> float:
        try:
            return fn(*args)
        except OverflowError:
            return math.inf
        except ValueError:
            return math.nan
    return wrapper


# -------------------------------
# Rounding and sign
# -------------------------------
def signum(x: float) -> float:
    if math.isnan(x):
        return math.nan
    return math.copysign(1.0, x)


def round_half_away(x: float) -> float:
    if not math.isfinite(x):
        return x
    return math.copysign(math.floor(abs(x) + 0.5), x)


def trunc(x: float) -> float:
    if not math.isfinite(x):
        return x
    return float(math.trunc(x))


def fract(x: float) -> float:
    return x - trunc(x)


def ceil(x: float) -> float:
    return x if not math.isfinite(x) else float(math.ceil(x))


def floor(x: float) -> float:
    return x if not math.isfinite(x) else float(math.floor(x))


# -------------------------------
# Logarithms and roots
# -------------------------------
def ln(x: float) -> float:
    if x == 0.0:
        return -math.inf
    return math.log(x)


def lg(x: float) -> float:
    if x == 0.0:
        return -math.inf
    return math.log10(x)


def log(x: float, base: float) -> float:
    num, den = ln(x), ln(base)
    if den == 0.0:
        if num == 0.0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num)
    return num / den


def cbrt(x: float) -> float:
    return math.copysign(abs(x) ** (1.0 / 3.0), x)


def root(x: float, n: float) -> float:
    if n == 0.0:
        return math.pow(x, math.inf)
    return math.pow(x, 1.0 / n)


def atanh(x: float) -> float:
    if abs(x) == 1.0:
        return math.copysign(math.inf, x)
    return math.atanh(x)


# -------------------------------
# Integer helpers
# -------------------------------
def _integral(name: str, *args: float) -> list[int]:
    if not all(math.isfinite(a) and float(a).is_integer() for a in args):
        raise CasTypeError(f"`{name}` is only defined for integers, got {list(args)}")
    return [int(a) for a in args]


def gcd(x: float, y: float) -> float:
    return float(math.gcd(*_integral("gcd", x, y)))


def lcm(x: float, y: float) -> float:
    a, b = _integral("lcm", x, y)
    if a == 0 or b == 0:
        return 0.0
    return float(abs(a * b) // math.gcd(a, b))


def modulus(x: float, y: float) -> float:
    if y == 0.0:
        return math.nan
    return math.fmod(x, y)


def total(*xs: float) -> float:
    return math.fsum(xs)


IMPLEMENTATIONS: dict[Builtin, NumericFn] = {
    Builtin.ABS: abs,
    Builtin.SIGNUM: signum,
    Builtin.CEIL: ceil,
    Builtin.FLOOR: floor,
    Builtin.ROUND: round_half_away,
    Builtin.TRUNC: trunc,
    Builtin.FRACT: fract,
    Builtin.SIN: _ieee(math.sin),
    Builtin.ASIN: _ieee(math.asin),
    Builtin.SINH: _ieee(math.sinh),
    Builtin.ASINH: _ieee(math.asinh),
    Builtin.COS: _ieee(math.cos),
    Builtin.ACOS: _ieee(math.acos),
    Builtin.COSH: _ieee(math.cosh),
    Builtin.ACOSH: _ieee(math.acosh),
    Builtin.TAN: _ieee(math.tan),
    Builtin.ATAN: _ieee(math.atan),
    Builtin.TANH: _ieee(math.tanh),
    Builtin.ATANH: _ieee(atanh),
    Builtin.LN: _ieee(ln),
    Builtin.LG: _ieee(lg),
    Builtin.EXP: _ieee(math.exp),
    Builtin.SQRT: _ieee(math.sqrt),
    Builtin.CBRT: _ieee(cbrt),
    Builtin.ROOT: _ieee(root),
    Builtin.LOG: _ieee(log),
    Builtin.ANGLE: _ieee(math.atan2),
    Builtin.MOD: modulus,
    Builtin.GCD: gcd,
    Builtin.LCM: lcm,
    Builtin.SUM: total,
}


def implementation(builtin: Builtin) -> NumericFn:
    return IMPLEMENTATIONS[builtin]
