"""Double-precision numbers of the CAS.

`Number` wraps a Python float so that the numeric domain stays apart from the
symbol domain. Arithmetic follows IEEE 754 like the float it wraps: division by
zero and domain errors produce `inf`/`nan` instead of raising.
"""

from __future__ import annotations

import math

# 171! overflows a double
_FACT_LIMIT = 170.0


class Number:
    __slots__ = ("value",)

    def __init__(self, value: float):
        self.value = float(value)

    @classmethod
    def parse(cls, text: str) -> Number:
        """Parse decimal `text`; raises ValueError unless it is a finite float."""
        value = float(text)
        if not math.isfinite(value):
            raise ValueError(f"`{text}` is not a finite number")
        return cls(value)

    # --- Comparison / hashing ---
    def __eq__(self, other: object) -> bool:
        return isinstance(other, Number) and self.value == other.value

    def __hash__(self) -> int:
        return hash(self.value)

    def __lt__(self, other: Number) -> bool:
        return self.value < other.value

    def __le__(self, other: Number) -> bool:
        return self.value <= other.value

    def __gt__(self, other: Number) -> bool:
        return self.value > other.value

    def __ge__(self, other: Number) -> bool:
        return self.value >= other.value

    def __float__(self) -> float:
        return self.value

    # --- Arithmetic ---
    def __neg__(self) -> Number:
        return Number(-self.value)

    def __add__(self, other: Number) -> Number:
        return Number(self.value + other.value)

    def __sub__(self, other: Number) -> Number:
        return Number(self.value - other.value)

    def __mul__(self, other: Number) -> Number:
        return Number(self.value * other.value)

    def __truediv__(self, other: Number) -> Number:
        if other.value == 0.0:
            if self.value == 0.0 or math.isnan(self.value):
                return Number(math.nan)
            sign = math.copysign(1.0, self.value) * math.copysign(1.0, other.value)
            return Number(math.copysign(math.inf, sign))
        return Number(self.value / other.value)

    def __mod__(self, other: Number) -> Number:
        # Truncated remainder: the result takes the sign of the dividend
        if other.value == 0.0:
            return Number(math.nan)
        return Number(math.fmod(self.value, other.value))

    def __pow__(self, other: Number) -> Number:
        base, exponent = self.value, other.value
        try:
            return Number(math.pow(base, exponent))
        except OverflowError:
            return Number(_signed_inf(base, exponent))
        except ValueError:
            if base == 0.0 and exponent < 0.0:
                # Pole at zero: 0^-1 = inf, (-0)^-1 = -inf
                return Number(_signed_inf(base, exponent))
            # e.g. a negative base with a fractional exponent
            return Number(math.nan)

    # --- Evaluation helpers ---
    def eval(self, env) -> Number:
        """A number is already reduced: returns itself."""
        from cas.evaluation.evaluator import evaluate
        return evaluate(self, env)

    def number(self, env) -> Number:
        from cas.evaluation.evaluator import number
        return number(self, env)

    def fact(self) -> Number:
        """Falling product x * (x-1) * ... down to the first factor <= 1.

        Values <= 0 and exactly 1 give 1. Non-integral values are accepted and
        stop at their fractional remainder, e.g. 2.5! = 2.5 * 1.5 * 0.5.
        """
        x = self.value
        if math.isnan(x):
            return Number(math.nan)
        if x > _FACT_LIMIT:
            return Number(math.inf)
        result = 1.0
        while x > 0.0 and x != 1.0:
            result *= x
            x -= 1.0
        return Number(result)

    def is_integral(self) -> bool:
        return math.isfinite(self.value) and self.value.is_integer()

    def __repr__(self):
        return f"Number({self.value!r})"

    def __str__(self):
        v = self.value
        if math.isnan(v):
            return "NaN"
        if math.isinf(v):
            return "inf" if v > 0 else "-inf"
        if v.is_integer() and abs(v) < 1e16:
            return str(int(v))
        return repr(v)


def _signed_inf(base: float, exponent: float) -> float:
    """Infinite power of `base`: negative only for a negative base and an odd exponent."""
    odd = exponent.is_integer() and math.fmod(exponent, 2.0) != 0.0
    return math.copysign(math.inf, base) if odd else math.inf
