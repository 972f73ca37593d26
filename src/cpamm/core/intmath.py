"""
Integer rounding helpers (centralised).

All engine arithmetic goes through these helpers so that the rounding direction is
explicit at every call site: OUT of the pool rounds down, INTO the pool rounds up.
"""

from __future__ import annotations

import math

from .exc import InvariantViolation


def _require_non_negative(**values: int) -> None:
    for name, v in values.items():
        if v < 0:
            raise InvariantViolation(f"{name} must be >= 0, got {v}")


def floor_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise InvariantViolation("floor_div expects a>=0 and b>0")
    return a // b


def ceil_div(a: int, b: int) -> int:
    if a < 0 or b <= 0:
        raise InvariantViolation("ceil_div expects a>=0 and b>0")
    return 0 if a == 0 else -(-a // b)


def mul_div_down(a: int, b: int, den: int) -> int:
    """floor(a * b / den) on non-negative integers."""
    _require_non_negative(a=a, b=b)
    return floor_div(a * b, den)


def mul_div_up(a: int, b: int, den: int) -> int:
    """ceil(a * b / den) on non-negative integers."""
    _require_non_negative(a=a, b=b)
    return ceil_div(a * b, den)


def isqrt(n: int) -> int:
    """Largest integer r with r*r <= n."""
    _require_non_negative(n=n)
    return math.isqrt(n)


__all__ = [
    "floor_div",
    "ceil_div",
    "mul_div_down",
    "mul_div_up",
    "isqrt",
]
