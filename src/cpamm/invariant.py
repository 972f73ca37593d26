"""
Constant-product invariant (fee on input): **pure predicates only**.

A proposed transition (r0, r1) -> (r0', r1') with inputs (a0_in, a1_in) is admissible iff

    (r0' * D - a0_in * f) * (r1' * D - a1_in * f) >= r0 * r1 * D^2

with D = FEE_BPS_DENOMINATOR and f = fee_bps. With f == 0 this is simply r0' * r1' >= r0 * r1.
Both sides are exact integers, so the comparison is deterministic.
"""
from __future__ import annotations

from .core.constants import FEE_BPS_DENOMINATOR
from .core.datatypes import PoolState
from .core.exc import InvariantViolation


def constant_product(reserve0: int, reserve1: int) -> int:
    return reserve0 * reserve1


def holds(reserve0_before: int,
          reserve1_before: int,
          reserve0_after: int,
          reserve1_after: int,
          *,
          amount0_in: int = 0,
          amount1_in: int = 0,
          fee_bps: int = 0) -> bool:
    """Return True if the fee-adjusted product after the trade is not below the product before it."""
    if reserve0_after < 0 or reserve1_after < 0:
        return False
    den = FEE_BPS_DENOMINATOR
    adj0 = reserve0_after * den - amount0_in * fee_bps
    adj1 = reserve1_after * den - amount1_in * fee_bps
    # fee larger than the whole post-trade reserve can only happen on degenerate inputs
    if adj0 < 0 or adj1 < 0:
        return False
    return adj0 * adj1 >= constant_product(reserve0_before, reserve1_before) * den * den


def check_pool_shape(state: PoolState) -> None:
    """Raise InvariantViolation unless the pool is either fully empty or fully initialised."""
    r0, r1, total = state
    if r0 < 0 or r1 < 0 or total < 0:
        raise InvariantViolation(f"negative pool field in {tuple(state)}")
    if (r0 == 0) != (r1 == 0) or (r0 == 0) != (total == 0):
        raise InvariantViolation(f"pool must be empty or fully initialised, got {tuple(state)}")


__all__ = ["constant_product", "holds", "check_pool_shape"]
