"""
Swap engine: validated directional trades against one ReservePool.

This module contains the swap admission rule and the pure quoting maths used by the
directional helpers. Pool fee (≤1%) is deducted on the *input* side; the check itself
is `invariant.holds`. A swap either commits at the requested amounts or raises with no
mutation; there is no partial fill.
"""
from __future__ import annotations

import logging

from .core.constants import DEFAULT_FEE_BPS, FEE_BPS_DENOMINATOR, MAX_FEE_BPS
from .core.datatypes import SwapDirection, SwapReceipt, SwapRequest
from .core.exc import ConfigError, InsufficientLiquidity, InvalidAmounts, SlippageExceeded
from .core.intmath import ceil_div, floor_div
from .invariant import holds
from .pool import ReservePool

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pure quoting (integer domain)
# ---------------------------------------------------------------------------

def get_amount_out(amount_in: int, reserve_in: int, reserve_out: int, fee_bps: int = DEFAULT_FEE_BPS) -> int:
    """Largest OUT a given IN buys without breaking the invariant (floored)."""
    if amount_in <= 0:
        raise InvalidAmounts(f"amount_in must be > 0, got {amount_in}")
    if reserve_in <= 0 or reserve_out <= 0:
        raise InsufficientLiquidity((reserve_in, reserve_out))
    amount_in_eff = amount_in * (FEE_BPS_DENOMINATOR - fee_bps)
    return floor_div(amount_in_eff * reserve_out, reserve_in * FEE_BPS_DENOMINATOR + amount_in_eff)


def get_amount_in(amount_out: int, reserve_in: int, reserve_out: int, fee_bps: int = DEFAULT_FEE_BPS) -> int:
    """Smallest IN that pays for `amount_out` without breaking the invariant (ceiled).

    Exact: (R_in*D + a_in*(D-f)) * (R_out - a_out) >= R_in*R_out*D  <=>
           a_in >= R_in*a_out*D / ((R_out - a_out)*(D-f)).
    """
    if amount_out <= 0:
        raise InvalidAmounts(f"amount_out must be > 0, got {amount_out}")
    if reserve_in <= 0 or reserve_out <= amount_out:
        raise InsufficientLiquidity((reserve_in, reserve_out))
    num = reserve_in * amount_out * FEE_BPS_DENOMINATOR
    den = (reserve_out - amount_out) * (FEE_BPS_DENOMINATOR - fee_bps)
    return ceil_div(num, den)


def quote(amount_a: int, reserve_a: int, reserve_b: int) -> int:
    """Equivalent amount of B at the current spot ratio, no fee and no price impact (floored)."""
    if amount_a < 0:
        raise InvalidAmounts(f"amount must be >= 0, got {amount_a}")
    if reserve_a <= 0 or reserve_b <= 0:
        raise InsufficientLiquidity((reserve_a, reserve_b))
    return floor_div(amount_a * reserve_b, reserve_a)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------

class SwapEngine:
    """Validate a proposed reserve transition with `invariant.holds`, then commit it atomically."""

    def __init__(self, pool: ReservePool, fee_bps: int = DEFAULT_FEE_BPS) -> None:
        if not 0 <= fee_bps <= MAX_FEE_BPS:
            raise ConfigError(f"fee_bps must satisfy 0 ≤ fee_bps ≤ {MAX_FEE_BPS}, got {fee_bps}")
        self.pool = pool
        self.fee_bps = fee_bps

    def swap(self,
             amount0_in: int,
             amount1_out: int,
             amount1_in: int,
             amount0_out: int,
             slippage_bound: int = 0) -> SwapReceipt:
        """Four-field swap (argument order as exposed to callers).

        Direction is implied by which fields are non-zero; the engine only applies the deltas.
        """
        return self.execute(SwapRequest(
            amount0_in=amount0_in,
            amount1_out=amount1_out,
            amount1_in=amount1_in,
            amount0_out=amount0_out,
            slippage_bound=slippage_bound,
        ))

    def execute(self, req: SwapRequest) -> SwapReceipt:
        if req.amount0_out == 0 and req.amount1_out == 0:
            raise InvalidAmounts("swap must request a non-zero output")
        if req.slippage_bound and req.total_out < req.slippage_bound:
            raise SlippageExceeded("output below slippage bound", req.slippage_bound, req.total_out)

        with self.pool.lock:
            before = self.pool.get_reserves()
            new0 = before.reserve0 + req.amount0_in - req.amount0_out
            new1 = before.reserve1 + req.amount1_in - req.amount1_out
            if new0 < 0 or new1 < 0:
                logger.debug("[%s] swap rejected: proposed reserves (%d, %d)", self.pool.pool_id, new0, new1)
                raise InvalidAmounts(f"swap would leave negative reserves ({new0}, {new1})")
            # an empty pool has k == 0, which any transition satisfies
            if before.is_empty():
                logger.debug("[%s] swap rejected: pool is empty", self.pool.pool_id)
                raise InsufficientLiquidity((before.reserve0, before.reserve1), (new0, new1))
            if not holds(before.reserve0, before.reserve1, new0, new1,
                         amount0_in=req.amount0_in, amount1_in=req.amount1_in, fee_bps=self.fee_bps):
                logger.debug("[%s] swap rejected: k %d -> %d (fee_bps=%d)",
                             self.pool.pool_id, before.k, new0 * new1, self.fee_bps)
                raise InsufficientLiquidity((before.reserve0, before.reserve1), (new0, new1))
            after = self.pool.apply_delta(new0 - before.reserve0, new1 - before.reserve1, 0)

        logger.debug("[%s] swap in=(%d, %d) out=(%d, %d) -> (%d, %d)", self.pool.pool_id,
                     req.amount0_in, req.amount1_in, req.amount0_out, req.amount1_out,
                     after.reserve0, after.reserve1)
        return SwapReceipt(
            amount0_in=req.amount0_in,
            amount1_in=req.amount1_in,
            amount0_out=req.amount0_out,
            amount1_out=req.amount1_out,
            reserves_before=before,
            reserves_after=after,
        )

    # --- Directional helpers ---
    def swap_directional(self, direction: SwapDirection, amount_in: int, amount_out: int,
                         slippage_bound: int = 0) -> SwapReceipt:
        return self.execute(SwapRequest.from_direction(direction, amount_in, amount_out, slippage_bound))

    def _reserves_for(self, direction: SwapDirection) -> tuple[int, int]:
        state = self.pool.get_reserves()
        if direction is SwapDirection.ZERO_FOR_ONE:
            return state.reserve0, state.reserve1
        return state.reserve1, state.reserve0

    def swap_exact_in(self, direction: SwapDirection, amount_in: int, min_amount_out: int = 0) -> SwapReceipt:
        """Pay exactly `amount_in` and receive the largest admissible output."""
        with self.pool.lock:
            reserve_in, reserve_out = self._reserves_for(direction)
            amount_out = get_amount_out(amount_in, reserve_in, reserve_out, self.fee_bps)
            if min_amount_out and amount_out < min_amount_out:
                raise SlippageExceeded("amount_out below minimum", min_amount_out, amount_out)
            return self.swap_directional(direction, amount_in, amount_out, min_amount_out)

    def swap_exact_out(self, direction: SwapDirection, amount_out: int, max_amount_in: int = 0) -> SwapReceipt:
        """Receive exactly `amount_out` for the smallest admissible input."""
        with self.pool.lock:
            reserve_in, reserve_out = self._reserves_for(direction)
            amount_in = get_amount_in(amount_out, reserve_in, reserve_out, self.fee_bps)
            if max_amount_in and amount_in > max_amount_in:
                raise SlippageExceeded("amount_in above maximum", max_amount_in, amount_in)
            return self.swap_directional(direction, amount_in, amount_out)


__all__ = ["SwapEngine", "get_amount_out", "get_amount_in", "quote"]
