"""
One asset pair, a ReservePool plus the LiquidityManager and SwapEngine bound to it.

This is the surface external callers use. Every mutating call is serialised on the
pool's lock; reads return snapshots.
"""
from __future__ import annotations

from typing import Dict, Hashable

from .config import PoolConfig
from .core.datatypes import BurnReceipt, MintReceipt, PoolState, SwapDirection, SwapReceipt
from .liquidity import LiquidityManager
from .pool import ReservePool
from .swap import SwapEngine, get_amount_in, get_amount_out, quote


class Pair:
    """Constant-product pool for (asset0, asset1) with input-side fee `config.fee_bps`."""

    def __init__(self, config: PoolConfig | None = None) -> None:
        self.config = config or PoolConfig()
        self.pool = ReservePool(self.config.pool_id)
        self.liquidity = LiquidityManager(self.pool)
        self.engine = SwapEngine(self.pool, fee_bps=self.config.fee_bps)

    @property
    def pool_id(self) -> str:
        return self.config.pool_id

    # --- Reads ---
    def get_reserves(self) -> PoolState:
        return self.pool.get_reserves()

    def position(self, owner: Hashable) -> int:
        return self.liquidity.position(owner)

    def positions(self) -> Dict[Hashable, int]:
        return self.liquidity.positions()

    # --- Liquidity ---
    def mint(self, owner: Hashable, amount0_desired: int, amount1_desired: int,
             amount0_min: int = 0, amount1_min: int = 0) -> MintReceipt:
        return self.liquidity.mint(owner, amount0_desired, amount1_desired, amount0_min, amount1_min)

    def burn(self, owner: Hashable, shares: int) -> BurnReceipt:
        return self.liquidity.burn(owner, shares)

    # --- Swaps ---
    def swap(self, amount0_in: int, amount1_out: int, amount1_in: int, amount0_out: int,
             slippage_bound: int = 0) -> SwapReceipt:
        return self.engine.swap(amount0_in, amount1_out, amount1_in, amount0_out, slippage_bound)

    def swap_directional(self, direction: SwapDirection, amount_in: int, amount_out: int,
                         slippage_bound: int = 0) -> SwapReceipt:
        return self.engine.swap_directional(direction, amount_in, amount_out, slippage_bound)

    def swap_exact_in(self, direction: SwapDirection, amount_in: int, min_amount_out: int = 0) -> SwapReceipt:
        return self.engine.swap_exact_in(direction, amount_in, min_amount_out)

    def swap_exact_out(self, direction: SwapDirection, amount_out: int, max_amount_in: int = 0) -> SwapReceipt:
        return self.engine.swap_exact_out(direction, amount_out, max_amount_in)

    # --- Quotes (no mutation) ---
    def _oriented(self, direction: SwapDirection) -> tuple[int, int]:
        r0, r1, _ = self.get_reserves()
        return (r0, r1) if direction is SwapDirection.ZERO_FOR_ONE else (r1, r0)

    def quote_out(self, direction: SwapDirection, amount_in: int) -> int:
        reserve_in, reserve_out = self._oriented(direction)
        return get_amount_out(amount_in, reserve_in, reserve_out, self.config.fee_bps)

    def quote_in(self, direction: SwapDirection, amount_out: int) -> int:
        reserve_in, reserve_out = self._oriented(direction)
        return get_amount_in(amount_out, reserve_in, reserve_out, self.config.fee_bps)

    def quote_spot(self, direction: SwapDirection, amount_in: int) -> int:
        reserve_in, reserve_out = self._oriented(direction)
        return quote(amount_in, reserve_in, reserve_out)

    def __repr__(self) -> str:
        r0, r1, total = self.get_reserves()
        return f"Pair(pool_id={self.pool_id!r}, fee_bps={self.config.fee_bps}, reserves=({r0}, {r1}), total_shares={total})"


__all__ = ["Pair"]
