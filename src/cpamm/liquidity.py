"""
LiquidityManager: share issuance and redemption against one ReservePool.

Rules (integer domain, pool's favour on every rounding):
  - Bootstrap (empty pool): shares = isqrt(amount0 * amount1); reserves become the deposit.
  - Top-up: shares = min(a0 * T // R0, a1 * T // R1); consumed amounts are
    ceil(shares * R / T), never more than desired. The unconsumed rest is refunded.
  - Burn: amountX = shares * RX // T (floor).

Deposits keep the price ratio by construction, so the constant-product check is not
consulted here; it only guards swaps.
"""
from __future__ import annotations

import logging
from typing import Dict, Hashable

from .core.datatypes import BurnReceipt, DepositRequest, LiquidityPosition, MintReceipt
from .core.exc import (
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientShares,
    InvalidAmounts,
    SlippageExceeded,
)
from .core.intmath import isqrt, mul_div_down, mul_div_up
from .pool import ReservePool

logger = logging.getLogger(__name__)


class LiquidityManager:
    """Mint/burn accounting plus the per-owner position ledger of one pool."""

    def __init__(self, pool: ReservePool) -> None:
        self.pool = pool
        self._positions: Dict[Hashable, LiquidityPosition] = {}

    # --- Positions (read side) ---
    def position(self, owner: Hashable) -> int:
        """Shares currently held by `owner` (0 if it has no position)."""
        with self.pool.lock:
            pos = self._positions.get(owner)
            return pos.shares if pos is not None else 0

    def positions(self) -> Dict[Hashable, int]:
        with self.pool.lock:
            return {owner: pos.shares for owner, pos in self._positions.items()}

    # --- Mint ---
    def mint(self,
             owner: Hashable,
             amount0_desired: int,
             amount1_desired: int,
             amount0_min: int = 0,
             amount1_min: int = 0) -> MintReceipt:
        """Deposit up to the desired amounts and credit the issued shares to `owner`."""
        req = DepositRequest(amount0_desired, amount1_desired, amount0_min, amount1_min)
        with self.pool.lock:
            r0, r1, total = self.pool.get_reserves()
            if total == 0:
                shares = isqrt(req.amount0_desired * req.amount1_desired)
                used0, used1 = req.amount0_desired, req.amount1_desired
            else:
                shares0 = mul_div_down(req.amount0_desired, total, r0)
                shares1 = mul_div_down(req.amount1_desired, total, r1)
                shares = min(shares0, shares1)
                used0 = mul_div_up(shares, r0, total)
                used1 = mul_div_up(shares, r1, total)
            if shares == 0:
                logger.debug("[%s] mint rejected: zero shares for (%d, %d)",
                             self.pool.pool_id, req.amount0_desired, req.amount1_desired)
                raise InsufficientLiquidityMinted(req.amount0_desired, req.amount1_desired, total_shares=total)
            if req.amount0_min and used0 < req.amount0_min:
                raise SlippageExceeded("amount0 consumed below minimum", req.amount0_min, used0)
            if req.amount1_min and used1 < req.amount1_min:
                raise SlippageExceeded("amount1 consumed below minimum", req.amount1_min, used1)

            self.pool.apply_delta(used0, used1, shares)
            self._credit(owner, shares)
            logger.debug("[%s] mint owner=%r shares=%d used=(%d, %d)",
                         self.pool.pool_id, owner, shares, used0, used1)
            return MintReceipt(
                owner=owner,
                shares=shares,
                amount0=used0,
                amount1=used1,
                refund0=req.amount0_desired - used0,
                refund1=req.amount1_desired - used1,
            )

    # --- Burn ---
    def burn(self, owner: Hashable, shares: int) -> BurnReceipt:
        """Redeem `shares` of `owner` for a proportional slice of both reserves."""
        if not isinstance(shares, int) or isinstance(shares, bool):
            raise InvalidAmounts(f"shares must be an int, got {shares!r}")
        if shares <= 0:
            raise InsufficientLiquidityBurned(f"shares to burn must be > 0, got {shares}")
        with self.pool.lock:
            held = self.position(owner)
            if shares > held:
                raise InsufficientShares(owner, shares, held)
            r0, r1, total = self.pool.get_reserves()
            out0 = mul_div_down(shares, r0, total)
            out1 = mul_div_down(shares, r1, total)
            if out0 == 0 or out1 == 0:
                raise InsufficientLiquidityBurned(
                    f"burning {shares} of {total} shares pays ({out0}, {out1})"
                )
            self.pool.apply_delta(-out0, -out1, -shares)
            self._debit(owner, shares)
            logger.debug("[%s] burn owner=%r shares=%d out=(%d, %d)",
                         self.pool.pool_id, owner, shares, out0, out1)
            return BurnReceipt(owner=owner, shares=shares, amount0=out0, amount1=out1)

    # --- Ledger helpers ---
    def _credit(self, owner: Hashable, shares: int) -> None:
        pos = self._positions.get(owner)
        if pos is None:
            pos = self._positions[owner] = LiquidityPosition(owner=owner, pool_id=self.pool.pool_id)
        pos.shares += shares

    def _debit(self, owner: Hashable, shares: int) -> None:
        pos = self._positions[owner]
        pos.shares -= shares
        if pos.shares == 0:
            del self._positions[owner]

    # --- Transaction support (settlement scope only) ---
    def snapshot(self) -> Dict[Hashable, int]:
        return self.positions()

    def restore(self, positions: Dict[Hashable, int]) -> None:
        with self.pool.lock:
            self._positions = {
                owner: LiquidityPosition(owner=owner, pool_id=self.pool.pool_id, shares=shares)
                for owner, shares in positions.items()
                if shares > 0
            }


__all__ = ["LiquidityManager"]
