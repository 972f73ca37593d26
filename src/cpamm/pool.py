"""ReservePool: the two reserves and the share supply of one asset pair.

The pool is the single source of truth that LiquidityManager and SwapEngine mutate.
It performs no economic validation; callers prove a delta admissible first and then
commit it through `apply_delta` while holding `lock`.
"""
from __future__ import annotations

import logging
import threading

from .core.constants import DEFAULT_POOL_ID
from .core.datatypes import PoolState, EMPTY_STATE
from .core.exc import InvariantViolation
from .invariant import check_pool_shape

logger = logging.getLogger(__name__)


class ReservePool:
    """Reserves (reserve0, reserve1) and total issued shares for one pair.

    Concurrency: every read and every commit happens under `lock` (re-entrant), so a
    snapshot never observes a half-applied delta and an operation that holds the lock
    across read-compute-commit cannot be interleaved with another.
    """

    def __init__(self, pool_id: str = DEFAULT_POOL_ID, state: PoolState = EMPTY_STATE) -> None:
        check_pool_shape(state)
        self.pool_id = pool_id
        self.lock = threading.RLock()
        self._reserve0, self._reserve1, self._total_shares = state

    # --- Read side ---
    def get_reserves(self) -> PoolState:
        """Return a consistent snapshot (reserve0, reserve1, total_shares)."""
        with self.lock:
            return PoolState(self._reserve0, self._reserve1, self._total_shares)

    def is_empty(self) -> bool:
        with self.lock:
            return self._total_shares == 0

    # --- Commit path (engine-internal) ---
    def apply_delta(self, d0: int, d1: int, d_shares: int) -> PoolState:
        """Add signed deltas to both reserves and the share supply in one step.

        Internal: only LiquidityManager and SwapEngine call this, after validation.
        Raises InvariantViolation (and changes nothing) if any field would go negative.
        """
        with self.lock:
            r0 = self._reserve0 + d0
            r1 = self._reserve1 + d1
            total = self._total_shares + d_shares
            if r0 < 0 or r1 < 0 or total < 0:
                raise InvariantViolation(
                    f"[{self.pool_id}] delta ({d0}, {d1}, {d_shares}) would leave "
                    f"reserves=({r0}, {r1}) total_shares={total}"
                )
            self._reserve0, self._reserve1, self._total_shares = r0, r1, total
            logger.debug("[%s] apply_delta d0=%d d1=%d dS=%d -> (%d, %d, %d)",
                         self.pool_id, d0, d1, d_shares, r0, r1, total)
            return PoolState(r0, r1, total)

    # --- Transaction support (settlement scope only) ---
    def snapshot(self) -> PoolState:
        return self.get_reserves()

    def restore(self, state: PoolState) -> None:
        """Reset the pool to a previously taken snapshot (rollback)."""
        check_pool_shape(state)
        with self.lock:
            self._reserve0, self._reserve1, self._total_shares = state
            logger.debug("[%s] restored to %s", self.pool_id, tuple(state))

    def __repr__(self) -> str:
        r0, r1, total = self.get_reserves()
        return f"ReservePool(pool_id={self.pool_id!r}, reserve0={r0}, reserve1={r1}, total_shares={total})"


__all__ = ["ReservePool"]
