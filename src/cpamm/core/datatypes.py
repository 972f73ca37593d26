"""
Core datatypes used by the engine.

These datatypes are intentionally minimal and immutable (where appropriate)
so that accounting logic can remain deterministic and testable.

Notes:
- All quantities are non-negative Python ints; there is no fractional representation.
- `PoolState` is a snapshot, never a live view of the pool.
- Owners are opaque hashable tokens; the engine only compares them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Hashable, NamedTuple

from .exc import InvalidAmounts


def _require_amount(name: str, value) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise InvalidAmounts(f"{name} must be an int, got {value!r}")
    if value < 0:
        raise InvalidAmounts(f"{name} must be >= 0")


# ---------------------------------------------------------------------------
# Pool snapshot
# ---------------------------------------------------------------------------

class PoolState(NamedTuple):
    """Reserves and share supply of one pool at a single point in time."""

    reserve0: int
    reserve1: int
    total_shares: int

    def is_empty(self) -> bool:
        return self.total_shares == 0

    @property
    def k(self) -> int:
        """Constant-product value reserve0 * reserve1."""
        return self.reserve0 * self.reserve1


EMPTY_STATE = PoolState(0, 0, 0)


# ---------------------------------------------------------------------------
# Positions
# ---------------------------------------------------------------------------

@dataclass
class LiquidityPosition:
    """Shares credited to one owner in one pool (the pool is referenced by id, not owned)."""

    owner: Hashable
    pool_id: str
    shares: int = 0


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------

class SwapDirection(Enum):
    """Which asset the trader pays in."""

    ZERO_FOR_ONE = "zero_for_one"
    ONE_FOR_ZERO = "one_for_zero"

    @property
    def index_in(self) -> int:
        return 0 if self is SwapDirection.ZERO_FOR_ONE else 1

    @property
    def index_out(self) -> int:
        return 1 - self.index_in


@dataclass(frozen=True)
class SwapRequest:
    """Four-field swap request in the order `swap` takes its arguments.

    Fields:
    - amount0_in / amount1_in: assets credited to the pool.
    - amount0_out / amount1_out: assets debited from the pool.
    - slippage_bound: minimum total output the caller accepts (0 = no bound).
    """

    amount0_in: int = 0
    amount1_out: int = 0
    amount1_in: int = 0
    amount0_out: int = 0
    slippage_bound: int = 0

    def __post_init__(self):
        for name in ("amount0_in", "amount1_out", "amount1_in", "amount0_out", "slippage_bound"):
            _require_amount(name, getattr(self, name))

    @classmethod
    def from_direction(cls, direction: SwapDirection, amount_in: int, amount_out: int,
                       slippage_bound: int = 0) -> "SwapRequest":
        if direction is SwapDirection.ZERO_FOR_ONE:
            return cls(amount0_in=amount_in, amount1_out=amount_out, slippage_bound=slippage_bound)
        return cls(amount1_in=amount_in, amount0_out=amount_out, slippage_bound=slippage_bound)

    @property
    def total_out(self) -> int:
        return self.amount0_out + self.amount1_out


@dataclass(frozen=True)
class DepositRequest:
    """Desired deposit plus the minimum amounts the caller accepts to have consumed."""

    amount0_desired: int
    amount1_desired: int
    amount0_min: int = 0
    amount1_min: int = 0

    def __post_init__(self):
        for name in ("amount0_desired", "amount1_desired", "amount0_min", "amount1_min"):
            _require_amount(name, getattr(self, name))


# ---------------------------------------------------------------------------
# Receipts
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class MintReceipt:
    """Outcome of a committed deposit. refund0/refund1 are desired amounts not consumed."""

    owner: Hashable
    shares: int
    amount0: int
    amount1: int
    refund0: int = 0
    refund1: int = 0


@dataclass(frozen=True)
class BurnReceipt:
    owner: Hashable
    shares: int
    amount0: int
    amount1: int


@dataclass(frozen=True)
class SwapReceipt:
    """Outcome of a committed swap, with the snapshots it moved between."""

    amount0_in: int
    amount1_in: int
    amount0_out: int
    amount1_out: int
    reserves_before: PoolState
    reserves_after: PoolState

    @property
    def delta0(self) -> int:
        return self.amount0_in - self.amount0_out

    @property
    def delta1(self) -> int:
        return self.amount1_in - self.amount1_out


__all__ = [
    "PoolState",
    "EMPTY_STATE",
    "LiquidityPosition",
    "SwapDirection",
    "SwapRequest",
    "DepositRequest",
    "MintReceipt",
    "BurnReceipt",
    "SwapReceipt",
]
