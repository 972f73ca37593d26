"""
Top-level API for cpamm (integer-domain constant-product AMM engine).

This module exposes the stable interface:
  - Pair: one asset pair (ReservePool + LiquidityManager + SwapEngine)
  - ReservePool / LiquidityManager / SwapEngine: the components, for custom wiring
  - invariant.holds: the constant-product admission predicate
  - SettledPair: engine operations bound to asset custody with rollback

Research helpers (pandas-based replay) remain under `cpamm.research` and are
**not** imported at the top level.
"""

from __future__ import annotations

from .config import PoolConfig
from .pool import ReservePool
from .liquidity import LiquidityManager
from .swap import SwapEngine, get_amount_in, get_amount_out, quote
from .pair import Pair
from .invariant import holds
from .settlement import LedgerCustodian, SettledPair, TokenLedger

from .core import (
    PoolState,
    LiquidityPosition,
    SwapDirection,
    SwapRequest,
    DepositRequest,
    MintReceipt,
    BurnReceipt,
    SwapReceipt,
    AMMError,
    InvariantViolation,
    InsufficientLiquidityMinted,
    InsufficientLiquidityBurned,
    InsufficientShares,
    InvalidAmounts,
    InsufficientLiquidity,
    SlippageExceeded,
    InsufficientBalance,
    ConfigError,
)

__version__ = "0.1.0"

__all__ = [
    # engine
    "PoolConfig",
    "ReservePool",
    "LiquidityManager",
    "SwapEngine",
    "Pair",
    "holds",
    "get_amount_in",
    "get_amount_out",
    "quote",
    # settlement
    "TokenLedger",
    "LedgerCustodian",
    "SettledPair",
    # datatypes
    "PoolState",
    "LiquidityPosition",
    "SwapDirection",
    "SwapRequest",
    "DepositRequest",
    "MintReceipt",
    "BurnReceipt",
    "SwapReceipt",
    # exceptions
    "AMMError",
    "InvariantViolation",
    "InsufficientLiquidityMinted",
    "InsufficientLiquidityBurned",
    "InsufficientShares",
    "InvalidAmounts",
    "InsufficientLiquidity",
    "SlippageExceeded",
    "InsufficientBalance",
    "ConfigError",
]
