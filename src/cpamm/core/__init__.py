"""
cpamm Core
==========

Unified exports for the integer-domain primitives shared by every engine module:
constants, rounding helpers, datatypes and exceptions.
No floating point is used anywhere below this package.
"""

# NOTE:
#   Rounding policy is uniform: amounts paid OUT of a pool round down, amounts
#   taken INTO a pool round up. The helpers in `intmath` make the direction explicit.

from .constants import (
    FEE_BPS_DENOMINATOR,
    MAX_FEE_BPS,
    DEFAULT_FEE_BPS,
    ASSET0,
    ASSET1,
    LIQUIDITY_NOT_ENOUGH,
    DEFAULT_POOL_ID,
)

from .intmath import (
    floor_div,
    ceil_div,
    mul_div_down,
    mul_div_up,
    isqrt,
)

from .datatypes import (
    PoolState,
    EMPTY_STATE,
    LiquidityPosition,
    SwapDirection,
    SwapRequest,
    DepositRequest,
    MintReceipt,
    BurnReceipt,
    SwapReceipt,
)

from .exc import (
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

__all__ = [
    # constants
    "FEE_BPS_DENOMINATOR",
    "MAX_FEE_BPS",
    "DEFAULT_FEE_BPS",
    "ASSET0",
    "ASSET1",
    "LIQUIDITY_NOT_ENOUGH",
    "DEFAULT_POOL_ID",
    # intmath
    "floor_div",
    "ceil_div",
    "mul_div_down",
    "mul_div_up",
    "isqrt",
    # datatypes
    "PoolState",
    "EMPTY_STATE",
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
