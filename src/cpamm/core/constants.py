"""
cpamm Core Constants (integer domain)
=====================================

Only integer constants and fixed user-facing messages live here. The engine never
uses floating point; fees are expressed in basis points over `FEE_BPS_DENOMINATOR`.
"""

# NOTE: The pool fee is deducted on the *input* side only, as in constant-product AMMs.

# ---------------------------------------------------------------------------
# Fee representation
# ---------------------------------------------------------------------------

#: Denominator for fee rates (1 bp = 1 / 10_000).
FEE_BPS_DENOMINATOR: int = 10_000

#: Upper bound for the pool fee (100 bp = 1%).
MAX_FEE_BPS: int = 100

#: Default fee. Observed pool behaviour is consistent with a zero-fee curve.
DEFAULT_FEE_BPS: int = 0


# ---------------------------------------------------------------------------
# Asset indices
# ---------------------------------------------------------------------------

ASSET0: int = 0
ASSET1: int = 1


# ---------------------------------------------------------------------------
# Messages
# ---------------------------------------------------------------------------

#: Message surfaced to callers when a swap fails the constant-product check.
LIQUIDITY_NOT_ENOUGH: str = "Liquidity is not enough!"

DEFAULT_POOL_ID: str = "pool"


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

__all__ = [
    "FEE_BPS_DENOMINATOR",
    "MAX_FEE_BPS",
    "DEFAULT_FEE_BPS",
    "ASSET0",
    "ASSET1",
    "LIQUIDITY_NOT_ENOUGH",
    "DEFAULT_POOL_ID",
]
