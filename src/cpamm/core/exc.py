"""
Core exception types for cpamm.core.

These are dependency-free and may be imported by all engine modules.
Every error is raised synchronously before any reserve mutation; none are retried internally.
"""

from .constants import LIQUIDITY_NOT_ENOUGH

__all__ = [
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


class AMMError(Exception):
    """Base class for every error raised by the engine."""
    pass


class InvariantViolation(AMMError):
    """Raised when a commit would drive a reserve or the share supply negative.

    This is a programming error in the caller of `ReservePool.apply_delta` and is
    not recoverable at this layer.
    """
    pass


class InsufficientLiquidityMinted(AMMError):
    """Raised when a deposit is too small to mint a non-zero number of shares."""

    def __init__(self, amount0, amount1, *, total_shares=0):
        super().__init__(
            f"Deposit amount0={amount0} amount1={amount1} mints zero shares (total_shares={total_shares})"
        )
        self.amount0 = amount0
        self.amount1 = amount1
        self.total_shares = total_shares


class InsufficientLiquidityBurned(AMMError):
    """Raised when a redemption would pay out nothing on one side of the pool."""
    pass


class InsufficientShares(AMMError):
    """Raised when an owner tries to burn more shares than their position holds.

    Attributes
    ----------
    owner : Any
        Opaque owner token supplied by the caller.
    requested : int
        Shares the caller asked to burn.
    held : int
        Shares currently credited to the owner.
    """

    def __init__(self, owner, requested, held):
        super().__init__(f"Owner {owner!r} holds {held} shares, cannot burn {requested}")
        self.owner = owner
        self.requested = requested
        self.held = held


class InvalidAmounts(AMMError):
    """Raised when a swap request is malformed (no output, negative field or negative reserve)."""
    pass


class InsufficientLiquidity(AMMError):
    """Raised when a swap would push the constant product below its pre-trade floor.

    Attributes
    ----------
    reserves_before : tuple[int, int]
        Pool reserves at the snapshot the swap was validated against.
    reserves_after : tuple[int, int]
        Proposed reserves that failed the check.
    """

    def __init__(self, reserves_before=None, reserves_after=None):
        super().__init__(LIQUIDITY_NOT_ENOUGH)
        self.reserves_before = reserves_before
        self.reserves_after = reserves_after


class SlippageExceeded(AMMError):
    """Raised when execution falls outside a caller-supplied min/max bound."""

    def __init__(self, what, bound, actual):
        super().__init__(f"{what}: bound={bound} actual={actual}")
        self.what = what
        self.bound = bound
        self.actual = actual


class InsufficientBalance(AMMError):
    """Raised by a custody ledger when an account cannot cover a transfer."""

    def __init__(self, account, requested, available):
        super().__init__(f"Account {account!r} has {available}, needs {requested}")
        self.account = account
        self.requested = requested
        self.available = available


class ConfigError(AMMError, ValueError):
    """Raised when a pool configuration value is out of range or malformed."""
    pass
