from __future__ import annotations

import pytest

from cpamm import Pair, PoolConfig
from cpamm.settlement import LedgerCustodian, SettledPair, TokenLedger


# -----------------------------
# Test helpers (pure functions)
# -----------------------------


def _assert_shape(pair: Pair) -> None:
    """Pool is either empty or fully initialised and positions add up to the share supply."""
    r0, r1, total = pair.get_reserves()
    assert r0 >= 0 and r1 >= 0 and total >= 0
    assert (r0 == 0) == (r1 == 0) == (total == 0)
    assert sum(pair.positions().values()) == total


# -----------------------------
# Pytest fixtures
# -----------------------------

@pytest.fixture()
def assert_shape():
    return _assert_shape


@pytest.fixture()
def empty_pair() -> Pair:
    return Pair(PoolConfig(fee_bps=0, pool_id="t0-t1"))


@pytest.fixture()
def seeded_pair(empty_pair: Pair) -> Pair:
    """Pool at reserves (100, 100) with 100 shares held by alice."""
    empty_pair.mint("alice", 100, 100, 0, 0)
    return empty_pair


@pytest.fixture()
def fee_pair() -> Pair:
    """30 bp pool seeded at (10_000, 10_000)."""
    pair = Pair(PoolConfig(fee_bps=30, pool_id="fee"))
    pair.mint("lp", 10_000, 10_000)
    return pair


@pytest.fixture()
def tokens() -> tuple[TokenLedger, TokenLedger]:
    return TokenLedger("T0"), TokenLedger("T1")


@pytest.fixture()
def settled(tokens) -> SettledPair:
    token0, token1 = tokens
    for who in ("alice", "bob"):
        token0.mint(who, 1_000)
        token1.mint(who, 1_000)
    return SettledPair(Pair(PoolConfig(pool_id="settled")), LedgerCustodian(token0, token1))
