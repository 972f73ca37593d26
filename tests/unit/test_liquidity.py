import random

import pytest

from cpamm import Pair, PoolConfig
from cpamm.core import (
    InsufficientLiquidity,
    InsufficientLiquidityBurned,
    InsufficientLiquidityMinted,
    InsufficientShares,
    InvalidAmounts,
    SlippageExceeded,
)

# -----------------------------
# Bootstrap
# -----------------------------


def test_bootstrap_mint_uses_integer_sqrt(empty_pair):
    r = empty_pair.mint("alice", 100, 100, 0, 0)
    print(f"[bootstrap] shares={r.shares} reserves={empty_pair.get_reserves()}")
    assert r.shares == 100
    assert empty_pair.get_reserves() == (100, 100, 100)
    assert empty_pair.position("alice") == 100
    assert (r.refund0, r.refund1) == (0, 0)


@pytest.mark.parametrize("a0,a1,shares", [(4, 9, 6), (2, 3, 2), (1, 1, 1), (400, 100, 200)])
def test_bootstrap_takes_full_deposit(empty_pair, a0, a1, shares):
    r = empty_pair.mint("alice", a0, a1)
    assert r.shares == shares
    assert empty_pair.get_reserves() == (a0, a1, shares)


@pytest.mark.parametrize("a0,a1", [(0, 100), (100, 0), (0, 0)])
def test_bootstrap_one_sided_mints_nothing(empty_pair, a0, a1):
    with pytest.raises(InsufficientLiquidityMinted):
        empty_pair.mint("alice", a0, a1)
    assert empty_pair.get_reserves() == (0, 0, 0)
    assert empty_pair.positions() == {}


def test_negative_deposit_rejected(empty_pair):
    with pytest.raises(InvalidAmounts):
        empty_pair.mint("alice", -1, 5)


@pytest.mark.parametrize("a0,a1", [(100.0, 100), (100, 99.5), (True, 100)])
def test_non_integer_deposit_rejected(empty_pair, a0, a1):
    with pytest.raises(InvalidAmounts):
        empty_pair.mint("alice", a0, a1)
    assert empty_pair.get_reserves() == (0, 0, 0)


# -----------------------------
# Proportional top-up
# -----------------------------


def test_proportional_mint(seeded_pair):
    r = seeded_pair.mint("bob", 10, 10, 0, 0)
    assert r.shares == 10
    assert seeded_pair.get_reserves() == (110, 110, 110)
    assert seeded_pair.positions() == {"alice": 100, "bob": 10}


def test_excess_on_non_limiting_side_is_not_consumed(seeded_pair):
    r = seeded_pair.mint("bob", 20, 10)
    print(f"[excess] used=({r.amount0}, {r.amount1}) refund=({r.refund0}, {r.refund1})")
    assert r.shares == 10
    assert (r.amount0, r.amount1) == (10, 10)
    assert (r.refund0, r.refund1) == (10, 0)
    assert seeded_pair.get_reserves() == (110, 110, 110)


def test_consumed_amounts_round_in_pools_favour(empty_pair, assert_shape):
    empty_pair.mint("alice", 400, 100)          # (400, 100, 200)
    r = empty_pair.mint("bob", 3, 1)
    # shares = min(3*200//400, 1*200//100) = 1 ; used = ceil(1*400/200), ceil(1*100/200)
    assert r.shares == 1
    assert (r.amount0, r.amount1) == (2, 1)
    assert empty_pair.get_reserves() == (402, 101, 201)
    assert_shape(empty_pair)


def test_deposit_rounding_to_zero_shares_rejected(empty_pair):
    empty_pair.mint("alice", 400, 100)
    with pytest.raises(InsufficientLiquidityMinted):
        empty_pair.mint("bob", 1, 1)
    assert empty_pair.get_reserves() == (400, 100, 200)
    assert empty_pair.position("bob") == 0


def test_min_bounds_guard_consumed_amounts(seeded_pair):
    with pytest.raises(SlippageExceeded):
        seeded_pair.mint("bob", 20, 10, 15, 0)
    assert seeded_pair.get_reserves() == (100, 100, 100)
    # bound met exactly
    r = seeded_pair.mint("bob", 20, 10, 10, 10)
    assert r.shares == 10


# -----------------------------
# Burn
# -----------------------------


def test_burn_is_proportional(seeded_pair):
    r = seeded_pair.burn("alice", 30)
    assert (r.amount0, r.amount1) == (30, 30)
    assert seeded_pair.get_reserves() == (70, 70, 70)
    assert seeded_pair.position("alice") == 70


def test_burn_everything_returns_pool_to_zero_state(seeded_pair):
    seeded_pair.swap(2, 1, 0, 0, 0)
    r = seeded_pair.burn("alice", 100)
    assert (r.amount0, r.amount1) == (102, 99)
    assert seeded_pair.get_reserves() == (0, 0, 0)
    assert seeded_pair.positions() == {}
    # pool can be bootstrapped again at a new price
    seeded_pair.mint("bob", 10, 40)
    assert seeded_pair.get_reserves() == (10, 40, 20)


def test_burn_more_than_held(seeded_pair):
    with pytest.raises(InsufficientShares) as ei:
        seeded_pair.burn("alice", 101)
    assert ei.value.held == 100 and ei.value.requested == 101
    with pytest.raises(InsufficientShares):
        seeded_pair.burn("bob", 1)
    assert seeded_pair.get_reserves() == (100, 100, 100)


@pytest.mark.parametrize("shares", [0, -5])
def test_burn_non_positive(seeded_pair, shares):
    with pytest.raises(InsufficientLiquidityBurned):
        seeded_pair.burn("alice", shares)


def test_burn_non_integer_shares(seeded_pair):
    with pytest.raises(InvalidAmounts):
        seeded_pair.burn("alice", 10.0)
    assert seeded_pair.get_reserves() == (100, 100, 100)


def test_burn_rounding_to_zero_on_one_side(empty_pair):
    empty_pair.mint("alice", 400, 100)          # (400, 100, 200)
    with pytest.raises(InsufficientLiquidityBurned):
        empty_pair.burn("alice", 1)             # out1 = 100 // 200 = 0
    assert empty_pair.position("alice") == 200


# -----------------------------
# Round-trip non-leakage
# -----------------------------


def test_mint_then_burn_never_returns_more_than_deposited(assert_shape):
    rng = random.Random(1234)
    checked = 0
    for _ in range(300):
        pair = Pair(PoolConfig())
        pair.mint("seed", rng.randint(1, 10_000), rng.randint(1, 10_000))
        if rng.random() < 0.5:
            try:
                pair.swap(rng.randint(1, 500), rng.randint(1, 50), 0, 0)
            except (InsufficientLiquidity, InvalidAmounts):
                pass
        a0, a1 = rng.randint(1, 5_000), rng.randint(1, 5_000)
        try:
            m = pair.mint("bob", a0, a1)
        except InsufficientLiquidityMinted:
            continue
        try:
            b = pair.burn("bob", m.shares)
        except InsufficientLiquidityBurned:
            continue
        assert b.amount0 <= m.amount0 <= a0
        assert b.amount1 <= m.amount1 <= a1
        assert_shape(pair)
        checked += 1
    print(f"[round-trip] checked={checked}")
    assert checked > 50
