"""
Scenarios observed against the reference token0/token1 pair deployment.

Each test starts from a fresh pool with no fee and drives it through the
public four-field `swap(amount0_in, amount1_out, amount1_in, amount0_out, slippage)`.
"""
import pytest

from cpamm import InsufficientLiquidity, Pair, PoolConfig


@pytest.fixture()
def pair():
    return Pair(PoolConfig(pool_id="token0-token1"))


def test_mint_sets_reserves(pair):
    pair.mint("alice", 10, 10, 0, 0)
    r0, r1, _ = pair.get_reserves()
    print(f"[mint] reserves=({r0}, {r1})")
    assert (r0, r1) == (10, 10)


def test_swap_fails_when_liquidity_is_not_enough(pair):
    pair.mint("alice", 10, 10, 0, 0)
    with pytest.raises(InsufficientLiquidity, match="Liquidity is not enough!"):
        pair.swap(1, 2, 0, 0, 0)
    r0, r1, _ = pair.get_reserves()
    assert (r0, r1) == (10, 10)


def test_swap_moves_reserves(pair):
    pair.mint("alice", 100, 100, 0, 0)
    pair.swap(2, 1, 0, 0, 0)
    r0, r1, _ = pair.get_reserves()
    print(f"[swap] reserves=({r0}, {r1})")
    assert (r0, r1) == (102, 99)
