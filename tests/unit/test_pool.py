import threading

import pytest

from cpamm.core import InvariantViolation, PoolState
from cpamm.pool import ReservePool


def test_new_pool_is_empty():
    pool = ReservePool("p")
    assert pool.get_reserves() == (0, 0, 0)
    assert pool.is_empty()


def test_apply_delta_commits_all_three_fields():
    pool = ReservePool("p")
    after = pool.apply_delta(100, 100, 100)
    assert after == PoolState(100, 100, 100)
    assert pool.get_reserves() == after
    assert pool.apply_delta(2, -1, 0) == (102, 99, 100)


@pytest.mark.parametrize("delta", [(-101, 0, 0), (0, -101, 0), (0, 0, -101), (-1000, 5, 5)])
def test_apply_delta_negative_result_raises_and_leaves_pool_untouched(delta):
    pool = ReservePool("p", PoolState(100, 100, 100))
    with pytest.raises(InvariantViolation):
        pool.apply_delta(*delta)
    assert pool.get_reserves() == (100, 100, 100)


def test_initial_state_must_be_well_shaped():
    with pytest.raises(InvariantViolation):
        ReservePool("p", PoolState(1, 0, 1))


def test_snapshot_restore():
    pool = ReservePool("p", PoolState(10, 20, 14))
    snap = pool.snapshot()
    pool.apply_delta(5, -3, 0)
    pool.restore(snap)
    assert pool.get_reserves() == (10, 20, 14)


def test_readers_never_see_half_applied_delta():
    """Writers keep reserve0 == reserve1 at every commit; readers must never observe otherwise."""
    pool = ReservePool("p", PoolState(1_000, 1_000, 1_000))
    stop = threading.Event()
    torn = []

    def writer():
        for i in range(2_000):
            d = 1 if i % 2 == 0 else -1
            pool.apply_delta(d, d, 0)
        stop.set()

    def reader():
        while not stop.is_set():
            r0, r1, _ = pool.get_reserves()
            if r0 != r1:
                torn.append((r0, r1))

    threads = [threading.Thread(target=writer)] + [threading.Thread(target=reader) for _ in range(3)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert torn == []
    assert pool.get_reserves() == (1_000, 1_000, 1_000)
