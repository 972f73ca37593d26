"""
Settlement: bind engine operations to asset custody in one transactional scope.

The engine itself never moves value. `SettledPair` runs an engine operation and the
matching custody transfers together: if any step raises, completed transfers are
compensated in reverse order and the pool state and position ledger are restored to the
snapshot taken when the scope opened. Nothing partial is left behind.

Custody is an external collaborator; `TokenLedger` + `LedgerCustodian` are the in-memory
implementation used by tests and the replay tooling.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Hashable, Iterator, List, Protocol, Tuple

from .core.constants import ASSET0, ASSET1
from .core.datatypes import BurnReceipt, MintReceipt, SwapDirection, SwapReceipt
from .core.exc import InsufficientBalance, InvalidAmounts
from .pair import Pair

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Custody contract
# ---------------------------------------------------------------------------

class Custodian(Protocol):
    """Moves assets between a counterparty and a pool's reserve account.

    Each call either succeeds completely or raises without moving anything.
    """

    def credit_reserve(self, pool_id: str, asset_index: int, amount: int, *, counterparty: Hashable) -> None:
        ...

    def debit_reserve(self, pool_id: str, asset_index: int, amount: int, *, counterparty: Hashable) -> None:
        ...


# ---------------------------------------------------------------------------
# In-memory fungible asset ledger
# ---------------------------------------------------------------------------

class TokenLedger:
    """Balances of one fungible asset: `mint`, `transfer`, `balance_of`."""

    def __init__(self, symbol: str) -> None:
        self.symbol = symbol
        self._balances: Dict[Hashable, int] = {}
        self._lock = threading.Lock()

    def balance_of(self, account: Hashable) -> int:
        with self._lock:
            return self._balances.get(account, 0)

    def mint(self, account: Hashable, amount: int) -> None:
        if amount < 0:
            raise InvalidAmounts(f"{self.symbol}: mint amount must be >= 0")
        with self._lock:
            self._balances[account] = self._balances.get(account, 0) + amount

    def transfer(self, sender: Hashable, recipient: Hashable, amount: int) -> None:
        if amount < 0:
            raise InvalidAmounts(f"{self.symbol}: transfer amount must be >= 0")
        with self._lock:
            available = self._balances.get(sender, 0)
            if available < amount:
                raise InsufficientBalance(sender, amount, available)
            self._balances[sender] = available - amount
            self._balances[recipient] = self._balances.get(recipient, 0) + amount

    def __repr__(self) -> str:
        return f"TokenLedger({self.symbol!r}, accounts={len(self._balances)})"


class LedgerCustodian:
    """Custodian over two TokenLedgers; each pool's reserves sit in account `pool:<pool_id>`."""

    def __init__(self, token0: TokenLedger, token1: TokenLedger) -> None:
        self.tokens = (token0, token1)

    @staticmethod
    def pool_account(pool_id: str) -> str:
        return f"pool:{pool_id}"

    def credit_reserve(self, pool_id: str, asset_index: int, amount: int, *, counterparty: Hashable) -> None:
        if amount:
            self.tokens[asset_index].transfer(counterparty, self.pool_account(pool_id), amount)

    def debit_reserve(self, pool_id: str, asset_index: int, amount: int, *, counterparty: Hashable) -> None:
        if amount:
            self.tokens[asset_index].transfer(self.pool_account(pool_id), counterparty, amount)

    def holdings(self, pool_id: str) -> Tuple[int, int]:
        account = self.pool_account(pool_id)
        return self.tokens[ASSET0].balance_of(account), self.tokens[ASSET1].balance_of(account)


# ---------------------------------------------------------------------------
# Transactional scope
# ---------------------------------------------------------------------------

class Transaction:
    """Custody moves performed inside one scope, each paired with its compensation."""

    def __init__(self, custodian: Custodian, pool_id: str) -> None:
        self.custodian = custodian
        self.pool_id = pool_id
        self._undo: List[Callable[[], None]] = []

    def credit(self, asset_index: int, amount: int, counterparty: Hashable) -> None:
        self.custodian.credit_reserve(self.pool_id, asset_index, amount, counterparty=counterparty)
        self._undo.append(lambda: self.custodian.debit_reserve(
            self.pool_id, asset_index, amount, counterparty=counterparty))

    def debit(self, asset_index: int, amount: int, counterparty: Hashable) -> None:
        self.custodian.debit_reserve(self.pool_id, asset_index, amount, counterparty=counterparty)
        self._undo.append(lambda: self.custodian.credit_reserve(
            self.pool_id, asset_index, amount, counterparty=counterparty))

    def compensate(self) -> int:
        """Run every pending compensation, newest first; return how many of them failed.

        A failing compensation is logged and skipped so the remaining ones still run.
        """
        failed = 0
        while self._undo:
            undo = self._undo.pop()
            try:
                undo()
            except Exception:
                failed += 1
                logger.exception("[%s] compensation failed; custody may need manual repair", self.pool_id)
        return failed


class SettledPair:
    """A Pair whose operations settle against a Custodian atomically."""

    def __init__(self, pair: Pair, custodian: Custodian) -> None:
        self.pair = pair
        self.custodian = custodian

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        pool, liquidity = self.pair.pool, self.pair.liquidity
        with pool.lock:
            state = pool.snapshot()
            positions = liquidity.snapshot()
            tx = Transaction(self.custodian, self.pair.pool_id)
            try:
                yield tx
            except Exception as e:
                logger.warning("[%s] rolling back: %s: %s", self.pair.pool_id, type(e).__name__, e)
                pool.restore(state)
                liquidity.restore(positions)
                tx.compensate()
                raise

    def add_liquidity(self, owner: Hashable, amount0_desired: int, amount1_desired: int,
                      amount0_min: int = 0, amount1_min: int = 0) -> MintReceipt:
        with self.transaction() as tx:
            receipt = self.pair.mint(owner, amount0_desired, amount1_desired, amount0_min, amount1_min)
            tx.credit(ASSET0, receipt.amount0, owner)
            tx.credit(ASSET1, receipt.amount1, owner)
            return receipt

    def remove_liquidity(self, owner: Hashable, shares: int) -> BurnReceipt:
        with self.transaction() as tx:
            receipt = self.pair.burn(owner, shares)
            tx.debit(ASSET0, receipt.amount0, owner)
            tx.debit(ASSET1, receipt.amount1, owner)
            return receipt

    def _settle_swap(self, tx: Transaction, trader: Hashable, receipt: SwapReceipt) -> None:
        tx.credit(ASSET0, receipt.amount0_in, trader)
        tx.credit(ASSET1, receipt.amount1_in, trader)
        tx.debit(ASSET0, receipt.amount0_out, trader)
        tx.debit(ASSET1, receipt.amount1_out, trader)

    def swap(self, trader: Hashable, amount0_in: int, amount1_out: int, amount1_in: int, amount0_out: int,
             slippage_bound: int = 0) -> SwapReceipt:
        with self.transaction() as tx:
            receipt = self.pair.swap(amount0_in, amount1_out, amount1_in, amount0_out, slippage_bound)
            self._settle_swap(tx, trader, receipt)
            return receipt

    def swap_exact_in(self, trader: Hashable, direction: SwapDirection, amount_in: int,
                      min_amount_out: int = 0) -> SwapReceipt:
        with self.transaction() as tx:
            receipt = self.pair.swap_exact_in(direction, amount_in, min_amount_out)
            self._settle_swap(tx, trader, receipt)
            return receipt


__all__ = [
    "Custodian",
    "TokenLedger",
    "LedgerCustodian",
    "Transaction",
    "SettledPair",
]
