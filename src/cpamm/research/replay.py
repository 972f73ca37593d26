"""
Replay a scripted sequence of pool operations and tabulate the pool after each one.

Scenario format (JSON):

    {
      "config": {"fee_bps": 0, "pool_id": "demo"},
      "ops": [
        {"op": "mint", "owner": "alice", "amount0": 100, "amount1": 100},
        {"op": "swap", "amount0_in": 2, "amount1_out": 1},
        {"op": "swap_exact_in", "direction": "zero_for_one", "amount_in": 10, "min_amount_out": 0},
        {"op": "burn", "owner": "alice", "shares": 10}
      ]
    }

Rejected operations are recorded with their error name rather than raised, so one
trace shows both the admitted and the refused requests.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from ..config import PoolConfig
from ..core.datatypes import SwapDirection
from ..core.exc import AMMError, ConfigError
from ..pair import Pair

TRACE_COLUMNS = [
    "step", "op", "owner", "ok", "error",
    "shares", "amount0", "amount1",
    "reserve0", "reserve1", "total_shares", "k",
]

OPS = ("mint", "burn", "swap", "swap_exact_in", "swap_exact_out")


def load_scenario(path: str | Path) -> Tuple[PoolConfig, List[Dict[str, Any]]]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict) or not isinstance(data.get("ops"), list):
        raise ConfigError(f"{path}: scenario must be an object with an 'ops' list")
    return PoolConfig.from_dict(data.get("config")), data["ops"]


def _apply(pair: Pair, op: Mapping[str, Any]) -> Dict[str, Any]:
    kind = op.get("op")
    if kind == "mint":
        r = pair.mint(op["owner"], op["amount0"], op["amount1"],
                      op.get("amount0_min", 0), op.get("amount1_min", 0))
        return {"shares": r.shares, "amount0": r.amount0, "amount1": r.amount1}
    if kind == "burn":
        r = pair.burn(op["owner"], op["shares"])
        return {"shares": -r.shares, "amount0": -r.amount0, "amount1": -r.amount1}
    if kind == "swap":
        r = pair.swap(op.get("amount0_in", 0), op.get("amount1_out", 0),
                      op.get("amount1_in", 0), op.get("amount0_out", 0),
                      op.get("slippage_bound", 0))
    elif kind == "swap_exact_in":
        r = pair.swap_exact_in(SwapDirection(op["direction"]), op["amount_in"], op.get("min_amount_out", 0))
    elif kind == "swap_exact_out":
        r = pair.swap_exact_out(SwapDirection(op["direction"]), op["amount_out"], op.get("max_amount_in", 0))
    else:
        raise ConfigError(f"unknown op {kind!r}; expected one of {', '.join(OPS)}")
    return {"shares": 0, "amount0": r.delta0, "amount1": r.delta1}


def replay(ops: Iterable[Mapping[str, Any]],
           *,
           pair: Optional[Pair] = None,
           config: Optional[PoolConfig] = None) -> pd.DataFrame:
    """Apply `ops` in order and return one trace row per op (amounts are pool-side deltas)."""
    pair = pair or Pair(config)
    rows = []
    for step, op in enumerate(ops, start=1):
        row: Dict[str, Any] = {"step": step, "op": op.get("op"), "owner": op.get("owner"),
                               "ok": True, "error": None, "shares": 0, "amount0": 0, "amount1": 0}
        try:
            row.update(_apply(pair, op))
        except ConfigError as e:
            raise ConfigError(f"step {step}: {e}") from e
        except AMMError as e:
            row["ok"] = False
            row["error"] = type(e).__name__
        except KeyError as e:
            raise ConfigError(f"step {step}: {row['op']!r} op is missing field {e}") from e
        except ValueError as e:
            raise ConfigError(f"step {step}: malformed {row['op']!r} op ({e})") from e
        r0, r1, total = pair.get_reserves()
        row.update(reserve0=r0, reserve1=r1, total_shares=total, k=r0 * r1)
        rows.append(row)
    return pd.DataFrame(rows, columns=TRACE_COLUMNS)


def summarize(trace: pd.DataFrame) -> Dict[str, Any]:
    """One-row summary of a trace: counts, final state and swap-only k monotonicity."""
    if trace.empty:
        return {"ops": 0, "rejected": 0, "reserve0": 0, "reserve1": 0, "total_shares": 0,
                "k_monotone_over_swaps": True, "errors": {}}
    k_prev = trace["k"].shift(1, fill_value=0)
    swaps = trace["op"].str.startswith("swap") & trace["ok"]
    last = trace.iloc[-1]
    return {
        "ops": int(len(trace)),
        "rejected": int((~trace["ok"]).sum()),
        "reserve0": int(last["reserve0"]),
        "reserve1": int(last["reserve1"]),
        "total_shares": int(last["total_shares"]),
        "k_monotone_over_swaps": bool((trace.loc[swaps, "k"] >= k_prev[swaps]).all()),
        "errors": {str(k): int(v) for k, v in trace.loc[~trace["ok"], "error"].value_counts().items()},
    }


__all__ = ["load_scenario", "replay", "summarize", "TRACE_COLUMNS", "OPS"]
