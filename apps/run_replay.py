#!/usr/bin/env python3
"""
Replay a pool scenario (JSON) through the production cpamm engine.

Printing policy:
1) Pool config.
2) One line per operation: op, outcome, reserves and k after it.
3) Summary (counts, final state, rejected-op breakdown).

Optional outputs: --out writes the full trace as CSV, --plot writes a PNG of
reserves and k per step (matplotlib, headless backend).
"""

from __future__ import annotations

import argparse
import json
import logging
from typing import Optional, Sequence

from cpamm.logging import configure_logging
from cpamm.research.replay import load_scenario, replay, summarize


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Replay an AMM scenario and tabulate pool state.")
    p.add_argument("--input", required=True, help="Path to scenario JSON ({'config': {...}, 'ops': [...]})")
    p.add_argument("--out", default=None, help="Write the trace as CSV to this path")
    p.add_argument("--plot", default=None, help="Write a reserves/k chart (PNG) to this path")
    p.add_argument("--fee-bps", type=int, default=None, help="Override the scenario fee (basis points)")
    p.add_argument("--verbose", action="store_true", help="Log engine commits at DEBUG level")
    return p.parse_args(argv)


def plot_trace(trace, path: str) -> None:
    import matplotlib
    matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    fig, (ax_r, ax_k) = plt.subplots(2, 1, sharex=True, figsize=(8, 6))
    ax_r.plot(trace["step"], trace["reserve0"], marker="o", label="reserve0")
    ax_r.plot(trace["step"], trace["reserve1"], marker="o", label="reserve1")
    ax_r.set_ylabel("reserve")
    ax_r.legend()
    ax_k.step(trace["step"], trace["k"], where="post")
    rejected = trace[~trace["ok"]]
    ax_k.scatter(rejected["step"], rejected["k"], color="red", marker="x", label="rejected")
    ax_k.set_xlabel("step")
    ax_k.set_ylabel("k = reserve0 * reserve1")
    ax_k.legend()
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    log = configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    config, ops = load_scenario(args.input)
    if args.fee_bps is not None:
        config = type(config)(fee_bps=args.fee_bps, pool_id=config.pool_id)
    log.info("replaying %d ops on pool %s (fee_bps=%d)", len(ops), config.pool_id, config.fee_bps)

    trace = replay(ops, config=config)

    print(f"Pool: {config.pool_id} fee_bps={config.fee_bps}")
    for row in trace.itertuples(index=False):
        outcome = "ok" if row.ok else f"REJECTED ({row.error})"
        print(f"[{row.step}] {row.op:<14} {outcome:<40} reserves=({row.reserve0}, {row.reserve1}) "
              f"shares={row.total_shares} k={row.k}")

    summary = summarize(trace)
    print("Summary:")
    print(json.dumps(summary, indent=2, sort_keys=True))

    if args.out:
        trace.to_csv(args.out, index=False)
        print(f"Trace written to {args.out}")
    if args.plot:
        plot_trace(trace, args.plot)
        print(f"Chart written to {args.plot}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
