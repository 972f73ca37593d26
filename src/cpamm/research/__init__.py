"""
Analysis helpers (not part of the stable engine API).

Requires pandas. Import explicitly: `from cpamm.research import replay`.
"""

from .replay import OPS, TRACE_COLUMNS, load_scenario, replay, summarize

__all__ = ["OPS", "TRACE_COLUMNS", "load_scenario", "replay", "summarize"]
