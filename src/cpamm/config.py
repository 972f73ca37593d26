"""Pool configuration: fee rate and pool identity, loadable from a dict or a JSON file."""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .core.constants import DEFAULT_FEE_BPS, DEFAULT_POOL_ID, MAX_FEE_BPS
from .core.exc import ConfigError


@dataclass(frozen=True)
class PoolConfig:
    """Static parameters of one pool. Fixed for the pool's lifetime."""

    fee_bps: int = DEFAULT_FEE_BPS
    pool_id: str = DEFAULT_POOL_ID

    def __post_init__(self):
        if not isinstance(self.fee_bps, int) or isinstance(self.fee_bps, bool):
            raise ConfigError(f"fee_bps must be an int, got {self.fee_bps!r}")
        if not 0 <= self.fee_bps <= MAX_FEE_BPS:
            raise ConfigError(f"fee_bps must satisfy 0 ≤ fee_bps ≤ {MAX_FEE_BPS}, got {self.fee_bps}")
        if not isinstance(self.pool_id, str) or not self.pool_id.strip():
            raise ConfigError("pool_id must be a non-empty string")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "PoolConfig":
        data = dict(data or {})
        unknown = sorted(set(data) - {"fee_bps", "pool_id"})
        if unknown:
            raise ConfigError(f"unknown pool config keys: {', '.join(unknown)}")
        return cls(
            fee_bps=data.get("fee_bps", DEFAULT_FEE_BPS),
            pool_id=data.get("pool_id", DEFAULT_POOL_ID),
        )

    @classmethod
    def from_json(cls, path: str | Path) -> "PoolConfig":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigError(f"{path}: invalid JSON ({e})") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path}: expected a JSON object")
        return cls.from_dict(data.get("config", data))

    def to_dict(self) -> dict:
        return {"fee_bps": self.fee_bps, "pool_id": self.pool_id}


__all__ = ["PoolConfig"]
