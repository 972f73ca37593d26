import json

import pytest

from cpamm import Pair, PoolConfig
from cpamm.core import ConfigError


def test_defaults():
    cfg = PoolConfig()
    assert (cfg.fee_bps, cfg.pool_id) == (0, "pool")
    assert Pair().config == cfg


@pytest.mark.parametrize("fee", [-1, 101, True, "30", 1.5])
def test_fee_out_of_range_or_wrong_type(fee):
    with pytest.raises(ConfigError):
        PoolConfig(fee_bps=fee)


@pytest.mark.parametrize("pool_id", ["", "   ", None])
def test_pool_id_must_be_named(pool_id):
    with pytest.raises(ConfigError):
        PoolConfig(pool_id=pool_id)


def test_config_error_is_a_value_error():
    with pytest.raises(ValueError):
        PoolConfig(fee_bps=500)


def test_from_dict():
    assert PoolConfig.from_dict(None) == PoolConfig()
    assert PoolConfig.from_dict({"fee_bps": 30}) == PoolConfig(fee_bps=30)
    cfg = PoolConfig(fee_bps=5, pool_id="x-y")
    assert PoolConfig.from_dict(cfg.to_dict()) == cfg
    with pytest.raises(ConfigError, match="fees"):
        PoolConfig.from_dict({"fees": 30})


def test_from_json_nested_and_flat(tmp_path):
    nested = tmp_path / "nested.json"
    nested.write_text(json.dumps({"config": {"fee_bps": 30, "pool_id": "a-b"}, "ops": []}))
    flat = tmp_path / "flat.json"
    flat.write_text(json.dumps({"fee_bps": 1}))
    assert PoolConfig.from_json(nested) == PoolConfig(fee_bps=30, pool_id="a-b")
    assert PoolConfig.from_json(str(flat)) == PoolConfig(fee_bps=1)


@pytest.mark.parametrize("text", ["{not json", "[1, 2]"])
def test_from_json_rejects_malformed(tmp_path, text):
    p = tmp_path / "bad.json"
    p.write_text(text)
    with pytest.raises(ConfigError):
        PoolConfig.from_json(p)
