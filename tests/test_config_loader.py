"""
Tests for config loader with overrides.
"""

import json
import os
import tempfile
from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from catalyst_options_bt.config import load_config, apply_env_overrides, apply_cli_overrides, RunConfig

CONFIGS_DIR = Path(__file__).parent.parent / "configs"


@pytest.fixture
def temp_config_json():
    """Create a temporary JSON config file"""
    config_dict = {
        "engine": {
            "days": 30,
            "catalyst_day": 20,
            "risk_free_rate": 0.02,
        },
        "regimes": {
            "high_volatility": {
                "daily_volatility": 0.12,
                "pre_catalyst_iv": 1.6,
                "post_catalyst_iv": 0.45,
                "shock_min": 0.3,
                "shock_max": 0.8,
            },
        },
        "seed": 7,
        "spot": 120.0,
    }

    fd, path = tempfile.mkstemp(suffix=".json")
    with open(fd, "w") as f:
        json.dump(config_dict, f)

    yield path

    Path(path).unlink()


def test_load_config_json(temp_config_json):
    """Test loading JSON config"""
    config = load_config(temp_config_json)
    assert isinstance(config, RunConfig)
    assert config.seed == 7
    assert config.spot == 120.0
    assert config.regimes.high_volatility.pre_catalyst_iv == 1.6
    # untouched sections keep defaults
    assert config.regimes.moderate_volatility.pre_catalyst_iv == 0.8
    assert config.benchmark.base == 1000.0


def test_load_config_yaml():
    """Test loading YAML config"""
    config_dict = {
        "engine": {"days": 40, "catalyst_day": 25},
        "sector": "HIGH_VOLATILITY",
    }

    fd, path = tempfile.mkstemp(suffix=".yaml")
    with open(fd, "w") as f:
        yaml.dump(config_dict, f)

    try:
        config = load_config(path)
        assert config.engine.days == 40
        assert config.sector == "high_volatility"
    finally:
        Path(path).unlink()


def test_load_config_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / "missing.yaml"))
    bad = tmp_path / "config.toml"
    bad.write_text("seed = 1")
    with pytest.raises(ValueError, match="Unsupported config file format"):
        load_config(str(bad))


def test_shipped_configs_load():
    default = load_config(str(CONFIGS_DIR / "catalyst_default.yaml"))
    assert default.seed == 42
    assert default.engine.catalyst_day == 20

    straddle = load_config(str(CONFIGS_DIR / "vrtx_straddle.yaml"))
    assert straddle.template.name == "long_straddle"
    assert straddle.template.params["target_profit"] == 60
    assert straddle.reporting.config_format == "yaml"


def test_catalyst_day_must_be_inside_horizon():
    with pytest.raises(ValidationError):
        RunConfig(engine={"days": 10, "catalyst_day": 10})
    with pytest.raises(ValidationError):
        RunConfig(engine={"days": 10, "catalyst_day": 1})


def test_shock_range_validated():
    with pytest.raises(ValidationError):
        RunConfig(regimes={"high_volatility": {
            "daily_volatility": 0.1, "pre_catalyst_iv": 1.5, "post_catalyst_iv": 0.4, "shock_min": 0.9, "shock_max": 0.4,
        }})


def test_inline_strategy_definition():
    config = RunConfig(strategy={
        "strategyName": "Inline",
        "ticker": "crsp",
        "tradeDetails": {
            "legs": [{"action": "BUY", "type": "CALL", "strike": 60}],
            "targetProfit": "50%",
            "stopLoss": "25%",
        },
    })
    s = config.strategy.to_strategy()
    assert s.ticker == "CRSP"
    assert s.stop_loss_pct == 25.0


def test_apply_env_overrides(temp_config_json):
    """Test environment variable overrides"""
    # Set environment variable
    os.environ["COBT__engine__risk_free_rate"] = "0.05"

    try:
        config = load_config(temp_config_json)
        config = apply_env_overrides(config)

        # Check override was applied
        assert config.engine.risk_free_rate == 0.05

    finally:
        # Cleanup
        os.environ.pop("COBT__engine__risk_free_rate", None)


def test_apply_env_overrides_mapping(temp_config_json):
    config = load_config(temp_config_json)
    config = apply_env_overrides(config, {"COBT__SEED": "99", "COBT__VOLUME__CATALYST_MULTIPLIER": "3", "OTHER": "x"})
    assert config.seed == 99
    assert config.volume.catalyst_multiplier == 3


def test_apply_cli_overrides(temp_config_json):
    """Test CLI --set overrides"""
    config = load_config(temp_config_json)

    config = apply_cli_overrides(config, ["engine.days=45"])
    assert config.engine.days == 45

    # Test nested override
    config = apply_cli_overrides(config, ["regimes.moderate_volatility.shock_max=0.3"])
    assert config.regimes.moderate_volatility.shock_max == 0.3
    # siblings survive the merge
    assert config.regimes.moderate_volatility.shock_min == 0.1


def test_apply_cli_overrides_typed(temp_config_json):
    """Test that CLI overrides parse types correctly"""
    config = load_config(temp_config_json)

    # Integer
    config = apply_cli_overrides(config, ["seed=8"])
    assert config.seed == 8
    assert isinstance(config.seed, int)

    # Float
    config = apply_cli_overrides(config, ["engine.risk_free_rate=0.035"])
    assert config.engine.risk_free_rate == 0.035

    # Boolean
    config = apply_cli_overrides(config, ["reporting.save_csv=false"])
    assert config.reporting.save_csv is False

    # String
    config = apply_cli_overrides(config, ["reporting.run_dir_root=out/runs"])
    assert config.reporting.run_dir_root == "out/runs"

    # JSON parsing
    config = apply_cli_overrides(config, ['benchmark={"base": 500.0, "daily_volatility": 0.01}'])
    assert config.benchmark.base == 500.0
    assert config.benchmark.daily_volatility == 0.01


def test_apply_cli_overrides_invalid(temp_config_json):
    config = load_config(temp_config_json)
    with pytest.raises(ValueError, match="Expected 'key=value'"):
        apply_cli_overrides(config, ["engine.days"])
    with pytest.raises(ValidationError):
        apply_cli_overrides(config, ["engine.catalyst_day=50"])
