"""
Tests for the synthetic catalyst price path.
"""

import numpy as np
import pytest

from catalyst_options_bt.config import RegimeParams, RunConfig
from catalyst_options_bt.data.simulator import implied_vol_schedule, simulate_path


@pytest.fixture
def params():
    return RunConfig().regimes.high_volatility


def test_path_shape(params):
    path = simulate_path(100.0, params, np.random.default_rng(1))
    assert path.days == 30
    assert [b.day for b in path.bars] == list(range(1, 31))
    assert path.catalyst_day == 20
    assert len(path.stock_returns) == len(path.market_returns) == len(path.implied_vols) == 30


def test_bars_chain_open_to_previous_close(params):
    path = simulate_path(100.0, params, np.random.default_rng(2))
    assert path.bars[0].open == 100.0
    for prev, cur in zip(path.bars, path.bars[1:]):
        assert cur.open == prev.close


def test_high_low_bracket_open_and_close(params):
    path = simulate_path(100.0, params, np.random.default_rng(3))
    for b in path.bars:
        assert b.high >= max(b.open, b.close)
        assert b.low <= min(b.open, b.close)


def test_close_floored_at_min_price():
    crash = RegimeParams(daily_volatility=0.5, pre_catalyst_iv=1.5, post_catalyst_iv=0.4, shock_min=0.99, shock_max=0.99)
    for seed in range(25):
        path = simulate_path(2.0, crash, np.random.default_rng(seed))
        assert all(b.close >= 1.0 for b in path.bars)


def test_shock_within_regime_range(params):
    for seed in range(10):
        path = simulate_path(200.0, params, np.random.default_rng(seed))
        assert params.shock_min - 1e-12 <= abs(path.shock) / 200.0 <= params.shock_max + 1e-12


def test_implied_vol_schedule(params):
    path = simulate_path(100.0, params, np.random.default_rng(4))
    assert path.implied_vol(1) == 1.5
    assert path.implied_vol(19) == 1.5
    assert path.implied_vol(20) == 0.4
    assert path.implied_vol(30) == 0.4
    assert implied_vol_schedule(params, 5, 3) == (1.5, 1.5, 0.4, 0.4, 0.4)


def test_volume_bounds(params):
    cfg = RunConfig()
    path = simulate_path(100.0, params, np.random.default_rng(5), cfg)
    for b in path.bars:
        mult = cfg.volume.catalyst_multiplier if b.day == path.catalyst_day else 1.0
        assert cfg.volume.base <= b.volume <= cfg.volume.base + cfg.volume.random_range * mult + 1


def test_same_seed_same_path(params):
    a = simulate_path(100.0, params, np.random.default_rng(42))
    b = simulate_path(100.0, params, np.random.default_rng(42))
    assert a == b


def test_different_seed_different_path(params):
    a = simulate_path(100.0, params, np.random.default_rng(1))
    b = simulate_path(100.0, params, np.random.default_rng(2))
    assert a.bars != b.bars


def test_market_cumulative_return_matches_compounded_returns(params):
    path = simulate_path(100.0, params, np.random.default_rng(6))
    compounded = float(np.prod(1.0 + np.asarray(path.market_returns)) - 1.0)
    assert path.market_cumulative_return == pytest.approx(compounded)


def test_custom_horizon(params):
    cfg = RunConfig(engine={"days": 10, "catalyst_day": 5})
    path = simulate_path(100.0, params, np.random.default_rng(7), cfg)
    assert path.days == 10
    assert path.catalyst_day == 5


def test_to_frame(params):
    df = simulate_path(100.0, params, np.random.default_rng(8)).to_frame()
    assert len(df) == 30
    assert {"day", "open", "high", "low", "close", "volume", "benchmark", "implied_vol"} <= set(df.columns)


def test_non_positive_spot_rejected(params):
    with pytest.raises(ValueError):
        simulate_path(0.0, params, np.random.default_rng(0))
