"""
Tests for side-by-side strategy comparison.
"""

from catalyst_options_bt.config import RunConfig
from catalyst_options_bt.run import run_backtest
from catalyst_options_bt.run.compare import COMPARISON_COLUMNS, compare_strategies
from catalyst_options_bt.strategy import build_strategy


def _candidates():
    return [
        build_strategy("long_straddle", "MRNA", 120.0),
        build_strategy("iron_condor", "MRNA", 120.0),
        build_strategy("long_call", "MRNA", 120.0),
    ]


def test_compare_columns_and_ranking():
    table = compare_strategies(_candidates(), 120.0, seed=21)
    assert list(table.columns) == COMPARISON_COLUMNS
    assert len(table) == 3
    sharpes = list(table["sharpe_ratio"])
    assert sharpes == sorted(sharpes, reverse=True)


def test_candidates_share_the_path():
    table = compare_strategies(_candidates(), 120.0, seed=21)
    straddle = build_strategy("long_straddle", "MRNA", 120.0)
    solo = run_backtest(straddle, 120.0, seed=21)
    row = table[table["strategy_name"] == straddle.name].iloc[0]
    assert row["final_pl_pct"] == solo.final_profit_loss_pct


def test_compare_without_seed():
    table = compare_strategies(_candidates()[:2], 120.0)
    assert len(table) == 2


def test_compare_empty():
    table = compare_strategies([], 120.0, seed=1)
    assert table.empty
    assert list(table.columns) == COMPARISON_COLUMNS


def test_configured_sector_applies_to_every_candidate():
    cfg = RunConfig(sector="moderate_volatility")
    straddle = build_strategy("long_straddle", "MRNA", 120.0)
    table = compare_strategies([straddle], 120.0, seed=3, config=cfg)
    solo = run_backtest(straddle, 120.0, sector="moderate_volatility", seed=3)
    assert table.loc[0, "final_pl_pct"] == solo.final_profit_loss_pct


def test_explicit_sector_overrides_config():
    cfg = RunConfig(sector="moderate_volatility")
    straddle = build_strategy("long_straddle", "MRNA", 120.0)
    table = compare_strategies([straddle], 120.0, seed=3, config=cfg, sector="high_volatility")
    solo = run_backtest(straddle, 120.0, sector="high_volatility", seed=3)
    assert table.loc[0, "final_pl_pct"] == solo.final_profit_loss_pct
