"""
Side-by-side comparison of candidate strategies.

Each candidate on the same ticker sees the same simulated path (one generator per
run, all seeded identically), so differences come from the legs, not the draw.
"""

import logging
from typing import Iterable, List, Optional, Union

import numpy as np
import pandas as pd

from ..config import RunConfig
from ..strategy.models import Strategy
from ..data.sectors import Regime
from .models import AlertKind, BacktestOutcome
from .runner import run_backtest

logger = logging.getLogger(__name__)

COMPARISON_COLUMNS = [
    "strategy_name",
    "strategy_type",
    "ticker",
    "max_risk",
    "final_pl_pct",
    "peak_pl_pct",
    "trough_pl_pct",
    "sharpe_ratio",
    "alpha",
    "beta",
    "target_hit_day",
    "stop_hit_day",
]


def summarize(strategy: Strategy, outcome: BacktestOutcome) -> dict:
    pl = [r.profit_loss_pct for r in outcome.results]
    return {
        "strategy_name": strategy.name,
        "strategy_type": strategy.strategy_type,
        "ticker": strategy.ticker,
        "max_risk": strategy.max_risk.split(" ")[0] if strategy.max_risk else None,
        "final_pl_pct": outcome.final_profit_loss_pct,
        "peak_pl_pct": max(pl) if pl else 0.0,
        "trough_pl_pct": min(pl) if pl else 0.0,
        "sharpe_ratio": outcome.metrics.sharpe_ratio,
        "alpha": outcome.metrics.alpha,
        "beta": outcome.metrics.beta,
        "target_hit_day": outcome.first_alert_day(AlertKind.PROFIT),
        "stop_hit_day": outcome.first_alert_day(AlertKind.LOSS),
    }

def compare_strategies(
    strategies: Iterable[Strategy],
    initial_spot: float,
    seed: Optional[int] = None,
    config: Optional[RunConfig] = None,
    sector: Union[Regime, str, None] = None,
) -> pd.DataFrame:
    """
    Backtest every candidate and rank by Sharpe ratio (descending).

    With seed=None a single entropy value is drawn up front and shared, so the
    candidates still see a common path. sector defaults to config.sector.
    """
    strategies = list(strategies)
    if seed is None:
        seed = int(np.random.SeedSequence().entropy % (2**32))
    if sector is None and config is not None:
        sector = config.sector

    rows: List[dict] = []
    for strategy in strategies:
        outcome = run_backtest(strategy, initial_spot, sector=sector, seed=seed, config=config)
        rows.append(summarize(strategy, outcome))

    logger.info(f"Compared {len(rows)} strategies with seed={seed} sector={sector or 'auto'}")
    df = pd.DataFrame(rows, columns=COMPARISON_COLUMNS)
    if df.empty:
        return df
    return df.sort_values("sharpe_ratio", ascending=False, kind="mergesort").reset_index(drop=True)
