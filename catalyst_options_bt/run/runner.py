"""
Backtest runner: orchestrates a single catalyst backtest.

This is the single source of truth for running backtests; the CLI and comparison
helpers both call run_backtest().

One run is: resolve regime -> simulate path -> open position -> fold over days
(revalue, P/L %, alerts) -> performance metrics. No I/O and no shared state, so
independent runs with independent generators can execute concurrently.
"""

import logging
from dataclasses import dataclass, replace
from functools import partial, reduce
from typing import Optional, Tuple, Union

import numpy as np

from ..config import RunConfig
from ..data.sectors import Regime, classify, regime_params
from ..data.simulator import DailyBar, SimulatedPath, simulate_path
from ..portfolio.valuation import opening_value, position_value
from ..strategy.models import Strategy, StrategyError
from .models import Alert, AlertKind, BacktestOutcome, DailyResult
from .performance import analyze

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _RunState:
    initial_value: float
    cost_basis: float
    target_hit: bool = False
    stop_hit: bool = False
    results: Tuple[DailyResult, ...] = ()


@dataclass(frozen=True)
class _RunContext:
    strategy: Strategy
    path: SimulatedPath
    days: int
    rate: float
    pre_iv: float
    post_iv: float


def _advance(ctx: _RunContext, state: _RunState, bar: DailyBar) -> _RunState:
    day = bar.day
    vol = ctx.path.implied_vol(day)
    current_value = position_value(ctx.strategy.legs, bar.close, vol, ctx.days - day, ctx.rate)
    pl = (state.initial_value + current_value) / state.cost_basis * 100.0

    target = ctx.strategy.target_profit_pct
    stop = -abs(ctx.strategy.stop_loss_pct)
    alerts = []
    target_hit, stop_hit = state.target_hit, state.stop_hit

    if not target_hit and pl >= target:
        alerts.append(Alert(day, AlertKind.PROFIT, f"Take-Profit target of {target:g}% hit."))
        target_hit = True
    elif not stop_hit and pl <= stop:
        alerts.append(Alert(day, AlertKind.LOSS, f"Stop-Loss of {stop:g}% triggered."))
        stop_hit = True

    if day == ctx.path.catalyst_day:
        alerts.append(
            Alert(
                day,
                AlertKind.INFO,
                f"Catalyst event occurred. IV crushed from {ctx.pre_iv * 100:g}% to {ctx.post_iv * 100:g}%.",
            )
        )

    for a in alerts:
        logger.info(f"Day {day}: [{a.kind.value}] {a.message} (P/L {pl:.2f}%)")

    return replace(
        state,
        target_hit=target_hit,
        stop_hit=stop_hit,
        results=state.results + (DailyResult(profit_loss_pct=float(pl), bar=bar, alerts=tuple(alerts)),),
    )


def evaluate_path(
    strategy: Strategy,
    path: SimulatedPath,
    initial_spot: float,
    config: Optional[RunConfig] = None,
    regime: Union[Regime, str] = "",
    seed: Optional[int] = None,
) -> BacktestOutcome:
    """
    Revalue a strategy over an already simulated path.

    The position is opened at initial_spot with the path's day-1 implied vol and
    the full horizon to expiry; each day is priced at its close with the IV from the
    path's schedule and (days - day) days left.

    Raises:
        StrategyError: If the strategy has no legs
    """
    cfg = config or RunConfig()
    if not strategy.legs:
        raise StrategyError(f"Strategy '{strategy.name}' has no legs")

    days = path.days
    rate = float(cfg.engine.risk_free_rate)
    pre_iv = path.implied_vol(1)
    post_iv = path.implied_vol(path.catalyst_day)

    initial_value, cost_basis = opening_value(strategy.legs, initial_spot, pre_iv, days, rate)
    logger.info(
        f"Opening '{strategy.name}' on {strategy.ticker}: spot={initial_spot:.2f} iv={pre_iv:.2f} "
        f"initial_value={initial_value:.4f} cost_basis={cost_basis:.4f}"
    )

    ctx = _RunContext(strategy=strategy, path=path, days=days, rate=rate, pre_iv=pre_iv, post_iv=post_iv)
    final = reduce(partial(_advance, ctx), path.bars, _RunState(initial_value=initial_value, cost_basis=cost_basis))

    metrics = analyze(final.results, path.stock_returns, path.market_returns, rate)

    return BacktestOutcome(
        results=final.results,
        metrics=metrics,
        strategy_name=strategy.name,
        ticker=strategy.ticker,
        regime=regime.value if isinstance(regime, Regime) else str(regime),
        initial_spot=float(initial_spot),
        initial_value=float(initial_value),
        cost_basis=float(cost_basis),
        shock=path.shock,
        catalyst_day=path.catalyst_day,
        seed=seed,
    )


def run_backtest(
    strategy: Strategy,
    initial_spot: float,
    *,
    sector: Union[Regime, str, None] = None,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    config: Optional[RunConfig] = None,
) -> BacktestOutcome:
    """
    Run a catalyst backtest.

    Args:
        strategy: Strategy to evaluate
        initial_spot: Underlying price on day 0
        sector: Regime override; defaults to classify(strategy.ticker)
        rng: Randomness source; takes precedence over seed
        seed: Seed for a fresh numpy Generator when rng is not given
        config: RunConfig (defaults to a 30-day horizon with catalyst on day 20)

    Returns:
        BacktestOutcome with one DailyResult per day and the run's metrics
    """
    cfg = config or RunConfig()
    regime = Regime(sector) if sector is not None else classify(strategy.ticker)
    params = regime_params(regime, cfg.regimes)

    if rng is None:
        rng = np.random.default_rng(seed)

    logger.info(
        f"Starting backtest: strategy='{strategy.name}' ticker={strategy.ticker} regime={regime.value} "
        f"days={cfg.engine.days} catalyst_day={cfg.engine.catalyst_day} seed={seed}"
    )

    path = simulate_path(initial_spot, params, rng, cfg)
    outcome = evaluate_path(strategy, path, initial_spot, cfg, regime=regime, seed=seed)

    m = outcome.metrics
    logger.info(
        f"Backtest complete: final P/L={outcome.final_profit_loss_pct:.2f}% sharpe={m.sharpe_ratio:.2f} "
        f"alpha={m.alpha:.4f} beta={m.beta:.2f} alerts={len(outcome.alerts())}"
    )
    return outcome
