"""
Synthetic daily price path around a scheduled catalyst.

The path is a random walk of daily bars with one directional shock on the catalyst
day, after which the implied vol used for pricing collapses to the post-catalyst
level. A shock-free benchmark series is generated alongside it for beta/alpha.

All randomness comes from the injected numpy Generator, so a seeded generator
reproduces the path exactly.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
import pandas as pd

from ..config.schemas import RegimeParams, RunConfig


@dataclass(frozen=True)
class DailyBar:
    day: int
    open: float
    high: float
    low: float
    close: float
    volume: int


@dataclass(frozen=True)
class SimulatedPath:
    """
    Day-indexed simulation output.

    bars[i], stock_returns[i], market_returns[i] and implied_vols[i] all describe day i + 1.
    shock is the signed price jump applied on catalyst_day.
    """
    bars: Tuple[DailyBar, ...]
    benchmark_closes: Tuple[float, ...]
    stock_returns: Tuple[float, ...]
    market_returns: Tuple[float, ...]
    implied_vols: Tuple[float, ...]
    catalyst_day: int
    shock: float
    benchmark_base: float = 1000.0

    @property
    def days(self) -> int:
        return len(self.bars)

    def bar(self, day: int) -> DailyBar:
        return self.bars[day - 1]

    def implied_vol(self, day: int) -> float:
        return self.implied_vols[day - 1]

    @property
    def market_cumulative_return(self) -> float:
        if not self.benchmark_closes:
            return 0.0
        return (self.benchmark_closes[-1] - self.benchmark_base) / self.benchmark_base

    def to_frame(self) -> pd.DataFrame:
        df = pd.DataFrame([vars(b) for b in self.bars])
        df["benchmark"] = list(self.benchmark_closes)
        df["implied_vol"] = list(self.implied_vols)
        return df


def implied_vol_schedule(params: RegimeParams, days: int, catalyst_day: int) -> Tuple[float, ...]:
    """Pre-catalyst IV before catalyst_day, post-catalyst IV from it onward."""
    return tuple(
        float(params.pre_catalyst_iv) if day < catalyst_day else float(params.post_catalyst_iv)
        for day in range(1, days + 1)
    )


def simulate_path(
    initial_spot: float,
    params: RegimeParams,
    rng: np.random.Generator,
    config: Optional[RunConfig] = None,
) -> SimulatedPath:
    """
    Simulate one run's price path.

    Draw order: shock magnitude, shock sign, then per day two intraday moves,
    volume, benchmark move.

    Args:
        initial_spot: Day-1 open
        params: Regime parameters (daily vol, IV levels, shock range)
        rng: Randomness source for this run
        config: RunConfig supplying horizon, benchmark and volume settings

    Raises:
        ValueError: If initial_spot is not positive
    """
    if not initial_spot > 0:
        raise ValueError(f"initial_spot must be positive, got {initial_spot}")

    cfg = config or RunConfig()
    days = int(cfg.engine.days)
    catalyst_day = int(cfg.engine.catalyst_day)
    min_price = float(cfg.engine.min_price)
    daily_vol = float(params.daily_volatility)
    market_vol = float(cfg.benchmark.daily_volatility)

    magnitude = float(rng.uniform(params.shock_min, params.shock_max))
    sign = 1.0 if rng.random() > 0.5 else -1.0
    shock = sign * float(initial_spot) * magnitude

    bars = []
    benchmark = []
    stock_returns = []
    market_returns = []

    close = float(initial_spot)
    market = float(cfg.benchmark.base)

    for day in range(1, days + 1):
        open_ = close
        move1 = open_ * (rng.random() - 0.5) * daily_vol
        move2 = open_ * (rng.random() - 0.5) * daily_vol
        close = open_ + move1 + move2
        if day == catalyst_day:
            close += shock
        close = max(min_price, close)

        mult = cfg.volume.catalyst_multiplier if day == catalyst_day else 1.0
        volume = int(round(cfg.volume.base + rng.random() * cfg.volume.random_range * mult))

        market_open = market
        market = market_open * (1.0 + (rng.random() - 0.5) * market_vol)

        points = (open_, close, open_ + move1, open_ + move2)
        bars.append(
            DailyBar(
                day=day,
                open=float(open_),
                high=float(max(points)),
                low=float(min(points)),
                close=float(close),
                volume=volume,
            )
        )
        benchmark.append(float(market))
        stock_returns.append(float((close - open_) / open_))
        market_returns.append(float((market - market_open) / market_open))

    return SimulatedPath(
        bars=tuple(bars),
        benchmark_closes=tuple(benchmark),
        stock_returns=tuple(stock_returns),
        market_returns=tuple(market_returns),
        implied_vols=implied_vol_schedule(params, days, catalyst_day),
        catalyst_day=catalyst_day,
        shock=float(shock),
        benchmark_base=float(cfg.benchmark.base),
    )
