"""
Performance statistics for a finished run: Sharpe ratio, CAPM beta and alpha.

All three are point estimates over the whole run. Sample (ddof=1) moments are used.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from ..portfolio.valuation import RISK_FREE_RATE
from .models import DailyResult, PerformanceMetrics


def sharpe_ratio(returns: Sequence[float], rate: float = RISK_FREE_RATE) -> float:
    """(mean * N - r) / (std * sqrt(N)); 0 when the series has no dispersion."""
    r = np.asarray(returns, dtype=float)
    n = len(r)
    if n < 2:
        return 0.0
    std = float(np.std(r, ddof=1))
    if std == 0 or not np.isfinite(std):
        return 0.0
    return float((r.mean() * n - rate) / (std * np.sqrt(n)))


def beta(stock_returns: Sequence[float], market_returns: Sequence[float]) -> float:
    """cov(stock, market) / var(market); 1 when the market series is flat."""
    s = np.asarray(stock_returns, dtype=float)
    m = np.asarray(market_returns, dtype=float)
    if len(s) != len(m):
        raise ValueError(f"Return series length mismatch: stock={len(s)} market={len(m)}")
    if len(m) < 2:
        return 1.0
    market_var = float(np.var(m, ddof=1))
    if market_var == 0:
        return 1.0
    cov = float(np.cov(s, m, ddof=1)[0, 1])
    return cov / market_var


def analyze(
    daily_results: Sequence[DailyResult],
    stock_returns: Sequence[float],
    market_returns: Sequence[float],
    rate: float = RISK_FREE_RATE,
) -> PerformanceMetrics:
    """
    Compute run metrics.

    Args:
        daily_results: Ordered daily results; profit_loss_pct / 100 is the return series
        stock_returns: Underlying's daily close-over-open returns
        market_returns: Benchmark daily returns
        rate: Risk-free rate

    Returns:
        PerformanceMetrics (alpha as a fraction, not percent)
    """
    returns = [r.profit_loss_pct / 100.0 for r in daily_results]
    b = beta(stock_returns, market_returns)
    final_return = returns[-1] if returns else 0.0
    market_final = float(np.prod(1.0 + np.asarray(market_returns, dtype=float)) - 1.0) if len(market_returns) else 0.0
    alpha = final_return - (rate + b * (market_final - rate))
    return PerformanceMetrics(alpha=float(alpha), beta=float(b), sharpe_ratio=sharpe_ratio(returns, rate))
