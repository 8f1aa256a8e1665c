"""
Strategy valuation from leg prices.

Two units live here and must not be mixed:
- position_value: theoretical premium per share, used by the backtest (normalized by cost basis)
- live_position_value: dollars per contract (x100 shares), used by paper trading
"""

from __future__ import annotations

import logging
from typing import Iterable, Tuple

from ..pricing.black_scholes import price_option
from ..strategy.models import OptionLeg

logger = logging.getLogger(__name__)

RISK_FREE_RATE = 0.02
CONTRACT_MULTIPLIER = 100
DAYS_PER_YEAR = 365.0
COST_BASIS_EPSILON = 0.01
FALLBACK_STRIKE_FRACTION = 0.1


def position_value(
    legs: Iterable[OptionLeg],
    spot: float,
    volatility: float,
    days_to_expiry: float,
    rate: float = RISK_FREE_RATE,
) -> float:
    """Signed sum of leg prices: BUY legs add, SELL legs subtract."""
    t = max(0.0, float(days_to_expiry) / DAYS_PER_YEAR)
    total = 0.0
    for leg in legs:
        px = price_option(spot, leg.strike, t, rate, volatility, leg.kind)
        total += leg.action.sign * px
    return total


def live_position_value(
    legs: Iterable[OptionLeg],
    spot: float,
    volatility: float,
    days_to_expiry: float,
    rate: float = RISK_FREE_RATE,
) -> float:
    """Dollar value of one contract per leg."""
    return position_value(legs, spot, volatility, days_to_expiry, rate) * CONTRACT_MULTIPLIER


def opening_value(
    legs: Iterable[OptionLeg],
    spot: float,
    volatility: float,
    days_to_expiry: float,
    rate: float = RISK_FREE_RATE,
) -> Tuple[float, float]:
    """
    Cash flow of opening the position and the cost basis used for % P/L.

    initial_value is negative for a net debit (buying costs money). When the position
    prices at ~0 the cost basis falls back to 10% of the average strike.

    Returns: (initial_value, cost_basis)
    """
    legs = tuple(legs)
    if not legs:
        raise ValueError("Cannot value a position with no legs")
    initial_value = -position_value(legs, spot, volatility, days_to_expiry, rate)
    if abs(initial_value) > COST_BASIS_EPSILON:
        return initial_value, abs(initial_value)

    avg_strike = sum(abs(leg.strike) for leg in legs) / len(legs)
    cost_basis = avg_strike * FALLBACK_STRIKE_FRACTION
    logger.warning(
        f"Initial position value {initial_value:.6f} is ~0; using fallback cost basis {cost_basis:.4f} "
        f"(avg strike {avg_strike:.2f} x {FALLBACK_STRIKE_FRACTION})"
    )
    return initial_value, cost_basis
