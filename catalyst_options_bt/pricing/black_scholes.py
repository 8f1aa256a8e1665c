"""
Black-Scholes valuation of a single European option leg.

The normal CDF uses the Zelen-Severo polynomial (Abramowitz & Stegun 26.2.17),
accurate to roughly 1e-7, which keeps the pricer free of scipy.
"""

from __future__ import annotations

import math

from ..strategy.models import OptionKind

_B1 = 0.319381530
_B2 = -0.356563782
_B3 = 1.781477937
_B4 = -1.821255978
_B5 = 1.330274429
_P = 0.2316419
_C = 0.39894228


def norm_cdf(z: float) -> float:
    """Standard normal cumulative distribution function."""
    if z >= 0.0:
        t = 1.0 / (1.0 + _P * z)
        poly = t * (t * (t * (t * (t * _B5 + _B4) + _B3) + _B2) + _B1)
        return 1.0 - _C * math.exp(-z * z / 2.0) * poly
    t = 1.0 / (1.0 - _P * z)
    poly = t * (t * (t * (t * (t * _B5 + _B4) + _B3) + _B2) + _B1)
    return _C * math.exp(-z * z / 2.0) * poly


def intrinsic_value(kind: OptionKind, strike: float, spot: float) -> float:
    if kind is OptionKind.CALL:
        return max(0.0, float(spot) - float(strike))
    return max(0.0, float(strike) - float(spot))


def price_option(
    spot: float,
    strike: float,
    time_to_expiry: float,
    rate: float,
    volatility: float,
    kind: OptionKind,
) -> float:
    """
    Price a European call or put.

    Args:
        spot: Underlying price
        strike: Strike price
        time_to_expiry: Years to expiry; <= 0 returns intrinsic value
        rate: Annualized risk-free rate (continuous)
        volatility: Annualized volatility (0.30 = 30%)
        kind: OptionKind.CALL or OptionKind.PUT

    Returns:
        Non-negative theoretical premium
    """
    spot = float(spot)
    strike = float(strike)
    t = float(time_to_expiry)
    if t <= 0:
        return intrinsic_value(kind, strike, spot)

    vol_sqrt_t = float(volatility) * math.sqrt(t)
    if vol_sqrt_t == 0:
        return intrinsic_value(kind, strike, spot)

    d1 = (math.log(spot / strike) + (rate + volatility * volatility / 2.0) * t) / vol_sqrt_t
    d2 = d1 - vol_sqrt_t
    discount = strike * math.exp(-rate * t)

    if kind is OptionKind.CALL:
        px = spot * norm_cdf(d1) - discount * norm_cdf(d2)
    else:
        px = discount * norm_cdf(-d2) - spot * norm_cdf(-d1)
    # the polynomial CDF can dip a hair below zero far out of the money
    return max(0.0, px)
