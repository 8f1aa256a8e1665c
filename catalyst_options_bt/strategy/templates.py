"""
Built-in strategy templates.

Strikes are anchored on the at-the-money strike rounded to a 5-point grid, the same
grid the market stub quotes. Offsets are expressed in grid steps.

Common params:
  - step: strike grid (default 5)
  - target_profit: take-profit % of cost basis (default 50)
  - stop_loss: stop-loss % of cost basis (default 50)
  - expiry: expiry label carried on every leg (default "30D")
"""

from __future__ import annotations

from typing import Any, Dict, List

from .models import Action, OptionKind, OptionLeg, Strategy, parse_percent
from .registry import register_template


def atm_strike(spot: float, step: float = 5.0) -> float:
    return float(round(spot / step) * step)


def _strike(spot: float, params: Dict[str, Any], offset: int) -> float:
    step = float(params.get("step", 5.0))
    k = atm_strike(spot, step) + offset * step
    return max(step, k)


def _make(name: str, strategy_type: str, ticker: str, legs: List[OptionLeg], params: Dict[str, Any]) -> Strategy:
    return Strategy(
        name=str(params.get("name", name)),
        ticker=ticker,
        legs=tuple(legs),
        target_profit_pct=parse_percent(params.get("target_profit", 50.0)),
        stop_loss_pct=parse_percent(params.get("stop_loss", 50.0)),
        strategy_type=strategy_type,
    )


@register_template("long_call")
def long_call(ticker: str, spot: float, params: Dict[str, Any]) -> Strategy:
    expiry = str(params.get("expiry", "30D"))
    k = _strike(spot, params, int(params.get("offset", 0)))
    legs = [OptionLeg(Action.BUY, OptionKind.CALL, k, expiry)]
    return _make(f"{ticker} Long Call", "Long Call", ticker, legs, params)


@register_template("long_put")
def long_put(ticker: str, spot: float, params: Dict[str, Any]) -> Strategy:
    expiry = str(params.get("expiry", "30D"))
    k = _strike(spot, params, -int(params.get("offset", 0)))
    legs = [OptionLeg(Action.BUY, OptionKind.PUT, k, expiry)]
    return _make(f"{ticker} Long Put", "Long Put", ticker, legs, params)


@register_template("long_straddle")
def long_straddle(ticker: str, spot: float, params: Dict[str, Any]) -> Strategy:
    expiry = str(params.get("expiry", "30D"))
    k = _strike(spot, params, 0)
    legs = [
        OptionLeg(Action.BUY, OptionKind.CALL, k, expiry),
        OptionLeg(Action.BUY, OptionKind.PUT, k, expiry),
    ]
    return _make(f"{ticker} Long Straddle", "Straddle", ticker, legs, params)


@register_template("long_strangle")
def long_strangle(ticker: str, spot: float, params: Dict[str, Any]) -> Strategy:
    expiry = str(params.get("expiry", "30D"))
    width = int(params.get("width", 1))
    legs = [
        OptionLeg(Action.BUY, OptionKind.CALL, _strike(spot, params, width), expiry),
        OptionLeg(Action.BUY, OptionKind.PUT, _strike(spot, params, -width), expiry),
    ]
    return _make(f"{ticker} Long Strangle", "Strangle", ticker, legs, params)


@register_template("bull_call_spread")
def bull_call_spread(ticker: str, spot: float, params: Dict[str, Any]) -> Strategy:
    expiry = str(params.get("expiry", "30D"))
    width = int(params.get("width", 2))
    legs = [
        OptionLeg(Action.BUY, OptionKind.CALL, _strike(spot, params, 0), expiry),
        OptionLeg(Action.SELL, OptionKind.CALL, _strike(spot, params, width), expiry),
    ]
    return _make(f"{ticker} Bull Call Spread", "Vertical Spread", ticker, legs, params)


@register_template("iron_condor")
def iron_condor(ticker: str, spot: float, params: Dict[str, Any]) -> Strategy:
    """Short inner strangle, long wings. Credit trade that profits from the IV crush."""
    expiry = str(params.get("expiry", "30D"))
    inner = int(params.get("inner", 1))
    wing = int(params.get("wing", 1))
    legs = [
        OptionLeg(Action.BUY, OptionKind.PUT, _strike(spot, params, -(inner + wing)), expiry),
        OptionLeg(Action.SELL, OptionKind.PUT, _strike(spot, params, -inner), expiry),
        OptionLeg(Action.SELL, OptionKind.CALL, _strike(spot, params, inner), expiry),
        OptionLeg(Action.BUY, OptionKind.CALL, _strike(spot, params, inner + wing), expiry),
    ]
    return _make(f"{ticker} Iron Condor", "Iron Condor", ticker, legs, params)
