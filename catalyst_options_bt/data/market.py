"""
Synthetic market snapshot used when no market-data service is wired in.

Produces a spot price, a catalyst date and a five-strike option chain priced off the
Black-Scholes pricer, with sector-dependent implied vol.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional, Union

import numpy as np
import pandas as pd

from ..pricing.black_scholes import price_option
from ..strategy.models import OptionKind
from .sectors import BIOTECHNOLOGY, Company, get_company

CHAIN_TENOR_DAYS = 30
CATALYST_OFFSET_DAYS = 25
STRIKE_STEP = 5.0
SPREAD_PCT = 0.05
MIN_BID = 0.01
MIN_QUOTED_IV = 50.0
RISK_FREE_RATE = 0.02


@dataclass(frozen=True)
class MarketSnapshot:
    """Spot, catalyst date and a synthetic option chain for one ticker."""
    ticker: str
    spot: float
    catalyst_date: date
    base_iv: float  # vol points, e.g. 150.0
    options_chain: pd.DataFrame  # columns: strike, kind, bid, ask, mid, iv, volume

    def calls(self) -> pd.DataFrame:
        return self.options_chain[self.options_chain["kind"] == OptionKind.CALL.value].reset_index(drop=True)

    def puts(self) -> pd.DataFrame:
        return self.options_chain[self.options_chain["kind"] == OptionKind.PUT.value].reset_index(drop=True)


def generate_option_chain(spot: float, base_iv: float, rng: np.random.Generator) -> pd.DataFrame:
    """
    Quote calls and puts at the ATM strike and two 5-point steps either side.

    IV is skewed linearly with moneyness plus up to 5 vol points of noise; the quoted
    IV is floored at 50 but pricing uses the unfloored value.
    """
    atm = round(spot / STRIKE_STEP) * STRIKE_STEP
    strikes = [atm + offset * STRIKE_STEP for offset in (-2, -1, 0, 1, 2)]
    t = CHAIN_TENOR_DAYS / 365.0

    rows = []
    for strike in strikes:
        for kind in (OptionKind.CALL, OptionKind.PUT):
            skew = (spot - strike) if kind is OptionKind.CALL else (strike - spot)
            iv = base_iv + skew * 0.5 + rng.random() * 5.0
            px = price_option(spot, max(strike, STRIKE_STEP), t, RISK_FREE_RATE, max(iv, 1.0) / 100.0, kind)
            spread = px * SPREAD_PCT
            bid = max(MIN_BID, px - spread)
            ask = px + spread
            rows.append(
                {
                    "strike": float(strike),
                    "kind": kind.value,
                    "bid": float(bid),
                    "ask": float(ask),
                    "mid": float((bid + ask) / 2.0),
                    "iv": float(max(MIN_QUOTED_IV, iv)),
                    "volume": int(rng.integers(200, 5200)),
                }
            )
    return pd.DataFrame(rows)


def generate_market_snapshot(
    company: Union[Company, str],
    rng: np.random.Generator,
    today: Optional[date] = None,
) -> MarketSnapshot:
    """
    Build a synthetic snapshot for a company (or ticker; unknown tickers are treated as tech).
    """
    if isinstance(company, str):
        ticker = company.strip().upper()
        company = get_company(ticker)
    else:
        ticker = company.ticker

    spot = 50.0 + rng.random() * 450.0
    if company is not None and company.sector == BIOTECHNOLOGY:
        base_iv = 150.0 + rng.random() * 50.0
    else:
        base_iv = 80.0 + rng.random() * 40.0

    today = today or date.today()
    return MarketSnapshot(
        ticker=ticker,
        spot=float(spot),
        catalyst_date=today + timedelta(days=CATALYST_OFFSET_DAYS),
        base_iv=float(base_iv),
        options_chain=generate_option_chain(spot, base_iv, rng),
    )
