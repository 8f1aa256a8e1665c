"""
Data layer: sector lookup, price path simulation, synthetic market snapshots
"""

from .sectors import Regime, Company, COMPANIES, classify, get_company, regime_params
from .simulator import DailyBar, SimulatedPath, simulate_path, implied_vol_schedule
from .market import MarketSnapshot, generate_market_snapshot, generate_option_chain

__all__ = [
    "Regime",
    "Company",
    "COMPANIES",
    "classify",
    "get_company",
    "regime_params",
    "DailyBar",
    "SimulatedPath",
    "simulate_path",
    "implied_vol_schedule",
    "MarketSnapshot",
    "generate_market_snapshot",
    "generate_option_chain",
]
