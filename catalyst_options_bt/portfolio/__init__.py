"""
Portfolio layer: strategy valuation and paper-trade monitoring.
"""

from .valuation import (
    RISK_FREE_RATE,
    CONTRACT_MULTIPLIER,
    position_value,
    live_position_value,
    opening_value,
)
from .paper import PaperBlotter, PaperTrade, Notification

__all__ = [
    "RISK_FREE_RATE",
    "CONTRACT_MULTIPLIER",
    "position_value",
    "live_position_value",
    "opening_value",
    "PaperBlotter",
    "PaperTrade",
    "Notification",
]
