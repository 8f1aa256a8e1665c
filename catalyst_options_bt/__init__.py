"""
Catalyst Options Backtest Engine

Prices multi-leg option strategies with Black-Scholes, simulates a synthetic price path
around a scheduled volatility-crushing catalyst, and scores the result.
"""

__version__ = "0.1.0"
