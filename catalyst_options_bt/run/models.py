"""
Backtest result types.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple

import pandas as pd

from ..data.simulator import DailyBar


class AlertKind(str, Enum):
    PROFIT = "profit"
    LOSS = "loss"
    INFO = "info"


@dataclass(frozen=True)
class Alert:
    day: int
    kind: AlertKind
    message: str


@dataclass(frozen=True)
class DailyResult:
    """
    One simulated day.

    alerts holds every alert raised that day in evaluation order (threshold alert
    first, catalyst INFO last). `alert` is the single alert to display: the threshold
    alert if one fired, otherwise the INFO alert.
    """
    profit_loss_pct: float
    bar: DailyBar
    alerts: Tuple[Alert, ...] = ()

    @property
    def day(self) -> int:
        return self.bar.day

    @property
    def alert(self) -> Optional[Alert]:
        for a in self.alerts:
            if a.kind is not AlertKind.INFO:
                return a
        return self.alerts[0] if self.alerts else None


@dataclass(frozen=True)
class PerformanceMetrics:
    alpha: float
    beta: float
    sharpe_ratio: float


@dataclass(frozen=True)
class BacktestOutcome:
    results: Tuple[DailyResult, ...]
    metrics: PerformanceMetrics
    strategy_name: str = ""
    ticker: str = ""
    regime: str = ""
    initial_spot: float = 0.0
    initial_value: float = 0.0
    cost_basis: float = 0.0
    shock: float = 0.0
    catalyst_day: int = 0
    seed: Optional[int] = None

    def alerts(self) -> Tuple[Alert, ...]:
        return tuple(a for r in self.results for a in r.alerts)

    def first_alert_day(self, kind: AlertKind) -> Optional[int]:
        for a in self.alerts():
            if a.kind is kind:
                return a.day
        return None

    @property
    def final_profit_loss_pct(self) -> float:
        return self.results[-1].profit_loss_pct if self.results else 0.0

    def to_frame(self) -> pd.DataFrame:
        """Day-indexed table for charting: OHLCV, P/L % and the displayed alert."""
        rows = []
        for r in self.results:
            shown = r.alert
            rows.append(
                {
                    "day": r.day,
                    "open": r.bar.open,
                    "high": r.bar.high,
                    "low": r.bar.low,
                    "close": r.bar.close,
                    "volume": r.bar.volume,
                    "profit_loss_pct": r.profit_loss_pct,
                    "alert_kind": shown.kind.value if shown else None,
                    "alert_message": shown.message if shown else None,
                }
            )
        return pd.DataFrame(
            rows,
            columns=["day", "open", "high", "low", "close", "volume", "profit_loss_pct", "alert_kind", "alert_message"],
        )

    def alerts_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{"day": a.day, "kind": a.kind.value, "message": a.message} for a in self.alerts()],
            columns=["day", "kind", "message"],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "strategy_name": self.strategy_name,
            "ticker": self.ticker,
            "regime": self.regime,
            "seed": self.seed,
            "initial_spot": self.initial_spot,
            "initial_value": self.initial_value,
            "cost_basis": self.cost_basis,
            "shock": self.shock,
            "catalyst_day": self.catalyst_day,
            "metrics": asdict(self.metrics),
            "results": [
                {
                    "profit_loss_pct": r.profit_loss_pct,
                    "ohlcv": asdict(r.bar),
                    "alerts": [{"day": a.day, "kind": a.kind.value, "message": a.message} for a in r.alerts],
                }
                for r in self.results
            ],
        }
