"""
Paper-trading blotter:
- open a strategy at the current spot (one contract per leg)
- re-mark open trades on price updates, closing them on dollar target/stop
- manual close

Everything here is in dollars per contract (live_position_value), independent of the
backtest's percentage-of-cost-basis path.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Literal, Optional

import logging

from ..config.schemas import PaperTradingConfig
from ..strategy.models import Strategy
from .valuation import live_position_value

logger = logging.getLogger(__name__)

TradeStatus = Literal["OPEN", "CLOSED"]
NotificationKind = Literal["info", "success", "error"]


@dataclass(frozen=True)
class Notification:
    kind: NotificationKind
    message: str


@dataclass
class PaperTrade:
    trade_id: str
    executed_at: datetime
    strategy: Strategy
    entry_price: float
    entry_value: float
    target_pnl: float
    stop_pnl: float
    status: TradeStatus = "OPEN"
    current_value: float = 0.0
    unrealized_pnl: float = 0.0
    closed_at: Optional[datetime] = None

    @property
    def ticker(self) -> str:
        return self.strategy.ticker

    @property
    def is_open(self) -> bool:
        return self.status == "OPEN"


def _money(x: float) -> str:
    return f"{'-' if x < 0 else ''}${abs(x):,.2f}"


@dataclass
class PaperBlotter:
    cfg: PaperTradingConfig = field(default_factory=PaperTradingConfig)
    trades: List[PaperTrade] = field(default_factory=list)
    _trade_id: int = 0

    def _find(self, trade_id: str) -> PaperTrade:
        for t in self.trades:
            if t.trade_id == trade_id:
                return t
        raise KeyError(f"Unknown paper trade: {trade_id}")

    def open_trades(self, ticker: Optional[str] = None) -> List[PaperTrade]:
        return [t for t in self.trades if t.is_open and (ticker is None or t.ticker.upper() == ticker.upper())]

    def execute(self, strategy: Strategy, spot: float, ts: Optional[datetime] = None) -> Notification:
        """Open a paper trade; dollar target/stop are fixed from the entry value."""
        entry_value = live_position_value(strategy.legs, spot, self.cfg.entry_volatility, self.cfg.entry_days)
        self._trade_id += 1
        trade = PaperTrade(
            trade_id=f"PT-{self._trade_id:04d}",
            executed_at=ts or datetime.now(timezone.utc),
            strategy=strategy,
            entry_price=float(spot),
            entry_value=float(entry_value),
            target_pnl=strategy.target_profit_pct / 100.0 * abs(entry_value),
            stop_pnl=-strategy.stop_loss_pct / 100.0 * abs(entry_value),
            current_value=float(entry_value),
        )
        # newest first
        self.trades.insert(0, trade)
        logger.info(
            f"Opened {trade.trade_id} {strategy.ticker} '{strategy.name}' at spot={spot:.2f} "
            f"entry_value={_money(entry_value)} target={_money(trade.target_pnl)} stop={_money(trade.stop_pnl)}"
        )
        return Notification("info", f"Executed paper trade for {strategy.ticker}")

    def on_price_update(self, ticker: str, spot: float, ts: Optional[datetime] = None) -> List[Notification]:
        """
        Re-mark every open trade on `ticker`. Target is checked before stop; either one
        closes the trade.
        """
        notes: List[Notification] = []
        ticker = ticker.upper()
        for trade in self.open_trades(ticker):
            value = live_position_value(trade.strategy.legs, spot, self.cfg.mark_volatility, self.cfg.mark_days)
            pnl = value - trade.entry_value
            trade.current_value = float(value)
            trade.unrealized_pnl = float(pnl)

            if pnl >= trade.target_pnl:
                self._close(trade, ts)
                notes.append(Notification("success", f"{ticker} Take-Profit hit at {_money(pnl)}"))
            elif pnl <= trade.stop_pnl:
                self._close(trade, ts)
                notes.append(Notification("error", f"{ticker} Stop-Loss triggered at {_money(pnl)}"))

        for n in notes:
            logger.info(f"[{n.kind}] {n.message}")
        return notes

    def close_trade(self, trade_id: str, spot: float, ts: Optional[datetime] = None) -> PaperTrade:
        """
        Close a trade at the given spot.

        Raises:
            KeyError: If trade_id is unknown
        """
        trade = self._find(trade_id)
        if not trade.is_open:
            logger.warning(f"{trade_id} is already closed")
            return trade
        value = live_position_value(trade.strategy.legs, spot, self.cfg.close_volatility, self.cfg.close_days)
        trade.current_value = float(value)
        trade.unrealized_pnl = float(value - trade.entry_value)
        self._close(trade, ts)
        logger.info(f"Closed {trade_id} at spot={spot:.2f} pnl={_money(trade.unrealized_pnl)}")
        return trade

    def _close(self, trade: PaperTrade, ts: Optional[datetime]) -> None:
        trade.status = "CLOSED"
        trade.closed_at = ts or datetime.now(timezone.utc)

    def summary(self) -> Dict[str, float]:
        closed = [t for t in self.trades if not t.is_open]
        wins = [t for t in closed if t.unrealized_pnl > 0]
        return {
            "trades": len(self.trades),
            "open": len(self.trades) - len(closed),
            "closed": len(closed),
            "win_rate_pct": (len(wins) / len(closed) * 100.0) if closed else 0.0,
            "net_pnl": float(sum(t.unrealized_pnl for t in self.trades)),
        }
