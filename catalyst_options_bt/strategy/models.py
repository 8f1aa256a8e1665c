"""
Strategy data model.

Strategies arrive from an external generator (LLM-backed or a saved file) as loosely
typed JSON. `StrategyDefinition` validates that shape once at the boundary and
`to_strategy()` hands the engine an immutable `Strategy` with numeric thresholds.
"""

from __future__ import annotations

import json
import math
import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class StrategyError(ValueError):
    """Raised when a strategy violates an engine precondition."""


class Action(str, Enum):
    BUY = "BUY"
    SELL = "SELL"

    @property
    def sign(self) -> int:
        return 1 if self is Action.BUY else -1


class OptionKind(str, Enum):
    CALL = "CALL"
    PUT = "PUT"


_NON_NUMERIC = re.compile(r"[^0-9.\-]+")


def parse_percent(text: Any) -> float:
    """
    Parse a free-text threshold such as "+50%", "50% of premium" or "$1,200".

    Everything except digits, '.' and '-' is dropped before conversion.

    Raises:
        StrategyError: If no number can be recovered
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        value = float(text)
    else:
        cleaned = _NON_NUMERIC.sub("", str(text))
        try:
            value = float(cleaned)
        except ValueError:
            raise StrategyError(f"Cannot parse threshold {text!r} as a percentage") from None
    if not math.isfinite(value):
        raise StrategyError(f"Cannot parse threshold {text!r} as a percentage")
    return value


@dataclass(frozen=True)
class OptionLeg:
    action: Action
    kind: OptionKind
    strike: float
    expiry: str = ""

    def __post_init__(self):
        if not self.strike > 0:
            raise StrategyError(f"Leg strike must be positive, got {self.strike}")


@dataclass(frozen=True)
class Strategy:
    """
    Immutable, engine-ready strategy.

    target_profit_pct and stop_loss_pct are percentages of cost basis; the stop is
    stored as a positive magnitude and applied as -|stop|.
    """
    name: str
    ticker: str
    legs: Tuple[OptionLeg, ...]
    target_profit_pct: float
    stop_loss_pct: float
    strategy_type: Optional[str] = None
    entry_price: str = ""
    position_size: str = ""
    max_risk: str = ""
    analysis: str = ""
    key_points: Tuple[str, ...] = ()
    risk_considerations: Tuple[str, ...] = ()
    greeks: Dict[str, float] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        if not self.legs:
            raise StrategyError(f"Strategy '{self.name}' has no legs")
        for label, value in (("target_profit_pct", self.target_profit_pct), ("stop_loss_pct", self.stop_loss_pct)):
            if not math.isfinite(float(value)):
                raise StrategyError(f"Strategy '{self.name}' has a non-finite {label}: {value!r}")
        object.__setattr__(self, "ticker", str(self.ticker).strip().upper())
        object.__setattr__(self, "legs", tuple(self.legs))
        object.__setattr__(self, "stop_loss_pct", abs(float(self.stop_loss_pct)))
        object.__setattr__(self, "target_profit_pct", float(self.target_profit_pct))

    @property
    def average_strike(self) -> float:
        return sum(leg.strike for leg in self.legs) / len(self.legs)


class LegDefinition(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    action: Action
    kind: OptionKind = Field(alias="type")
    strike: float = Field(gt=0)
    expiry: str = ""

    @field_validator("action", "kind", mode="before")
    @classmethod
    def upper_case(cls, v):
        return v.upper() if isinstance(v, str) else v


class TradeDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    legs: List[LegDefinition] = Field(min_length=1, description="Option legs (at least one)")
    entry_price: str = Field(default="", alias="entryPrice")
    target_profit: float = Field(alias="targetProfit", description="Take-profit, % of cost basis")
    stop_loss: float = Field(alias="stopLoss", description="Stop-loss, % of cost basis")
    position_size: str = Field(default="", alias="positionSize")
    max_risk: str = Field(default="", alias="maxRisk")

    @field_validator("target_profit", "stop_loss", mode="before")
    @classmethod
    def parse_threshold(cls, v):
        return parse_percent(v)

    @field_validator("entry_price", "position_size", "max_risk", mode="before")
    @classmethod
    def stringify(cls, v):
        return "" if v is None else str(v)


class Rationale(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    key_points: List[str] = Field(default_factory=list, alias="keyPoints")
    risk_considerations: List[str] = Field(default_factory=list, alias="riskConsiderations")


class StrategyDefinition(BaseModel):
    """Strategy as supplied by the generator (camelCase or snake_case keys)."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(alias="strategyName")
    strategy_type: Optional[str] = Field(default=None, alias="strategyType")
    ticker: str
    analysis: str = ""
    rationale: Rationale = Field(default_factory=Rationale)
    greeks: Dict[str, float] = Field(default_factory=dict)
    trade_details: TradeDetails = Field(alias="tradeDetails")

    @field_validator("ticker", mode="before")
    @classmethod
    def normalize_ticker(cls, v):
        return str(v).strip().upper()

    def to_strategy(self) -> Strategy:
        td = self.trade_details
        return Strategy(
            name=self.name,
            ticker=self.ticker,
            legs=tuple(OptionLeg(leg.action, leg.kind, float(leg.strike), leg.expiry) for leg in td.legs),
            target_profit_pct=td.target_profit,
            stop_loss_pct=td.stop_loss,
            strategy_type=self.strategy_type,
            entry_price=td.entry_price,
            position_size=td.position_size,
            max_risk=td.max_risk,
            analysis=self.analysis,
            key_points=tuple(self.rationale.key_points),
            risk_considerations=tuple(self.rationale.risk_considerations),
            greeks=dict(self.greeks),
        )


def strategy_from_dict(data: Dict[str, Any]) -> Strategy:
    return StrategyDefinition.model_validate(data).to_strategy()


def load_strategy(path: str) -> Strategy:
    """
    Load a strategy definition from a YAML or JSON file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file format is unsupported
        pydantic.ValidationError: If the definition is malformed
    """
    strategy_path = Path(path)
    if not strategy_path.exists():
        raise FileNotFoundError(f"Strategy file not found: {path}")

    suffix = strategy_path.suffix.lower()
    with open(strategy_path, "r", encoding="utf-8") as f:
        if suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        elif suffix == ".json":
            data = json.load(f)
        else:
            raise ValueError(f"Unsupported strategy file format: {suffix}. Use .yaml, .yml, or .json")

    return strategy_from_dict(data)
