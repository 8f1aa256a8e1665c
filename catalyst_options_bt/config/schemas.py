"""
Configuration schemas using Pydantic for validation and type safety.
"""

from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from ..strategy.models import StrategyDefinition


class EngineConfig(BaseModel):
    """Backtest horizon and pricing constants"""
    days: int = Field(default=30, ge=2, description="Number of simulated trading days")
    catalyst_day: int = Field(default=20, description="Day of the scheduled catalyst event (1-based)")
    risk_free_rate: float = Field(default=0.02, description="Annualized risk-free rate")
    min_price: float = Field(default=1.0, gt=0, description="Floor applied to the simulated close")

    @model_validator(mode="after")
    def validate_catalyst_day(self):
        """Catalyst must fall strictly inside the horizon"""
        if not 1 < self.catalyst_day < self.days:
            raise ValueError(f"catalyst_day must be strictly between 1 and days={self.days}, got {self.catalyst_day}")
        return self


class RegimeParams(BaseModel):
    """Simulation parameters for one volatility regime"""
    daily_volatility: float = Field(gt=0, description="Scale of each intraday perturbation")
    pre_catalyst_iv: float = Field(gt=0, description="Implied vol before the catalyst (0.8 = 80%)")
    post_catalyst_iv: float = Field(gt=0, description="Implied vol from the catalyst day on")
    shock_min: float = Field(ge=0, description="Lower bound of the catalyst shock, fraction of initial spot")
    shock_max: float = Field(ge=0, description="Upper bound of the catalyst shock, fraction of initial spot")

    @model_validator(mode="after")
    def validate_shock_range(self):
        if self.shock_max < self.shock_min:
            raise ValueError(f"shock_max ({self.shock_max}) must be >= shock_min ({self.shock_min})")
        return self


class RegimeConfig(BaseModel):
    """Per-regime simulation parameters"""
    high_volatility: RegimeParams = Field(
        default_factory=lambda: RegimeParams(
            daily_volatility=0.10, pre_catalyst_iv=1.5, post_catalyst_iv=0.4, shock_min=0.4, shock_max=0.9
        ),
        description="Biotech-like names",
    )
    moderate_volatility: RegimeParams = Field(
        default_factory=lambda: RegimeParams(
            daily_volatility=0.05, pre_catalyst_iv=0.8, post_catalyst_iv=0.3, shock_min=0.1, shock_max=0.25
        ),
        description="Large-cap tech-like names",
    )


class BenchmarkConfig(BaseModel):
    """Synthetic market benchmark"""
    base: float = Field(default=1000.0, gt=0, description="Starting benchmark level")
    daily_volatility: float = Field(default=0.03, ge=0, description="Constant daily perturbation scale")


class VolumeConfig(BaseModel):
    """Synthetic volume model"""
    base: float = Field(default=1_000_000, ge=0, description="Minimum daily volume")
    random_range: float = Field(default=5_000_000, ge=0, description="Random volume on top of base")
    catalyst_multiplier: float = Field(default=5.0, ge=1, description="Multiplier on the random part on catalyst day")


class PaperTradingConfig(BaseModel):
    """Vol/days assumptions used to mark paper trades"""
    entry_volatility: float = Field(default=1.5, gt=0)
    entry_days: int = Field(default=30, ge=0)
    mark_volatility: float = Field(default=1.0, gt=0)
    mark_days: int = Field(default=15, ge=0)
    close_volatility: float = Field(default=0.4, gt=0)
    close_days: int = Field(default=10, ge=0)


class ReportingConfig(BaseModel):
    """Reporting configuration"""
    run_dir_root: str = Field(default="runs", description="Root directory for run outputs")
    save_csv: bool = Field(default=True, description="Save results.csv and alerts.csv")
    save_log: bool = Field(default=True, description="Save run log")
    config_format: Literal["json", "yaml"] = Field(default="json", description="Format of config_resolved")


class TemplateConfig(BaseModel):
    """Build the strategy from a registered template instead of a definition"""
    name: str = Field(description="Template name (must be registered)")
    ticker: str = Field(description="Underlying ticker")
    params: Dict[str, Any] = Field(default_factory=dict, description="Template parameters")


class RunConfig(BaseModel):
    """Complete run configuration"""
    engine: EngineConfig = Field(default_factory=EngineConfig)
    regimes: RegimeConfig = Field(default_factory=RegimeConfig)
    benchmark: BenchmarkConfig = Field(default_factory=BenchmarkConfig)
    volume: VolumeConfig = Field(default_factory=VolumeConfig)
    paper: PaperTradingConfig = Field(default_factory=PaperTradingConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)

    spot: Optional[float] = Field(default=None, gt=0, description="Initial underlying price")
    seed: Optional[int] = Field(default=None, description="Seed for the run's random generator")
    sector: Optional[Literal["high_volatility", "moderate_volatility"]] = Field(
        default=None, description="Override the ticker's sector classification"
    )
    strategy: Optional[StrategyDefinition] = Field(default=None, description="Inline strategy definition")
    template: Optional[TemplateConfig] = Field(default=None, description="Strategy template")

    @field_validator("sector", mode="before")
    @classmethod
    def normalize_sector(cls, v):
        return v.lower() if isinstance(v, str) else v
