"""
Configuration system: schemas and loaders
"""

from .schemas import (
    EngineConfig,
    RegimeParams,
    RegimeConfig,
    BenchmarkConfig,
    VolumeConfig,
    PaperTradingConfig,
    ReportingConfig,
    TemplateConfig,
    RunConfig,
)
from .loader import load_config, apply_env_overrides, apply_cli_overrides

__all__ = [
    "EngineConfig",
    "RegimeParams",
    "RegimeConfig",
    "BenchmarkConfig",
    "VolumeConfig",
    "PaperTradingConfig",
    "ReportingConfig",
    "TemplateConfig",
    "RunConfig",
    "load_config",
    "apply_env_overrides",
    "apply_cli_overrides",
]
