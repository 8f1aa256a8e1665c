"""
Run module: backtest runner, performance metrics, comparison, CLI, and artifacts.
"""

from .models import Alert, AlertKind, BacktestOutcome, DailyResult, PerformanceMetrics
from .runner import run_backtest, evaluate_path
from .performance import analyze, sharpe_ratio, beta
from .compare import compare_strategies
from .artifacts import RunArtifacts, generate_run_id

__all__ = [
    "Alert",
    "AlertKind",
    "BacktestOutcome",
    "DailyResult",
    "PerformanceMetrics",
    "run_backtest",
    "evaluate_path",
    "analyze",
    "sharpe_ratio",
    "beta",
    "compare_strategies",
    "RunArtifacts",
    "generate_run_id",
]
