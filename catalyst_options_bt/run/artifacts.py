"""
Run artifacts: standardized output files for each backtest run.
"""

import hashlib
import json
import logging
import random
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Literal

import pandas as pd
import yaml

from .models import BacktestOutcome

logger = logging.getLogger(__name__)

# Parent logger of the engine; the per-run file handler hangs here so runner,
# simulator and valuation messages all land in run.log.
_PACKAGE_LOGGER = logging.getLogger("catalyst_options_bt")


class RunArtifacts:
    """
    Manages run artifacts (output files) for a backtest run.

    Each run writes to: runs/<run_id>/
    - config_resolved.json|yaml
    - manifest.json
    - results.csv
    - alerts.csv
    - metrics.json
    - run.log
    """

    def __init__(
        self,
        run_dir: Path,
        run_id: str,
        config: Dict[str, Any],
        save_log: bool = True,
    ):
        """
        Initialize run artifacts writer.

        Args:
            run_dir: Root directory for runs (e.g., Path("runs"))
            run_id: Unique run ID (deterministic hash or timestamp-based)
            config: Resolved RunConfig as a JSON-compatible dictionary
            save_log: Attach a run.log file handler
        """
        self.run_dir = Path(run_dir) / run_id
        self.run_id = run_id
        self.config = config

        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.log_file = self.run_dir / "run.log"
        self._file_handler = None
        self._previous_level = None
        if save_log:
            self._setup_logging()

    def _setup_logging(self):
        """Setup file logging for this run"""
        file_handler = logging.FileHandler(self.log_file, encoding="utf-8")
        file_handler.setLevel(logging.INFO)
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(formatter)
        _PACKAGE_LOGGER.addHandler(file_handler)
        self._previous_level = _PACKAGE_LOGGER.level
        if _PACKAGE_LOGGER.level == logging.NOTSET or _PACKAGE_LOGGER.level > logging.INFO:
            _PACKAGE_LOGGER.setLevel(logging.INFO)
        self._file_handler = file_handler

    def close(self):
        """Close file handlers"""
        if self._file_handler is not None:
            _PACKAGE_LOGGER.removeHandler(self._file_handler)
            self._file_handler.close()
            self._file_handler = None
            _PACKAGE_LOGGER.setLevel(self._previous_level)

    def write_config_resolved(self, format: Literal["yaml", "json"] = "json"):
        """Write resolved configuration file"""
        if format == "yaml":
            with open(self.run_dir / "config_resolved.yaml", "w", encoding="utf-8") as f:
                yaml.safe_dump(self.config, f, default_flow_style=False, sort_keys=False)
        else:
            with open(self.run_dir / "config_resolved.json", "w", encoding="utf-8") as f:
                json.dump(self.config, f, indent=2, default=str)

    def write_manifest(self, metadata: Dict[str, Any]):
        """Write manifest.json with run metadata"""
        manifest = {
            "run_id": self.run_id,
            "created_at": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "config": self.config,
            **metadata,
        }

        with open(self.run_dir / "manifest.json", "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2, default=str)

    def write_results(self, outcome: BacktestOutcome):
        """
        Write results.csv

        Columns: day, open, high, low, close, volume, profit_loss_pct, alert_kind, alert_message
        """
        outcome.to_frame().to_csv(self.run_dir / "results.csv", index=False)

    def write_alerts(self, outcome: BacktestOutcome):
        """Write alerts.csv (every alert, including same-day ones hidden from results.csv)"""
        outcome.alerts_frame().to_csv(self.run_dir / "alerts.csv", index=False)

    def write_comparison(self, comparison: pd.DataFrame):
        comparison.to_csv(self.run_dir / "comparison.csv", index=False)

    def write_metrics(self, metrics: Dict[str, Any]):
        """Write metrics.json"""
        with open(self.run_dir / "metrics.json", "w", encoding="utf-8") as f:
            json.dump(metrics, f, indent=2, default=str)


def generate_run_id(
    config: Dict[str, Any],
    mode: Literal["deterministic", "timestamp"] = "timestamp",
) -> str:
    """
    Generate run ID.

    Args:
        config: Resolved RunConfig as dictionary
        mode: "deterministic" (hash of config) or "timestamp" (YYYYMMDD-HHMMSS-<suffix>)

    Returns:
        Run ID string
    """
    if mode == "deterministic":
        config_json = json.dumps(config, sort_keys=True, default=str)
        hash_hex = hashlib.sha256(config_json.encode("utf-8")).hexdigest()[:12]
        return f"run-{hash_hex}"

    elif mode == "timestamp":
        timestamp_str = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
        # short suffix to avoid collisions between runs started in the same second
        suffix = random.randint(100, 999)
        return f"run-{timestamp_str}-{suffix}"

    else:
        raise ValueError(f"Invalid run_id_mode: {mode}")
