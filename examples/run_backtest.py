"""
Example runner script demonstrating programmatic backtest execution.

This calls the same run_backtest() function used by the CLI.
"""

import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from catalyst_options_bt.config import load_config
from catalyst_options_bt.run import AlertKind, compare_strategies, run_backtest
from catalyst_options_bt.strategy import build_strategy, load_strategy


def main():
    """Run example backtest"""
    root = Path(__file__).parent.parent
    config_path = root / "configs" / "catalyst_default.yaml"
    strategy_path = root / "strategies" / "mrna_long_straddle.json"

    if not config_path.exists() or not strategy_path.exists():
        print(f"ERROR: Example inputs not found under {root}")
        return 1

    try:
        config = load_config(str(config_path))
        strategy = load_strategy(str(strategy_path))

        print(f"Running backtest for '{strategy.name}' with config: {config_path}")
        outcome = run_backtest(strategy, 120.0, seed=config.seed, config=config)

        print("\n" + "=" * 70)
        print("BACKTEST COMPLETE")
        print("=" * 70)
        print(f"Regime: {outcome.regime} | Shock: {outcome.shock:+.2f}")
        print(f"Final P/L: {outcome.final_profit_loss_pct:.2f}%")
        print(f"Sharpe Ratio: {outcome.metrics.sharpe_ratio:.2f}")
        print(f"Alpha: {outcome.metrics.alpha * 100:.2f}%")
        print(f"Beta: {outcome.metrics.beta:.2f}")
        print(f"Target hit on day: {outcome.first_alert_day(AlertKind.PROFIT)}")
        print(f"Stop hit on day: {outcome.first_alert_day(AlertKind.LOSS)}")
        print("=" * 70)

        # Same seed, same path: compare a saved strategy against a template
        condor = load_strategy(str(root / "strategies" / "mrna_iron_condor.yaml"))
        strangle = build_strategy("long_strangle", "MRNA", 120.0, {"width": 2})
        table = compare_strategies([strategy, condor, strangle], 120.0, seed=config.seed, config=config)
        print("\n" + table.to_string(index=False, float_format=lambda x: f"{x:.2f}"))

        return 0

    except Exception as e:
        print(f"ERROR: Backtest failed: {e}")
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
