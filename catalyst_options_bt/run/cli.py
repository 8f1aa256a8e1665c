"""
CLI entrypoint for running catalyst backtests.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np
import pandas as pd

from ..config import RunConfig, load_config, apply_env_overrides, apply_cli_overrides
from ..data.market import generate_market_snapshot
from ..data.sectors import COMPANIES, classify
from ..strategy import Strategy, build_strategy, list_templates, load_strategy
from .artifacts import RunArtifacts, generate_run_id
from .compare import compare_strategies
from .models import AlertKind, BacktestOutcome
from .runner import run_backtest

logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO"):
    """Setup logging configuration"""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def print_summary(outcome: BacktestOutcome, run_dir: Optional[Path] = None):
    """Print backtest summary to console"""
    m = outcome.metrics

    print("\n" + "=" * 70)
    print("BACKTEST SUMMARY")
    print("=" * 70)
    print(f"Strategy: {outcome.strategy_name} ({outcome.ticker}, {outcome.regime})")
    if run_dir is not None:
        print(f"Run Directory: {run_dir}")
    print("-" * 70)
    print(f"Initial Spot: {outcome.initial_spot:,.2f} | Cost Basis: {outcome.cost_basis:,.4f}")
    print(f"Catalyst Day: {outcome.catalyst_day} | Shock: {outcome.shock:+,.2f}")
    print(f"Final P/L: {outcome.final_profit_loss_pct:.2f}%")
    print(f"Sharpe Ratio: {m.sharpe_ratio:.2f}")
    print(f"Alpha: {m.alpha * 100:.2f}%")
    print(f"Beta: {m.beta:.2f}")
    print("-" * 70)
    for a in outcome.alerts():
        print(f"  Day {a.day:>2} [{a.kind.value.upper():<6}] {a.message}")
    print("=" * 70 + "\n")


def cmd_list_templates():
    print("\n" + "=" * 70)
    print("AVAILABLE STRATEGY TEMPLATES")
    print("=" * 70)
    for name in list_templates():
        print(f"  - {name}")
    print("=" * 70 + "\n")


def cmd_list_companies():
    print("\n" + "=" * 70)
    print("KNOWN COMPANIES")
    print("=" * 70)
    for c in COMPANIES.values():
        print(f"  {c.ticker:<6} {c.name:<28} {c.sector:<15} {classify(c.ticker).value}")
    print("=" * 70 + "\n")


def resolve_config(config_path: Optional[str], sets: List[str], args: argparse.Namespace) -> RunConfig:
    config = load_config(config_path) if config_path else RunConfig()
    config = apply_env_overrides(config)
    if sets:
        config = apply_cli_overrides(config, sets)

    updates = {}
    if args.seed is not None:
        updates["seed"] = args.seed
    if args.spot is not None:
        updates["spot"] = args.spot
    if args.sector is not None:
        updates["sector"] = args.sector
    if updates:
        config = RunConfig(**{**config.model_dump(), **updates})
    return config


def resolve_strategy(config: RunConfig, args: argparse.Namespace, spot: Optional[float]) -> Strategy:
    """--strategy file, then inline config strategy, then --template / config template."""
    if args.strategy:
        return load_strategy(args.strategy)
    if config.strategy is not None:
        return config.strategy.to_strategy()

    name = args.template or (config.template.name if config.template else None)
    ticker = args.ticker or (config.template.ticker if config.template else None)
    params = dict(config.template.params) if config.template else {}
    if not name or not ticker:
        raise ValueError("No strategy given: use --strategy FILE, --template NAME --ticker T, or a config strategy/template")
    if spot is None:
        raise ValueError("Template strategies need a spot price")
    return build_strategy(name, ticker, spot, params)


def resolve_spot(config: RunConfig, ticker: Optional[str]) -> Optional[float]:
    if config.spot is not None:
        return float(config.spot)
    if not ticker:
        return None
    # independent stream from the backtest's own generator
    seq = np.random.SeedSequence(config.seed)
    snapshot = generate_market_snapshot(ticker, np.random.default_rng(seq.spawn(1)[0]))
    logger.info(f"No spot configured; using synthetic quote {snapshot.spot:.2f} for {snapshot.ticker}")
    return snapshot.spot


def _ticker_hint(config: RunConfig, args: argparse.Namespace) -> Optional[str]:
    if args.ticker:
        return args.ticker
    if args.strategy:
        return load_strategy(args.strategy).ticker
    if config.strategy is not None:
        return config.strategy.ticker
    if config.template is not None:
        return config.template.ticker
    return None


def cmd_dry_run(config: RunConfig, run_id_mode: str):
    """Dry run: resolve config and print run ID without executing"""
    config_dict = config.model_dump(mode="json")
    run_id = generate_run_id(config_dict, mode=run_id_mode)

    print("\n" + "=" * 70)
    print("DRY RUN - Configuration Resolved")
    print("=" * 70)
    print(f"Run ID (mode: {run_id_mode}): {run_id}")
    print(f"Days: {config.engine.days} | Catalyst Day: {config.engine.catalyst_day}")
    print(f"Risk-free Rate: {config.engine.risk_free_rate}")
    print(f"Seed: {config.seed} | Spot: {config.spot} | Sector: {config.sector or 'auto'}")
    print("=" * 70 + "\n")
    return run_id


def cmd_run(config: RunConfig, strategy: Strategy, spot: float, run_id_mode: str, write_artifacts: bool) -> BacktestOutcome:
    """Run one backtest and write its artifacts"""
    if not write_artifacts:
        outcome = run_backtest(strategy, spot, sector=config.sector, seed=config.seed, config=config)
        print_summary(outcome)
        return outcome

    config_dict = config.model_dump(mode="json")
    run_id = generate_run_id(config_dict, mode=run_id_mode)
    # artifacts first so the run's own log lines land in run.log
    artifacts = RunArtifacts(Path(config.reporting.run_dir_root), run_id, config_dict, save_log=config.reporting.save_log)
    try:
        artifacts.write_config_resolved(format=config.reporting.config_format)
        outcome = run_backtest(strategy, spot, sector=config.sector, seed=config.seed, config=config)
        artifacts.write_manifest(
            {
                "strategy": strategy.name,
                "ticker": strategy.ticker,
                "regime": outcome.regime,
                "initial_spot": spot,
                "profit_alert_day": outcome.first_alert_day(AlertKind.PROFIT),
                "loss_alert_day": outcome.first_alert_day(AlertKind.LOSS),
            }
        )
        if config.reporting.save_csv:
            artifacts.write_results(outcome)
            artifacts.write_alerts(outcome)
        artifacts.write_metrics(
            {
                "alpha": outcome.metrics.alpha,
                "beta": outcome.metrics.beta,
                "sharpe_ratio": outcome.metrics.sharpe_ratio,
                "final_profit_loss_pct": outcome.final_profit_loss_pct,
                "cost_basis": outcome.cost_basis,
                "initial_value": outcome.initial_value,
            }
        )
    finally:
        artifacts.close()

    print_summary(outcome, artifacts.run_dir)
    return outcome


def cmd_compare(config: RunConfig, paths: List[str], spot: float, run_id_mode: str, write_artifacts: bool) -> pd.DataFrame:
    strategies = [load_strategy(p) for p in paths]
    table = compare_strategies(strategies, spot, seed=config.seed, config=config)

    print("\n" + "=" * 70)
    print("STRATEGY COMPARISON")
    print("=" * 70)
    with pd.option_context("display.width", 140, "display.max_columns", None):
        print(table.to_string(index=False, float_format=lambda x: f"{x:.2f}"))
    print("=" * 70 + "\n")

    if write_artifacts:
        config_dict = config.model_dump(mode="json")
        run_id = generate_run_id({**config_dict, "compare": list(paths)}, mode=run_id_mode)
        artifacts = RunArtifacts(Path(config.reporting.run_dir_root), run_id, config_dict, save_log=False)
        try:
            artifacts.write_config_resolved(format=config.reporting.config_format)
            artifacts.write_comparison(table)
        finally:
            artifacts.close()
    return table


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entrypoint"""
    parser = argparse.ArgumentParser(
        description="Catalyst Options Backtest Engine - CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Backtest a saved strategy at a given spot
  python -m catalyst_options_bt.run --strategy strategies/mrna_iron_condor.yaml --spot 120 --seed 7

  # Backtest a template with a config file
  python -m catalyst_options_bt.run --config configs/catalyst_default.yaml --template long_straddle --ticker VRTX

  # Override config values
  python -m catalyst_options_bt.run --config configs/catalyst_default.yaml --set engine.risk_free_rate=0.03

  # Compare candidates on a common path
  python -m catalyst_options_bt.run --compare strategies/mrna_long_straddle.json strategies/mrna_iron_condor.yaml --spot 120 --seed 7
        """,
    )

    parser.add_argument("--config", type=str, help="Path to config file (YAML or JSON)")
    parser.add_argument("--strategy", type=str, help="Path to a strategy file (YAML or JSON)")
    parser.add_argument("--template", type=str, help="Build the strategy from a registered template")
    parser.add_argument("--ticker", type=str, help="Ticker for --template")
    parser.add_argument("--spot", type=float, help="Initial underlying price (default: synthetic quote)")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible run")
    parser.add_argument(
        "--sector",
        choices=["high_volatility", "moderate_volatility"],
        help="Override the ticker's volatility regime",
    )
    parser.add_argument(
        "--set",
        action="append",
        dest="sets",
        metavar="KEY=VALUE",
        help="Override config value (can be used multiple times). Use nested keys: engine.days=45",
    )
    parser.add_argument("--compare", nargs="+", metavar="FILE", help="Compare several strategy files")
    parser.add_argument(
        "--run-id-mode",
        choices=["deterministic", "timestamp"],
        default="timestamp",
        help="Run ID generation mode (default: timestamp)",
    )
    parser.add_argument("--no-artifacts", action="store_true", help="Do not write run artifacts")
    parser.add_argument("--dry-run", action="store_true", help="Resolve config and print run ID without executing")
    parser.add_argument("--list-templates", action="store_true", help="List strategy templates and exit")
    parser.add_argument("--list-companies", action="store_true", help="List known companies and exit")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    if args.list_templates:
        cmd_list_templates()
        return 0
    if args.list_companies:
        cmd_list_companies()
        return 0

    try:
        config = resolve_config(args.config, args.sets or [], args)

        if args.dry_run:
            cmd_dry_run(config, args.run_id_mode)
            return 0

        write_artifacts = not args.no_artifacts

        if args.compare:
            first = load_strategy(args.compare[0])
            spot = resolve_spot(config, first.ticker)
            cmd_compare(config, args.compare, spot, args.run_id_mode, write_artifacts)
            return 0

        spot = resolve_spot(config, _ticker_hint(config, args))
        strategy = resolve_strategy(config, args, spot)
        if spot is None:
            spot = resolve_spot(config, strategy.ticker)
        cmd_run(config, strategy, spot, args.run_id_mode, write_artifacts)
        return 0

    except Exception as e:
        print(f"ERROR: {e}", file=sys.stderr)
        logger.exception("Backtest failed")
        return 1


if __name__ == "__main__":
    sys.exit(main())
