"""
Strategy module: immutable strategy model, ingestion, and template registry.

Templates are registered via @register_template when `templates` is imported,
which this __init__.py does explicitly so registration is deterministic.
"""

from .models import (
    Action,
    OptionKind,
    OptionLeg,
    Strategy,
    StrategyDefinition,
    StrategyError,
    parse_percent,
    strategy_from_dict,
    load_strategy,
)
from .registry import register_template, list_templates, build_strategy
from . import templates  # noqa: F401  (registers built-in templates)

__all__ = [
    "Action",
    "OptionKind",
    "OptionLeg",
    "Strategy",
    "StrategyDefinition",
    "StrategyError",
    "parse_percent",
    "strategy_from_dict",
    "load_strategy",
    "register_template",
    "list_templates",
    "build_strategy",
]
