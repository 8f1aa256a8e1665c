"""
Strategy template registry.

Templates register themselves using the @register_template decorator.
Registry provides lookup and construction with friendly error messages.
"""

from typing import Any, Callable, Dict, List, Optional
import logging

from .models import Strategy

logger = logging.getLogger(__name__)

TemplateBuilder = Callable[[str, float, Dict[str, Any]], Strategy]

# Global registry: name -> builder(ticker, spot, params)
_template_registry: Dict[str, TemplateBuilder] = {}


def register_template(name: str):
    """
    Decorator to register a strategy template builder.

    Args:
        name: Template name (must be unique)

    Example:
        @register_template("long_straddle")
        def long_straddle(ticker, spot, params):
            ...
    """
    def decorator(fn: TemplateBuilder):
        if name in _template_registry:
            logger.warning(f"Template '{name}' is already registered. Overwriting.")
        _template_registry[name] = fn
        logger.debug(f"Registered template: {name} -> {fn.__name__}")
        return fn
    return decorator


def list_templates() -> List[str]:
    return sorted(_template_registry.keys())


def build_strategy(name: str, ticker: str, spot: float, params: Optional[Dict[str, Any]] = None) -> Strategy:
    """
    Build a strategy from a registered template.

    Args:
        name: Template name (must be registered)
        ticker: Underlying ticker
        spot: Current underlying price, used to anchor strikes
        params: Template parameters (strike offsets, thresholds)

    Raises:
        ValueError: If the template name is unknown or construction fails
    """
    if name not in _template_registry:
        available = list_templates()
        if available:
            raise ValueError(f"Unknown strategy template: '{name}'. Available templates: {', '.join(available)}")
        raise ValueError(f"Unknown strategy template: '{name}'. No templates are registered.")

    builder = _template_registry[name]
    try:
        return builder(str(ticker).upper(), float(spot), dict(params or {}))
    except Exception as e:
        raise ValueError(f"Failed to build strategy template '{name}': {e}") from e
