"""
Configuration loader with YAML/JSON support, environment overrides, and CLI overrides.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import yaml

from .schemas import RunConfig

ENV_PREFIX = "COBT__"


def load_config(path: str) -> RunConfig:
    """
    Load configuration from YAML or JSON file.

    Args:
        path: Path to config file

    Returns:
        RunConfig validated instance

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If file format is unsupported
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    suffix = config_path.suffix.lower()

    if suffix in [".yaml", ".yml"]:
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = yaml.safe_load(f) or {}
    elif suffix == ".json":
        with open(config_path, "r", encoding="utf-8") as f:
            config_dict = json.load(f)
    else:
        raise ValueError(f"Unsupported config file format: {suffix}. Use .yaml, .yml, or .json")

    return RunConfig(**config_dict)


def _parse_value(value: str) -> Any:
    """JSON first, then true/false/null and numbers, else the raw string"""
    try:
        return json.loads(value)
    except (json.JSONDecodeError, ValueError):
        pass
    lowered = value.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if lowered == "null":
        return None
    try:
        return float(value) if "." in value else int(value)
    except ValueError:
        return value


def _set_nested(overrides: Dict[str, Any], keys: List[str], value: Any) -> None:
    current = overrides
    for key in keys[:-1]:
        if not isinstance(current.get(key), dict):
            current[key] = {}
        current = current[key]
    current[keys[-1]] = value


def _merge(cfg: RunConfig, overrides: Dict[str, Any]) -> RunConfig:
    if not overrides:
        return cfg
    config_dict = cfg.model_dump()
    config_dict = _deep_merge(config_dict, overrides)
    # Re-validate
    return RunConfig(**config_dict)


def apply_env_overrides(cfg: RunConfig, environ: Optional[Mapping[str, str]] = None) -> RunConfig:
    """
    Apply environment variable overrides to configuration.

    Environment variables must follow pattern: COBT__{section}__{key}
    Example: COBT__engine__risk_free_rate=0.03
    Top-level scalars use a single segment: COBT__seed=7

    Args:
        cfg: Base RunConfig
        environ: Mapping to read instead of os.environ

    Returns:
        RunConfig with environment overrides applied
    """
    environ = os.environ if environ is None else environ
    overrides: Dict[str, Any] = {}

    for key, value in environ.items():
        if not key.startswith(ENV_PREFIX):
            continue
        # Normalize to lowercase for Windows compatibility (env vars are often uppercase)
        parts = [p for p in key[len(ENV_PREFIX):].lower().split("__") if p]
        if not parts:
            continue
        _set_nested(overrides, parts, _parse_value(value))

    return _merge(cfg, overrides)


def apply_cli_overrides(cfg: RunConfig, sets: List[str]) -> RunConfig:
    """
    Apply CLI --set key=value overrides to configuration.

    Supports nested keys: engine.days=45 or regimes.high_volatility.shock_max=0.8
    Uses json.loads for typed values, falls back to string.

    Args:
        cfg: Base RunConfig
        sets: List of "key=value" strings from CLI --set flags

    Returns:
        RunConfig with CLI overrides applied
    """
    if not sets:
        return cfg

    overrides: Dict[str, Any] = {}

    for set_str in sets:
        if "=" not in set_str:
            raise ValueError(f"Invalid --set format: {set_str}. Expected 'key=value'")

        key_str, value_str = set_str.split("=", 1)
        key_parts = [k for k in key_str.strip().split(".") if k]
        if not key_parts:
            raise ValueError(f"Invalid --set key: {key_str!r}")

        _set_nested(overrides, key_parts, _parse_value(value_str))

    return _merge(cfg, overrides)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep merge two dictionaries"""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result
