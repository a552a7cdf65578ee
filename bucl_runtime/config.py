"""BUCL config loader.

Reads bucl.config (YAML) from the project directory, layered over
DEFAULTS.  The result is cached after the first load; call
_reset_config() in tests.
"""

import os
import yaml

from bucl_runtime.exceptions import BuclConfigError

_config = None

CONFIG_FILENAME = "bucl.config"

DEFAULTS = {
    "functions": {
        "subfolder": "functions",
        "extension": ".bucl",
        "search_cwd": True,
        "stdlib": True,
    },
    "output": {
        "stream": True,
    },
    "limits": {
        "max_call_depth": 64,
    },
    "trace": False,
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Layer ``override`` on top of ``base``; nested sections merge key by key."""
    merged = dict(base)
    for key, val in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(val, dict):
            merged[key] = _deep_merge(current, val)
        else:
            merged[key] = val
    return merged


def call_depth_limit(config: dict) -> int:
    """``limits.max_call_depth`` as a positive integer."""
    limits = config.get("limits")
    value = limits.get("max_call_depth") if isinstance(limits, dict) else None
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise BuclConfigError(
            f"limits.max_call_depth must be a positive integer, got {value!r}"
        )
    return value


def _load_file(config_path: str) -> dict:
    """User settings from ``config_path``; {} when absent or not a mapping."""
    if not os.path.exists(config_path):
        return {}
    with open(config_path) as f:
        try:
            loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise BuclConfigError(f"Invalid {config_path}: {e}") from e
    return loaded if isinstance(loaded, dict) else {}


def get_config(config_dir: str | None = None) -> dict:
    """Return the BUCL config for ``config_dir`` (default: cwd), cached."""
    global _config
    if _config is None:
        base = config_dir if config_dir is not None else os.getcwd()
        config = _deep_merge(DEFAULTS, _load_file(os.path.join(base, CONFIG_FILENAME)))
        call_depth_limit(config)
        _config = config
    return _config


def _reset_config():
    """Clear cached config. Call this in tests."""
    global _config
    _config = None
