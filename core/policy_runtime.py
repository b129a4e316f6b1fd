"""Configuration loading for the graph runtime."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml

CONFIG_ENV_VAR = "WASM_DAG_CONFIG"


def load_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML config file; a missing file yields an empty mapping."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` into ``base``, descending into nested mappings."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path, override_path: Path | None = None) -> dict[str, Any]:
    """Merge ``config/default.yaml`` with an optional override file.

    The override comes from ``override_path`` or, failing that, the
    ``WASM_DAG_CONFIG`` environment variable. A named override that does not
    exist is an error; a missing default file is not.
    """
    config = load_yaml(root / "config" / "default.yaml")
    if override_path is None and os.environ.get(CONFIG_ENV_VAR):
        override_path = Path(os.environ[CONFIG_ENV_VAR])
    if override_path is not None:
        if not override_path.exists():
            raise ValueError(f"Config override not found: {override_path}")
        config = merge_dicts(config, load_yaml(override_path))
    return config


def runtime_settings(config: dict[str, Any]) -> dict[str, Any]:
    """Executor settings with defaults applied."""
    runtime_cfg = config.get("runtime", {})
    return {
        "entry_point": str(runtime_cfg.get("entry_point", "main")),
        "allow_wat": bool(runtime_cfg.get("allow_wat", True)),
    }
