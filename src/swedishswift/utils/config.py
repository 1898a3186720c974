from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict

import yaml


DEFAULT_CONFIG_NAME = "config.yaml"
CONFIG_ENV = "SWEDISHSWIFT_CONFIG"
TABLE_ENV = "SWEDISHSWIFT_TABLE"


def load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    return data or {}


def deep_get(d: Dict[str, Any], keys: list[str], default: Any = None) -> Any:
    cur: Any = d
    for k in keys:
        if not isinstance(cur, dict) or k not in cur:
            return default
        cur = cur[k]
    return cur


def load_config(path: str | Path | None = None) -> Dict[str, Any]:
    """
    Reads the YAML config. Priority of the config location:
    1) explicit path
    2) SWEDISHSWIFT_CONFIG
    3) ./config.yaml
    SWEDISHSWIFT_TABLE overrides table.path from the file.
    """
    p = Path(path or os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_NAME)
    cfg = load_yaml(p)
    cfg.setdefault("table", {})
    cfg.setdefault("logging", {})
    table_env = os.environ.get(TABLE_ENV, "").strip()
    if table_env:
        cfg["table"]["path"] = table_env
    return cfg
