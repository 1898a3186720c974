from __future__ import annotations

import os
import sys
from pathlib import Path

APP_NAME = "swedishswift"


def default_data_dir() -> Path:
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / APP_NAME
    base = os.environ.get("LOCALAPPDATA") or os.environ.get("XDG_STATE_HOME") or str(Path.home() / ".local" / "state")
    return Path(base) / APP_NAME


def _repo_root() -> Path:
    # src/swedishswift/utils/paths.py -> repo root is three parents up
    return Path(__file__).resolve().parents[3]


def _is_checkout(root: Path) -> bool:
    return (root / "pyproject.toml").is_file() or (root / "src" / APP_NAME).is_dir()


def default_log_dir() -> Path:
    # repo root/LOG in a checkout, per-user data dir once installed
    root = _repo_root()
    if _is_checkout(root):
        return root / "LOG"
    return default_data_dir() / "LOG"


def resolve_log_dir(log_dir: str | None) -> Path:
    ld = Path(log_dir) if log_dir else default_log_dir()
    ld.mkdir(parents=True, exist_ok=True)
    return ld
