from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

import yaml

from swedishswift.errors import BankTableError
from swedishswift.lookup.bank_table import BankTable

log = logging.getLogger(__name__)

BUNDLED_TABLE_PATH = Path(__file__).resolve().parent / "data" / "swedish_bank_lookup.yaml"

_DEFAULT_TABLE: Optional[BankTable] = None
_DEFAULT_TABLE_LOCK = threading.Lock()


def load_table(path: Path | str | None = None) -> BankTable:
    """Read a clearing number table from YAML (bundled table when path is None)."""
    p = Path(path) if path else BUNDLED_TABLE_PATH
    try:
        raw = yaml.safe_load(p.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise BankTableError(f"bank table not found: {p}") from exc
    except yaml.YAMLError as exc:
        raise BankTableError(f"bank table {p} is not valid YAML: {exc}") from exc

    if not isinstance(raw, list):
        raise BankTableError(f"bank table {p} must be a list of records")
    table = BankTable.from_records(raw)
    log.debug("Loaded bank table path=%s rows=%s", p, len(table))
    return table


def default_table() -> BankTable:
    """Bundled table, loaded once per process and shared read-only."""
    global _DEFAULT_TABLE
    if _DEFAULT_TABLE is not None:
        return _DEFAULT_TABLE
    with _DEFAULT_TABLE_LOCK:
        if _DEFAULT_TABLE is None:
            _DEFAULT_TABLE = load_table()
    return _DEFAULT_TABLE
