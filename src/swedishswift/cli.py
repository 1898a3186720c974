from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, TextIO

from swedishswift.convert.converter import SwedishDetailsConverter
from swedishswift.convert.validators import valid_bank_code, valid_length
from swedishswift.errors import SwedishSwiftError
from swedishswift.lookup.bank_table import BankTable
from swedishswift.lookup.loader import default_table, load_table
from swedishswift.utils.config import deep_get, load_config
from swedishswift.utils.logging_setup import log_event, setup_logging
from swedishswift.utils.paths import resolve_log_dir
from swedishswift.utils.request_context import new_request_id, request_scope

log = logging.getLogger("swedishswift.cli")

EXIT_INPUT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="swedishswift",
        description="Convert Swedish clearing + account numbers to SWIFT bank code and account number.",
    )
    ap.add_argument("--config", default=None, help="YAML config (default: $SWEDISHSWIFT_CONFIG or ./config.yaml)")
    ap.add_argument("--table", default=None, help="clearing number table YAML (default: bundled table)")
    sub = ap.add_subparsers(dest="command", required=True)

    ap_conv = sub.add_parser("convert", help="convert one account")
    ap_conv.add_argument("--branch-code", default=None)
    ap_conv.add_argument("account_number")

    ap_val = sub.add_parser("validate", help="check a SWIFT bank code against an account number")
    ap_val.add_argument("bank_code")
    ap_val.add_argument("account_number")

    ap_batch = sub.add_parser("batch", help="convert 'branch_code;account_number' lines from a file ('-' for stdin)")
    ap_batch.add_argument("file")
    return ap


def _resolve_table(cli_table: Optional[str], cfg: Dict[str, Any]) -> BankTable:
    path = cli_table or deep_get(cfg, ["table", "path"])
    if path:
        return load_table(Path(path))
    return default_table()


def _emit(out: TextIO, obj: Dict[str, Any]) -> None:
    out.write(json.dumps(obj, ensure_ascii=False) + "\n")


def _parse_batch_line(line: str) -> tuple[Optional[str], str]:
    if ";" in line:
        branch, account = line.split(";", 1)
        return (branch.strip() or None), account.strip()
    return None, line.strip()


def run_batch(lines: Iterable[str], table: BankTable, out: TextIO, source: str = "-") -> int:
    """Converts each non-empty line, returns the number of lines that failed."""
    failed = 0
    for line_no, line in enumerate(lines, start=1):
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        branch, account = _parse_batch_line(line)
        with request_scope(source=source, line_no=line_no):
            try:
                result = SwedishDetailsConverter(branch, account, table=table).convert()
            except SwedishSwiftError as exc:
                failed += 1
                log.warning("Line %s rejected: %s", line_no, exc)
                _emit(out, {"line": line_no, "error": str(exc)})
                continue
        _emit(out, {"line": line_no, **result.as_dict()})
    return failed


def main(argv: Optional[List[str]] = None, out: TextIO | None = None) -> int:
    out = out or sys.stdout
    args = _build_parser().parse_args(argv)

    cfg = load_config(args.config)
    try:
        setup_logging(
            resolve_log_dir(deep_get(cfg, ["logging", "dir"])),
            name="swedishswift",
            console=deep_get(cfg, ["logging", "console"]),
        )
    except OSError as exc:
        print(f"swedishswift: file logging disabled: {exc}", file=sys.stderr)

    with request_scope(request_id=new_request_id()):
        try:
            table = _resolve_table(args.table, cfg)
            if args.command == "convert":
                result = SwedishDetailsConverter(args.branch_code, args.account_number, table=table).convert()
                log_event(log, "convert.done", "Converted account", resolved=result.resolved)
                _emit(out, result.as_dict())
                return 0

            if args.command == "validate":
                payload = {
                    "valid_bank_code": valid_bank_code(table, args.bank_code, args.account_number),
                    "valid_length": valid_length(table, args.bank_code, args.account_number),
                }
                log_event(log, "validate.done", "Validated account", **payload)
                _emit(out, payload)
                return 0

            if args.file == "-":
                failed = run_batch(sys.stdin, table, out)
            else:
                with open(args.file, "r", encoding="utf-8") as fh:
                    failed = run_batch(fh, table, out, source=args.file)
            log_event(log, "batch.done", "Batch finished", source=args.file, failed=failed)
            return EXIT_INPUT_ERROR if failed else 0
        except SwedishSwiftError as exc:
            log.error("Rejected input: %s", exc)
            print(f"swedishswift: {exc}", file=sys.stderr)
            return EXIT_INPUT_ERROR
