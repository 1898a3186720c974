from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Sequence, Tuple

from swedishswift.errors import BankTableError

_REQUIRED_KEYS = (
    "bank_code",
    "range",
    "clearing_code_length",
    "serial_number_length",
    "zerofill_serial_number",
    "include_clearing_code",
)


@dataclass(frozen=True)
class BankFormat:
    """One row of the Swedish clearing number table.

    `clearing_range` is inclusive on both ends.
    """

    bank_code: str
    clearing_range: Tuple[int, int]
    clearing_code_length: int
    serial_number_length: int
    zerofill_serial_number: bool
    include_clearing_code: bool

    def covers(self, clearing_number: int) -> bool:
        low, high = self.clearing_range
        return low <= clearing_number <= high


def _as_bool(v: Any, field: str, idx: int) -> bool:
    if isinstance(v, bool):
        return v
    raise BankTableError(f"record {idx}: {field} must be a boolean, got {v!r}")


def _as_int(v: Any, field: str, idx: int) -> int:
    if isinstance(v, bool) or not isinstance(v, int):
        raise BankTableError(f"record {idx}: {field} must be an integer, got {v!r}")
    return v


def _record_to_format(raw: Mapping[str, Any], idx: int) -> BankFormat:
    if not isinstance(raw, Mapping):
        raise BankTableError(f"record {idx}: expected a mapping, got {type(raw).__name__}")
    missing = [k for k in _REQUIRED_KEYS if k not in raw]
    if missing:
        raise BankTableError(f"record {idx}: missing {', '.join(missing)}")

    bounds = raw["range"]
    if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
        raise BankTableError(f"record {idx}: range must be a [low, high] pair, got {bounds!r}")
    low = _as_int(bounds[0], "range", idx)
    high = _as_int(bounds[1], "range", idx)
    if low > high:
        raise BankTableError(f"record {idx}: range {low}..{high} is empty")

    bank_code = raw["bank_code"]
    if bank_code is None or str(bank_code).strip() == "":
        raise BankTableError(f"record {idx}: bank_code is empty")

    return BankFormat(
        bank_code=str(bank_code).strip(),
        clearing_range=(low, high),
        clearing_code_length=_as_int(raw["clearing_code_length"], "clearing_code_length", idx),
        serial_number_length=_as_int(raw["serial_number_length"], "serial_number_length", idx),
        zerofill_serial_number=_as_bool(raw["zerofill_serial_number"], "zerofill_serial_number", idx),
        include_clearing_code=_as_bool(raw["include_clearing_code"], "include_clearing_code", idx),
    )


class BankTable:
    """Ordered, read-only sequence of BankFormat rows.

    Lookups scan in table order and the first covering row wins, so narrow
    exceptions must be listed before the broad range they sit inside.
    """

    def __init__(self, formats: Iterable[BankFormat]):
        self._formats: Tuple[BankFormat, ...] = tuple(formats)

    @classmethod
    def from_records(cls, records: Sequence[Mapping[str, Any]]) -> "BankTable":
        if records is None:
            raise BankTableError("no records given")
        return cls(_record_to_format(r, i) for i, r in enumerate(records))

    def __iter__(self) -> Iterator[BankFormat]:
        return iter(self._formats)

    def __len__(self) -> int:
        return len(self._formats)

    def lookup(self, clearing_number: int) -> Optional[BankFormat]:
        for bank in self._formats:
            if bank.covers(clearing_number):
                return bank
        return None

    def candidates_for(self, bank_code: str, clearing_number: Optional[int]) -> List[BankFormat]:
        """Rows that could own an account with this bank code.

        Rows that leave the clearing code out of the SWIFT number are not range
        checked. `clearing_number` of None only matches those rows.
        """
        out: List[BankFormat] = []
        for bank in self._formats:
            if bank.bank_code != bank_code:
                continue
            if not bank.include_clearing_code:
                out.append(bank)
            elif clearing_number is not None and bank.covers(clearing_number):
                out.append(bank)
        return out
