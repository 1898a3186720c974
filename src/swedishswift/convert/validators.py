"""Plausibility checks for a SWIFT bank code + domestic account number pair.

Both checks work on the table alone and accept the input when any row for the
bank code accepts it; banks may have several ranges with different rules.
"""

from __future__ import annotations

from typing import List, Optional

from swedishswift.lookup.bank_table import BankFormat, BankTable


def _strip_leading_zeros(account_number: str) -> str:
    return account_number.lstrip("0")


def _clearing_candidate(stripped: str) -> Optional[int]:
    prefix = stripped[:4]
    if not (prefix.isascii() and prefix.isdigit()):
        return None
    return int(prefix)


def _possible_banks(table: BankTable, bank_code: str, account_number: str) -> List[BankFormat]:
    stripped = _strip_leading_zeros(account_number)
    return table.candidates_for(str(bank_code), _clearing_candidate(stripped))


def valid_bank_code(table: BankTable, bank_code: str, account_number: str) -> bool:
    return bool(_possible_banks(table, bank_code, account_number))


def _expected_length(bank: BankFormat) -> int:
    length = bank.serial_number_length
    if bank.include_clearing_code:
        length += bank.clearing_code_length
    return length


def valid_length(table: BankTable, bank_code: str, account_number: str) -> Optional[bool]:
    """True/False by length, None when the bank code itself is implausible."""
    candidates = _possible_banks(table, bank_code, account_number)
    if not candidates:
        return None

    stripped = _strip_leading_zeros(account_number)
    for bank in candidates:
        number = stripped
        if bank.zerofill_serial_number and not bank.include_clearing_code:
            number = number.rjust(bank.serial_number_length, "0")
        if len(number) == _expected_length(bank):
            return True
    return False
