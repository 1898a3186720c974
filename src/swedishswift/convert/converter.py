from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

from swedishswift.convert.cleaning import (
    ExplicitClearing,
    clean_field,
    clearing_source,
    lookup_key,
)
from swedishswift.convert import validators
from swedishswift.errors import MissingAccountNumber
from swedishswift.lookup.bank_table import BankFormat, BankTable
from swedishswift.lookup.loader import default_table

log = logging.getLogger(__name__)

SWIFT_ACCOUNT_NUMBER_LENGTH = 17


@dataclass(frozen=True)
class ConversionResult:
    swift_account_number: str
    swift_bank_code: Optional[str] = None
    branch_code: Optional[str] = None
    account_number: Optional[str] = None

    @property
    def resolved(self) -> bool:
        return self.swift_bank_code is not None

    def as_dict(self) -> Dict[str, Any]:
        if not self.resolved:
            return {"swift_bank_code": None, "swift_account_number": self.swift_account_number}
        return {
            "branch_code": self.branch_code,
            "account_number": self.account_number,
            "swift_bank_code": self.swift_bank_code,
            "swift_account_number": self.swift_account_number,
        }


class SwedishDetailsConverter:
    """Converts Swedish domestic details into SWIFT bank code + account number.

    Domestic details come either as
      - branch_code=<clearing number>, account_number=<serial number>, or
      - branch_code=None, account_number=<clearing number><serial number>.

    There is no way back: the clearing/serial split cannot be recovered from a
    SWIFT account number, so never feed one in here.
    """

    def __init__(
        self,
        branch_code: Optional[str] = None,
        account_number: Optional[str] = None,
        *,
        table: Optional[BankTable] = None,
    ):
        self._table = table if table is not None else default_table()
        self.branch_code = clean_field(branch_code)
        self.account_number = clean_field(account_number)

    def convert(self) -> ConversionResult:
        if self.account_number is None:
            raise MissingAccountNumber()

        source = clearing_source(self.branch_code, self.account_number)
        bank = self._table.lookup(lookup_key(source))
        if bank is None:
            log.debug("No bank for clearing prefix %r", source.key_source()[:4])
            return ConversionResult(swift_account_number=self.account_number.rjust(SWIFT_ACCOUNT_NUMBER_LENGTH, "0"))

        if isinstance(source, ExplicitClearing):
            clearing_code = source.clearing_code
            serial_number = self.account_number
        else:
            clearing_code = self.account_number[: bank.clearing_code_length]
            serial_number = self.account_number[bank.clearing_code_length :]

        if bank.zerofill_serial_number:
            # rjust never shortens, over-long serials are kept as given
            serial_number = serial_number.rjust(bank.serial_number_length, "0")

        return ConversionResult(
            branch_code=clearing_code,
            account_number=serial_number,
            swift_bank_code=bank.bank_code,
            swift_account_number=_swift_account_number(bank, clearing_code, serial_number),
        )

    @classmethod
    def valid_bank_code(cls, bank_code: str, account_number: str, *, table: Optional[BankTable] = None) -> bool:
        return validators.valid_bank_code(table if table is not None else default_table(), bank_code, account_number)

    @classmethod
    def valid_length(cls, bank_code: str, account_number: str, *, table: Optional[BankTable] = None) -> Optional[bool]:
        return validators.valid_length(table if table is not None else default_table(), bank_code, account_number)


def _swift_account_number(bank: BankFormat, clearing_code: str, serial_number: str) -> str:
    if bank.include_clearing_code:
        return (clearing_code + serial_number).rjust(SWIFT_ACCOUNT_NUMBER_LENGTH, "0")
    return serial_number.rjust(SWIFT_ACCOUNT_NUMBER_LENGTH, "0")


def convert(
    branch_code: Optional[str] = None,
    account_number: Optional[str] = None,
    *,
    table: Optional[BankTable] = None,
) -> ConversionResult:
    return SwedishDetailsConverter(branch_code, account_number, table=table).convert()
