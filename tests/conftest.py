from __future__ import annotations

import pytest

from swedishswift.lookup.bank_table import BankTable


def _row(bank_code, low, high, ccl=4, snl=7, zerofill=False, include=True):
    return {
        "bank_code": bank_code,
        "range": [low, high],
        "clearing_code_length": ccl,
        "serial_number_length": snl,
        "zerofill_serial_number": zerofill,
        "include_clearing_code": include,
    }


SAMPLE_RECORDS = [
    _row("120", 1200, 1399),
    _row("300", 3300, 3300, snl=10, zerofill=True, include=False),
    _row("300", 3000, 3999),
    _row("500", 5000, 5999),
    _row("600", 6000, 6999, snl=9, zerofill=True, include=False),
    _row("800", 8000, 8999, ccl=5, snl=10, zerofill=True, include=True),
    _row("950", 9500, 9549, snl=10, zerofill=True, include=False),
]


@pytest.fixture
def sample_table() -> BankTable:
    return BankTable.from_records(SAMPLE_RECORDS)
