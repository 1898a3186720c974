from __future__ import annotations

import pytest

from swedishswift.convert import SwedishDetailsConverter, convert
from swedishswift.errors import InvalidClearingNumber, MissingAccountNumber
from swedishswift.lookup.bank_table import BankTable


def _single_row_table(**overrides) -> BankTable:
    row = {
        "bank_code": "120",
        "range": [3300, 3300],
        "clearing_code_length": 4,
        "serial_number_length": 7,
        "zerofill_serial_number": False,
        "include_clearing_code": True,
    }
    row.update(overrides)
    return BankTable.from_records([row])


def test_separate_branch_code_keeps_account_as_serial() -> None:
    result = convert("3300", "000-1234", table=_single_row_table())
    assert result.as_dict() == {
        "branch_code": "3300",
        "account_number": "0001234",
        "swift_bank_code": "120",
        "swift_account_number": "0" * 6 + "33000001234",
    }


def test_combined_account_number_is_split_by_clearing_code_length() -> None:
    result = convert(None, "33001234567", table=_single_row_table())
    assert result.branch_code == "3300"
    assert result.account_number == "1234567"
    assert result.swift_bank_code == "120"
    assert result.swift_account_number == "0" * 6 + "33001234567"


def test_unknown_bank_pads_cleaned_account_number(sample_table) -> None:
    result = convert(None, "9999-1234", table=sample_table)
    assert result.resolved is False
    assert result.swift_bank_code is None
    assert result.swift_account_number == "0" * 9 + "99991234"
    assert result.as_dict() == {"swift_bank_code": None, "swift_account_number": "0" * 9 + "99991234"}


def test_unknown_bank_preserves_leading_zeros(sample_table) -> None:
    result = convert(None, "0123 4567", table=sample_table)
    assert result.swift_bank_code is None
    assert result.swift_account_number == "0" * 9 + "01234567"
    assert len(result.swift_account_number) == 17


def test_serial_zerofilled_when_clearing_not_embedded(sample_table) -> None:
    result = convert("6789", "12345", table=sample_table)
    assert result.account_number == "000012345"
    assert result.swift_bank_code == "600"
    assert result.swift_account_number == "0" * 8 + "000012345"


def test_over_long_serial_is_not_truncated(sample_table) -> None:
    result = convert("6789", "1234567890", table=sample_table)
    assert result.account_number == "1234567890"
    assert result.swift_account_number == "0" * 7 + "1234567890"


def test_five_digit_clearing_code_embedded(sample_table) -> None:
    result = convert(None, "8327-9 33 123 456-7", table=sample_table)
    assert result.branch_code == "83279"
    assert result.account_number == "0331234567"
    assert result.swift_bank_code == "800"
    assert result.swift_account_number == "00" + "83279" + "0331234567"


def test_single_clearing_exception_wins_over_surrounding_range(sample_table) -> None:
    exception = convert(None, "3300 000620-5124", table=sample_table)
    assert exception.swift_bank_code == "300"
    assert exception.branch_code == "3300"
    assert exception.account_number == "0006205124"
    assert exception.swift_account_number == "0" * 7 + "0006205124"

    broad = convert(None, "3301 1234567", table=sample_table)
    assert broad.swift_account_number == "0" * 6 + "33011234567"


@pytest.mark.parametrize("account", ["1", "1234567", "00001234567"])
def test_embedded_clearing_gives_17_digits_ending_with_serial(sample_table, account) -> None:
    result = convert("5440", account, table=sample_table)
    assert len(result.swift_account_number) == 17
    assert result.swift_account_number.endswith(result.account_number)
    assert result.swift_account_number.endswith("5440" + account)


def test_non_embedded_clearing_digits_do_not_change_swift_number(sample_table) -> None:
    numbers = {convert(branch, "123", table=sample_table).swift_account_number for branch in ("9500", "9521", "9549")}
    assert numbers == {"0" * 14 + "123"}


def test_missing_account_number_raises(sample_table) -> None:
    with pytest.raises(MissingAccountNumber):
        convert("5440", None, table=sample_table)


def test_non_numeric_clearing_prefix_raises(sample_table) -> None:
    with pytest.raises(InvalidClearingNumber):
        convert(None, "SE45 5000 0000 0583 9825 7466", table=sample_table)
    with pytest.raises(InvalidClearingNumber):
        convert("", "1234567", table=sample_table)


def test_converter_cleans_fields_on_construction(sample_table) -> None:
    conv = SwedishDetailsConverter(" 5440 ", "022-01.92", table=sample_table)
    assert conv.branch_code == "5440"
    assert conv.account_number == "0220192"
    assert SwedishDetailsConverter(None, "5440", table=sample_table).branch_code is None


def test_bundled_table_used_by_default() -> None:
    result = SwedishDetailsConverter(account_number="5440-0220192").convert()
    assert result.swift_bank_code == "500"
    assert result.branch_code == "5440"
    assert result.account_number == "0220192"
    assert result.swift_account_number == "0" * 6 + "54400220192"


def test_classmethod_validators_use_given_table(sample_table) -> None:
    assert SwedishDetailsConverter.valid_bank_code("500", "54400220192", table=sample_table) is True
    assert SwedishDetailsConverter.valid_length("500", "54400220192", table=sample_table) is True
    assert SwedishDetailsConverter.valid_length("500", "33001234567", table=sample_table) is None


@pytest.mark.parametrize("account", ["", " - . "])
def test_empty_account_number_is_rejected_not_padded(sample_table, account) -> None:
    with pytest.raises(InvalidClearingNumber) as exc:
        convert(None, account, table=sample_table)
    assert exc.value.key == ""


def test_padding_treats_sign_characters_as_plain_text(sample_table) -> None:
    result = convert("6789", "+12", table=sample_table)
    assert result.account_number == "000000+12"
    assert result.swift_account_number == "0" * 8 + "000000+12"
