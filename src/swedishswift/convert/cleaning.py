from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

from swedishswift.errors import InvalidClearingNumber

_BAD_CHARS_RE = re.compile(r"[-.\s]")

LOOKUP_KEY_LENGTH = 4


def clean_field(value: Optional[str]) -> Optional[str]:
    """Drop hyphens, dots and whitespace. None stays None, it means "not given"."""
    if value is None:
        return None
    return _BAD_CHARS_RE.sub("", value)


@dataclass(frozen=True)
class ExplicitClearing:
    """Clearing number was handed in separately from the account number."""

    clearing_code: str

    def key_source(self) -> str:
        return self.clearing_code


@dataclass(frozen=True)
class DerivedClearing:
    """Clearing number is the leading part of a combined account number."""

    account_number: str

    def key_source(self) -> str:
        return self.account_number


ClearingSource = Union[ExplicitClearing, DerivedClearing]


def clearing_source(branch_code: Optional[str], account_number: str) -> ClearingSource:
    if branch_code is not None:
        return ExplicitClearing(branch_code)
    return DerivedClearing(account_number)


def lookup_key(source: ClearingSource) -> int:
    key = source.key_source()[:LOOKUP_KEY_LENGTH]
    if not (key.isascii() and key.isdigit()):
        raise InvalidClearingNumber(key)
    return int(key)
