from __future__ import annotations


class SwedishSwiftError(ValueError):
    """Base for everything the converter raises on purpose."""


class BankTableError(SwedishSwiftError):
    pass


class InvalidClearingNumber(SwedishSwiftError):
    def __init__(self, key: str):
        super().__init__(f"clearing number prefix is not numeric: {key!r}")
        self.key = key


class MissingAccountNumber(SwedishSwiftError):
    def __init__(self) -> None:
        super().__init__("account_number is required")
