"""
Receipt parsing errors.

Every failure is fatal for the whole parse: callers get either a complete
ReceiptDetails or one of these.
"""

from typing import Optional


class ReceiptParseError(ValueError):
    """Base class for all receipt parsing failures."""


class MissingSection(ReceiptParseError):
    """An anchor label never appears in the receipt."""

    def __init__(self, label: str, message: Optional[str] = None):
        self.label = label
        super().__init__(message or f"Could not find section label {label!r}")


class MissingField(ReceiptParseError):
    """The anchor was found but no value for the field follows it."""

    def __init__(self, field: str, message: Optional[str] = None):
        self.field = field
        super().__init__(message or f"Could not find value for {field}")


class UnparsableField(ReceiptParseError):
    """A value was found but failed validation."""

    def __init__(self, field: str, value: Optional[str] = None, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Could not parse {field} from {value!r}")


class NoItemsFound(ReceiptParseError):
    """The item-table header is missing."""

    def __init__(self, message: str = "Could not find items section in receipt"):
        super().__init__(message)


class MissingTotal(ReceiptParseError):
    """The grand-total line is missing."""

    def __init__(self, message: str = "Could not find total in receipt"):
        super().__init__(message)
