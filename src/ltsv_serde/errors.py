"""
Error taxonomy for LTSV encoding and decoding.

Every failure raised by this package is an ``LtsvError``. The kinds form a
flat set, not a hierarchy: callers either catch ``LtsvError`` or one of the
three concrete kinds below.

    InvalidInput          malformed line, or a shape/key/value the
                          format cannot represent
    MaterializationError  the value layer could not convert between a
                          tagged Value and a Python object
    TextDecodingError     a byte sequence key/value is not valid UTF-8
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Discriminator carried by every LtsvError."""

    INVALID_INPUT = "invalid_input"
    MATERIALIZATION = "materialization"
    TEXT_DECODING = "text_decoding"


class LtsvError(Exception):
    """
    Base class for all LTSV codec errors.

    Properties:
        kind: ErrorKind of this error
        message: Human-readable description
        source: Offending input line or rendered value, when known
    """

    kind: ErrorKind

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.source = source

    def __str__(self) -> str:
        return self.message


class InvalidInput(LtsvError):
    """Raised on malformed LTSV syntax or an unrepresentable shape."""

    kind = ErrorKind.INVALID_INPUT


class MaterializationError(LtsvError):
    """Raised when a Value cannot be converted into or out of a Python type."""

    kind = ErrorKind.MATERIALIZATION


class TextDecodingError(LtsvError):
    """Raised when a byte sequence key or value is not valid UTF-8."""

    kind = ErrorKind.TEXT_DECODING


__all__ = [
    "ErrorKind",
    "LtsvError",
    "InvalidInput",
    "MaterializationError",
    "TextDecodingError",
]
