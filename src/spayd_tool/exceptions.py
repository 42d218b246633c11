"""Error taxonomy for SPAYD parsing, checksums and typed conversions."""
from __future__ import annotations

from typing import Optional


class SpaydError(ValueError):
    """Base exception for all SPAYD errors."""


class ParseError(SpaydError):
    """Raised when raw text is not a structurally valid descriptor."""


class MalformedField(ParseError):
    def __init__(self, segment: str, reason: str = "missing ':' separator") -> None:
        self.segment = segment
        self.reason = reason
        super().__init__(f"Malformed field {segment!r}: {reason}")


class InvalidVersion(ParseError):
    def __init__(self, text: str) -> None:
        self.text = text
        super().__init__(f"Invalid SPAYD header or version: {text!r}")


class DuplicateField(ParseError):
    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Duplicate field {key!r}")


class PercentDecodeError(ParseError):
    def __init__(self, text: str, reason: str = "invalid percent escape") -> None:
        self.text = text
        self.reason = reason
        super().__init__(f"Cannot decode {text!r}: {reason}")


class ChecksumError(SpaydError):
    """Raised when the CRC32 integrity check cannot be satisfied."""


class ChecksumMismatch(ChecksumError):
    """Stored and computed CRC32 digests differ.

    ``expected`` is the digest computed from the fields, ``actual`` is the
    text stored in the checksum field.
    """

    def __init__(self, expected: str, actual: str) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"CRC32 mismatch: expected {expected}, found {actual}")


class MissingChecksum(ChecksumError):
    def __init__(self) -> None:
        super().__init__("CRC32 checksum is required but not present")


class ConversionError(SpaydError):
    """Raised when a single field cannot be converted to its semantic type."""

    def __init__(self, text: str, message: Optional[str] = None, key: Optional[str] = None) -> None:
        self.text = text
        self.key = key
        super().__init__(message or f"Cannot convert {text!r}")


class MissingField(ConversionError):
    def __init__(self, key: str) -> None:
        super().__init__("", f"Field {key!r} is missing", key=key)


class InvalidAmount(ConversionError):
    def __init__(self, text: str) -> None:
        super().__init__(text, f"Invalid amount {text!r}")


class InvalidDate(ConversionError):
    def __init__(self, text: str) -> None:
        super().__init__(text, f"Invalid date {text!r}, expected YYYYMMDD")


class UnknownCurrency(ConversionError):
    def __init__(self, text: str) -> None:
        super().__init__(text, f"Unknown ISO 4217 currency {text!r}")


class InvalidIban(ConversionError):
    def __init__(self, text: str) -> None:
        super().__init__(text, f"Invalid IBAN {text!r}")


class InvalidBic(ConversionError):
    def __init__(self, text: str) -> None:
        super().__init__(text, f"Invalid BIC {text!r}")
