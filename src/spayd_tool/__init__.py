"""SPAYD tool: parse, render and verify Short Payment Descriptors."""

from importlib.metadata import PackageNotFoundError, version

from .exceptions import (
    ChecksumMismatch,
    ConversionError,
    DuplicateField,
    InvalidAmount,
    InvalidDate,
    InvalidIban,
    InvalidVersion,
    MalformedField,
    PercentDecodeError,
    SpaydError,
    UnknownCurrency,
)
from .models import Descriptor, FieldKey, IbanBic, SpaydVersion, render
from .services.checksum import ChecksumStatus, compute, require_checksum, verify, with_checksum
from .services.convert import get_account, get_amount, get_currency, get_due_date
from .services.parser import parse

__all__ = [
    "ChecksumMismatch",
    "ChecksumStatus",
    "ConversionError",
    "Descriptor",
    "DuplicateField",
    "FieldKey",
    "IbanBic",
    "InvalidAmount",
    "InvalidDate",
    "InvalidIban",
    "InvalidVersion",
    "MalformedField",
    "PercentDecodeError",
    "SpaydError",
    "SpaydVersion",
    "UnknownCurrency",
    "compute",
    "get_account",
    "get_amount",
    "get_currency",
    "get_due_date",
    "get_version",
    "parse",
    "render",
    "require_checksum",
    "verify",
    "with_checksum",
]


def get_version() -> str:
    """Return the installed package version."""
    try:
        return version("spayd-tool")
    except PackageNotFoundError:  # pragma: no cover - fallback if package metadata missing
        return "0.1.0"
