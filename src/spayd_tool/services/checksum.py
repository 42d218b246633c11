"""Optional CRC32 integrity suffix.

The digest covers the canonical text of every field except ``CRC32`` itself,
in stored order and including the delimiter that precedes the checksum
field. It guards against transcription errors only and offers no
authenticity guarantees.
"""
from __future__ import annotations

import logging
import re
import zlib
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..config import get_settings
from ..exceptions import ChecksumMismatch, MissingChecksum
from ..models import CHECKSUM_KEY, Descriptor

logger = logging.getLogger(__name__)

_DIGEST_RE = re.compile(r"[0-9A-Fa-f]{8}")


class ChecksumStatus(str, Enum):
    PASSED = "passed"
    NOT_PROVIDED = "not_provided"
    MISMATCH = "mismatch"


@dataclass
class ChecksumReport:
    status: ChecksumStatus
    expected: Optional[str] = None
    actual: Optional[str] = None


def compute(descriptor: Descriptor) -> int:
    return zlib.crc32(descriptor.canonical_text().encode("utf-8")) & 0xFFFFFFFF


def format_digest(value: int, uppercase: Optional[bool] = None) -> str:
    if uppercase is None:
        uppercase = get_settings().checksum_uppercase
    return f"{value:08X}" if uppercase else f"{value:08x}"


def verify(descriptor: Descriptor) -> ChecksumStatus:
    """Check the stored digest against the fields.

    Returns ``NOT_PROVIDED`` when there is no checksum field, since SPAYD
    values are valid without one. Raises :class:`ChecksumMismatch` when the
    stored value is not an 8-digit hex number or differs from the computed one.
    """

    stored = descriptor.checksum
    if stored is None:
        return ChecksumStatus.NOT_PROVIDED
    expected = format_digest(compute(descriptor))
    if not _DIGEST_RE.fullmatch(stored) or int(stored, 16) != int(expected, 16):
        logger.warning(f"CRC32 mismatch: expected {expected}, found {stored}")
        raise ChecksumMismatch(expected, stored)
    return ChecksumStatus.PASSED


def require_checksum(descriptor: Descriptor) -> ChecksumStatus:
    if descriptor.checksum is None:
        raise MissingChecksum()
    return verify(descriptor)


def checksum_status(descriptor: Descriptor) -> ChecksumReport:
    """Non-raising variant of :func:`verify` for inspection output."""

    try:
        status = verify(descriptor)
    except ChecksumMismatch as exc:
        return ChecksumReport(ChecksumStatus.MISMATCH, expected=exc.expected, actual=exc.actual)
    if status is ChecksumStatus.PASSED:
        return ChecksumReport(status, expected=format_digest(compute(descriptor)), actual=descriptor.checksum)
    return ChecksumReport(status)


def with_checksum(descriptor: Descriptor, uppercase: Optional[bool] = None) -> Descriptor:
    """Return a copy of ``descriptor`` carrying a freshly computed CRC32 field."""

    signed = descriptor.copy()
    signed.remove(CHECKSUM_KEY)
    signed.set(CHECKSUM_KEY, format_digest(compute(descriptor), uppercase))
    logger.debug(f"Appended CRC32 {signed.checksum}")
    return signed
