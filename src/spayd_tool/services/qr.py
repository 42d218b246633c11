"""Generate QR codes carrying a SPAYD payload."""
from __future__ import annotations

import io
from dataclasses import dataclass
from typing import Optional

import segno

from ..config import get_settings
from ..models import CHECKSUM_KEY, Descriptor
from .checksum import with_checksum


@dataclass
class SpaydQR:
    payload: str
    svg: str
    png: bytes


def generate_spayd_qr(descriptor: Descriptor, *, include_checksum: Optional[bool] = None) -> SpaydQR:
    """Encode ``descriptor`` as a QR code.

    With ``include_checksum`` unset an existing CRC32 field is kept as is;
    ``True`` recomputes it and ``False`` drops it from the payload.
    """

    settings = get_settings()
    if include_checksum:
        descriptor = with_checksum(descriptor)
    elif include_checksum is False:
        descriptor = descriptor.copy()
        descriptor.remove(CHECKSUM_KEY)
    payload = descriptor.render()
    qr = segno.make(payload, error=settings.qr_error, micro=False)
    buffer = io.StringIO()
    qr.save(buffer, kind="svg", xmldecl=False, encoding=None)
    png_buffer = io.BytesIO()
    qr.save(png_buffer, kind="png", scale=settings.qr_scale)
    return SpaydQR(payload=payload, svg=buffer.getvalue(), png=png_buffer.getvalue())
