"""Percent-encoding of SPAYD keys and values."""
from __future__ import annotations

import re
from urllib.parse import quote, unquote_to_bytes

from ..exceptions import PercentDecodeError

RESERVED = "*:%"

# Printable ASCII without the reserved characters; everything else is escaped.
_SAFE = "".join(chr(code) for code in range(0x20, 0x7F) if chr(code) not in RESERVED)
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode(text: str) -> str:
    return quote(text, safe=_SAFE, encoding="utf-8", errors="strict")


def decode(text: str) -> str:
    """Decode ``%XX`` escapes, rejecting malformed escapes and invalid UTF-8."""

    match = _BAD_ESCAPE.search(text)
    if match:
        raise PercentDecodeError(text, f"invalid percent escape at position {match.start()}")
    try:
        return unquote_to_bytes(text).decode("utf-8")
    except UnicodeDecodeError as exc:
        raise PercentDecodeError(text, "escaped bytes are not valid UTF-8") from exc
