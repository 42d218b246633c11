"""Tokenizer turning raw SPAYD text into a :class:`Descriptor`."""
from __future__ import annotations

import logging

from ..exceptions import DuplicateField, InvalidVersion, MalformedField
from ..models import DELIMITER, HEADER, SEPARATOR, Descriptor, SpaydVersion
from .encoding import decode

logger = logging.getLogger(__name__)


def tokenize(raw: str) -> tuple[str, list[tuple[str, str]]]:
    """Split ``raw`` into its version segment and decoded ``(key, value)`` pairs."""

    text = raw.strip()
    segments = text.split(DELIMITER)
    if len(segments) < 2 or segments[0] != HEADER:
        raise InvalidVersion(text[:16])
    version_text, field_segments = segments[1], segments[2:]
    if field_segments and field_segments[-1] == "":
        field_segments.pop()

    pairs: list[tuple[str, str]] = []
    for segment in field_segments:
        key, sep, value = segment.partition(SEPARATOR)
        if not sep:
            raise MalformedField(segment)
        if not key:
            raise MalformedField(segment, "empty field key")
        pairs.append((decode(key), decode(value)))
    return version_text, pairs


def parse(raw: str) -> Descriptor:
    """Parse a SPAYD string; any structural error aborts the whole parse."""

    version_text, pairs = tokenize(raw)
    descriptor = Descriptor.empty(SpaydVersion.parse(version_text))
    for key, value in pairs:
        if key in descriptor:
            raise DuplicateField(key)
        descriptor.set(key, value)
    logger.debug(f"Parsed SPAYD {descriptor.version} with {len(descriptor)} fields")
    return descriptor
