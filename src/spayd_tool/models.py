"""In-memory model of a Short Payment Descriptor."""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional, Union

from .exceptions import InvalidVersion
from .services.encoding import encode

HEADER = "SPD"
DELIMITER = "*"
SEPARATOR = ":"

_VERSION_RE = re.compile(r"([0-9]+)\.([0-9]+)")


class FieldKey(str, Enum):
    ACCOUNT = "ACC"
    ALTERNATIVE_ACCOUNTS = "ALT-ACC"
    AMOUNT = "AM"
    CURRENCY = "CC"
    REFERENCE = "RF"
    RECIPIENT = "RN"
    DUE_DATE = "DT"
    PAYMENT_TYPE = "PT"
    MESSAGE = "MSG"
    CRC32 = "CRC32"
    VARIABLE_SYMBOL = "X-VS"
    SPECIFIC_SYMBOL = "X-SS"
    CONSTANT_SYMBOL = "X-KS"


CHECKSUM_KEY = FieldKey.CRC32.value

Key = Union[str, FieldKey]


def normalize_key(key: Key) -> str:
    if isinstance(key, FieldKey):
        return key.value
    if not isinstance(key, str):
        raise TypeError(f"Field key must be str, got {type(key).__name__}")
    return key


@dataclass(frozen=True, order=True)
class SpaydVersion:
    major: int
    minor: int

    @classmethod
    def parse(cls, text: str) -> SpaydVersion:
        match = _VERSION_RE.fullmatch(text)
        if not match:
            raise InvalidVersion(text)
        return cls(int(match.group(1)), int(match.group(2)))

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}"


V1_0 = SpaydVersion(1, 0)


@dataclass(frozen=True)
class IbanBic:
    """An account field value: IBAN with an optional BIC after ``+``."""

    iban: str
    bic: Optional[str] = None

    def __str__(self) -> str:
        if self.bic:
            return f"{self.iban}+{self.bic}"
        return self.iban


@dataclass(frozen=True)
class CurrencyCode:
    code: str
    name: str
    numeric: Optional[str] = None

    def __str__(self) -> str:
        return self.code


@dataclass(eq=False)
class Descriptor:
    """Version marker plus an insertion-ordered mapping of raw field values.

    Values are stored exactly as decoded text. The ``CRC32`` field lives in the
    same mapping but is excluded from :meth:`canonical_items` and always
    rendered last.
    """

    version: SpaydVersion = V1_0
    fields: dict[str, str] = field(default_factory=dict)

    @classmethod
    def empty(cls, version: Optional[SpaydVersion] = None) -> Descriptor:
        return cls(version or V1_0)

    @classmethod
    def of(cls, pairs: Iterable[tuple[Key, str]], version: Optional[SpaydVersion] = None) -> Descriptor:
        descriptor = cls.empty(version)
        for key, value in pairs:
            descriptor.set(key, value)
        return descriptor

    def get(self, key: Key, default: Optional[str] = None) -> Optional[str]:
        return self.fields.get(normalize_key(key), default)

    def set(self, key: Key, value: str) -> None:
        """Overwrite in place or append; no coercion of non-text values."""

        key = normalize_key(key)
        if not key:
            raise ValueError("Field key must not be empty")
        if not isinstance(value, str):
            raise TypeError(f"Value of {key!r} must be str, got {type(value).__name__}")
        self.fields[key] = value

    def remove(self, key: Key) -> Optional[str]:
        return self.fields.pop(normalize_key(key), None)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, FieldKey):
            key = key.value
        return key in self.fields

    def __len__(self) -> int:
        return len(self.fields)

    def __iter__(self) -> Iterator[str]:
        return iter(self.fields)

    def keys(self) -> list[str]:
        return list(self.fields)

    def items(self) -> list[tuple[str, str]]:
        return list(self.fields.items())

    def copy(self) -> Descriptor:
        return Descriptor(self.version, dict(self.fields))

    @property
    def checksum(self) -> Optional[str]:
        return self.fields.get(CHECKSUM_KEY)

    def canonical_items(self) -> Iterator[tuple[str, str]]:
        return ((k, v) for k, v in self.fields.items() if k != CHECKSUM_KEY)

    def canonical_text(self) -> str:
        """Rendered text of every field except the checksum, trailing delimiter included."""

        parts = [f"{HEADER}{DELIMITER}{self.version}{DELIMITER}"]
        for key, value in self.canonical_items():
            parts.append(f"{encode(key)}{SEPARATOR}{encode(value)}{DELIMITER}")
        return "".join(parts)

    def render(self) -> str:
        text = self.canonical_text()
        if self.checksum is not None:
            text += f"{CHECKSUM_KEY}{SEPARATOR}{encode(self.checksum)}{DELIMITER}"
        return text

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Descriptor):
            return NotImplemented
        return (
            self.version == other.version
            and list(self.canonical_items()) == list(other.canonical_items())
            and self.checksum == other.checksum
        )

    __hash__ = None  # type: ignore[assignment]


def render(descriptor: Descriptor) -> str:
    """Return the canonical SPAYD text for ``descriptor``."""

    return descriptor.render()
