"""Validation helpers for account and currency values."""
from __future__ import annotations

import re

import pycountry
from stdnum import bic, iban
from stdnum.exceptions import ValidationError

from ..exceptions import InvalidBic, InvalidIban, UnknownCurrency
from ..models import CurrencyCode

_CURRENCY_RE = re.compile(r"[A-Z]{3}")


def validate_iban(value: str) -> str:
    """Return the compact IBAN, checking its checksum and country structure."""

    try:
        return iban.validate(value)
    except ValidationError as exc:
        raise InvalidIban(value) from exc


def validate_bic(value: str) -> str:
    try:
        return bic.validate(value)
    except ValidationError as exc:
        raise InvalidBic(value) from exc


def lookup_currency(value: str) -> CurrencyCode:
    if not _CURRENCY_RE.fullmatch(value):
        raise UnknownCurrency(value)
    currency = pycountry.currencies.get(alpha_3=value)
    if currency is None:
        raise UnknownCurrency(value)
    return CurrencyCode(
        code=currency.alpha_3,
        name=currency.name,
        numeric=getattr(currency, "numeric", None),
    )
