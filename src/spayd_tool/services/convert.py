"""Typed projections of raw descriptor fields.

Every parse function is pure and independent: converting one field never
touches the stored text of any other field, and a failed conversion is
reported only to the caller who asked for it.
"""
from __future__ import annotations

import re
from datetime import date
from decimal import Decimal
from typing import Any, Callable, Iterable, Optional, Union

from ..exceptions import ConversionError, InvalidAmount, InvalidDate, MissingField
from ..models import CurrencyCode, Descriptor, FieldKey, IbanBic, Key, normalize_key
from .validators import lookup_currency, validate_bic, validate_iban

_AMOUNT_RE = re.compile(r"[+-]?[0-9]+(\.[0-9]+)?")
_DATE_RE = re.compile(r"[0-9]{8}")

Converter = Callable[[str], Any]


def parse_amount(text: str) -> Decimal:
    if not _AMOUNT_RE.fullmatch(text):
        raise InvalidAmount(text)
    return Decimal(text)


def parse_date(text: str) -> date:
    if not _DATE_RE.fullmatch(text):
        raise InvalidDate(text)
    try:
        return date(int(text[:4]), int(text[4:6]), int(text[6:]))
    except ValueError as exc:
        raise InvalidDate(text) from exc


def parse_currency(text: str) -> CurrencyCode:
    return lookup_currency(text)


def parse_account(text: str) -> IbanBic:
    """Parse ``IBAN`` or ``IBAN+BIC``."""

    iban_text, sep, bic_text = text.partition("+")
    account = validate_iban(iban_text)
    if sep:
        return IbanBic(account, validate_bic(bic_text))
    return IbanBic(account)


def parse_accounts(text: str) -> list[IbanBic]:
    return [parse_account(item) for item in text.split(",")]


def format_amount(amount: Decimal) -> str:
    text = format(amount, "f")
    if not _AMOUNT_RE.fullmatch(text):
        raise InvalidAmount(text)
    return text


def format_date(value: date) -> str:
    return f"{value.year:04d}{value.month:02d}{value.day:02d}"


CONVERTERS: dict[str, Converter] = {
    FieldKey.ACCOUNT.value: parse_account,
    FieldKey.ALTERNATIVE_ACCOUNTS.value: parse_accounts,
    FieldKey.AMOUNT.value: parse_amount,
    FieldKey.CURRENCY.value: parse_currency,
    FieldKey.DUE_DATE.value: parse_date,
}


def converter_registry() -> dict[str, Converter]:
    """Return a private copy of the default accessors for callers to extend."""

    return dict(CONVERTERS)


def register_converter(registry: dict[str, Converter], key: Key, converter: Converter) -> None:
    """Attach a typed accessor to ``key`` in a registry from :func:`converter_registry`."""

    if registry is CONVERTERS:
        raise ValueError("Extend a copy from converter_registry(), not the shared defaults")
    registry[normalize_key(key)] = converter


def _field_converted(descriptor: Descriptor, key: Key, converter: Converter) -> Any:
    text = descriptor.get(key)
    name = normalize_key(key)
    if text is None:
        raise MissingField(name)
    try:
        return converter(text)
    except ConversionError as exc:
        exc.key = name
        raise


def convert_field(descriptor: Descriptor, key: Key, registry: Optional[dict[str, Converter]] = None) -> Any:
    name = normalize_key(key)
    converter = (CONVERTERS if registry is None else registry).get(name)
    if converter is None:
        raise KeyError(f"No typed accessor registered for {name!r}")
    return _field_converted(descriptor, name, converter)


def typed_values(
    descriptor: Descriptor, registry: Optional[dict[str, Converter]] = None
) -> dict[str, Union[Any, ConversionError]]:
    """Convert every field that has an accessor, collecting errors instead of raising."""

    if registry is None:
        registry = CONVERTERS
    values: dict[str, Union[Any, ConversionError]] = {}
    for key in descriptor:
        if key not in registry:
            continue
        try:
            values[key] = convert_field(descriptor, key, registry)
        except ConversionError as exc:
            values[key] = exc
    return values


def get_account(descriptor: Descriptor) -> IbanBic:
    return _field_converted(descriptor, FieldKey.ACCOUNT, parse_account)


def get_alternative_accounts(descriptor: Descriptor) -> list[IbanBic]:
    return _field_converted(descriptor, FieldKey.ALTERNATIVE_ACCOUNTS, parse_accounts)


def get_amount(descriptor: Descriptor) -> Decimal:
    return _field_converted(descriptor, FieldKey.AMOUNT, parse_amount)


def get_currency(descriptor: Descriptor) -> CurrencyCode:
    return _field_converted(descriptor, FieldKey.CURRENCY, parse_currency)


def get_due_date(descriptor: Descriptor) -> date:
    return _field_converted(descriptor, FieldKey.DUE_DATE, parse_date)


def set_account(descriptor: Descriptor, account: Union[IbanBic, str]) -> None:
    if isinstance(account, str):
        account = parse_account(account)
    descriptor.set(FieldKey.ACCOUNT, str(account))


def set_alternative_accounts(descriptor: Descriptor, accounts: Iterable[Union[IbanBic, str]]) -> None:
    items = [parse_account(acc) if isinstance(acc, str) else acc for acc in accounts]
    descriptor.set(FieldKey.ALTERNATIVE_ACCOUNTS, ",".join(str(acc) for acc in items))


def set_amount(descriptor: Descriptor, amount: Decimal) -> None:
    descriptor.set(FieldKey.AMOUNT, format_amount(amount))


def set_currency(descriptor: Descriptor, currency: Union[CurrencyCode, str]) -> None:
    code = currency.code if isinstance(currency, CurrencyCode) else currency
    descriptor.set(FieldKey.CURRENCY, parse_currency(code).code)


def set_due_date(descriptor: Descriptor, value: date) -> None:
    descriptor.set(FieldKey.DUE_DATE, format_date(value))
