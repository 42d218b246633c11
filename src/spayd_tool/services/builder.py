"""Assemble descriptors from structured payment requests."""
from __future__ import annotations

import logging

from ..config import get_settings
from ..exceptions import ConversionError
from ..models import Descriptor, FieldKey, IbanBic, SpaydVersion
from ..schemas import ChecksumRead, DescriptorRead, PaymentRequest, TypedValueRead
from .checksum import checksum_status, with_checksum
from .convert import set_account, set_alternative_accounts, set_amount, set_currency, set_due_date, typed_values

logger = logging.getLogger(__name__)


def build_descriptor(data: PaymentRequest) -> Descriptor:
    version = SpaydVersion.parse(data.version or get_settings().default_version)
    descriptor = Descriptor.empty(version)
    set_account(descriptor, IbanBic(data.account, data.bic))
    if data.alternative_accounts:
        set_alternative_accounts(descriptor, data.alternative_accounts)
    if data.amount is not None:
        set_amount(descriptor, data.amount)
    if data.currency:
        set_currency(descriptor, data.currency)
    if data.reference:
        descriptor.set(FieldKey.REFERENCE, data.reference)
    if data.recipient:
        descriptor.set(FieldKey.RECIPIENT, data.recipient)
    if data.due_date:
        set_due_date(descriptor, data.due_date)
    if data.payment_type:
        descriptor.set(FieldKey.PAYMENT_TYPE, data.payment_type)
    if data.message:
        descriptor.set(FieldKey.MESSAGE, data.message)
    for key, value in data.extra.items():
        descriptor.set(key, value)
    if data.include_checksum:
        descriptor = with_checksum(descriptor)
    logger.debug(f"Built SPAYD descriptor with fields {descriptor.keys()}")
    return descriptor


def describe(descriptor: Descriptor) -> DescriptorRead:
    """Project a descriptor, its checksum state and typed values for display."""

    report = checksum_status(descriptor)
    typed: dict[str, TypedValueRead] = {}
    for key, value in typed_values(descriptor).items():
        if isinstance(value, ConversionError):
            typed[key] = TypedValueRead(error=str(value))
        elif isinstance(value, list):
            typed[key] = TypedValueRead(value=",".join(str(item) for item in value))
        else:
            typed[key] = TypedValueRead(value=str(value))
    return DescriptorRead(
        version=str(descriptor.version),
        entries=dict(descriptor.fields),
        checksum=ChecksumRead(status=report.status.value, expected=report.expected, actual=report.actual),
        typed=typed,
    )
