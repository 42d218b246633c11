"""Pydantic schemas for building and inspecting descriptors."""
from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from .models import SpaydVersion
from .services.convert import parse_account
from .services.validators import validate_bic, validate_iban


class PaymentRequest(BaseModel):
    account: str = Field(description="Payee IBAN")
    bic: Optional[str] = None
    alternative_accounts: list[str] = Field(default_factory=list)
    amount: Optional[Decimal] = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    currency: Optional[str] = Field(default=None, pattern=r"^[A-Z]{3}$")
    due_date: Optional[date] = None
    reference: Optional[str] = Field(default=None, pattern=r"^[0-9]{1,16}$")
    recipient: Optional[str] = Field(default=None, max_length=35)
    message: Optional[str] = Field(default=None, max_length=60)
    payment_type: Optional[str] = Field(default=None, max_length=3)
    extra: dict[str, str] = Field(default_factory=dict, description="Application specific X- fields")
    version: Optional[str] = None
    include_checksum: bool = True

    @field_validator("account", "bic", "alternative_accounts", mode="before")
    @classmethod
    def _strip_spaces(cls, value: Any):
        if isinstance(value, str):
            return value.replace(" ", "").upper()
        if isinstance(value, list):
            return [item.replace(" ", "").upper() if isinstance(item, str) else item for item in value]
        return value

    @field_validator("account")
    @classmethod
    def _check_account(cls, value: str) -> str:
        return validate_iban(value)

    @field_validator("alternative_accounts")
    @classmethod
    def _check_alternative_accounts(cls, value: list[str]) -> list[str]:
        return [str(parse_account(item)) for item in value]

    @field_validator("bic")
    @classmethod
    def _check_bic(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return validate_bic(value)

    @field_validator("extra")
    @classmethod
    def _check_extra(cls, value: dict[str, str]) -> dict[str, str]:
        for key in value:
            if not key.startswith("X-"):
                raise ValueError(f"extra field {key!r} must start with 'X-'")
        return value

    @field_validator("version")
    @classmethod
    def _check_version(cls, value: Optional[str]) -> Optional[str]:
        if value is None:
            return value
        return str(SpaydVersion.parse(value))


class ChecksumRead(BaseModel):
    status: str
    expected: Optional[str] = None
    actual: Optional[str] = None


class TypedValueRead(BaseModel):
    value: Optional[str] = None
    error: Optional[str] = None


class DescriptorRead(BaseModel):
    version: str
    entries: dict[str, str]
    checksum: ChecksumRead
    typed: dict[str, TypedValueRead] = Field(default_factory=dict)
