"""Command-line shell around the SPAYD codec.

Reads payloads from arguments or stdin, prints results on stdout and maps
library errors to a non-zero exit status. The codec itself never does I/O.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

import click
from pydantic import ValidationError

from . import get_version
from .config import get_settings
from .exceptions import ChecksumError, SpaydError
from .schemas import PaymentRequest
from .services.builder import build_descriptor, describe
from .services.checksum import require_checksum, verify
from .services.parser import parse
from .services.qr import generate_spayd_qr

logger = logging.getLogger(__name__)

_CTX: Dict[str, Any] = dict(help_option_names=["-h", "--help"], show_default=True)


def _read_payload(payload: str) -> str:
    if payload == "-":
        return click.get_text_stream("stdin").read()
    return payload


def _parse_or_fail(payload: str):
    try:
        return parse(_read_payload(payload))
    except SpaydError as exc:
        raise click.ClickException(str(exc)) from exc


@click.group(context_settings=_CTX)
@click.version_option(get_version())
@click.option("-v", "--verbose", is_flag=True, help="DEBUG-level log output on stderr.")
def main(verbose: bool) -> None:
    """spayd - Short Payment Descriptor toolkit."""

    try:
        settings = get_settings()
    except ValidationError as exc:
        raise click.ClickException(f"Invalid configuration: {exc}") from exc
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(level=level, format="[%(levelname)s] %(name)s: %(message)s")


@main.command("parse")
@click.argument("payload", default="-")
def parse_cmd(payload: str) -> None:
    """Print fields, checksum state and typed values as JSON."""

    descriptor = _parse_or_fail(payload)
    click.echo(describe(descriptor).model_dump_json(indent=2))


@main.command("verify")
@click.argument("payload", default="-")
@click.option(
    "--require/--no-require",
    default=None,
    help="Fail when no CRC32 field is present (default from SPAYD_TOOL_REQUIRE_CHECKSUM).",
)
def verify_cmd(payload: str, require: Optional[bool]) -> None:
    """Check the CRC32 field of PAYLOAD."""

    descriptor = _parse_or_fail(payload)
    if require is None:
        require = get_settings().require_checksum
    try:
        status = require_checksum(descriptor) if require else verify(descriptor)
    except ChecksumError as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(status.value)


@main.command("build")
@click.option("--account", required=True, help="Payee IBAN.")
@click.option("--bic", help="Payee BIC.")
@click.option("--alt-account", "alternative_accounts", multiple=True, help="Alternative IBAN, repeatable.")
@click.option("--amount", help="Amount with '.' as decimal separator.")
@click.option("--currency", help="ISO 4217 code.")
@click.option("--due-date", type=click.DateTime(formats=["%Y-%m-%d"]), help="Due date (YYYY-MM-DD).")
@click.option("--reference", help="Payee reference number.")
@click.option("--recipient", help="Payee name.")
@click.option("--message", help="Message for the payee.")
@click.option("--payment-type", help="Payment type code.")
@click.option("--extra", multiple=True, metavar="X-KEY=VALUE", help="Application field, repeatable.")
@click.option("--checksum/--no-checksum", default=True, help="Append a CRC32 field.")
def build_cmd(
    account: str,
    bic: Optional[str],
    alternative_accounts: tuple[str, ...],
    amount: Optional[str],
    currency: Optional[str],
    due_date,
    reference: Optional[str],
    recipient: Optional[str],
    message: Optional[str],
    payment_type: Optional[str],
    extra: tuple[str, ...],
    checksum: bool,
) -> None:
    """Assemble a descriptor and print its SPAYD text."""

    extra_fields: dict[str, str] = {}
    for item in extra:
        key, sep, value = item.partition("=")
        if not sep:
            raise click.BadParameter(f"expected X-KEY=VALUE, got {item!r}", param_hint="--extra")
        extra_fields[key] = value
    try:
        request = PaymentRequest(
            account=account,
            bic=bic,
            alternative_accounts=list(alternative_accounts),
            amount=amount,
            currency=currency,
            due_date=due_date.date() if due_date else None,
            reference=reference,
            recipient=recipient,
            message=message,
            payment_type=payment_type,
            extra=extra_fields,
            include_checksum=checksum,
        )
        descriptor = build_descriptor(request)
    except (ValidationError, SpaydError) as exc:
        raise click.ClickException(str(exc)) from exc
    click.echo(descriptor.render())


@main.command("qr")
@click.argument("payload", default="-")
@click.option(
    "-o",
    "--output",
    required=True,
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    help="Target file; .svg writes SVG, anything else PNG.",
)
def qr_cmd(payload: str, output: Path) -> None:
    """Render PAYLOAD as a QR code image."""

    descriptor = _parse_or_fail(payload)
    qr = generate_spayd_qr(descriptor)
    if output.suffix.lower() == ".svg":
        output.write_text(qr.svg, encoding="utf-8")
    else:
        output.write_bytes(qr.png)
    logger.info(f"Wrote QR code for {len(qr.payload)} character payload to {output}")
    click.echo(str(output))


cli = main
