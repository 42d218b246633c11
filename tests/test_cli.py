from __future__ import annotations

import json

from click.testing import CliRunner

from spayd_tool.cli import main

IBAN = "CZ5855000000001265098001"
EXAMPLE = f"SPD*1.0*ACC:{IBAN}*AM:480.00*CC:CZK*"


def test_parse_prints_json():
    result = CliRunner().invoke(main, ["parse", EXAMPLE])

    assert result.exit_code == 0, result.output
    data = json.loads(result.output)
    assert data["entries"] == {"ACC": IBAN, "AM": "480.00", "CC": "CZK"}
    assert data["checksum"]["status"] == "not_provided"
    assert data["typed"]["AM"]["value"] == "480.00"


def test_parse_reads_stdin():
    result = CliRunner().invoke(main, ["parse", "-"], input=EXAMPLE + "\n")
    assert result.exit_code == 0, result.output


def test_parse_error_exits_non_zero():
    result = CliRunner().invoke(main, ["parse", "SPD*1.0*AM:1*AM:2*"])

    assert result.exit_code == 1
    assert "Duplicate field 'AM'" in result.output


def test_build_and_verify():
    runner = CliRunner()
    built = runner.invoke(
        main,
        ["build", "--account", IBAN, "--amount", "480.00", "--currency", "CZK", "--extra", "X-VS=12345"],
    )
    assert built.exit_code == 0, built.output
    payload = built.output.strip()
    assert payload.startswith(f"{EXAMPLE}X-VS:12345*CRC32:")

    verified = runner.invoke(main, ["verify", payload])
    assert verified.exit_code == 0, verified.output
    assert verified.output.strip() == "passed"


def test_build_rejects_invalid_iban():
    result = CliRunner().invoke(main, ["build", "--account", "CZ5855000000001265098002"])
    assert result.exit_code == 1


def test_verify_without_checksum():
    runner = CliRunner()

    assert runner.invoke(main, ["verify", EXAMPLE]).output.strip() == "not_provided"
    assert runner.invoke(main, ["verify", "--require", EXAMPLE]).exit_code == 1


def test_verify_require_from_settings(monkeypatch):
    monkeypatch.setenv("SPAYD_TOOL_REQUIRE_CHECKSUM", "true")
    assert CliRunner().invoke(main, ["verify", EXAMPLE]).exit_code == 1


def test_verify_mismatch():
    result = CliRunner().invoke(main, ["verify", EXAMPLE + "CRC32:00000000*"])

    assert result.exit_code == 1
    assert "CRC32 mismatch" in result.output


def test_qr_writes_png_and_svg(tmp_path):
    runner = CliRunner()
    png = tmp_path / "payment.png"
    svg = tmp_path / "payment.svg"

    assert runner.invoke(main, ["qr", EXAMPLE, "-o", str(png)]).exit_code == 0
    assert runner.invoke(main, ["qr", EXAMPLE, "-o", str(svg)]).exit_code == 0
    assert png.read_bytes().startswith(b"\x89PNG")
    assert "<svg" in svg.read_text(encoding="utf-8")


def test_invalid_log_level_setting_is_reported(monkeypatch):
    monkeypatch.setenv("SPAYD_TOOL_LOG_LEVEL", "loud")

    result = CliRunner().invoke(main, ["verify", EXAMPLE])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.output
