from __future__ import annotations

import pytest

from spayd_tool.exceptions import InvalidVersion
from spayd_tool.models import Descriptor, FieldKey, IbanBic, SpaydVersion, render


def test_empty_descriptor_renders_header_only():
    assert render(Descriptor.empty()) == "SPD*1.0*"


def test_version_parse_and_str():
    version = SpaydVersion.parse("1.2")
    assert (version.major, version.minor) == (1, 2)
    assert str(version) == "1.2"
    assert SpaydVersion(1, 0) < SpaydVersion(1, 2) < SpaydVersion(2, 0)


def test_version_parse_rejects_garbage():
    with pytest.raises(InvalidVersion):
        SpaydVersion.parse("one.zero")


def test_set_overwrites_in_place():
    descriptor = Descriptor.of([("ACC", "X"), ("AM", "1.00"), ("CC", "CZK")])

    descriptor.set("AM", "2.00")

    assert descriptor.items() == [("ACC", "X"), ("AM", "2.00"), ("CC", "CZK")]


def test_set_appends_new_keys():
    descriptor = Descriptor.of([("ACC", "X")])

    descriptor.set(FieldKey.MESSAGE, "hello")

    assert descriptor.keys() == ["ACC", "MSG"]
    assert descriptor.get(FieldKey.MESSAGE) == "hello"
    assert FieldKey.MESSAGE in descriptor


def test_remove_keeps_remaining_order():
    descriptor = Descriptor.of([("A", "1"), ("B", "2"), ("C", "3")])

    assert descriptor.remove("B") == "2"
    assert descriptor.remove("B") is None
    assert descriptor.keys() == ["A", "C"]


def test_keys_are_case_sensitive():
    descriptor = Descriptor.of([("msg", "lower"), ("MSG", "upper")])
    assert len(descriptor) == 2


def test_set_does_not_coerce_values():
    descriptor = Descriptor.empty()
    with pytest.raises(TypeError):
        descriptor.set("AM", 480)  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        descriptor.set("", "x")


def test_checksum_field_is_rendered_last():
    descriptor = Descriptor.of([("ACC", "X"), ("CRC32", "ABCDEF01"), ("AM", "1")])

    assert descriptor.canonical_text() == "SPD*1.0*ACC:X*AM:1*"
    assert descriptor.render() == "SPD*1.0*ACC:X*AM:1*CRC32:ABCDEF01*"
    assert list(descriptor.canonical_items()) == [("ACC", "X"), ("AM", "1")]


def test_render_encodes_values():
    descriptor = Descriptor.of([("MSG", "PŘÍKLAD")])
    assert str(descriptor) == "SPD*1.0*MSG:P%C5%98%C3%8DKLAD*"


def test_equality_respects_order_and_version():
    first = Descriptor.of([("A", "1"), ("B", "2")])

    assert first == Descriptor.of([("A", "1"), ("B", "2")])
    assert first != Descriptor.of([("B", "2"), ("A", "1")])
    assert first != Descriptor.of([("A", "1"), ("B", "2")], version=SpaydVersion(1, 1))


def test_copy_is_independent():
    original = Descriptor.of([("A", "1")])
    clone = original.copy()

    clone.set("A", "2")

    assert original.get("A") == "1"


def test_iban_bic_str():
    assert str(IbanBic("CZ5855000000001265098001")) == "CZ5855000000001265098001"
    assert str(IbanBic("CZ5855000000001265098001", "RZBCCZPP")) == "CZ5855000000001265098001+RZBCCZPP"
