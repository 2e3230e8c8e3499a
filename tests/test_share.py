"""vCard sharing and parsing of scanned QR payloads."""

import pytest

from roster.application import UnreadablePayload, parse_scanned_payload, person_to_vcard
from roster.domain import Person


def _person() -> Person:
    return Person(
        name="Ana Silva",
        email="ana@example.com",
        phone="(11) 99876-5432",
        role="Developer",
    )


def test_vcard_contains_contact_fields():
    card = person_to_vcard(_person())
    lines = card.split("\r\n")
    assert lines[0] == "BEGIN:VCARD"
    assert lines[-1] == "END:VCARD"
    assert "FN:Ana Silva" in lines
    assert "EMAIL:ana@example.com" in lines
    assert "TEL:(11) 99876-5432" in lines
    assert "TITLE:Developer" in lines


def test_vcard_round_trips_into_form():
    form = parse_scanned_payload(person_to_vcard(_person()))
    assert form.name == "Ana Silva"
    assert form.email == "ana@example.com"
    assert form.phone == "(11) 99876-5432"
    assert form.role == "Developer"
    assert form.photo is None


def test_vcard_with_parameters_and_n_fallback():
    payload = "\n".join(
        [
            "BEGIN:VCARD",
            "VERSION:3.0",
            "N:Costa;Bruno;;;",
            "EMAIL;TYPE=INTERNET:bruno@example.com",
            "TEL;TYPE=CELL:(21) 91234-5678",
            "END:VCARD",
        ]
    )
    form = parse_scanned_payload(payload)
    assert form.name == "Bruno Costa"
    assert form.email == "bruno@example.com"
    assert form.phone == "(21) 91234-5678"
    assert form.role == ""


def test_vcard_escaped_comma():
    person = Person(name="Ana", email="ana@example.com", role="Other")
    card = person_to_vcard(person.with_changes(name="Silva, Ana"))
    assert "FN:Silva\\, Ana" in card.split("\r\n")
    assert parse_scanned_payload(card).name == "Silva, Ana"


def test_json_payload():
    form = parse_scanned_payload('{"name": "Ana", "email": "ana@example.com", "extra": 1}')
    assert form.name == "Ana"
    assert form.email == "ana@example.com"
    assert form.phone == ""


def test_mailto_payload():
    form = parse_scanned_payload("mailto:ana%40example.com?name=Ana%20Silva")
    assert form.email == "ana@example.com"
    assert form.name == "Ana Silva"


@pytest.mark.parametrize(
    "payload",
    [
        "",
        "   ",
        "https://example.com",
        "just some text",
        "{not json",
        "[1, 2, 3]",
        '{"role": "Developer"}',
        "BEGIN:VCARD\nVERSION:3.0\nEND:VCARD",
    ],
)
def test_unreadable_payloads(payload):
    with pytest.raises(UnreadablePayload):
        parse_scanned_payload(payload)
