"""Share records as vCard text and read scanned QR payloads back into form data."""

import json
from urllib.parse import parse_qs, unquote, urlparse

from roster.application.dto import PersonForm
from roster.application.errors import UnreadablePayload
from roster.domain import Person


def _escape(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


def _unescape(value: str) -> str:
    out = []
    chars = iter(value)
    for c in chars:
        if c == "\\":
            nxt = next(chars, "")
            out.append("\n" if nxt in ("n", "N") else nxt)
        else:
            out.append(c)
    return "".join(out)


def person_to_vcard(person: Person) -> str:
    """vCard 3.0 with FN, EMAIL, TEL and TITLE."""
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"FN:{_escape(person.name)}",
        f"EMAIL:{_escape(person.email)}",
        f"TEL:{_escape(person.phone)}",
        f"TITLE:{_escape(person.role)}",
        "END:VCARD",
    ]
    return "\r\n".join(lines)


def _parse_vcard(text: str) -> PersonForm:
    fields: dict[str, str] = {}
    for line in text.splitlines():
        if ":" not in line:
            continue
        key, value = line.split(":", 1)
        # Drop parameters: "TEL;TYPE=CELL" -> "TEL"
        name = key.split(";", 1)[0].strip().upper()
        if name not in fields:
            fields[name] = _unescape(value.strip())
    name = fields.get("FN", "")
    if not name and fields.get("N"):
        # N is "family;given;..."
        parts = [p for p in fields["N"].split(";") if p]
        name = " ".join(reversed(parts[:2]))
    return PersonForm(
        name=name,
        email=fields.get("EMAIL", ""),
        phone=fields.get("TEL", ""),
        role=fields.get("TITLE", ""),
    )


def _parse_json(text: str) -> PersonForm:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise UnreadablePayload("QR code does not contain contact data.") from e
    if not isinstance(data, dict):
        raise UnreadablePayload("QR code does not contain contact data.")
    return PersonForm(
        name=str(data.get("name") or ""),
        email=str(data.get("email") or ""),
        phone=str(data.get("phone") or ""),
        role=str(data.get("role") or ""),
    )


def _parse_mailto(text: str) -> PersonForm:
    parsed = urlparse(text)
    email = unquote(parsed.path)
    name = (parse_qs(parsed.query).get("name") or [""])[0]
    return PersonForm(name=name, email=email)


def parse_scanned_payload(text: str) -> PersonForm:
    """Turn a QR payload into add-form data. Fields missing from the payload stay empty."""
    text = (text or "").strip()
    if not text:
        raise UnreadablePayload("QR code is empty.")
    if text.upper().startswith("BEGIN:VCARD"):
        form = _parse_vcard(text)
    elif text.startswith("{"):
        form = _parse_json(text)
    elif text.lower().startswith("mailto:"):
        form = _parse_mailto(text)
    else:
        raise UnreadablePayload("QR code does not contain contact data.")
    if not (form.name or form.email or form.phone):
        raise UnreadablePayload("QR code does not contain contact data.")
    return form
