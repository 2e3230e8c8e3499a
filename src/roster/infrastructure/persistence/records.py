"""Person <-> plain dict mapping shared by the persistence adapters."""

from datetime import datetime, timezone

from roster.domain import DEFAULT_PHOTO_URL, Person

SCHEMA_VERSION = 1


def _datetime_to_iso(dt: datetime) -> str:
    return dt.isoformat()


def _iso_to_datetime(s: str) -> datetime:
    dt = datetime.fromisoformat(s.replace("Z", "+00:00"))
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def person_to_record(person: Person) -> dict[str, str]:
    return {
        "id": person.id,
        "name": person.name,
        "email": person.email,
        "phone": person.phone,
        "role": person.role,
        "photo": person.photo,
        "registered_at": _datetime_to_iso(person.registered_at),
    }


def record_to_person(record) -> Person:
    """Build a Person from a dict-like record (JSON object or Neo4j node)."""
    return Person(
        id=str(record["id"]),
        name=record["name"],
        email=record["email"],
        phone=record.get("phone") or "",
        role=record.get("role") or "",
        photo=record.get("photo") or DEFAULT_PHOTO_URL,
        registered_at=_iso_to_datetime(record["registered_at"]),
    )
