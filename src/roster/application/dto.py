"""DTOs and outcome types passed between the application layer and its callers."""

from dataclasses import dataclass, field
from datetime import datetime

from roster.domain import Person


@dataclass(frozen=True)
class PersonForm:
    """Raw add-form input. photo is optional; the default avatar is used when empty."""

    name: str = ""
    email: str = ""
    phone: str = ""
    role: str = ""
    photo: str | None = None


@dataclass(frozen=True)
class PersonPatch:
    """Partial edit. None means 'leave unchanged'."""

    name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    photo: str | None = None

    def changes(self) -> dict[str, str]:
        return {
            key: value
            for key, value in (
                ("name", self.name),
                ("email", self.email),
                ("phone", self.phone),
                ("role", self.role),
                ("photo", self.photo),
            )
            if value is not None
        }


@dataclass(frozen=True)
class PersonCreated:
    person: Person


@dataclass(frozen=True)
class PersonUpdated:
    person: Person


@dataclass(frozen=True)
class Invalid:
    """Field-level validation failure: field name -> message."""

    errors: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class NotFound:
    person_id: str


@dataclass(frozen=True)
class DirectoryStats:
    total: int
    registered_today: int
    as_of: datetime
