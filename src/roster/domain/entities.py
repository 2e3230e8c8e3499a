"""Domain entities: Person and the directory constants it is validated against."""

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

NAME_MIN_LENGTH = 2
NAME_MAX_LENGTH = 100
EMAIL_MAX_LENGTH = 255

# Roles offered by the add/edit form. Stored as plain strings on Person.
ROLES = (
    "Developer",
    "Designer",
    "Manager",
    "Analyst",
    "Coordinator",
    "Director",
    "Intern",
    "Other",
)

DEFAULT_PHOTO_URL = (
    "https://images.pexels.com/photos/1300402/pexels-photo-1300402.jpeg"
    "?auto=compress&cs=tinysrgb&w=150&h=150&fit=crop"
)

# Fields a caller may change after creation. id and registered_at are fixed.
EDITABLE_FIELDS = ("name", "email", "phone", "role", "photo")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Person:
    """
    One record in the directory.
    Field-level rules (format, uniqueness) live in the application layer;
    the entity only refuses records that could never be displayed.
    """

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = field(default="")
    email: str = field(default="")
    phone: str = field(default="")
    role: str = field(default="")
    photo: str = field(default=DEFAULT_PHOTO_URL)
    registered_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("Person name must be non-empty.")
        if not self.email or not self.email.strip():
            raise ValueError("Person email must be non-empty.")
        if not self.photo:
            object.__setattr__(self, "photo", DEFAULT_PHOTO_URL)
        if self.registered_at.tzinfo is None:
            object.__setattr__(
                self, "registered_at", self.registered_at.replace(tzinfo=timezone.utc)
            )

    def with_changes(self, **changes) -> "Person":
        """Return a copy with the given editable fields replaced."""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValueError(f"Not editable: {', '.join(sorted(unknown))}")
        return replace(self, **changes)
