"""Domain layer: entities and constants. No dependencies on outer layers."""

from roster.domain.entities import (
    DEFAULT_PHOTO_URL,
    EDITABLE_FIELDS,
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    ROLES,
    Person,
)

__all__ = [
    "DEFAULT_PHOTO_URL",
    "EDITABLE_FIELDS",
    "EMAIL_MAX_LENGTH",
    "NAME_MAX_LENGTH",
    "NAME_MIN_LENGTH",
    "ROLES",
    "Person",
]
