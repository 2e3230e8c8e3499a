"""Field validators for the add/edit form.

Each validator returns an error message, or "" when the value is acceptable.
Values are expected to be stripped by the caller.
"""

import re
from collections.abc import Callable, Iterable

from roster.application.dto import PersonForm
from roster.domain import (
    EMAIL_MAX_LENGTH,
    NAME_MAX_LENGTH,
    NAME_MIN_LENGTH,
    ROLES,
    Person,
)

# "(11) 99999-9999", "11 99999-9999", "1199999999" and the 8-digit landline variant.
LOCAL_PHONE_PATTERN = re.compile(r"^\(?\d{2}\)?\s?\d{4,5}-?\d{4}$")

_NAME_PATTERN = re.compile(r"^[a-zA-ZÀ-ÿ\s]+$")
_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PhoneCheck = Callable[[str], bool]


def local_phone_check(phone: str) -> bool:
    return bool(LOCAL_PHONE_PATTERN.match(phone))


def validate_name(name: str) -> str:
    if not name:
        return "Name is required."
    if len(name) < NAME_MIN_LENGTH:
        return f"Name must be at least {NAME_MIN_LENGTH} characters."
    if len(name) > NAME_MAX_LENGTH:
        return f"Name must be at most {NAME_MAX_LENGTH} characters."
    if not _NAME_PATTERN.match(name):
        return "Name may only contain letters and spaces."
    return ""


def email_taken(
    email: str, people: Iterable[Person], exclude_id: str | None = None
) -> bool:
    """Linear scan for a case-insensitive email match, skipping exclude_id."""
    needle = email.strip().lower()
    for person in people:
        if person.id == exclude_id:
            continue
        if person.email.lower() == needle:
            return True
    return False


def validate_email(
    email: str,
    people: Iterable[Person] = (),
    exclude_id: str | None = None,
) -> str:
    if not email:
        return "Email is required."
    if not _EMAIL_PATTERN.match(email):
        return "Invalid email."
    if len(email) > EMAIL_MAX_LENGTH:
        return "Email is too long."
    if email_taken(email, people, exclude_id=exclude_id):
        return "This email is already registered."
    return ""


def validate_phone(phone: str, check: PhoneCheck = local_phone_check) -> str:
    if not phone:
        return "Phone is required."
    if not check(phone):
        return "Invalid format. Use: (11) 99999-9999"
    return ""


def validate_role(role: str) -> str:
    if not role:
        return "Role is required."
    if role not in ROLES:
        return "Unknown role."
    return ""


def clean_form(form: PersonForm) -> PersonForm:
    """Strip surrounding whitespace from every text field."""
    return PersonForm(
        name=(form.name or "").strip(),
        email=(form.email or "").strip(),
        phone=(form.phone or "").strip(),
        role=(form.role or "").strip(),
        photo=(form.photo or "").strip() or None,
    )


def validate_form(
    form: PersonForm,
    people: Iterable[Person] = (),
    *,
    exclude_id: str | None = None,
    phone_check: PhoneCheck = local_phone_check,
) -> dict[str, str]:
    """Validate every field of a cleaned form. Returns only the failing fields."""
    errors = {
        "name": validate_name(form.name),
        "email": validate_email(form.email, people, exclude_id=exclude_id),
        "phone": validate_phone(form.phone, phone_check),
        "role": validate_role(form.role),
    }
    return {key: message for key, message in errors.items() if message}
