"""Directory use cases: add, edit, delete, list, search, stats and seeding."""

import logging
from collections.abc import Iterable
from datetime import datetime, timezone

from roster.application.dto import (
    DirectoryStats,
    Invalid,
    NotFound,
    PersonCreated,
    PersonForm,
    PersonPatch,
    PersonUpdated,
)
from roster.application.ports import DirectoryRepository
from roster.application.validation import (
    PhoneCheck,
    clean_form,
    email_taken,
    local_phone_check,
    validate_form,
)
from roster.domain import DEFAULT_PHOTO_URL, Person

logger = logging.getLogger(__name__)


def matches_search(person: Person, term: str) -> bool:
    """Case-insensitive substring match over name, email, role and phone."""
    needle = term.strip().lower()
    if not needle:
        return True
    return (
        needle in person.name.lower()
        or needle in person.email.lower()
        or needle in person.role.lower()
        or needle in person.phone.lower()
    )


class DirectoryService:
    """Owns the person collection. Every check is a linear scan over list_all()."""

    def __init__(
        self,
        repository: DirectoryRepository,
        *,
        phone_check: PhoneCheck = local_phone_check,
    ) -> None:
        self._repo = repository
        self._phone_check = phone_check

    def add_person(self, form: PersonForm) -> PersonCreated | Invalid:
        """Validate the form and store a new record with a fresh id and timestamp."""
        form = clean_form(form)
        errors = validate_form(
            form, self._repo.list_all(), phone_check=self._phone_check
        )
        if errors:
            return Invalid(errors=errors)

        person = Person(
            name=form.name,
            email=form.email,
            phone=form.phone,
            role=form.role,
            photo=form.photo or DEFAULT_PHOTO_URL,
        )
        self._repo.add(person)
        logger.info("Added person %s (%s)", person.id, person.email)
        return PersonCreated(person=person)

    def update_person(
        self, person_id: str, patch: PersonPatch
    ) -> PersonUpdated | Invalid | NotFound:
        """Merge patch onto the stored record. The record itself is excluded from the email check."""
        current = self._repo.get_by_id(person_id)
        if current is None:
            return NotFound(person_id=person_id)

        fields = {
            "name": current.name,
            "email": current.email,
            "phone": current.phone,
            "role": current.role,
            "photo": current.photo,
        }
        fields.update(patch.changes())
        merged = clean_form(PersonForm(**fields))
        errors = validate_form(
            merged,
            self._repo.list_all(),
            exclude_id=person_id,
            phone_check=self._phone_check,
        )
        if errors:
            return Invalid(errors=errors)

        updated = current.with_changes(
            name=merged.name,
            email=merged.email,
            phone=merged.phone,
            role=merged.role,
            photo=merged.photo or DEFAULT_PHOTO_URL,
        )
        if not self._repo.update(updated):
            return NotFound(person_id=person_id)
        logger.info("Updated person %s", person_id)
        return PersonUpdated(person=updated)

    def delete_person(self, person_id: str) -> bool:
        deleted = self._repo.delete(person_id)
        if deleted:
            logger.info("Deleted person %s", person_id)
        return deleted

    def get_person(self, person_id: str) -> Person | None:
        return self._repo.get_by_id(person_id)

    def list_people(self) -> list[Person]:
        return self._repo.list_all()

    def search_people(self, term: str) -> list[Person]:
        """Return records matching term. A blank term returns everything."""
        return [p for p in self._repo.list_all() if matches_search(p, term or "")]

    def email_taken(self, email: str, exclude_id: str | None = None) -> bool:
        return email_taken(email, self._repo.list_all(), exclude_id=exclude_id)

    def stats(self, now: datetime | None = None) -> DirectoryStats:
        """Total records and how many registered on the same UTC day as now."""
        now = now or datetime.now(timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        today = now.astimezone(timezone.utc).date()
        people = self._repo.list_all()
        registered_today = sum(
            1
            for p in people
            if p.registered_at.astimezone(timezone.utc).date() == today
        )
        return DirectoryStats(
            total=len(people), registered_today=registered_today, as_of=now
        )

    def populate_initial_data(self, forms: Iterable[PersonForm]) -> int:
        """Add sample records when the directory is empty. Returns how many were added."""
        if self._repo.list_all():
            return 0
        added = 0
        for form in forms:
            result = self.add_person(form)
            if isinstance(result, Invalid):
                logger.warning(
                    "Skipping seed record %r: %s", form.email, result.errors
                )
                continue
            added += 1
        logger.info("Seeded directory with %d people", added)
        return added
