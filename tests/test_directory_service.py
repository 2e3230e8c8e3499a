"""Unit tests for DirectoryService. In-memory repo and PersonForm only."""

from datetime import datetime, timedelta, timezone

from roster.application import (
    DirectoryService,
    Invalid,
    NotFound,
    PersonCreated,
    PersonForm,
    PersonPatch,
    PersonUpdated,
)
from roster.domain import DEFAULT_PHOTO_URL, Person
from roster.infrastructure import InMemoryDirectoryRepository


def _service() -> DirectoryService:
    return DirectoryService(repository=InMemoryDirectoryRepository())


def _form(**overrides) -> PersonForm:
    data = {
        "name": "Ana Silva",
        "email": "ana@example.com",
        "phone": "(11) 99876-5432",
        "role": "Developer",
    }
    data.update(overrides)
    return PersonForm(**data)


def test_add_person_assigns_id_timestamp_and_default_photo() -> None:
    service = _service()
    result = service.add_person(_form())
    assert isinstance(result, PersonCreated)
    person = result.person
    assert person.id
    assert person.name == "Ana Silva"
    assert person.photo == DEFAULT_PHOTO_URL
    assert person.registered_at.tzinfo is not None

    listed = service.list_people()
    assert len(listed) == 1
    assert listed[0].id == person.id


def test_add_person_strips_whitespace() -> None:
    service = _service()
    result = service.add_person(_form(name="  Ana Silva  ", email=" ana@example.com "))
    assert isinstance(result, PersonCreated)
    assert result.person.name == "Ana Silva"
    assert result.person.email == "ana@example.com"


def test_add_person_invalid_reports_every_field() -> None:
    service = _service()
    result = service.add_person(PersonForm())
    assert isinstance(result, Invalid)
    assert set(result.errors) == {"name", "email", "phone", "role"}
    assert service.list_people() == []


def test_duplicate_email_rejected_on_add_case_insensitive() -> None:
    service = _service()
    assert isinstance(service.add_person(_form()), PersonCreated)

    result = service.add_person(_form(name="Other Person", email="ANA@example.com"))
    assert isinstance(result, Invalid)
    assert list(result.errors) == ["email"]
    assert "already registered" in result.errors["email"]
    assert len(service.list_people()) == 1


def test_update_keeps_own_email() -> None:
    service = _service()
    created = service.add_person(_form())
    assert isinstance(created, PersonCreated)

    result = service.update_person(
        created.person.id, PersonPatch(name="Ana Maria Silva", email="ana@example.com")
    )
    assert isinstance(result, PersonUpdated)
    assert result.person.name == "Ana Maria Silva"
    assert result.person.registered_at == created.person.registered_at
    assert service.get_person(created.person.id).name == "Ana Maria Silva"


def test_update_rejects_email_of_another_record() -> None:
    service = _service()
    service.add_person(_form())
    other = service.add_person(_form(name="Bruno Costa", email="bruno@example.com"))
    assert isinstance(other, PersonCreated)

    result = service.update_person(other.person.id, PersonPatch(email="Ana@Example.com"))
    assert isinstance(result, Invalid)
    assert "email" in result.errors
    assert service.get_person(other.person.id).email == "bruno@example.com"


def test_update_missing_id_is_not_found() -> None:
    service = _service()
    result = service.update_person("nope", PersonPatch(name="Anyone"))
    assert isinstance(result, NotFound)
    assert result.person_id == "nope"


def test_update_partial_leaves_other_fields() -> None:
    service = _service()
    created = service.add_person(_form(photo="https://example.com/a.png"))
    result = service.update_person(created.person.id, PersonPatch(role="Manager"))
    assert isinstance(result, PersonUpdated)
    assert result.person.role == "Manager"
    assert result.person.phone == "(11) 99876-5432"
    assert result.person.photo == "https://example.com/a.png"


def test_delete_person() -> None:
    service = _service()
    created = service.add_person(_form())
    assert service.delete_person(created.person.id) is True
    assert service.delete_person(created.person.id) is False
    assert service.list_people() == []


def test_search_matches_name_email_role_phone() -> None:
    service = _service()
    service.add_person(_form())
    service.add_person(
        _form(
            name="Bruno Costa",
            email="bruno@corp.io",
            phone="(21) 91234-5678",
            role="Designer",
        )
    )

    assert [p.name for p in service.search_people("ana")] == ["Ana Silva"]
    assert [p.name for p in service.search_people("CORP.IO")] == ["Bruno Costa"]
    assert [p.name for p in service.search_people("design")] == ["Bruno Costa"]
    assert [p.name for p in service.search_people("91234")] == ["Bruno Costa"]
    assert len(service.search_people("")) == 2
    assert service.search_people("nonexistent") == []


def test_email_taken_excludes_given_id() -> None:
    service = _service()
    created = service.add_person(_form())
    assert service.email_taken("ANA@example.com") is True
    assert service.email_taken("ana@example.com", exclude_id=created.person.id) is False


def test_stats_counts_registered_today() -> None:
    now = datetime(2024, 5, 10, 12, 0, tzinfo=timezone.utc)
    repo = InMemoryDirectoryRepository(
        [
            Person(name="Old", email="old@example.com", registered_at=now - timedelta(days=2)),
            Person(name="New", email="new@example.com", registered_at=now - timedelta(hours=1)),
        ]
    )
    stats = DirectoryService(repo).stats(now=now)
    assert stats.total == 2
    assert stats.registered_today == 1


def test_populate_initial_data_only_when_empty() -> None:
    service = _service()
    forms = [_form(), _form(name="Bruno Costa", email="bruno@example.com")]
    assert service.populate_initial_data(forms) == 2
    assert service.populate_initial_data(forms) == 0
    assert len(service.list_people()) == 2


def test_populate_initial_data_skips_invalid() -> None:
    service = _service()
    forms = [_form(), _form(name="X", email="bad")]
    assert service.populate_initial_data(forms) == 1


def test_custom_phone_check_is_used() -> None:
    service = DirectoryService(
        InMemoryDirectoryRepository(), phone_check=lambda phone: phone.startswith("+")
    )
    assert isinstance(service.add_person(_form(phone="(11) 99876-5432")), Invalid)
    assert isinstance(service.add_person(_form(phone="+44 20 7946 0958")), PersonCreated)
