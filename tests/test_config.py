"""Settings from environment and repository wiring."""

from pathlib import Path

import pytest

from roster.application import Invalid, PersonCreated, PersonForm
from roster.infrastructure import (
    InMemoryDirectoryRepository,
    JsonFileDirectoryRepository,
    Neo4jDirectoryRepository,
    Settings,
    build_repository,
    build_service,
    get_driver,
)

_ENV = (
    "ROSTER_STORE",
    "ROSTER_DATA_FILE",
    "ROSTER_SEED",
    "ROSTER_SEED_FILE",
    "ROSTER_PHONE_REGION",
    "ROSTER_PAGE_SIZE",
    "ROSTER_DIRECTORY",
    "ROSTER_CAMERA_INDEX",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    settings = Settings.from_env()
    assert settings.store == "json"
    assert settings.data_file == Path("data/people.json")
    assert settings.seed is True
    assert settings.phone_region == "BR"
    assert settings.page_size == 4
    assert settings.seed_path.name == "seed.yaml"


def test_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("ROSTER_STORE", "Memory")
    monkeypatch.setenv("ROSTER_SEED", "no")
    monkeypatch.setenv("ROSTER_SEED_FILE", str(tmp_path / "s.yaml"))
    monkeypatch.setenv("ROSTER_PHONE_REGION", "us")
    monkeypatch.setenv("ROSTER_PAGE_SIZE", "10")
    settings = Settings.from_env()
    assert settings.store == "memory"
    assert settings.seed is False
    assert settings.seed_path == tmp_path / "s.yaml"
    assert settings.phone_region == "US"
    assert settings.page_size == 10


def test_unknown_store_rejected(monkeypatch):
    monkeypatch.setenv("ROSTER_STORE", "sqlite")
    with pytest.raises(ValueError):
        Settings.from_env()


def test_build_repository(tmp_path):
    assert isinstance(build_repository(Settings(store="memory")), InMemoryDirectoryRepository)
    repo = build_repository(Settings(store="json", data_file=tmp_path / "p.json"))
    assert isinstance(repo, JsonFileDirectoryRepository)
    assert repo.path == tmp_path / "p.json"
    with pytest.raises(ValueError):
        build_repository(Settings(store="neo4j"))


def test_build_service_uses_phone_region():
    form = PersonForm(
        name="Ana Silva", email="ana@example.com", phone="+1 202 555 1234", role="Developer"
    )
    service = build_service(Settings(store="memory"), InMemoryDirectoryRepository())
    assert isinstance(service.add_person(form), PersonCreated)

    bad = PersonForm(name="Bruno Costa", email="bruno@example.com", phone="12", role="Developer")
    assert isinstance(service.add_person(bad), Invalid)


def test_neo4j_store_wiring():
    settings = Settings(store="neo4j", directory="team-a")
    driver = get_driver(settings)
    try:
        repo = build_repository(settings, driver=driver)
        assert isinstance(repo, Neo4jDirectoryRepository)
    finally:
        driver.close()
