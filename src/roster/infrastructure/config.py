"""Settings from environment variables. Entry points load .env before calling from_env()."""

import os
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from neo4j import GraphDatabase

from roster.application import DirectoryService
from roster.application.listing import DEFAULT_PAGE_SIZE
from roster.infrastructure.memory_repository import InMemoryDirectoryRepository
from roster.infrastructure.persistence.json_repository import JsonFileDirectoryRepository
from roster.infrastructure.persistence.neo4j_repository import Neo4jDirectoryRepository
from roster.infrastructure.phone import is_valid_phone
from roster.infrastructure.seed import default_seed_path

STORE_MEMORY = "memory"
STORE_JSON = "json"
STORE_NEO4J = "neo4j"
STORES = (STORE_MEMORY, STORE_JSON, STORE_NEO4J)


def _env(name: str, default: str) -> str:
    return os.environ.get(name, default).strip() or default


def _env_bool(name: str, default: bool) -> bool:
    raw = os.environ.get(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    store: str = STORE_JSON
    data_file: Path = Path("data/people.json")
    seed: bool = True
    seed_file: Path | None = None
    phone_region: str = "BR"
    page_size: int = DEFAULT_PAGE_SIZE
    directory: str = "default"
    neo4j_uri: str = "bolt://localhost:7687"
    neo4j_user: str = "neo4j"
    neo4j_password: str = "password"
    camera_index: int = 0

    def __post_init__(self):
        if self.store not in STORES:
            raise ValueError(f"ROSTER_STORE must be one of {', '.join(STORES)}")

    @classmethod
    def from_env(cls) -> "Settings":
        seed_file = os.environ.get("ROSTER_SEED_FILE", "").strip()
        return cls(
            store=_env("ROSTER_STORE", STORE_JSON).lower(),
            data_file=Path(_env("ROSTER_DATA_FILE", "data/people.json")),
            seed=_env_bool("ROSTER_SEED", True),
            seed_file=Path(seed_file) if seed_file else None,
            phone_region=_env("ROSTER_PHONE_REGION", "BR").upper(),
            page_size=int(_env("ROSTER_PAGE_SIZE", str(DEFAULT_PAGE_SIZE))),
            directory=_env("ROSTER_DIRECTORY", "default"),
            neo4j_uri=_env("NEO4J_URI", "bolt://localhost:7687"),
            neo4j_user=_env("NEO4J_USER", "neo4j"),
            neo4j_password=_env("NEO4J_PASSWORD", "password"),
            camera_index=int(_env("ROSTER_CAMERA_INDEX", "0")),
        )

    @property
    def seed_path(self) -> Path:
        return self.seed_file or default_seed_path()


def get_driver(settings: Settings):
    return GraphDatabase.driver(
        settings.neo4j_uri, auth=(settings.neo4j_user, settings.neo4j_password)
    )


def build_repository(settings: Settings, driver=None):
    """Repository for settings.store. driver is required for neo4j."""
    if settings.store == STORE_MEMORY:
        return InMemoryDirectoryRepository()
    if settings.store == STORE_JSON:
        return JsonFileDirectoryRepository(settings.data_file)
    if driver is None:
        raise ValueError("A Neo4j driver is required for the neo4j store")
    return Neo4jDirectoryRepository(driver, directory=settings.directory)


def build_service(settings: Settings, repository) -> DirectoryService:
    return DirectoryService(
        repository,
        phone_check=partial(is_valid_phone, default_region=settings.phone_region),
    )
