"""JSON snapshot implementation of DirectoryRepository.

The whole collection lives in one file, {"schema_version": 1, "users": [...]},
rewritten after every mutation.
"""

import json
import logging
from pathlib import Path

from roster.application.errors import StorageError
from roster.domain import Person
from roster.infrastructure.persistence.records import (
    SCHEMA_VERSION,
    person_to_record,
    record_to_person,
)

logger = logging.getLogger(__name__)


class JsonFileDirectoryRepository:
    """Keeps records in memory and persists a full snapshot to path on each change."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._people: list[Person] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> list[Person]:
        if self._people is not None:
            return self._people
        if not self._path.exists():
            self._people = []
            return self._people
        try:
            obj = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning("Could not read %s: %s", self._path, e)
            raise StorageError(f"Could not read the directory file: {e}") from e
        if not isinstance(obj, dict):
            raise StorageError("Directory file must contain a JSON object.")
        version = obj.get("schema_version")
        if version != SCHEMA_VERSION:
            raise StorageError(f"Unsupported directory schema version: {version!r}")
        try:
            self._people = [record_to_person(r) for r in obj.get("users") or []]
        except (KeyError, TypeError, ValueError) as e:
            raise StorageError(f"Malformed record in directory file: {e}") from e
        return self._people

    def _save(self, people: list[Person]) -> None:
        """Write people to disk, then make them the cached state.

        On failure the cache keeps the last saved snapshot.
        """
        obj = {
            "schema_version": SCHEMA_VERSION,
            "users": [person_to_record(p) for p in people],
        }
        tmp = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(json.dumps(obj, ensure_ascii=False, indent=2), encoding="utf-8")
            tmp.replace(self._path)
        except OSError as e:
            logger.warning("Could not write %s: %s", self._path, e)
            raise StorageError(f"Could not save the directory file: {e}") from e
        self._people = people

    def add(self, person: Person) -> None:
        people = self._load()
        if any(p.id == person.id for p in people):
            return
        self._save([*people, person])

    def get_by_id(self, person_id: str) -> Person | None:
        for person in self._load():
            if person.id == person_id:
                return person
        return None

    def list_all(self) -> list[Person]:
        return list(self._load())

    def update(self, person: Person) -> bool:
        people = self._load()
        if not any(p.id == person.id for p in people):
            return False
        self._save([person if p.id == person.id else p for p in people])
        return True

    def delete(self, person_id: str) -> bool:
        people = self._load()
        remaining = [p for p in people if p.id != person_id]
        if len(remaining) == len(people):
            return False
        self._save(remaining)
        return True

    def clear(self) -> None:
        self._save([])
