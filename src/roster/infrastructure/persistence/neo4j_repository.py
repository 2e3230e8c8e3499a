"""Neo4j implementation of DirectoryRepository.
Graph: one (:DirectoryPerson) node per record, scoped by a `directory` property.
`position` keeps insertion order; `email_key` is the lowercased email used by the
uniqueness constraint.
"""

import logging
from contextlib import contextmanager

from neo4j.exceptions import DriverError, Neo4jError

from roster.application.errors import StorageError
from roster.domain import Person
from roster.infrastructure.persistence.records import person_to_record, record_to_person

logger = logging.getLogger(__name__)

_CONSTRAINT_QUERY = """
CREATE CONSTRAINT directory_person_email IF NOT EXISTS
FOR (p:DirectoryPerson) REQUIRE (p.directory, p.email_key) IS NODE UNIQUE
"""

_ADD_QUERY = """
OPTIONAL MATCH (existing:DirectoryPerson {directory: $directory})
WITH coalesce(max(existing.position), 0) + 1 AS next_position
MERGE (p:DirectoryPerson {directory: $directory, id: $id})
ON CREATE SET p += $props, p.email_key = $email_key, p.position = next_position
"""

_GET_QUERY = """
MATCH (p:DirectoryPerson {directory: $directory, id: $id})
RETURN p
"""

_LIST_QUERY = """
MATCH (p:DirectoryPerson {directory: $directory})
RETURN p
ORDER BY p.position
"""

_UPDATE_QUERY = """
MATCH (p:DirectoryPerson {directory: $directory, id: $id})
SET p += $props, p.email_key = $email_key
RETURN p.id AS id
"""

_DELETE_QUERY = """
MATCH (p:DirectoryPerson {directory: $directory, id: $id})
WITH p, p.id AS id
DELETE p
RETURN id
"""

_CLEAR_QUERY = """
MATCH (p:DirectoryPerson {directory: $directory})
DELETE p
"""


def ensure_email_constraint(driver) -> None:
    """Create the per-directory unique email constraint if missing."""
    with driver.session() as session:
        session.run(_CONSTRAINT_QUERY)


class Neo4jDirectoryRepository:
    """Stores records in Neo4j, scoped by directory name."""

    def __init__(self, driver: object, directory: str = "default") -> None:
        self._driver = driver
        self._directory = directory

    @contextmanager
    def _session(self):
        try:
            with self._driver.session() as session:
                yield session
        except (Neo4jError, DriverError) as e:
            logger.warning("Neo4j error in directory %s: %s", self._directory, e)
            raise StorageError(f"Directory database error: {e}") from e

    def add(self, person: Person) -> None:
        with self._session() as session:
            session.run(
                _ADD_QUERY,
                directory=self._directory,
                id=person.id,
                props=person_to_record(person),
                email_key=person.email.lower(),
            )

    def get_by_id(self, person_id: str) -> Person | None:
        with self._session() as session:
            record = session.run(
                _GET_QUERY, directory=self._directory, id=person_id
            ).single()
        if not record:
            return None
        return record_to_person(record["p"])

    def list_all(self) -> list[Person]:
        with self._session() as session:
            result = session.run(_LIST_QUERY, directory=self._directory)
            return [record_to_person(rec["p"]) for rec in result]

    def update(self, person: Person) -> bool:
        with self._session() as session:
            record = session.run(
                _UPDATE_QUERY,
                directory=self._directory,
                id=person.id,
                props=person_to_record(person),
                email_key=person.email.lower(),
            ).single()
        return record is not None

    def delete(self, person_id: str) -> bool:
        with self._session() as session:
            record = session.run(
                _DELETE_QUERY, directory=self._directory, id=person_id
            ).single()
        return record is not None

    def clear(self) -> None:
        with self._session() as session:
            session.run(_CLEAR_QUERY, directory=self._directory)
