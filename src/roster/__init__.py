"""
Roster core: clean-architecture layout.

- domain: the Person entity and directory constants. No outer dependencies.
- application: use cases (DirectoryService, ListViewController, CaptureSession), ports, DTOs.
- infrastructure: adapters (in-memory, JSON file and Neo4j repositories, OpenCV camera, QR images).
"""

from roster.application import (
    DirectoryRepository,
    DirectoryService,
    Invalid,
    ListPage,
    ListState,
    ListViewController,
    NotFound,
    PersonCreated,
    PersonForm,
    PersonPatch,
    PersonUpdated,
    SortKey,
    ViewMode,
)
from roster.domain import ROLES, Person
from roster.infrastructure import (
    InMemoryDirectoryRepository,
    JsonFileDirectoryRepository,
    Neo4jDirectoryRepository,
)

__all__ = [
    "DirectoryRepository",
    "DirectoryService",
    "InMemoryDirectoryRepository",
    "Invalid",
    "JsonFileDirectoryRepository",
    "ListPage",
    "ListState",
    "ListViewController",
    "Neo4jDirectoryRepository",
    "NotFound",
    "Person",
    "PersonCreated",
    "PersonForm",
    "PersonPatch",
    "PersonUpdated",
    "ROLES",
    "SortKey",
    "ViewMode",
]
