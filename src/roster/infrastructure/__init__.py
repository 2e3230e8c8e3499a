"""Infrastructure layer: concrete implementations of application ports."""

from roster.infrastructure.capture_machine import XStateCaptureMachine, load_machine
from roster.infrastructure.config import (
    Settings,
    build_repository,
    build_service,
    get_driver,
)
from roster.infrastructure.memory_repository import InMemoryDirectoryRepository
from roster.infrastructure.persistence.json_repository import JsonFileDirectoryRepository
from roster.infrastructure.persistence.neo4j_repository import (
    Neo4jDirectoryRepository,
    ensure_email_constraint,
)
from roster.infrastructure.phone import is_valid_phone, normalize_phone
from roster.infrastructure.qr import generate_qr_bytes, person_qr_png
from roster.infrastructure.seed import load_seed

__all__ = [
    "InMemoryDirectoryRepository",
    "JsonFileDirectoryRepository",
    "Neo4jDirectoryRepository",
    "Settings",
    "XStateCaptureMachine",
    "build_repository",
    "build_service",
    "ensure_email_constraint",
    "generate_qr_bytes",
    "get_driver",
    "is_valid_phone",
    "load_machine",
    "load_seed",
    "normalize_phone",
    "person_qr_png",
]
