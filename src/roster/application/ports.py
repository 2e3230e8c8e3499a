"""Application ports (interfaces). Implemented by infrastructure adapters."""

from typing import Protocol

from roster.domain import Person


class DirectoryRepository(Protocol):
    """Persists and queries person records."""

    def add(self, person: Person) -> None:
        """Store a new record."""
        ...

    def get_by_id(self, person_id: str) -> Person | None:
        """Return the record with the given id, or None."""
        ...

    def list_all(self) -> list[Person]:
        """Return all records in insertion order."""
        ...

    def update(self, person: Person) -> bool:
        """Replace the stored record with the same id. Returns False if absent."""
        ...

    def delete(self, person_id: str) -> bool:
        """Remove a record. Returns True if it existed."""
        ...

    def clear(self) -> None:
        """Remove every record."""
        ...


class Camera(Protocol):
    """A video source that yields frames until released."""

    def open(self, facing: str) -> None:
        """Acquire the device. facing is 'user' or 'environment'."""
        ...

    def read(self):
        """Return the next frame, or None when no frame is available."""
        ...

    def release(self) -> None:
        ...


class QrDecoder(Protocol):
    def decode(self, frame) -> str | None:
        """Return the decoded payload of the first QR code in frame, or None."""
        ...


class FrameEncoder(Protocol):
    def encode_jpeg(self, frame, quality: int) -> bytes:
        ...
