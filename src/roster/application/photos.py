"""Photo field helpers: uploaded or captured images become data: URLs."""

import base64
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from roster.application.errors import InvalidPhoto

MAX_PHOTO_BYTES = 5 * 1024 * 1024


@dataclass(frozen=True)
class CapturedPhoto:
    data: bytes
    content_type: str = "image/jpeg"

    @property
    def data_url(self) -> str:
        return to_data_url(self.data, self.content_type)


def to_data_url(data: bytes, content_type: str) -> str:
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{content_type};base64,{encoded}"


def photo_from_upload(data: bytes, content_type: str | None) -> str:
    """Check size and type of an uploaded image and return it as a data: URL."""
    if len(data) > MAX_PHOTO_BYTES:
        raise InvalidPhoto("File too large. Maximum 5MB.")
    content_type = (content_type or "").strip().lower()
    if not content_type.startswith("image/"):
        raise InvalidPhoto("Please select an image file.")
    if not data:
        raise InvalidPhoto("The image file is empty.")
    return to_data_url(data, content_type)


def load_photo_file(path: Path) -> str:
    """Gallery path: read an image from disk and return it as a data: URL."""
    content_type, _ = mimetypes.guess_type(path.name)
    if path.stat().st_size > MAX_PHOTO_BYTES:
        raise InvalidPhoto("File too large. Maximum 5MB.")
    return photo_from_upload(path.read_bytes(), content_type)
