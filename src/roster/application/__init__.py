"""Application layer: use cases, ports, and DTOs. Depends only on domain."""

from roster.application.capture import CaptureMachine, CaptureSession
from roster.application.directory_service import DirectoryService, matches_search
from roster.application.dto import (
    DirectoryStats,
    Invalid,
    NotFound,
    PersonCreated,
    PersonForm,
    PersonPatch,
    PersonUpdated,
)
from roster.application.errors import (
    CameraBusy,
    CameraError,
    CameraNotFound,
    CameraPermissionDenied,
    CameraUnsupported,
    CaptureStateError,
    InvalidPhoto,
    NothingToExport,
    RosterError,
    StorageError,
    UnreadablePayload,
)
from roster.application.export import CsvExport, export_csv
from roster.application.listing import (
    ListPage,
    ListState,
    ListViewController,
    SortKey,
    ViewMode,
    build_page,
)
from roster.application.photos import CapturedPhoto, load_photo_file, photo_from_upload
from roster.application.ports import Camera, DirectoryRepository, FrameEncoder, QrDecoder
from roster.application.share import parse_scanned_payload, person_to_vcard

__all__ = [
    "Camera",
    "CameraBusy",
    "CameraError",
    "CameraNotFound",
    "CameraPermissionDenied",
    "CameraUnsupported",
    "CaptureMachine",
    "CaptureSession",
    "CaptureStateError",
    "CapturedPhoto",
    "CsvExport",
    "DirectoryRepository",
    "DirectoryService",
    "DirectoryStats",
    "FrameEncoder",
    "Invalid",
    "InvalidPhoto",
    "ListPage",
    "ListState",
    "ListViewController",
    "NotFound",
    "NothingToExport",
    "PersonCreated",
    "PersonForm",
    "PersonPatch",
    "PersonUpdated",
    "QrDecoder",
    "RosterError",
    "SortKey",
    "StorageError",
    "UnreadablePayload",
    "ViewMode",
    "build_page",
    "export_csv",
    "load_photo_file",
    "matches_search",
    "parse_scanned_payload",
    "person_to_vcard",
    "photo_from_upload",
]
