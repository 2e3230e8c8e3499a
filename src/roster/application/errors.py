"""Exceptions raised for infrastructure and capture faults.

Validation problems are not exceptions; they come back as Invalid results.
"""


class RosterError(Exception):
    """Base class. str(error) is safe to show to the user."""


class StorageError(RosterError):
    """The persistence backend could not be read or written."""


class NothingToExport(RosterError):
    def __init__(self, message: str = "There is no data to export.") -> None:
        super().__init__(message)


class UnreadablePayload(RosterError):
    """A scanned QR payload did not contain contact data."""


class InvalidPhoto(RosterError):
    """An uploaded photo is too large or not an image."""


class CameraError(RosterError):
    default_message = "Could not access the camera."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)


class CameraPermissionDenied(CameraError):
    default_message = (
        "Camera permission denied. Allow camera access in the system settings."
    )


class CameraNotFound(CameraError):
    default_message = "No camera found on this device."


class CameraBusy(CameraError):
    default_message = "The camera is being used by another application."


class CameraUnsupported(CameraError):
    default_message = "Camera capture is not supported here."


class CaptureStateError(CameraError):
    """An operation was requested in the wrong capture mode."""
