"""OpenCV adapters for the capture ports: webcam, QR decoder and JPEG encoder."""

import logging
import os
from pathlib import Path

import cv2
import numpy as np

from roster.application.errors import (
    CameraBusy,
    CameraError,
    CameraNotFound,
    CameraPermissionDenied,
    CameraUnsupported,
)

logger = logging.getLogger(__name__)


class OpenCvCamera:
    """Wraps cv2.VideoCapture. facing selects between two device indexes."""

    def __init__(
        self,
        user_index: int = 0,
        environment_index: int | None = None,
        width: int = 1920,
        height: int = 1080,
    ) -> None:
        self._indexes = {
            "user": user_index,
            "environment": user_index if environment_index is None else environment_index,
        }
        self._width = width
        self._height = height
        self._capture = None

    def open(self, facing: str) -> None:
        if facing not in self._indexes:
            raise CameraUnsupported(f"Unknown camera facing: {facing}")
        index = self._indexes[facing]
        capture = cv2.VideoCapture(index)
        if not capture.isOpened():
            capture.release()
            if _access_denied(index):
                raise CameraPermissionDenied()
            raise CameraNotFound()
        capture.set(cv2.CAP_PROP_FRAME_WIDTH, self._width)
        capture.set(cv2.CAP_PROP_FRAME_HEIGHT, self._height)
        ok, _ = capture.read()
        if not ok:
            capture.release()
            # Device exists but yields nothing: another process holds it.
            raise CameraBusy()
        self._capture = capture
        logger.info("Opened camera index %d (%s)", index, facing)

    def read(self):
        if self._capture is None:
            return None
        ok, frame = self._capture.read()
        return frame if ok else None

    def release(self) -> None:
        if self._capture is not None:
            self._capture.release()
            self._capture = None


def _device_path(index: int) -> Path:
    return Path(f"/dev/video{index}")


def _access_denied(index: int) -> bool:
    """True when the V4L2 device node exists but this process may not open it.

    OpenCV reports every open failure the same way; the device node is the
    only place a permission problem shows up. Other platforms report not found.
    """
    path = _device_path(index)
    return path.exists() and not os.access(path, os.R_OK | os.W_OK)


class OpenCvQrDecoder:
    def __init__(self) -> None:
        self._detector = cv2.QRCodeDetector()

    def decode(self, frame) -> str | None:
        try:
            data, _points, _ = self._detector.detectAndDecode(frame)
        except cv2.error as e:
            logger.warning("QR decode failed: %s", e)
            return None
        return data or None

    def decode_image(self, data: bytes) -> str | None:
        """Decode a QR code from encoded image bytes (PNG, JPEG, ...)."""
        return self.decode(decode_image(data))


class OpenCvFrameEncoder:
    def encode_jpeg(self, frame, quality: int) -> bytes:
        ok, buf = cv2.imencode(".jpg", frame, [cv2.IMWRITE_JPEG_QUALITY, quality])
        if not ok:
            raise CameraError("Could not encode the captured photo.")
        return buf.tobytes()


def decode_image(data: bytes):
    """Decode image bytes to a BGR frame. Raises CameraError when unreadable."""
    frame = cv2.imdecode(np.frombuffer(data, dtype=np.uint8), cv2.IMREAD_COLOR)
    if frame is None:
        raise CameraError("Could not read the image.")
    return frame
