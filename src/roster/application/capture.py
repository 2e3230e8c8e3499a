"""Capture session: one camera stream in either photo mode or QR scanning mode.

Mode changes go through a state machine (closed, photo, scanning). The stream
is released whenever the machine returns to closed.
"""

import logging
import time
from collections.abc import Callable
from typing import Protocol

from roster.application.errors import CameraError, CaptureStateError
from roster.application.photos import CapturedPhoto
from roster.application.ports import Camera, FrameEncoder, QrDecoder

logger = logging.getLogger(__name__)

CLOSED = "closed"
PHOTO = "photo"
SCANNING = "scanning"

FACING_USER = "user"
FACING_ENVIRONMENT = "environment"

JPEG_QUALITY = 90
MAX_SCANS_PER_SECOND = 5
# Consecutive empty reads before a scan treats the stream as lost.
MAX_MISSED_FRAMES = 5


class CaptureMachine(Protocol):
    initial: str

    def transition(self, state_value: str, event: str) -> str | None:
        """Return the next state, or None when event is not accepted in state_value."""
        ...


class CaptureSession:
    """Owns the camera while open. Use as a context manager to guarantee release."""

    def __init__(
        self,
        camera: Camera,
        decoder: QrDecoder,
        encoder: FrameEncoder,
        machine: CaptureMachine,
        *,
        max_scans_per_second: int = MAX_SCANS_PER_SECOND,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._camera = camera
        self._decoder = decoder
        self._encoder = encoder
        self._machine = machine
        self._state = machine.initial
        self._facing = FACING_USER
        self._stream_open = False
        self._interval = 1.0 / max_scans_per_second
        self._sleep = sleep

    @property
    def state(self) -> str:
        return self._state

    @property
    def facing(self) -> str:
        return self._facing

    def __enter__(self) -> "CaptureSession":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def open_photo(self) -> None:
        """Start still-photo mode with the front camera."""
        self._facing = FACING_USER
        self._enter("OPEN_PHOTO")

    def open_qr(self) -> None:
        """Start QR mode with the back camera."""
        self._facing = FACING_ENVIRONMENT
        self._enter("OPEN_QR")

    def switch_camera(self) -> None:
        if self._state == CLOSED:
            raise CaptureStateError("The camera is not open.")
        self._facing = (
            FACING_ENVIRONMENT if self._facing == FACING_USER else FACING_USER
        )
        self._release()
        try:
            self._acquire()
        except CameraError:
            self._fail()
            raise

    def capture_photo(self) -> CapturedPhoto:
        """Grab one frame, encode it as JPEG and close the stream."""
        if self._state != PHOTO:
            raise CaptureStateError("Open the camera in photo mode first.")
        frame = self._camera.read()
        if frame is None:
            self._fail()
            raise CameraError("Could not read a frame from the camera.")
        try:
            data = self._encoder.encode_jpeg(frame, JPEG_QUALITY)
        except CameraError:
            self._fail()
            raise
        self._send("CAPTURED")
        return CapturedPhoto(data=data)

    def scan_qr(self, max_frames: int | None = None) -> str | None:
        """Decode frames until one yields a payload. First success wins and closes the stream.

        Returns None when max_frames frames were read without a decode; the
        stream stays open so the caller may keep scanning or close().
        Raises CameraError once MAX_MISSED_FRAMES reads in a row return nothing.
        """
        if self._state != SCANNING:
            raise CaptureStateError("Open the camera in QR mode first.")
        frames = 0
        missed = 0
        while max_frames is None or frames < max_frames:
            started = time.monotonic()
            frame = self._camera.read()
            frames += 1
            if frame is None:
                missed += 1
                if missed >= MAX_MISSED_FRAMES:
                    self._fail()
                    raise CameraError("Could not read a frame from the camera.")
            else:
                missed = 0
                payload = self._decoder.decode(frame)
                if payload:
                    logger.info("QR code decoded after %d frame(s)", frames)
                    self._send("DECODED")
                    return payload
            remaining = self._interval - (time.monotonic() - started)
            if remaining > 0:
                self._sleep(remaining)
        return None

    def close(self) -> None:
        if self._state != CLOSED:
            self._send("CLOSE")
        self._release()

    def _enter(self, event: str) -> None:
        next_state = self._machine.transition(self._state, event)
        if next_state is None:
            raise CaptureStateError(f"Cannot {event} while {self._state}.")
        self._release()
        self._state = next_state
        try:
            self._acquire()
        except CameraError:
            self._fail()
            raise

    def _send(self, event: str) -> None:
        next_state = self._machine.transition(self._state, event)
        if next_state is not None:
            self._state = next_state
        if self._state == CLOSED:
            self._release()

    def _fail(self) -> None:
        self._send("FAIL")

    def _acquire(self) -> None:
        logger.info("Opening %s camera for %s", self._facing, self._state)
        self._camera.open(self._facing)
        self._stream_open = True

    def _release(self) -> None:
        if self._stream_open:
            self._camera.release()
            self._stream_open = False
            logger.info("Camera released")
