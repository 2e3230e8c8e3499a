"""
Local camera capture: still photo or QR scan through the capture session.
Run: python -m capture photo OUT.jpg | python -m capture qr [--add] [--max-frames N]
"""
import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from dotenv import load_dotenv

# Repo root: from src/capture/__main__.py go up to repo root
_REPO_ROOT = Path(__file__).resolve().parent.parent.parent
for path in (_REPO_ROOT / ".env", Path.cwd() / ".env"):
    if path.exists():
        load_dotenv(path)
        break

from roster.application import (  # noqa: E402
    CaptureSession,
    Invalid,
    RosterError,
    parse_scanned_payload,
)
from roster.infrastructure import (  # noqa: E402
    Settings,
    XStateCaptureMachine,
    build_repository,
    build_service,
    get_driver,
)
from roster.infrastructure.camera import (  # noqa: E402
    OpenCvCamera,
    OpenCvFrameEncoder,
    OpenCvQrDecoder,
)
from roster.infrastructure.config import STORE_NEO4J  # noqa: E402

logging.basicConfig(
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    level=logging.INFO,
)
logger = logging.getLogger(__name__)


def _session(settings: Settings) -> CaptureSession:
    return CaptureSession(
        OpenCvCamera(user_index=settings.camera_index),
        OpenCvQrDecoder(),
        OpenCvFrameEncoder(),
        XStateCaptureMachine(),
    )


def _photo(settings: Settings, out: Path) -> int:
    with _session(settings) as session:
        session.open_photo()
        photo = session.capture_photo()
    out.write_bytes(photo.data)
    print(f"Saved {out} ({len(photo.data)} bytes)")
    return 0


def _qr(settings: Settings, add: bool, max_frames: int | None) -> int:
    with _session(settings) as session:
        session.open_qr()
        payload = session.scan_qr(max_frames=max_frames)
    if payload is None:
        print("No QR code found.", file=sys.stderr)
        return 1
    form = parse_scanned_payload(payload)
    print(json.dumps(asdict(form), ensure_ascii=False, indent=2))
    if not add:
        return 0

    driver = get_driver(settings) if settings.store == STORE_NEO4J else None
    try:
        service = build_service(settings, build_repository(settings, driver=driver))
        result = service.add_person(form)
    finally:
        if driver is not None:
            driver.close()
    if isinstance(result, Invalid):
        for field, message in result.errors.items():
            print(f"{field}: {message}", file=sys.stderr)
        return 1
    print(f"Added {result.person.name} ({result.person.id})")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="capture", description=__doc__)
    sub = parser.add_subparsers(dest="mode", required=True)
    photo = sub.add_parser("photo", help="capture one still photo")
    photo.add_argument("out", type=Path)
    qr = sub.add_parser("qr", help="scan a QR code and print the contact fields")
    qr.add_argument("--add", action="store_true", help="add the scanned contact to the directory")
    qr.add_argument("--max-frames", type=int, default=None)
    args = parser.parse_args(argv)

    settings = Settings.from_env()
    try:
        if args.mode == "photo":
            return _photo(settings, args.out)
        return _qr(settings, args.add, args.max_frames)
    except RosterError as e:
        logger.warning("Capture failed: %s", e)
        print(str(e), file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
