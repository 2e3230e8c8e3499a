"""Load sample people from YAML for seeding an empty directory."""

from pathlib import Path

import yaml

from roster.application.dto import PersonForm


def default_seed_path() -> Path:
    return Path(__file__).resolve().parent / "data" / "seed.yaml"


def load_seed(path: Path | None = None) -> list[PersonForm]:
    """Read the seed file and return one PersonForm per entry. Validates minimal structure."""
    if path is None:
        path = default_seed_path()
    raw = path.read_text(encoding="utf-8")
    data = yaml.safe_load(raw)
    if not isinstance(data, dict) or not isinstance(data.get("people"), list):
        raise ValueError("Seed YAML must be a dict with a 'people' list")
    forms = []
    for i, entry in enumerate(data["people"]):
        if not isinstance(entry, dict):
            raise ValueError(f"Seed entry {i} must be a mapping")
        forms.append(
            PersonForm(
                name=str(entry.get("name") or ""),
                email=str(entry.get("email") or ""),
                phone=str(entry.get("phone") or ""),
                role=str(entry.get("role") or ""),
                photo=entry.get("photo") or None,
            )
        )
    return forms
