"""Seed YAML loading."""

import pytest

from roster.application import DirectoryService
from roster.infrastructure import InMemoryDirectoryRepository, load_seed
from roster.infrastructure.seed import default_seed_path


def test_packaged_seed_is_valid():
    forms = load_seed()
    assert default_seed_path().name == "seed.yaml"
    assert len(forms) == 12
    service = DirectoryService(InMemoryDirectoryRepository())
    assert service.populate_initial_data(forms) == 12
    emails = [p.email for p in service.list_people()]
    assert len(set(emails)) == 12


def test_seed_entry_without_photo(tmp_path):
    path = tmp_path / "seed.yaml"
    path.write_text(
        "people:\n"
        "  - name: Ana Silva\n"
        "    email: ana@example.com\n"
        "    phone: (11) 99876-5432\n"
        "    role: Developer\n",
        encoding="utf-8",
    )
    [form] = load_seed(path)
    assert form.name == "Ana Silva"
    assert form.photo is None


@pytest.mark.parametrize("content", ["[]", "people: nope", "people:\n  - just text\n"])
def test_bad_seed_structure(tmp_path, content):
    path = tmp_path / "seed.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ValueError):
        load_seed(path)
