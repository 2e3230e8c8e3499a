"""CSV export of the filtered projection."""

import csv
import io
from datetime import date, datetime, timezone

import pytest

from roster.application import ListState, NothingToExport, build_page, export_csv
from roster.application.export import CSV_COLUMNS, export_filename
from roster.domain import Person


def _people() -> list[Person]:
    return [
        Person(
            id="1",
            name="Ana Silva",
            email="ana@example.com",
            phone="(11) 99876-5432",
            role="Developer",
            registered_at=datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc),
        ),
        Person(
            id="2",
            name='Bruno "Bru" Costa, Jr',
            email="bruno@example.com",
            phone="(21) 91234-5678",
            role="Designer",
            registered_at=datetime(2024, 12, 31, tzinfo=timezone.utc),
        ),
    ]


def test_export_quotes_every_field_and_formats_dates():
    result = export_csv(_people(), today=date(2025, 1, 2))
    lines = result.content.splitlines()
    assert lines[0] == '"Name","Email","Phone","Role","Registration Date"'
    assert lines[1] == '"Ana Silva","ana@example.com","(11) 99876-5432","Developer","05/03/2024"'
    assert result.filename == "people_2025-01-02.csv"
    assert result.row_count == 2
    assert result.media_type.startswith("text/csv")


def test_export_escapes_embedded_quotes_and_commas():
    content = export_csv(_people()).content
    rows = list(csv.reader(io.StringIO(content)))
    assert rows[0] == CSV_COLUMNS
    assert rows[2][0] == 'Bruno "Bru" Costa, Jr'
    assert rows[2][4] == "31/12/2024"


def test_export_covers_whole_filter_not_only_visible_page():
    people = _people() + [
        Person(id=str(i), name=f"Person {chr(64 + i)}", email=f"p{i}@example.com", role="Developer")
        for i in range(3, 9)
    ]
    page = build_page(people, ListState(role="Developer", page_size=2))
    assert len(page.items) == 2
    result = export_csv(page.filtered)
    assert result.row_count == page.filtered_count == 7
    assert len(result.content.splitlines()) == 8


def test_export_empty_raises():
    with pytest.raises(NothingToExport) as exc:
        export_csv([])
    assert str(exc.value) == "There is no data to export."


def test_export_filename_uses_iso_date():
    assert export_filename(date(2024, 7, 9)) == "people_2024-07-09.csv"
