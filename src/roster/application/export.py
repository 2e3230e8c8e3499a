"""CSV export of a filtered projection."""

import csv
from dataclasses import dataclass
from datetime import date, datetime, timezone

import pandas as pd

from roster.application.errors import NothingToExport
from roster.domain import Person

CSV_COLUMNS = ["Name", "Email", "Phone", "Role", "Registration Date"]
DATE_FORMAT = "%d/%m/%Y"


@dataclass(frozen=True)
class CsvExport:
    filename: str
    content: str
    row_count: int

    @property
    def media_type(self) -> str:
        return "text/csv; charset=utf-8"


def export_filename(today: date | None = None) -> str:
    today = today or datetime.now(timezone.utc).date()
    return f"people_{today.isoformat()}.csv"


def people_frame(people: list[Person], date_format: str = DATE_FORMAT) -> pd.DataFrame:
    """One row per person, columns in export order."""
    rows = [
        [
            p.name,
            p.email,
            p.phone,
            p.role,
            p.registered_at.strftime(date_format),
        ]
        for p in people
    ]
    return pd.DataFrame(rows, columns=CSV_COLUMNS, dtype=str)


def export_csv(
    people: list[Person],
    *,
    today: date | None = None,
    date_format: str = DATE_FORMAT,
) -> CsvExport:
    """Render people as CSV with every field quoted. Raises NothingToExport when empty."""
    if not people:
        raise NothingToExport()
    frame = people_frame(people, date_format=date_format)
    content = frame.to_csv(index=False, quoting=csv.QUOTE_ALL, lineterminator="\n")
    return CsvExport(
        filename=export_filename(today),
        content=content,
        row_count=len(frame),
    )
