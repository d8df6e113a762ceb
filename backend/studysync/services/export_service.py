from __future__ import annotations

import csv
import io
from datetime import date, datetime
from typing import Sequence
from zoneinfo import ZoneInfo

from studysync.models.assignment import AssignmentRecord
from studysync.services.errors import EmptyExportError

EXPORT_HEADERS = ["Name", "Student ID", "Group", "Assigned At"]


def format_timestamp(assigned_at_ms: int, tz: ZoneInfo) -> str:
    # en-US style, e.g. "3/7/2026, 9:05:02 AM"
    dt = datetime.fromtimestamp(assigned_at_ms / 1000, tz=tz)
    hour = dt.hour % 12 or 12
    meridiem = "AM" if dt.hour < 12 else "PM"
    return f"{dt.month}/{dt.day}/{dt.year}, {hour}:{dt.minute:02d}:{dt.second:02d} {meridiem}"


def sort_for_export(roster: Sequence[AssignmentRecord]) -> list[AssignmentRecord]:
    return sorted(roster, key=lambda r: (r.group_number, r.assigned_at))


def build_export_rows(
    roster: Sequence[AssignmentRecord],
    *,
    tz: ZoneInfo,
    placeholder: str = "N/A",
) -> list[list[str]]:
    return [
        [
            r.full_name,
            r.student_identifier or placeholder,
            f"Group {r.group_number}",
            format_timestamp(r.assigned_at, tz),
        ]
        for r in sort_for_export(roster)
    ]


def render_csv(rows: Sequence[Sequence[str]], *, quote_fields: bool = False) -> str:
    """
    Join the header and rows into CSV text.

    Without ``quote_fields`` the cells are joined with bare commas, so a
    name containing a comma shifts the remaining columns.
    """
    if not quote_fields:
        return "\n".join(",".join(row) for row in [EXPORT_HEADERS, *rows])

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(EXPORT_HEADERS)
    writer.writerows(rows)
    return buffer.getvalue().rstrip("\n")


def export_filename(today: date) -> str:
    return f"group_registrations_{today.isoformat()}.csv"


def export_date(tz_name: str, now: datetime | None = None) -> date:
    """Today's date in the export time zone, so the filename agrees with the timestamps inside."""
    tz = ZoneInfo(tz_name)
    current = now.astimezone(tz) if now is not None else datetime.now(tz)
    return current.date()


def export_roster_csv(
    roster: Sequence[AssignmentRecord],
    *,
    tz_name: str,
    placeholder: str = "N/A",
    quote_fields: bool = False,
) -> str:
    if not roster:
        raise EmptyExportError("No data to export")
    rows = build_export_rows(roster, tz=ZoneInfo(tz_name), placeholder=placeholder)
    return render_csv(rows, quote_fields=quote_fields)
