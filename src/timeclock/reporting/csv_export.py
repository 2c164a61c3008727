from __future__ import annotations

import csv
import io
from datetime import tzinfo
from typing import Iterable

from ..common.datetime_utils import to_local
from ..core.constants import EVENT_TYPE_LABELS
from ..events.model import Event
from ..timesheet.model import TimesheetReport

TIMESHEET_FIELDS = ["日付", "出勤", "退勤", "勤務時間", "休憩時間", "日給", "備考"]
PUNCH_FIELDS = ["種別", "日時"]


def timesheet_rows(report: TimesheetReport) -> list[dict]:
    """Flatten summaries into the column layout shared by CSV and Excel."""
    return [
        {
            "日付": row.date_label,
            "出勤": row.start_time,
            "退勤": row.end_time,
            "勤務時間": row.work_hours,
            "休憩時間": row.break_time,
            "日給": row.daily_wage,
            "備考": row.notes_text,
        }
        for row in report.rows
    ]


def _write(fieldnames: list[str], rows: Iterable[dict]) -> str:
    out = io.StringIO()
    writer = csv.DictWriter(out, fieldnames=fieldnames, lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow(row)
    return out.getvalue()


def timesheet_to_csv(report: TimesheetReport) -> str:
    return _write(TIMESHEET_FIELDS, timesheet_rows(report))


def punches_to_csv(events: Iterable[Event], tz: tzinfo) -> str:
    """Raw punch log: type label and ISO-8601 local timestamp per line."""
    rows = (
        {
            "種別": EVENT_TYPE_LABELS[e.event_type],
            "日時": to_local(e.timestamp, tz).isoformat(timespec="seconds"),
        }
        for e in events
    )
    return _write(PUNCH_FIELDS, rows)


def encode_csv(text: str) -> bytes:
    # BOM so spreadsheet apps detect UTF-8
    return text.encode("utf-8-sig")
