from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from ..common.datetime_utils import elapsed, format_day_label, format_duration
from ..core.constants import NOTE_DELIMITER


@dataclass(frozen=True)
class Interval:
    """A closed (start, end) pair of punches."""

    start: datetime
    end: datetime

    @property
    def duration(self) -> timedelta:
        return elapsed(self.start, self.end)


@dataclass(frozen=True)
class DailySummary:
    """One reconciled timesheet row. Derived on every read, never persisted."""

    work_date: date
    start_time: str
    end_time: str
    worked_minutes: int
    break_minutes: int
    daily_wage: int
    notes: tuple[str, ...] = ()
    in_progress: bool = False
    has_modified: bool = False
    work_pairs: tuple[Interval, ...] = field(default=(), compare=False, repr=False)
    break_pairs: tuple[Interval, ...] = field(default=(), compare=False, repr=False)

    @property
    def date_label(self) -> str:
        return format_day_label(self.work_date)

    @property
    def work_hours(self) -> str:
        return format_duration(self.worked_minutes)

    @property
    def break_time(self) -> str:
        return format_duration(self.break_minutes)

    @property
    def notes_text(self) -> str:
        return NOTE_DELIMITER.join(self.notes)


@dataclass(frozen=True)
class TimesheetReport:
    """Rows for one user and period plus the period wage total."""

    start: date
    end: date
    rows: list[DailySummary]
    total_wage: int
    period_label: str
    user_name: str = ""

    @property
    def total_worked_minutes(self) -> int:
        return sum(r.worked_minutes for r in self.rows)
