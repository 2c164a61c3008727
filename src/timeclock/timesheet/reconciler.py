from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Callable, Iterable, Optional, Sequence

from ..common.datetime_utils import format_clock, whole_minutes
from ..core.constants import IN_PROGRESS_LABEL
from ..core.enums import EventType
from ..events.model import Event
from ..payroll.calculator.base import WageCalculator
from ..payroll.calculator.standard_calculator import TruncatingWageCalculator
from .grouping import group_events_by_day
from .model import DailySummary, Interval

NOTE_MULTIPLE_WORK_PAIRS = "複数の出勤・退勤ペアが存在します"
NOTE_MISSING_END_WORK = "{count}件の出勤記録に対応する退勤記録がありません"
NOTE_MISSING_START_WORK = "{count}件の退勤記録に対応する出勤記録がありません"
NOTE_MISSING_END_BREAK = "{count}件の休憩開始記録に対応する休憩終了記録がありません"
NOTE_MISSING_START_BREAK = "{count}件の休憩終了記録に対応する休憩開始記録がありません"
NOTE_BREAK_PAIRS_SUMMED = "{count}件の休憩ペアの合計時間を表示しています"


@dataclass
class _DayState:
    """Mutable scratch state for one pass over a single day's punches."""

    open_starts: deque[datetime] = field(default_factory=deque)
    work_pairs: list[Interval] = field(default_factory=list)
    orphan_end_works: list[datetime] = field(default_factory=list)
    start_work_count: int = 0
    end_work_count: int = 0
    last_end_work: Optional[datetime] = None

    open_break: Optional[datetime] = None
    break_pairs: list[Interval] = field(default_factory=list)
    abandoned_breaks: int = 0
    orphan_end_breaks: int = 0

    def on_start_work(self, at: datetime) -> None:
        self.start_work_count += 1
        self.open_starts.append(at)

    def on_end_work(self, at: datetime) -> None:
        self.end_work_count += 1
        self.last_end_work = at
        if self.open_starts:
            # FIFO: the oldest unmatched start closes first
            self.work_pairs.append(Interval(self.open_starts.popleft(), at))
        else:
            self.orphan_end_works.append(at)

    def has_trailing_start(self) -> bool:
        """An unpaired start with no END_WORK after it, i.e. still clocked in."""
        if not self.open_starts:
            return False
        return self.last_end_work is None or self.open_starts[-1] > self.last_end_work

    def on_start_break(self, at: datetime) -> None:
        if self.open_break is not None:
            self.abandoned_breaks += 1
        self.open_break = at

    def on_end_break(self, at: datetime) -> None:
        if self.open_break is None:
            self.orphan_end_breaks += 1
            return
        self.break_pairs.append(Interval(self.open_break, at))
        self.open_break = None


_HANDLERS: dict[EventType, Callable[[_DayState, datetime], None]] = {
    EventType.START_WORK: _DayState.on_start_work,
    EventType.END_WORK: _DayState.on_end_work,
    EventType.START_BREAK: _DayState.on_start_break,
    EventType.END_BREAK: _DayState.on_end_break,
}


class DailyReconciler:
    """Turns raw punches into one DailySummary per local calendar day.

    Pure computation: the caller supplies ``today`` and nothing is persisted.
    Malformed sequences never raise; they surface as notes on the row.
    """

    def __init__(self, *, tz: tzinfo, calculator: Optional[WageCalculator] = None):
        self._tz = tz
        self._calculator = calculator or TruncatingWageCalculator()

    @property
    def calculator(self) -> WageCalculator:
        return self._calculator

    def reconcile(self, events: Iterable[Event], *, today: date) -> list[DailySummary]:
        """Summaries for every day present in ``events``, in date order."""
        buckets = group_events_by_day(events, self._tz)
        return [self.reconcile_day(day, bucket, today=today) for day, bucket in buckets.items()]

    def reconcile_day(self, work_date: date, events: Sequence[Event], *, today: date) -> DailySummary:
        """Reconcile one day's punches, which must already be in timestamp order."""
        state = _DayState()
        for event in events:
            _HANDLERS[event.event_type](state, event.timestamp)

        is_today = work_date == today
        notes = self._notes(state, is_today=is_today)

        total_break = sum((p.duration for p in state.break_pairs), timedelta())
        break_minutes = whole_minutes(total_break)

        start_at: Optional[datetime] = None
        end_at: Optional[datetime] = None
        worked_minutes = 0

        if state.work_pairs:
            start_at = min(p.start for p in state.work_pairs)
            end_at = max(p.end for p in state.work_pairs)
            span = Interval(start_at, end_at).duration
            worked_minutes = max(0, whole_minutes(span - total_break))
        else:
            if state.open_starts:
                start_at = state.open_starts[0]
            if state.orphan_end_works:
                end_at = max(state.orphan_end_works)

        in_progress = is_today and state.has_trailing_start()
        end_time = IN_PROGRESS_LABEL if in_progress else format_clock(end_at, self._tz)

        return DailySummary(
            work_date=work_date,
            start_time=format_clock(start_at, self._tz),
            end_time=end_time,
            worked_minutes=worked_minutes,
            break_minutes=break_minutes,
            daily_wage=self._calculator.daily_wage(worked_minutes),
            notes=tuple(notes),
            in_progress=in_progress,
            has_modified=any(e.is_modified for e in events),
            work_pairs=tuple(state.work_pairs),
            break_pairs=tuple(state.break_pairs),
        )

    def period_total(self, rows: Iterable[DailySummary]) -> int:
        return self._calculator.period_total(r.daily_wage for r in rows)

    @staticmethod
    def _notes(state: _DayState, *, is_today: bool) -> list[str]:
        # Fixed order
        notes: list[str] = []
        pairs = len(state.work_pairs)

        if pairs > 1:
            notes.append(NOTE_MULTIPLE_WORK_PAIRS)

        missing_end_work = state.start_work_count - pairs
        if missing_end_work > 0 and not is_today:
            notes.append(NOTE_MISSING_END_WORK.format(count=missing_end_work))

        missing_start_work = state.end_work_count - pairs
        if missing_start_work > 0:
            notes.append(NOTE_MISSING_START_WORK.format(count=missing_start_work))

        missing_end_break = state.abandoned_breaks + (1 if state.open_break is not None else 0)
        if missing_end_break > 0:
            notes.append(NOTE_MISSING_END_BREAK.format(count=missing_end_break))

        if state.orphan_end_breaks > 0:
            notes.append(NOTE_MISSING_START_BREAK.format(count=state.orphan_end_breaks))

        if len(state.break_pairs) > 1:
            notes.append(NOTE_BREAK_PAIRS_SUMMED.format(count=len(state.break_pairs)))

        return notes
