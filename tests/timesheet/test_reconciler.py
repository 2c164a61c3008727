from __future__ import annotations

from datetime import date
from zoneinfo import ZoneInfo

import pytest

from timeclock.core.constants import IN_PROGRESS_LABEL
from timeclock.core.enums import EventType
from timeclock.payroll.calculator.standard_calculator import TruncatingWageCalculator
from timeclock.timesheet.reconciler import DailyReconciler

SW, EW, SB, EB = EventType.START_WORK, EventType.END_WORK, EventType.START_BREAK, EventType.END_BREAK

PAST = "2025-06-02"


@pytest.fixture
def reconciler(tz):
    return DailyReconciler(tz=tz)


def _one(reconciler, events, today):
    rows = reconciler.reconcile(events, today=today)
    assert len(rows) == 1
    return rows[0]


def test_regular_day_with_one_break(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SW, f"{PAST} 09:00"),
            make_event(SB, f"{PAST} 12:00"),
            make_event(EB, f"{PAST} 13:00"),
            make_event(EW, f"{PAST} 18:00"),
        ],
        today,
    )

    assert row.date_label == "06/02(月)"
    assert (row.start_time, row.end_time) == ("09:00", "18:00")
    assert row.worked_minutes == 480
    assert row.work_hours == "8:00"
    assert row.break_time == "1:00"
    assert row.daily_wage == 12000
    assert row.notes_text == ""


def test_orphan_end_work_only(reconciler, make_event, today):
    row = _one(reconciler, [make_event(EW, f"{PAST} 18:00")], today)

    assert row.start_time == ""
    assert row.end_time == "18:00"
    assert row.worked_minutes == 0
    assert row.daily_wage == 0
    assert row.notes == ("1件の退勤記録に対応する出勤記録がありません",)


def test_lone_start_break_on_past_day(reconciler, make_event, today):
    row = _one(reconciler, [make_event(SB, f"{PAST} 12:00")], today)

    assert row.break_minutes == 0
    assert row.notes == ("1件の休憩開始記録に対応する休憩終了記録がありません",)


def test_end_work_pairs_with_earliest_open_start(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SW, f"{PAST} 09:00"),
            make_event(EW, f"{PAST} 17:00"),
            make_event(SW, f"{PAST} 08:00"),
        ],
        today,
    )

    assert len(row.work_pairs) == 1
    assert row.start_time == "08:00"
    assert row.end_time == "17:00"
    assert row.worked_minutes == 9 * 60
    assert row.notes == ("1件の出勤記録に対応する退勤記録がありません",)


def test_open_start_today_is_in_progress(reconciler, make_event, today):
    row = _one(reconciler, [make_event(SW, f"{today} 09:00")], today)

    assert row.in_progress is True
    assert row.start_time == "09:00"
    assert row.end_time == IN_PROGRESS_LABEL
    assert row.worked_minutes == 0
    assert row.notes == ()


def test_open_start_yesterday_is_flagged(reconciler, make_event, today):
    row = _one(reconciler, [make_event(SW, "2025-06-09 09:00")], today)

    assert row.in_progress is False
    assert row.start_time == "09:00"
    assert row.end_time == ""
    assert row.worked_minutes == 0
    assert row.notes == ("1件の出勤記録に対応する退勤記録がありません",)


def test_back_at_work_after_a_closed_session_today(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SW, f"{today} 09:00"),
            make_event(EW, f"{today} 12:00"),
            make_event(SW, f"{today} 13:00"),
        ],
        today,
    )

    assert row.end_time == IN_PROGRESS_LABEL
    assert row.worked_minutes == 180
    assert row.notes == ()


def test_open_start_followed_by_end_work_is_not_in_progress(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SW, f"{today} 09:00"),
            make_event(SW, f"{today} 10:00"),
            make_event(EW, f"{today} 17:00"),
        ],
        today,
    )

    assert row.in_progress is False
    assert (row.start_time, row.end_time) == ("09:00", "17:00")
    assert row.worked_minutes == 480
    assert row.notes == ()


def test_orphan_end_work_is_reported_even_today(reconciler, make_event, today):
    row = _one(reconciler, [make_event(EW, f"{today} 10:00")], today)

    assert row.notes == ("1件の退勤記録に対応する出勤記録がありません",)


def test_open_break_today_is_still_flagged(reconciler, make_event, today):
    row = _one(reconciler, [make_event(SW, f"{today} 09:00"), make_event(SB, f"{today} 12:00")], today)

    assert row.notes == ("1件の休憩開始記録に対応する休憩終了記録がありません",)


def test_break_pairs_are_summed(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SW, f"{PAST} 09:00"),
            make_event(SB, f"{PAST} 10:00"),
            make_event(EB, f"{PAST} 10:15"),
            make_event(SB, f"{PAST} 15:00"),
            make_event(EB, f"{PAST} 15:20"),
            make_event(EW, f"{PAST} 18:00"),
        ],
        today,
    )

    assert row.break_minutes == 35
    assert row.worked_minutes == 540 - 35
    assert row.daily_wage == 8 * 1500
    assert row.notes == ("2件の休憩ペアの合計時間を表示しています",)


def test_multiple_sessions_use_outer_bounds(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SW, f"{PAST} 09:00"),
            make_event(EW, f"{PAST} 12:00"),
            make_event(SW, f"{PAST} 13:00"),
            make_event(EW, f"{PAST} 18:00"),
        ],
        today,
    )

    assert (row.start_time, row.end_time) == ("09:00", "18:00")
    assert row.worked_minutes == 540
    assert row.notes == ("複数の出勤・退勤ペアが存在します",)


def test_notes_follow_fixed_order(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SW, f"{PAST} 09:00"),
            make_event(EB, f"{PAST} 10:00"),
            make_event(EW, f"{PAST} 12:00"),
            make_event(SW, f"{PAST} 13:00"),
            make_event(SB, f"{PAST} 14:00"),
            make_event(SB, f"{PAST} 15:00"),
            make_event(EB, f"{PAST} 15:10"),
            make_event(SB, f"{PAST} 16:00"),
            make_event(EB, f"{PAST} 16:05"),
            make_event(EW, f"{PAST} 18:00"),
            make_event(EW, f"{PAST} 19:00"),
        ],
        today,
    )

    assert row.notes == (
        "複数の出勤・退勤ペアが存在します",
        "1件の退勤記録に対応する出勤記録がありません",
        "1件の休憩開始記録に対応する休憩終了記録がありません",
        "1件の休憩終了記録に対応する休憩開始記録がありません",
        "2件の休憩ペアの合計時間を表示しています",
    )
    assert row.notes_text == ", ".join(row.notes)
    assert row.end_time == "18:00"
    assert row.break_minutes == 15
    assert row.worked_minutes == 540 - 15


def test_worked_minutes_never_negative(reconciler, make_event, today):
    row = _one(
        reconciler,
        [
            make_event(SB, f"{PAST} 08:00"),
            make_event(SW, f"{PAST} 09:00"),
            make_event(EW, f"{PAST} 10:00"),
            make_event(EB, f"{PAST} 12:00"),
        ],
        today,
    )

    assert row.break_minutes == 240
    assert row.worked_minutes == 0
    assert row.daily_wage == 0


def test_partial_minutes_are_floored(reconciler, make_event, today):
    row = _one(
        reconciler,
        [make_event(SW, f"{PAST} 09:00:00"), make_event(EW, f"{PAST} 09:59:59")],
        today,
    )

    assert row.worked_minutes == 59
    assert row.daily_wage == 0


def test_durations_are_measured_across_dst_change(make_event):
    new_york = ZoneInfo("America/New_York")
    reconciler = DailyReconciler(tz=new_york)
    # clocks jump from 02:00 to 03:00 on this day
    events = [
        make_event(SW, "2025-03-09 01:00", zone=new_york),
        make_event(EW, "2025-03-09 04:00", zone=new_york),
    ]

    row = _one(reconciler, events, date(2025, 3, 20))

    assert row.worked_minutes == 120


def test_rows_sorted_by_calendar_date(reconciler, make_event, today):
    rows = reconciler.reconcile(
        [
            make_event(EW, "2025-10-10 18:00"),
            make_event(EW, "2025-01-05 18:00"),
            make_event(EW, "2025-10-02 18:00"),
            make_event(EW, "2024-12-28 18:00"),
        ],
        today=today,
    )

    assert [r.work_date for r in rows] == [
        date(2024, 12, 28),
        date(2025, 1, 5),
        date(2025, 10, 2),
        date(2025, 10, 10),
    ]


def test_period_total_sums_daily_wages(reconciler, make_event, today):
    rows = reconciler.reconcile(
        [
            make_event(SW, "2025-06-02 09:00"),
            make_event(SB, "2025-06-02 12:00"),
            make_event(EB, "2025-06-02 13:00"),
            make_event(EW, "2025-06-02 18:00"),
            make_event(EW, "2025-06-03 18:00"),
            make_event(SW, "2025-06-04 09:00"),
            make_event(EW, "2025-06-04 14:30"),
        ],
        today=today,
    )

    assert [r.daily_wage for r in rows] == [12000, 0, 7500]
    assert reconciler.period_total(rows) == 19500


def test_modified_punch_marks_the_day(reconciler, make_event, today):
    row = _one(
        reconciler,
        [make_event(SW, f"{PAST} 09:00"), make_event(EW, f"{PAST} 18:00", is_modified=True)],
        today,
    )

    assert row.has_modified is True


def test_custom_wage_unit(make_event, tz, today):
    reconciler = DailyReconciler(tz=tz, calculator=TruncatingWageCalculator(hourly_rate=750, minute_unit=30))

    row = _one(reconciler, [make_event(SW, f"{PAST} 09:00"), make_event(EW, f"{PAST} 10:29")], today)

    assert row.worked_minutes == 89
    assert row.daily_wage == 2 * 750
