from __future__ import annotations

import io
from datetime import date

import pandas as pd

from timeclock.reporting.excel_export import timesheet_dataframe, timesheet_to_xlsx
from timeclock.timesheet.model import DailySummary, TimesheetReport


def _report(rows):
    return TimesheetReport(
        start=date(2025, 4, 1),
        end=date(2025, 6, 6),
        rows=rows,
        total_wage=sum(r.daily_wage for r in rows),
        period_label="2025年4月～2025年6月",
    )


def _row(day, minutes, wage):
    return DailySummary(
        work_date=day,
        start_time="09:00",
        end_time="18:00",
        worked_minutes=minutes,
        break_minutes=60,
        daily_wage=wage,
    )


def test_dataframe_keeps_wage_numeric():
    df = timesheet_dataframe(_report([_row(date(2025, 4, 1), 480, 12000)]))

    assert df["日給"].dtype == "int64"
    assert df.loc[0, "勤務時間"] == "8:00"


def test_workbook_has_rows_and_total():
    report = _report([_row(date(2025, 4, 1), 480, 12000), _row(date(2025, 4, 2), 330, 7500)])

    sheets = pd.read_excel(io.BytesIO(timesheet_to_xlsx(report)), sheet_name=None)

    assert list(sheets) == ["2025年4月～2025年6月"]
    df = sheets["2025年4月～2025年6月"]
    assert list(df["日付"]) == ["04/01(火)", "04/02(水)", "合計"]
    assert list(df["日給"]) == [12000, 7500, 19500]


def test_empty_period_still_has_total_row():
    df = pd.read_excel(io.BytesIO(timesheet_to_xlsx(_report([]))))

    assert list(df["日付"]) == ["合計"]
    assert list(df["日給"]) == [0]
