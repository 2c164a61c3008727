from __future__ import annotations

import io

import pandas as pd

from ..timesheet.model import TimesheetReport
from .csv_export import TIMESHEET_FIELDS, timesheet_rows

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def timesheet_dataframe(report: TimesheetReport) -> pd.DataFrame:
    df = pd.DataFrame(timesheet_rows(report), columns=TIMESHEET_FIELDS)
    df["日給"] = df["日給"].astype("int64")
    return df


def timesheet_to_xlsx(report: TimesheetReport) -> bytes:
    """Workbook with the daily rows followed by the period total."""
    df = timesheet_dataframe(report)
    total = pd.DataFrame([{"日付": "合計", "日給": report.total_wage}], columns=TIMESHEET_FIELDS)
    sheet = pd.concat([df, total], ignore_index=True) if len(df) else total

    out = io.BytesIO()
    with pd.ExcelWriter(out, engine="openpyxl") as writer:
        sheet.to_excel(writer, index=False, sheet_name=report.period_label[:31] or "timesheet")
    return out.getvalue()
