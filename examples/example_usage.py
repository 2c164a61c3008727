"""Example: run the timesheet engine without Flask or a database.

Controllers are a thin layer; every rule lives in the services and the engine.
"""

import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from timeclock.common.datetime_utils import get_timezone
from timeclock.database.bootstrap import iter_demo_punches
from timeclock.events.model import Event
from timeclock.timesheet.reconciler import DailyReconciler


def main():
    tz = get_timezone("Asia/Tokyo")
    events = [
        Event(event_id=i, user_id=1, event_type=kind, timestamp=ts, is_modified=modified)
        for i, (kind, ts, modified) in enumerate(iter_demo_punches(date(2025, 4, 1), date(2025, 4, 13), tz), start=1)
    ]

    reconciler = DailyReconciler(tz=tz)
    rows = reconciler.reconcile(events, today=date(2025, 4, 14))
    for row in rows:
        print(row.date_label, row.start_time, row.end_time, row.work_hours, row.break_time, row.daily_wage, row.notes_text)
    print("total:", reconciler.period_total(rows))


if __name__ == "__main__":
    main()
