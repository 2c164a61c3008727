from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from ..common.datetime_utils import date_range_label, day_start, local_day, month_bounds, now_local, parse_iso_date
from ..core.exceptions import ValidationError
from ..events.repository import EventRepository
from ..timesheet.model import TimesheetReport
from ..timesheet.reconciler import DailyReconciler
from ..users.repository import UserRepository

logger = logging.getLogger(__name__)


class TimesheetReportService:
    """Use case: daily timesheet and period wage for one user."""

    def __init__(
        self,
        events: EventRepository,
        reconciler: DailyReconciler,
        *,
        tz: tzinfo,
        users: Optional[UserRepository] = None,
    ):
        self._events = events
        self._reconciler = reconciler
        self._tz = tz
        self._users = users

    def resolve_period(
        self,
        start_s: Optional[str],
        end_s: Optional[str],
        *,
        today: date,
    ) -> tuple[date, date]:
        """Parse YYYY-MM-DD bounds, defaulting each side to the current month."""
        month_start, month_end = month_bounds(today)
        try:
            start = parse_iso_date(start_s) if start_s else month_start
            end = parse_iso_date(end_s) if end_s else month_end
        except ValueError:
            raise ValidationError("日付の形式が正しくありません")

        if start > end:
            raise ValidationError("開始日は終了日以前の日付を指定してください")
        return start, end

    def build(
        self,
        *,
        user_id: int,
        start: date,
        end: date,
        now: Optional[datetime] = None,
    ) -> TimesheetReport:
        now = now or now_local(self._tz)
        today = local_day(now, self._tz)

        # End bound is inclusive of the whole last local day
        events = self._events.list_for_user(
            user_id,
            start_at=day_start(start, self._tz),
            end_before=day_start(end + timedelta(days=1), self._tz),
        )
        rows = self._reconciler.reconcile(events, today=today)
        total = self._reconciler.period_total(rows)

        logger.info(
            "timesheet built user_id=%s range=%s..%s events=%d days=%d total_wage=%d",
            user_id, start, end, len(events), len(rows), total,
        )

        user_name = ""
        if self._users:
            user = self._users.get_by_id(user_id)
            user_name = user.full_name if user else ""

        return TimesheetReport(
            start=start,
            end=end,
            rows=rows,
            total_wage=total,
            period_label=date_range_label(start, end),
            user_name=user_name,
        )
