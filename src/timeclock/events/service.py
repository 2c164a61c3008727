from __future__ import annotations

import logging
from datetime import datetime, timedelta, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import (
    combine_local,
    day_start,
    elapsed,
    format_clock,
    now_local,
    parse_clock,
    parse_iso_date,
    to_local,
)
from ..core.constants import DEFAULT_DELETION_WINDOW_MINUTES, EVENT_TYPE_LABELS
from ..core.enums import EventType, WorkStatus
from ..core.exceptions import (
    DeletionWindowExpiredError,
    NotLatestRecordError,
    RecordNotFoundError,
    ValidationError,
)
from .model import Event, TodayPunch
from .repository import EventRepository

logger = logging.getLogger(__name__)

_STATUS_AFTER = {
    EventType.START_WORK: WorkStatus.WORKING,
    EventType.END_BREAK: WorkStatus.WORKING,
    EventType.START_BREAK: WorkStatus.ON_BREAK,
    EventType.END_WORK: WorkStatus.NOT_WORKING,
}


def parse_event_type(value: object) -> EventType:
    if isinstance(value, EventType):
        return value
    try:
        return EventType(str(value or "").strip())
    except ValueError:
        raise ValidationError("打刻種別が正しくありません")


class PunchService:
    """Use case: record, correct and retract punches."""

    def __init__(
        self,
        events: EventRepository,
        *,
        tz: tzinfo,
        deletion_window_minutes: int = DEFAULT_DELETION_WINDOW_MINUTES,
    ):
        self._events = events
        self._tz = tz
        self._deletion_window = timedelta(minutes=int(deletion_window_minutes))

    def punch(self, user_id: int, event_type: object, *, now: Optional[datetime] = None) -> int:
        """Live punch stamped with the current time."""
        kind = parse_event_type(event_type)
        now = now or now_local(self._tz)

        event_id = self._events.add(user_id=user_id, event_type=kind, timestamp=now, created_at=now)
        logger.info("punch recorded user_id=%s type=%s event_id=%s", user_id, kind.value, event_id)
        return event_id

    def record_correction(
        self,
        user_id: int,
        *,
        date_s: str,
        time_s: str,
        type_s: str,
        now: Optional[datetime] = None,
    ) -> int:
        """Back-dated punch entered by hand; stored with ``is_modified``."""
        if not date_s or not time_s or not type_s:
            raise ValidationError("日付・時刻・種別をすべて入力してください")

        kind = parse_event_type(type_s)
        try:
            day = parse_iso_date(date_s.strip())
            clock = parse_clock(time_s.strip())
        except ValueError:
            raise ValidationError("日付または時刻の形式が正しくありません")

        now = now or now_local(self._tz)
        timestamp = combine_local(day, clock, self._tz)
        if timestamp > now:
            raise ValidationError("未来の日時は登録できません")

        event_id = self._events.add(
            user_id=user_id,
            event_type=kind,
            timestamp=timestamp,
            created_at=now,
            is_modified=True,
        )
        logger.info(
            "correction recorded user_id=%s type=%s at=%s event_id=%s",
            user_id, kind.value, timestamp.isoformat(), event_id,
        )
        return event_id

    def delete_latest(self, user_id: int, event_id: int, *, now: Optional[datetime] = None) -> None:
        """Soft-delete a punch if it is the user's newest one and still fresh."""
        now = now or now_local(self._tz)

        event = self._events.get_by_id(event_id)
        if not event or event.user_id != user_id or event.is_deleted:
            logger.warning("delete rejected (not found) user_id=%s event_id=%s", user_id, event_id)
            raise RecordNotFoundError("指定された打刻が見つかりません")

        latest = self._events.get_latest_created(user_id)
        if not latest or latest.event_id != event.event_id:
            logger.warning("delete rejected (not latest) user_id=%s event_id=%s", user_id, event_id)
            raise NotLatestRecordError("削除できるのは最新の打刻のみです")

        if not self._within_window(event, now):
            logger.warning("delete rejected (window expired) user_id=%s event_id=%s", user_id, event_id)
            minutes = int(self._deletion_window.total_seconds() // 60)
            raise DeletionWindowExpiredError(f"打刻から{minutes}分以上経過したため削除できません")

        self._events.soft_delete(event.event_id)
        logger.info("punch deleted user_id=%s event_id=%s", user_id, event_id)

    def current_status(self, user_id: int) -> WorkStatus:
        latest = self._events.get_latest_by_timestamp(user_id)
        if not latest:
            return WorkStatus.NOT_WORKING
        return _STATUS_AFTER[latest.event_type]

    def today_punches(self, user_id: int, *, now: Optional[datetime] = None) -> list[TodayPunch]:
        """Today's punches in time order, soft-deleted ones included for display."""
        now = now or now_local(self._tz)
        today = to_local(now, self._tz).date()

        events = self._events.list_for_user(
            user_id,
            start_at=day_start(today, self._tz),
            end_before=day_start(today + timedelta(days=1), self._tz),
            include_deleted=True,
        )
        latest = self._events.get_latest_created(user_id)
        deletable_id = latest.event_id if latest and self._within_window(latest, now) else None

        return [
            TodayPunch(
                event_id=e.event_id,
                type_label=EVENT_TYPE_LABELS[e.event_type],
                clock=format_clock(e.timestamp, self._tz),
                is_deleted=e.is_deleted,
                is_modified=e.is_modified,
                can_delete=not e.is_deleted and e.event_id == deletable_id,
            )
            for e in events
        ]

    def list_punches(self, user_id: int) -> Sequence[Event]:
        return self._events.list_for_user(user_id)

    def _within_window(self, event: Event, now: datetime) -> bool:
        created = event.created_at or event.timestamp
        return elapsed(created, now) <= self._deletion_window
