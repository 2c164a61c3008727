from __future__ import annotations

import itertools
from dataclasses import replace
from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from timeclock.core.enums import EventType, Role
from timeclock.events.model import Event
from timeclock.users.model import User

TOKYO = ZoneInfo("Asia/Tokyo")


class InMemoryEvents:
    """EventRepository backed by a dict; records the last list_for_user call."""

    def __init__(self, events=()):
        self._rows: dict[int, Event] = {}
        self.last_list_args: Optional[dict] = None
        for e in events:
            self._rows[e.event_id] = e

    def add(self, *, user_id: int, event_type: EventType, timestamp: datetime, created_at: datetime, is_modified: bool = False) -> int:
        event_id = max(self._rows, default=0) + 1
        self._rows[event_id] = Event(
            event_id=event_id,
            user_id=user_id,
            event_type=event_type,
            timestamp=timestamp,
            created_at=created_at,
            is_modified=is_modified,
        )
        return event_id

    def put(self, event: Event) -> Event:
        self._rows[event.event_id] = event
        return event

    def get_by_id(self, event_id: int) -> Optional[Event]:
        return self._rows.get(event_id)

    def _live(self, user_id: int) -> list[Event]:
        return [e for e in self._rows.values() if e.user_id == user_id and not e.is_deleted]

    def get_latest_created(self, user_id: int) -> Optional[Event]:
        rows = self._live(user_id)
        return max(rows, key=lambda e: (e.created_at or e.timestamp, e.event_id)) if rows else None

    def get_latest_by_timestamp(self, user_id: int) -> Optional[Event]:
        rows = self._live(user_id)
        return max(rows, key=lambda e: (e.timestamp, e.event_id)) if rows else None

    def list_for_user(self, user_id: int, *, start_at=None, end_before=None, include_deleted: bool = False):
        self.last_list_args = {
            "user_id": user_id,
            "start_at": start_at,
            "end_before": end_before,
            "include_deleted": include_deleted,
        }
        rows = [
            e
            for e in self._rows.values()
            if e.user_id == user_id
            and (include_deleted or not e.is_deleted)
            and (start_at is None or e.timestamp >= start_at)
            and (end_before is None or e.timestamp < end_before)
        ]
        return sorted(rows, key=lambda e: (e.timestamp, e.event_id))

    def soft_delete(self, event_id: int) -> bool:
        event = self._rows.get(event_id)
        if not event or event.is_deleted:
            return False
        self._rows[event_id] = replace(event, is_deleted=True)
        return True


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}
        self._ids = itertools.count(max(self._by_id, default=0) + 1)

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        email = email.strip().lower()
        return next((u for u in self._by_id.values() if u.email == email), None)

    def create_user(self, *, full_name: str, email: str, password_hash: str, role: Role) -> int:
        user_id = next(self._ids)
        self._by_id[user_id] = User(
            user_id=user_id,
            full_name=full_name,
            email=email,
            password_hash=password_hash,
            role=role,
        )
        return user_id

    def put(self, user: User) -> User:
        self._by_id[user.user_id] = user
        return user


@pytest.fixture
def tz():
    return TOKYO


@pytest.fixture
def today() -> date:
    return date(2025, 6, 10)


@pytest.fixture
def fixed_now(today) -> datetime:
    return datetime(today.year, today.month, today.day, 14, 30, tzinfo=TOKYO)


@pytest.fixture
def make_event():
    """Factory: make_event(EventType.START_WORK, "2025-06-02 09:00", ...)."""
    ids = itertools.count(1)

    def _make(
        event_type: EventType,
        local: str,
        *,
        user_id: int = 1,
        created_at: Optional[datetime] = None,
        is_modified: bool = False,
        is_deleted: bool = False,
        zone=TOKYO,
    ) -> Event:
        fmt = "%Y-%m-%d %H:%M:%S" if local.count(":") == 2 else "%Y-%m-%d %H:%M"
        ts = datetime.strptime(local, fmt).replace(tzinfo=zone)
        return Event(
            event_id=next(ids),
            user_id=user_id,
            event_type=event_type,
            timestamp=ts,
            created_at=created_at or ts,
            is_deleted=is_deleted,
            is_modified=is_modified,
        )

    return _make


@pytest.fixture
def events_repo():
    return InMemoryEvents()


@pytest.fixture
def users_repo():
    return InMemoryUsers()
