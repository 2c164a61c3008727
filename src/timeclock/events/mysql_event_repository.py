from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Optional, Sequence

from ..common.datetime_utils import to_utc_naive
from ..core.enums import EventType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import execute, query_all, query_one
from .model import Event
from .repository import EventRepository

_COLUMNS = "event_id, user_id, event_type, occurred_at, created_at, is_deleted, is_modified"


def _aware(value: Optional[datetime]) -> Optional[datetime]:
    # DATETIME columns hold naive UTC
    if value is None:
        return None
    return value.replace(tzinfo=timezone.utc)


def _to_event(r: dict[str, Any]) -> Event:
    return Event(
        event_id=int(r["event_id"]),
        user_id=int(r["user_id"]),
        event_type=EventType(r["event_type"]),
        timestamp=_aware(r["occurred_at"]),
        created_at=_aware(r.get("created_at")),
        is_deleted=bool(r.get("is_deleted", False)),
        is_modified=bool(r.get("is_modified", False)),
    )


class MySQLEventRepository(EventRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(
        self,
        *,
        user_id: int,
        event_type: EventType,
        timestamp: datetime,
        created_at: datetime,
        is_modified: bool = False,
    ) -> int:
        result = execute(
            self._conn_factory,
            """
            INSERT INTO punch_events(user_id, event_type, occurred_at, created_at, is_deleted, is_modified)
            VALUES(%s,%s,%s,%s,0,%s)
            """,
            (
                user_id,
                event_type.value,
                to_utc_naive(timestamp),
                to_utc_naive(created_at),
                1 if is_modified else 0,
            ),
        )
        return result.lastrowid

    def get_by_id(self, event_id: int) -> Optional[Event]:
        r = query_one(self._conn_factory, f"SELECT {_COLUMNS} FROM punch_events WHERE event_id=%s", (int(event_id),))
        return _to_event(r) if r else None

    def _latest(self, user_id: int, order_column: str) -> Optional[Event]:
        r = query_one(
            self._conn_factory,
            f"""
            SELECT {_COLUMNS}
            FROM punch_events
            WHERE user_id=%s AND is_deleted=0
            ORDER BY {order_column} DESC, event_id DESC
            LIMIT 1
            """,
            (user_id,),
        )
        return _to_event(r) if r else None

    def get_latest_created(self, user_id: int) -> Optional[Event]:
        return self._latest(user_id, "created_at")

    def get_latest_by_timestamp(self, user_id: int) -> Optional[Event]:
        return self._latest(user_id, "occurred_at")

    def list_for_user(
        self,
        user_id: int,
        *,
        start_at: Optional[datetime] = None,
        end_before: Optional[datetime] = None,
        include_deleted: bool = False,
    ) -> Sequence[Event]:
        clauses = ["user_id=%s"]
        params: list[object] = [int(user_id)]

        if start_at is not None:
            clauses.append("occurred_at >= %s")
            params.append(to_utc_naive(start_at))
        if end_before is not None:
            clauses.append("occurred_at < %s")
            params.append(to_utc_naive(end_before))
        if not include_deleted:
            clauses.append("is_deleted=0")
        where = " AND ".join(clauses)

        rows = query_all(
            self._conn_factory,
            f"""
            SELECT {_COLUMNS}
            FROM punch_events
            WHERE {where}
            ORDER BY occurred_at ASC, event_id ASC
            """,
            params,
        )
        return [_to_event(r) for r in rows]

    def soft_delete(self, event_id: int) -> bool:
        result = execute(
            self._conn_factory,
            "UPDATE punch_events SET is_deleted=1 WHERE event_id=%s AND is_deleted=0",
            (int(event_id),),
        )
        return result.rowcount > 0
