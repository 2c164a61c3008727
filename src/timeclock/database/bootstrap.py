from __future__ import annotations

import logging
import re
from datetime import date, datetime, timedelta, timezone, tzinfo
from pathlib import Path
from typing import Iterable

import mysql.connector
from werkzeug.security import generate_password_hash

from ..common.datetime_utils import combine_local, parse_clock, to_utc_naive
from ..core.enums import EventType
from .connection import DBConfig

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"

DEMO_USER_NAME = "テストユーザー"
DEMO_USER_EMAIL = "test@example.com"
DEMO_USER_PASSWORD = "Password1!"

DEMO_START = date(2025, 4, 1)
DEMO_END = date(2025, 6, 6)

# One entry per day, cycled across the seeded range: (type, HH:MM, is_modified)
DEMO_SCENARIOS: list[list[tuple[EventType, str, bool]]] = [
    # regular day with one break
    [
        (EventType.START_WORK, "09:00", False),
        (EventType.START_BREAK, "12:00", False),
        (EventType.END_BREAK, "13:00", False),
        (EventType.END_WORK, "18:00", False),
    ],
    # no break
    [(EventType.START_WORK, "09:15", False), (EventType.END_WORK, "18:05", False)],
    # two breaks
    [
        (EventType.START_WORK, "08:45", False),
        (EventType.START_BREAK, "11:00", False),
        (EventType.END_BREAK, "11:15", False),
        (EventType.START_BREAK, "15:00", False),
        (EventType.END_BREAK, "15:20", False),
        (EventType.END_WORK, "17:45", False),
    ],
    # start at midnight
    [(EventType.START_WORK, "00:00", False), (EventType.END_WORK, "09:00", False)],
    # end entered by hand at 00:00 of the same day
    [(EventType.START_WORK, "15:00", False), (EventType.END_WORK, "00:00", True)],
    [(EventType.START_WORK, "10:00", False)],
    [(EventType.END_WORK, "20:00", False)],
    [(EventType.START_BREAK, "12:30", False)],
    [(EventType.END_BREAK, "13:00", False)],
    # missing end of work
    [
        (EventType.START_WORK, "09:00", False),
        (EventType.START_BREAK, "12:00", False),
        (EventType.END_BREAK, "12:45", False),
    ],
    [(EventType.END_WORK, "18:00", False)],
    # missing end of break
    [
        (EventType.START_WORK, "09:00", False),
        (EventType.START_BREAK, "12:10", False),
        (EventType.END_WORK, "19:00", False),
    ],
    # missing start of break
    [
        (EventType.START_WORK, "08:30", False),
        (EventType.END_BREAK, "13:00", False),
        (EventType.END_WORK, "17:30", False),
    ],
]


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Minimal SQL splitter for schema files (handles ';' inside quotes, skips -- comments).
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    lines = [ln for ln in sql.splitlines() if not ln.lstrip().startswith("--")]
    for ch in "\n".join(lines):
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
            buf.append(ch)
            continue

        if ch == '"' and not in_single:
            in_double = not in_double
            buf.append(ch)
            continue

        if ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _connect(target: DBConfig, *, with_database: bool = True):
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def ensure_database_exists(db_config: dict) -> None:
    target = DBConfig.from_dict(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path = SCHEMA_PATH) -> None:
    ensure_database_exists(db_config)
    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()
    logger.info("schema applied from %s", schema_path)


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()


def ensure_demo_user(db_config: dict) -> int:
    """Create or reset the demo account and return its id."""
    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor(dictionary=True)
        password_hash = generate_password_hash(DEMO_USER_PASSWORD)
        cur.execute("SELECT user_id FROM users WHERE email=%s", (DEMO_USER_EMAIL,))
        existing = cur.fetchone()
        if existing:
            user_id = int(existing["user_id"])
            cur.execute(
                "UPDATE users SET full_name=%s, password_hash=%s, is_active=1 WHERE user_id=%s",
                (DEMO_USER_NAME, password_hash, user_id),
            )
        else:
            cur.execute(
                """
                INSERT INTO users (full_name, email, password_hash, role, is_active)
                VALUES (%s, %s, %s, 'user', 1)
                """,
                (DEMO_USER_NAME, DEMO_USER_EMAIL, password_hash),
            )
            user_id = int(cur.lastrowid)
        conn.commit()
        return user_id
    finally:
        conn.close()


def iter_demo_punches(start: date, end: date, tz: tzinfo) -> Iterable[tuple[EventType, datetime, bool]]:
    """Yield (type, aware timestamp, is_modified) for every day in [start, end]."""
    day = start
    index = 0
    while day <= end:
        for event_type, clock, is_modified in DEMO_SCENARIOS[index % len(DEMO_SCENARIOS)]:
            yield event_type, combine_local(day, parse_clock(clock), tz), is_modified
        day += timedelta(days=1)
        index += 1


def seed_demo_punches(db_config: dict, *, user_id: int, start: date, end: date, tz: tzinfo) -> int:
    """Replace the user's punches with the demo scenarios. Returns rows inserted."""
    now = to_utc_naive(datetime.now(timezone.utc))
    rows = [
        (user_id, event_type.value, to_utc_naive(ts), now, 1 if is_modified else 0)
        for event_type, ts, is_modified in iter_demo_punches(start, end, tz)
    ]

    conn = _connect(DBConfig.from_dict(db_config))
    try:
        cur = conn.cursor()
        cur.execute("DELETE FROM punch_events WHERE user_id=%s", (user_id,))
        cur.executemany(
            """
            INSERT INTO punch_events (user_id, event_type, occurred_at, created_at, is_deleted, is_modified)
            VALUES (%s, %s, %s, %s, 0, %s)
            """,
            rows,
        )
        conn.commit()
    finally:
        conn.close()

    logger.info("seeded %d punches for user_id=%s (%s..%s)", len(rows), user_id, start, end)
    return len(rows)
