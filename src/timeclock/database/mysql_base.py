from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Sequence

from .connection import DatabaseConnection

Row = dict[str, Any]


@dataclass(frozen=True)
class WriteResult:
    lastrowid: int
    rowcount: int


@contextmanager
def transaction(conn_factory: DatabaseConnection) -> Iterator[Any]:
    """One short-lived connection per unit of work, yielding a dict cursor.

    Commits when the block exits normally and rolls back when it raises.
    """
    conn = conn_factory.connect()
    cur = conn.cursor(dictionary=True)
    try:
        yield cur
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        cur.close()
        conn.close()


def query_one(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> Optional[Row]:
    with transaction(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return cur.fetchone() or None


def query_all(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> list[Row]:
    with transaction(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return list(cur.fetchall() or [])


def execute(conn_factory: DatabaseConnection, sql: str, params: Sequence[Any] = ()) -> WriteResult:
    with transaction(conn_factory) as cur:
        cur.execute(sql, tuple(params))
        return WriteResult(lastrowid=int(cur.lastrowid or 0), rowcount=int(cur.rowcount or 0))
