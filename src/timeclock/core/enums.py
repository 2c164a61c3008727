from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Account role stored on the users table."""

    USER = "user"


class EventType(str, Enum):
    """The four punch kinds a user can record."""

    START_WORK = "START_WORK"
    END_WORK = "END_WORK"
    START_BREAK = "START_BREAK"
    END_BREAK = "END_BREAK"


class WorkStatus(str, Enum):
    """Current state derived from the latest punch."""

    WORKING = "WORKING"
    ON_BREAK = "ON_BREAK"
    NOT_WORKING = "NOT_WORKING"
