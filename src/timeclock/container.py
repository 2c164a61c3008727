from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from typing import Optional

from .common.datetime_utils import get_timezone
from .core.constants import (
    DEFAULT_DELETION_WINDOW_MINUTES,
    DEFAULT_HOURLY_RATE,
    DEFAULT_MINUTE_UNIT,
    DEFAULT_TIMEZONE,
)
from .database.connection import DBConfig, DatabaseConnection
from .events.mysql_event_repository import MySQLEventRepository
from .events.repository import EventRepository
from .events.service import PunchService
from .payroll.calculator.standard_calculator import TruncatingWageCalculator
from .payroll.service import TimesheetReportService
from .timesheet.reconciler import DailyReconciler
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    tz: tzinfo

    users_repo: UserRepository
    events_repo: EventRepository

    auth_service: AuthService
    user_service: UserService
    punch_service: PunchService
    timesheet_service: TimesheetReportService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    events_repo: EventRepository,
    timezone_name: str = DEFAULT_TIMEZONE,
    hourly_rate: int = DEFAULT_HOURLY_RATE,
    minute_unit: int = DEFAULT_MINUTE_UNIT,
    deletion_window_minutes: int = DEFAULT_DELETION_WINDOW_MINUTES,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over any repository implementation (MySQL or in-memory)."""
    tz = get_timezone(timezone_name)
    calculator = TruncatingWageCalculator(hourly_rate=hourly_rate, minute_unit=minute_unit)
    reconciler = DailyReconciler(tz=tz, calculator=calculator)

    return Container(
        tz=tz,
        users_repo=users_repo,
        events_repo=events_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        punch_service=PunchService(events_repo, tz=tz, deletion_window_minutes=deletion_window_minutes),
        timesheet_service=TimesheetReportService(events_repo, reconciler, tz=tz, users=users_repo),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    timezone_name: str = DEFAULT_TIMEZONE,
    hourly_rate: int = DEFAULT_HOURLY_RATE,
    minute_unit: int = DEFAULT_MINUTE_UNIT,
    deletion_window_minutes: int = DEFAULT_DELETION_WINDOW_MINUTES,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        events_repo=MySQLEventRepository(conn),
        timezone_name=timezone_name,
        hourly_rate=hourly_rate,
        minute_unit=minute_unit,
        deletion_window_minutes=deletion_window_minutes,
        conn=conn,
    )
