"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from .enums import EventType, WorkStatus

DEFAULT_SESSION_DAYS = 7
DEFAULT_TIMEZONE = "Asia/Tokyo"

# Wages accrue per whole completed unit of worked minutes
DEFAULT_HOURLY_RATE = 1500
DEFAULT_MINUTE_UNIT = 60

DEFAULT_DELETION_WINDOW_MINUTES = 5

MIN_PASSWORD_LENGTH = 8

IN_PROGRESS_LABEL = "勤務中"
NOTE_DELIMITER = ", "

# Indexed by date.weekday() (Monday == 0)
WEEKDAY_LABELS = ("月", "火", "水", "木", "金", "土", "日")

EVENT_TYPE_LABELS = {
    EventType.START_WORK: "出勤",
    EventType.END_WORK: "退勤",
    EventType.START_BREAK: "休憩開始",
    EventType.END_BREAK: "休憩終了",
}

WORK_STATUS_LABELS = {
    WorkStatus.WORKING: "勤務中",
    WorkStatus.ON_BREAK: "休憩中",
    WorkStatus.NOT_WORKING: "勤務していません",
}
