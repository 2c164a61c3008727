from __future__ import annotations

from ...core.constants import DEFAULT_HOURLY_RATE, DEFAULT_MINUTE_UNIT
from .base import WageCalculator


class TruncatingWageCalculator(WageCalculator):
    """Standard rule: floor(worked / minute_unit) * hourly_rate.

    Partial units are not paid, so a 59 minute day earns nothing at the
    default 60 minute unit.
    """

    def __init__(self, *, hourly_rate: int = DEFAULT_HOURLY_RATE, minute_unit: int = DEFAULT_MINUTE_UNIT):
        if int(minute_unit) <= 0:
            raise ValueError(f"minute_unit must be positive, got {minute_unit!r}")
        if int(hourly_rate) < 0:
            raise ValueError(f"hourly_rate must not be negative, got {hourly_rate!r}")
        self._hourly_rate = int(hourly_rate)
        self._minute_unit = int(minute_unit)

    @property
    def hourly_rate(self) -> int:
        return self._hourly_rate

    @property
    def minute_unit(self) -> int:
        return self._minute_unit

    def daily_wage(self, worked_minutes: int) -> int:
        if worked_minutes <= 0:
            return 0
        return (int(worked_minutes) // self._minute_unit) * self._hourly_rate
