from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterable


class WageCalculator(ABC):
    """Calculator interface (Strategy Pattern for wages)."""

    @abstractmethod
    def daily_wage(self, worked_minutes: int) -> int:
        raise NotImplementedError

    def period_total(self, daily_wages: Iterable[int]) -> int:
        return sum(daily_wages)
