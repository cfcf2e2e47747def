from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from .policy import AttendancePolicy
from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import AttendanceStrategy
from .strategies.full_day_strategy import FullDayStrategy
from .strategies.half_day_strategy import HalfDayStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the classification strategy from worked hours."""

    def for_clock_out(self, *, hours_worked: Decimal, policy: AttendancePolicy) -> AttendanceStrategy:
        if hours_worked >= policy.full_day_hours:
            return FullDayStrategy()
        if hours_worked >= policy.half_day_hours:
            return HalfDayStrategy()
        return AbsentStrategy()
