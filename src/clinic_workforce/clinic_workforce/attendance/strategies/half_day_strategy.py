from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class HalfDayStrategy(AttendanceStrategy):
    """Half day, no overtime."""

    def decide_clock_out(self, *, hours_worked: Decimal, policy: AttendancePolicy) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
