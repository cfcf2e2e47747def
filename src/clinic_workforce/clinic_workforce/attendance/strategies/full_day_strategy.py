from __future__ import annotations

from decimal import Decimal

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy
from .base import AttendanceStrategy, StatusDecision


class FullDayStrategy(AttendanceStrategy):
    """Full day: present, anything past the threshold is overtime."""

    def decide_clock_out(self, *, hours_worked: Decimal, policy: AttendancePolicy) -> StatusDecision:
        overtime = max(hours_worked - policy.full_day_hours, Decimal("0"))
        return StatusDecision(status=AttendanceStatus.PRESENT, overtime_hours=overtime.quantize(Decimal("0.01")))
