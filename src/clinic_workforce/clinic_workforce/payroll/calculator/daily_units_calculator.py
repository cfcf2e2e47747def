from __future__ import annotations

from decimal import Decimal

from ...core.constants import HALF_DAY_UNITS
from ...core.enums import AttendanceStatus
from .base import PayrollCalculator


class DailyUnitsCalculator(PayrollCalculator):
    """Daily rule: present = 1 unit, half day = 0.5, absent = 0."""

    _UNITS = {
        AttendanceStatus.PRESENT: Decimal("1"),
        AttendanceStatus.HALF_DAY: HALF_DAY_UNITS,
        AttendanceStatus.ABSENT: Decimal("0"),
    }

    def units_for(self, status: AttendanceStatus) -> Decimal:
        return self._UNITS.get(status, Decimal("0"))
