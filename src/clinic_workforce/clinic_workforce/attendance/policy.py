from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..core.constants import DEFAULT_FULL_DAY_HOURS, DEFAULT_HALF_DAY_HOURS


@dataclass(frozen=True)
class AttendancePolicy:
    """Hour thresholds used to classify a closed attendance record."""

    full_day_hours: Decimal = DEFAULT_FULL_DAY_HOURS
    half_day_hours: Decimal = DEFAULT_HALF_DAY_HOURS

    def __post_init__(self) -> None:
        full = Decimal(str(self.full_day_hours))
        half = Decimal(str(self.half_day_hours))
        if half < 0 or full < half:
            raise ValueError("Attendance thresholds must satisfy 0 <= half_day_hours <= full_day_hours")
        object.__setattr__(self, "full_day_hours", full)
        object.__setattr__(self, "half_day_hours", half)
