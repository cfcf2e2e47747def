from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from ...core.enums import AttendanceStatus
from ..policy import AttendancePolicy


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    overtime_hours: Optional[Decimal] = None


class AttendanceStrategy(ABC):
    """Strategy Pattern: encapsulate how a closed day is classified."""

    @abstractmethod
    def decide_clock_out(self, *, hours_worked: Decimal, policy: AttendancePolicy) -> StatusDecision:
        raise NotImplementedError
