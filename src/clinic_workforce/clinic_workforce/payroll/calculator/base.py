from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import ROUND_HALF_UP, Decimal

from ...core.enums import AttendanceStatus


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def units_for(self, status: AttendanceStatus) -> Decimal:
        raise NotImplementedError

    def amount(self, units: Decimal, rate: int) -> int:
        """``units * rate`` rounded to a whole currency unit, halves up."""

        return int((Decimal(units) * Decimal(int(rate))).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
