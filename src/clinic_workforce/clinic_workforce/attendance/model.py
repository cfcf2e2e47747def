from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import AttendanceStatus, ClockMethod


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one staff member's worked time for one day."""

    attendance_id: int
    clinic_id: int
    staff_id: int
    work_date: date
    clock_in: datetime
    status: AttendanceStatus
    location_id: Optional[int] = None
    clock_out: Optional[datetime] = None
    clock_in_method: ClockMethod = ClockMethod.MANUAL
    clock_out_method: Optional[ClockMethod] = None
    hours_worked: Optional[Decimal] = None
    overtime_hours: Optional[Decimal] = None
    notes: Optional[str] = None
    staff_name: Optional[str] = None
    job_role: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return self.clock_out is None


@dataclass(frozen=True)
class AttendanceReportRow:
    """Read-model for summary/export (record joined with the staff name)."""

    staff_id: int
    first_name: str
    last_name: str
    job_role: Optional[str]
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime]
    hours_worked: Optional[Decimal]
    status: AttendanceStatus

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class AttendanceQuery:
    work_date: Optional[date] = None
    start: Optional[date] = None
    end: Optional[date] = None
    staff_id: Optional[int] = None
    status: Optional[AttendanceStatus] = None
