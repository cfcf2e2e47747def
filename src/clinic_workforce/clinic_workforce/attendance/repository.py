from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus, ClockMethod
from .model import AttendanceQuery, AttendanceRecord, AttendanceReportRow


class AttendanceRepository(Protocol):
    def get_for_staff_and_date(self, clinic_id: int, staff_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_clock_in(
        self,
        *,
        clinic_id: int,
        staff_id: int,
        work_date: date,
        clock_in: datetime,
        method: ClockMethod,
        status: AttendanceStatus,
        location_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Insert today's record.

        The store keeps one row per (staff_id, work_date); a second insert
        raises ``ConflictError``.
        """

        raise NotImplementedError

    def close_clock_in(
        self,
        *,
        clinic_id: int,
        attendance_id: int,
        clock_out: datetime,
        method: ClockMethod,
        hours_worked: Decimal,
        overtime_hours: Optional[Decimal],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        """Close a record that is still open; False if it was already closed."""

        raise NotImplementedError

    def list_records(self, *, clinic_id: int, criteria: AttendanceQuery) -> Sequence[AttendanceRecord]:
        """Newest first, every matching row; records carry the staff name and role."""

        raise NotImplementedError

    def get_report_rows(
        self,
        *,
        clinic_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        closed_only: bool = False,
    ) -> Sequence[AttendanceReportRow]:
        """Newest date first."""

        raise NotImplementedError
