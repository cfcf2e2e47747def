from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import hours_between
from ..common.validators import clean_optional, require_date_order
from ..core.enums import AttendanceStatus, ClockMethod, DutyStatus
from ..core.exceptions import AlreadyClockedIn, ConflictError, NoActiveClockIn, NotFoundError
from ..directory.service import DirectoryService
from .factory import AttendanceStrategyFactory
from .model import AttendanceQuery, AttendanceRecord
from .policy import AttendancePolicy
from .repository import AttendanceRepository

_logger = logging.getLogger(__name__)


class AttendanceService:
    """Clock-in/clock-out state machine, one record per staff member per day."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        directory: DirectoryService,
        *,
        policy: AttendancePolicy | None = None,
        strategy_factory: AttendanceStrategyFactory | None = None,
    ):
        self._attendance = attendance
        self._directory = directory
        self._policy = policy or AttendancePolicy()
        self._factory = strategy_factory or AttendanceStrategyFactory()

    @property
    def policy(self) -> AttendancePolicy:
        return self._policy

    def _today_record(self, clinic_id: int, staff_id: int, today: date) -> AttendanceRecord:
        record = self._attendance.get_for_staff_and_date(int(clinic_id), staff_id, today)
        if not record:
            raise NotFoundError("Attendance record not found")
        return record

    def clock_in(
        self,
        *,
        clinic_id: int,
        staff_id: int,
        method: ClockMethod = ClockMethod.MANUAL,
        location_id: Optional[int] = None,
        notes: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()

        staff = self._directory.get_staff(clinic_id=clinic_id, staff_id=staff_id)
        if location_id is not None:
            self._directory.ensure_location(clinic_id=clinic_id, location_id=location_id)
        else:
            location_id = staff.location_id

        if self._attendance.get_for_staff_and_date(int(clinic_id), staff.staff_id, today):
            raise AlreadyClockedIn("Already clocked in today")

        try:
            self._attendance.create_clock_in(
                clinic_id=int(clinic_id),
                staff_id=staff.staff_id,
                work_date=today,
                clock_in=now,
                method=method,
                status=AttendanceStatus.PRESENT,
                location_id=location_id,
                notes=clean_optional(notes),
            )
        except AlreadyClockedIn:
            raise
        except ConflictError as e:
            # Lost the race against a concurrent clock-in; the unique index decided.
            raise AlreadyClockedIn("Already clocked in today") from e

        self._directory.set_duty_status(clinic_id=clinic_id, staff_id=staff.staff_id, duty_status=DutyStatus.ON_DUTY)
        _logger.info("Staff %s clocked in at %s (clinic %s)", staff.staff_id, now.isoformat(), clinic_id)
        return self._today_record(clinic_id, staff.staff_id, today)

    def clock_out(
        self,
        *,
        clinic_id: int,
        staff_id: int,
        method: ClockMethod = ClockMethod.MANUAL,
        notes: Optional[str] = None,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        now = now or datetime.now()
        today = now.date()

        staff = self._directory.get_staff(clinic_id=clinic_id, staff_id=staff_id)

        record = self._attendance.get_for_staff_and_date(int(clinic_id), staff.staff_id, today)
        if not record or not record.is_open:
            raise NoActiveClockIn("No active clock-in found for today")

        hours_worked = max(hours_between(record.clock_in, now), Decimal("0.00"))
        strategy = self._factory.for_clock_out(hours_worked=hours_worked, policy=self._policy)
        decision = strategy.decide_clock_out(hours_worked=hours_worked, policy=self._policy)

        closed = self._attendance.close_clock_in(
            clinic_id=int(clinic_id),
            attendance_id=record.attendance_id,
            clock_out=now,
            method=method,
            hours_worked=hours_worked,
            overtime_hours=decision.overtime_hours,
            status=decision.status,
            notes=clean_optional(notes) or record.notes,
        )
        if not closed:
            raise NoActiveClockIn("No active clock-in found for today")

        self._directory.set_duty_status(clinic_id=clinic_id, staff_id=staff.staff_id, duty_status=DutyStatus.OFF)
        _logger.info(
            "Staff %s clocked out: %s hours, status %s",
            staff.staff_id,
            hours_worked,
            decision.status.value,
        )
        return self._today_record(clinic_id, staff.staff_id, today)

    def list_attendance(
        self,
        *,
        clinic_id: int,
        work_date: Optional[date] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        staff_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> Sequence[AttendanceRecord]:
        """Every matching record, newest first. The list is not paginated."""

        if start and end:
            require_date_order(start, end)
        criteria = AttendanceQuery(
            work_date=work_date,
            start=start,
            end=end,
            staff_id=int(staff_id) if staff_id is not None else None,
            status=status,
        )
        return self._attendance.list_records(clinic_id=int(clinic_id), criteria=criteria)
