from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from ..common.schemas import JsonDecimal, RequestModel, ResponseModel
from ..core.enums import AttendanceStatus, ClockMethod


class AttendanceListQuery(RequestModel):
    work_date: Optional[date] = Field(None, alias="date")
    start: Optional[date] = Field(None, alias="from")
    end: Optional[date] = Field(None, alias="to")
    staff_id: Optional[int] = None
    status: Optional[AttendanceStatus] = None


class DateRangeQuery(RequestModel):
    start: Optional[date] = Field(None, alias="from")
    end: Optional[date] = Field(None, alias="to")


class ClockInIn(RequestModel):
    staff_id: int
    method: ClockMethod = ClockMethod.MANUAL
    location_id: Optional[int] = None
    notes: Optional[str] = None


class ClockOutIn(RequestModel):
    staff_id: int
    method: ClockMethod = ClockMethod.MANUAL
    notes: Optional[str] = None


class AttendanceOut(ResponseModel):
    attendance_id: int
    clinic_id: int
    staff_id: int
    staff_name: Optional[str] = None
    job_role: Optional[str] = None
    location_id: Optional[int] = None
    work_date: date
    clock_in: datetime
    clock_out: Optional[datetime] = None
    clock_in_method: ClockMethod
    clock_out_method: Optional[ClockMethod] = None
    hours_worked: Optional[JsonDecimal] = None
    overtime_hours: Optional[JsonDecimal] = None
    status: AttendanceStatus
    notes: Optional[str] = None


class StaffHoursSummaryOut(ResponseModel):
    staff_id: int
    name: str
    job_role: str
    days_worked: int
    total_hours: JsonDecimal
    last_date: Optional[date] = None
