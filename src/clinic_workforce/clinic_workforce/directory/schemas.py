from __future__ import annotations

from typing import Optional

from ..core.enums import DutyStatus, PayType
from ..common.schemas import RequestModel, ResponseModel


class StaffCreate(RequestModel):
    first_name: str
    last_name: str = ""
    job_role: Optional[str] = None
    location_id: Optional[int] = None
    pay_basis: PayType = PayType.MONTHLY
    daily_rate: int = 0
    monthly_salary: int = 0


class StaffOut(ResponseModel):
    staff_id: int
    clinic_id: int
    first_name: str
    last_name: str
    full_name: str
    job_role: Optional[str] = None
    location_id: Optional[int] = None
    duty_status: DutyStatus
    employment_status: str
    kyc_status: str
    pay_basis: PayType


class LocationOut(ResponseModel):
    location_id: int
    clinic_id: int
    name: str
    town: Optional[str] = None
    is_primary: bool
    is_active: bool
