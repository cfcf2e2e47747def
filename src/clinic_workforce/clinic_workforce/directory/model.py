from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import DutyStatus, PayType


@dataclass(frozen=True)
class Clinic:
    """A tenant; every other record belongs to exactly one clinic."""

    clinic_id: int
    name: str


@dataclass(frozen=True)
class Location:
    """A clinic branch."""

    location_id: int
    clinic_id: int
    name: str
    town: Optional[str] = None
    is_primary: bool = False
    is_active: bool = True


@dataclass(frozen=True)
class Staff:
    """Domain entity: a clinic employee.

    Employment and KYC statuses are owned by onboarding flows and only read here.
    """

    staff_id: int
    clinic_id: int
    first_name: str
    last_name: str
    job_role: Optional[str] = None
    location_id: Optional[int] = None
    duty_status: DutyStatus = DutyStatus.OFF
    employment_status: str = "inactive"
    kyc_status: str = "not_started"
    pay_basis: PayType = PayType.MONTHLY
    daily_rate: int = 0
    monthly_salary: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
