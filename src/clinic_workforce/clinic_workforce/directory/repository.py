from __future__ import annotations

from typing import Iterable, Optional, Protocol, Sequence

from ..core.enums import DutyStatus, PayType
from .model import Clinic, Location, Staff


class DirectoryRepository(Protocol):
    """Read access to clinics, locations and staff.

    Every lookup takes the clinic id: a row from another clinic is treated as absent.
    """

    def get_clinic(self, *, clinic_id: int) -> Optional[Clinic]:
        raise NotImplementedError

    def get_staff(self, *, clinic_id: int, staff_id: int) -> Optional[Staff]:
        raise NotImplementedError

    def get_staff_many(self, *, clinic_id: int, staff_ids: Iterable[int]) -> Sequence[Staff]:
        raise NotImplementedError

    def list_staff(self, *, clinic_id: int, location_id: Optional[int] = None) -> Sequence[Staff]:
        raise NotImplementedError

    def set_duty_status(self, *, clinic_id: int, staff_id: int, duty_status: DutyStatus) -> bool:
        raise NotImplementedError

    def create_staff(
        self,
        *,
        clinic_id: int,
        first_name: str,
        last_name: str,
        job_role: Optional[str],
        location_id: Optional[int] = None,
        pay_basis: PayType = PayType.MONTHLY,
        daily_rate: int = 0,
        monthly_salary: int = 0,
    ) -> int:
        raise NotImplementedError

    def get_location(self, *, clinic_id: int, location_id: int) -> Optional[Location]:
        raise NotImplementedError

    def list_locations(self, *, clinic_id: int, active_only: bool = False) -> Sequence[Location]:
        raise NotImplementedError
