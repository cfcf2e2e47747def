from __future__ import annotations

import logging
from typing import Iterable, Optional, Sequence

from ..common.validators import clean_optional, require_non_empty
from ..core.enums import DutyStatus, PayType
from ..core.exceptions import NotFoundError, ValidationError
from .model import Clinic, Location, Staff
from .repository import DirectoryRepository

_logger = logging.getLogger(__name__)


class DirectoryService:
    """Tenant membership checks used by every other feature module."""

    def __init__(self, directory: DirectoryRepository):
        self._directory = directory

    def get_clinic(self, *, clinic_id: int) -> Clinic:
        clinic = self._directory.get_clinic(clinic_id=int(clinic_id))
        if not clinic:
            raise NotFoundError("Clinic not found")
        return clinic

    def ensure_clinic(self, *, clinic_id: int) -> None:
        """Guard for writes that would otherwise only fail on the clinic foreign key."""

        self.get_clinic(clinic_id=clinic_id)

    def get_staff(self, *, clinic_id: int, staff_id: int) -> Staff:
        staff = self._directory.get_staff(clinic_id=int(clinic_id), staff_id=int(staff_id))
        if not staff:
            raise NotFoundError("Staff not found")
        return staff

    def create_staff(
        self,
        *,
        clinic_id: int,
        first_name: str,
        last_name: str,
        job_role: Optional[str] = None,
        location_id: Optional[int] = None,
        pay_basis: PayType = PayType.MONTHLY,
        daily_rate: int = 0,
        monthly_salary: int = 0,
    ) -> Staff:
        """Add a staff member to the roster; new staff start off duty."""

        first_name = require_non_empty(first_name, "First name")
        last_name = (last_name or "").strip()
        if int(daily_rate) < 0 or int(monthly_salary) < 0:
            raise ValidationError("Pay rates cannot be negative")
        self.ensure_clinic(clinic_id=clinic_id)
        self.ensure_location(clinic_id=clinic_id, location_id=location_id)

        staff_id = self._directory.create_staff(
            clinic_id=int(clinic_id),
            first_name=first_name,
            last_name=last_name,
            job_role=clean_optional(job_role),
            location_id=int(location_id) if location_id is not None else None,
            pay_basis=PayType(pay_basis),
            daily_rate=int(daily_rate),
            monthly_salary=int(monthly_salary),
        )
        _logger.info("Created staff %s for clinic %s", staff_id, clinic_id)
        return self.get_staff(clinic_id=clinic_id, staff_id=staff_id)

    def staff_by_id(self, *, clinic_id: int, staff_ids: Iterable[int]) -> dict[int, Staff]:
        return {s.staff_id: s for s in self._directory.get_staff_many(clinic_id=int(clinic_id), staff_ids=staff_ids)}

    def list_staff(self, *, clinic_id: int, location_id: Optional[int] = None) -> Sequence[Staff]:
        return self._directory.list_staff(clinic_id=int(clinic_id), location_id=location_id)

    def set_duty_status(self, *, clinic_id: int, staff_id: int, duty_status: DutyStatus) -> None:
        if not self._directory.set_duty_status(
            clinic_id=int(clinic_id), staff_id=int(staff_id), duty_status=duty_status
        ):
            _logger.warning("Duty status for staff %s was not updated to %s", staff_id, duty_status.value)

    def get_location(self, *, clinic_id: int, location_id: int) -> Location:
        location = self._directory.get_location(clinic_id=int(clinic_id), location_id=int(location_id))
        if not location:
            raise NotFoundError("Location not found")
        return location

    def ensure_location(self, *, clinic_id: int, location_id: Optional[int]) -> None:
        if location_id is not None:
            self.get_location(clinic_id=clinic_id, location_id=location_id)

    def list_locations(self, *, clinic_id: int, active_only: bool = False) -> Sequence[Location]:
        return self._directory.list_locations(clinic_id=int(clinic_id), active_only=active_only)
