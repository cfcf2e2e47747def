from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.service import AttendanceService
from ..common.validators import clean_optional, require_date_order, require_non_empty
from ..core.enums import PayrollStatus, PayType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..directory.service import DirectoryService
from .calculator.base import PayrollCalculator
from .calculator.daily_units_calculator import DailyUnitsCalculator
from .model import BulkStatusResult, PayrollDraft, PayrollEntry, PayrollQuery
from .repository import PayrollRepository

_logger = logging.getLogger(__name__)


def daily_payroll_key(staff_id: int, work_date: date, location_id: Optional[int]) -> str:
    location = location_id if location_id is not None else "none"
    return f"d_{staff_id}_{work_date.isoformat()}_{location}"


class PayrollService:
    """Caller-driven payroll lines plus their draft -> paid status chain."""

    def __init__(
        self,
        entries: PayrollRepository,
        attendance: AttendanceService,
        directory: DirectoryService,
        *,
        calculator: Optional[PayrollCalculator] = None,
        forward_only: bool = True,
    ):
        self._entries = entries
        self._attendance = attendance
        self._directory = directory
        self._calculator = calculator or DailyUnitsCalculator()
        self._forward_only = bool(forward_only)

    def _allowed_from(self, status: PayrollStatus) -> Optional[list[PayrollStatus]]:
        if not self._forward_only:
            return None
        return [s for s in PayrollStatus if s.rank <= status.rank]

    def _require_entry(self, clinic_id: int, payroll_key: str) -> PayrollEntry:
        entry = self._entries.get_by_key(clinic_id=int(clinic_id), payroll_key=payroll_key)
        if not entry:
            raise NotFoundError("Payroll entry not found")
        return entry

    def upsert(
        self,
        *,
        clinic_id: int,
        payroll_key: str,
        pay_type: PayType,
        staff_id: Optional[int] = None,
        location_id: Optional[int] = None,
        period_label: Optional[str] = None,
        entry_date: Optional[date] = None,
        units: Decimal = Decimal("0"),
        rate: int = 0,
        amount: Optional[int] = None,
        work_summary: Optional[str] = None,
        hours_audit: Optional[Decimal] = None,
        status: Optional[PayrollStatus] = None,
    ) -> PayrollEntry:
        payroll_key = require_non_empty(payroll_key, "Payroll key")
        if pay_type is None:
            raise ValidationError("Pay type is required")
        if staff_id is None and location_id is None:
            raise ValidationError("Either staff id or location id is required")

        units = Decimal(str(units))
        if units < 0:
            raise ValidationError("Units cannot be negative")
        if int(rate) < 0:
            raise ValidationError("Rate cannot be negative")

        self._directory.ensure_clinic(clinic_id=clinic_id)
        if staff_id is not None:
            self._directory.get_staff(clinic_id=clinic_id, staff_id=staff_id)
        self._directory.ensure_location(clinic_id=clinic_id, location_id=location_id)

        draft = PayrollDraft(
            payroll_key=payroll_key,
            pay_type=PayType(pay_type),
            staff_id=int(staff_id) if staff_id is not None else None,
            location_id=int(location_id) if location_id is not None else None,
            period_label=clean_optional(period_label),
            entry_date=entry_date,
            units=units,
            rate=int(rate),
            amount=int(amount) if amount is not None else self._calculator.amount(units, int(rate)),
            work_summary=clean_optional(work_summary),
            hours_audit=hours_audit,
        )

        if status is not None:
            existing = self._entries.get_by_key(clinic_id=int(clinic_id), payroll_key=payroll_key)
            if existing and existing.status != status:
                raise ConflictError(
                    f"Payroll entry {payroll_key} is {existing.status.value}; use the status endpoint to change it"
                )

        created = self._entries.upsert(
            clinic_id=int(clinic_id),
            draft=draft,
            initial_status=status or PayrollStatus.DRAFT,
        )
        _logger.info("Payroll entry %s %s for clinic %s", payroll_key, "created" if created else "updated", clinic_id)
        return self._require_entry(clinic_id, payroll_key)

    def get_entry(self, *, clinic_id: int, payroll_key: str) -> PayrollEntry:
        return self._require_entry(clinic_id, payroll_key)

    def list_entries(
        self,
        *,
        clinic_id: int,
        location_id: Optional[int] = None,
        pay_type: Optional[PayType] = None,
        status: Optional[PayrollStatus] = None,
    ) -> Sequence[PayrollEntry]:
        criteria = PayrollQuery(location_id=location_id, pay_type=pay_type, status=status)
        return self._entries.list_entries(clinic_id=int(clinic_id), criteria=criteria)

    def set_status(
        self,
        *,
        clinic_id: int,
        payroll_key: str,
        status: PayrollStatus,
        now: datetime | None = None,
    ) -> PayrollEntry:
        updated = self._entries.set_status(
            clinic_id=int(clinic_id),
            payroll_keys=[payroll_key],
            status=status,
            now=now or datetime.now(),
            allowed_from=self._allowed_from(status),
        )

        entry = self._require_entry(clinic_id, payroll_key)
        if not updated:
            raise ConflictError(f"Cannot move payroll entry from {entry.status.value} to {status.value}")

        _logger.info("Payroll entry %s moved to %s", payroll_key, status.value)
        return entry

    def bulk_set_status(
        self,
        *,
        clinic_id: int,
        payroll_keys: Sequence[str],
        status: PayrollStatus,
        now: datetime | None = None,
    ) -> BulkStatusResult:
        keys = list(dict.fromkeys(k.strip() for k in payroll_keys if k and k.strip()))
        if not keys:
            raise ValidationError("No payroll keys provided")

        allowed_from = self._allowed_from(status)
        current = self._entries.current_statuses(clinic_id=int(clinic_id), payroll_keys=keys)
        updated = self._entries.set_status(
            clinic_id=int(clinic_id),
            payroll_keys=keys,
            status=status,
            now=now or datetime.now(),
            allowed_from=allowed_from,
        )
        missing = [k for k in keys if k not in current]
        refused = [k for k in keys if k in current and allowed_from is not None and current[k] not in allowed_from]

        _logger.info(
            "Bulk payroll status %s for clinic %s: %s updated, %s missing, %s refused",
            status.value,
            clinic_id,
            updated,
            len(missing),
            len(refused),
        )
        return BulkStatusResult(status=status, updated=updated, missing_keys=missing, refused_keys=refused)

    def preview_daily(self, *, clinic_id: int, start: Optional[date], end: Optional[date]) -> list[PayrollDraft]:
        """Unsaved DAILY drafts derived from closed attendance of daily-paid staff."""

        if not start or not end:
            raise ValidationError("From and to dates are required")
        require_date_order(start, end)

        records = [
            r
            for r in self._attendance.list_attendance(clinic_id=clinic_id, start=start, end=end)
            if not r.is_open
        ]
        staff = self._directory.staff_by_id(clinic_id=clinic_id, staff_ids=[r.staff_id for r in records])

        drafts: list[PayrollDraft] = []
        for r in records:
            member = staff.get(r.staff_id)
            if not member or member.pay_basis != PayType.DAILY:
                continue

            units = self._calculator.units_for(r.status)
            drafts.append(
                PayrollDraft(
                    payroll_key=daily_payroll_key(r.staff_id, r.work_date, r.location_id),
                    pay_type=PayType.DAILY,
                    staff_id=r.staff_id,
                    location_id=r.location_id,
                    entry_date=r.work_date,
                    units=units,
                    rate=member.daily_rate,
                    amount=self._calculator.amount(units, member.daily_rate),
                    work_summary=f"{r.status.value}, {r.hours_worked} h",
                    hours_audit=r.hours_worked,
                )
            )

        drafts.sort(key=lambda d: (d.entry_date, d.staff_id, d.payroll_key))
        return drafts
