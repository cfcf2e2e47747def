from __future__ import annotations

from datetime import datetime
from typing import Collection, Optional, Protocol, Sequence

from ..core.enums import PayrollStatus
from .model import PayrollDraft, PayrollEntry, PayrollQuery


class PayrollRepository(Protocol):
    def upsert(self, *, clinic_id: int, draft: PayrollDraft, initial_status: PayrollStatus) -> bool:
        """Insert, or overwrite the payload of the existing (clinic_id, payroll_key) row.

        ``initial_status`` only applies to a new row. Returns True on insert.
        """

        raise NotImplementedError

    def get_by_key(self, *, clinic_id: int, payroll_key: str) -> Optional[PayrollEntry]:
        raise NotImplementedError

    def list_entries(self, *, clinic_id: int, criteria: PayrollQuery) -> Sequence[PayrollEntry]:
        raise NotImplementedError

    def current_statuses(self, *, clinic_id: int, payroll_keys: Sequence[str]) -> dict[str, PayrollStatus]:
        """Status of each key that exists in the clinic; absent keys are left out."""

        raise NotImplementedError

    def set_status(
        self,
        *,
        clinic_id: int,
        payroll_keys: Sequence[str],
        status: PayrollStatus,
        now: datetime,
        allowed_from: Optional[Collection[PayrollStatus]] = None,
    ) -> int:
        """One conditional UPDATE over ``payroll_keys``; returns affected rows.

        When ``allowed_from`` is given only rows currently in one of those
        statuses are touched.
        """

        raise NotImplementedError
