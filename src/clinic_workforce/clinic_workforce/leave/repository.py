from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveQuery, LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        clinic_id: int,
        staff_id: int,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        days_count: int,
        reason: Optional[str] = None,
        attachment_url: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def get(self, *, clinic_id: int, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_requests(self, *, clinic_id: int, criteria: LeaveQuery) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def review_pending(
        self,
        *,
        clinic_id: int,
        leave_id: int,
        status: LeaveStatus,
        reviewed_by: Optional[int],
        reviewed_at: Optional[datetime],
        rejection_reason: Optional[str],
    ) -> bool:
        """Move a request out of ``pending``; False if it was not pending."""

        raise NotImplementedError

    def delete_pending(self, *, clinic_id: int, leave_id: int) -> bool:
        raise NotImplementedError
