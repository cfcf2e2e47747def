from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.validators import clean_optional, require_date_order
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..directory.service import DirectoryService
from ..schedule_blocks.model import ScheduleBlock
from ..schedule_blocks.service import ScheduleBlockService
from .model import LeaveQuery, LeaveRequest
from .repository import LeaveRepository

_logger = logging.getLogger(__name__)

_REVIEW_TARGETS = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED, LeaveStatus.CANCELLED})
_STAMPED_TARGETS = frozenset({LeaveStatus.APPROVED, LeaveStatus.REJECTED})


def leave_days(from_date: date, to_date: date) -> int:
    """Calendar days from ``from_date`` to ``to_date``, both inclusive."""

    require_date_order(from_date, to_date)
    return (to_date - from_date).days + 1


class LeaveService:
    def __init__(self, leaves: LeaveRepository, directory: DirectoryService, blocks: ScheduleBlockService):
        self._leaves = leaves
        self._directory = directory
        self._blocks = blocks

    def create_leave(
        self,
        *,
        clinic_id: int,
        staff_id: Optional[int],
        leave_type: Optional[LeaveType],
        from_date: Optional[date],
        to_date: Optional[date],
        reason: Optional[str] = None,
        attachment_url: Optional[str] = None,
    ) -> LeaveRequest:
        if not staff_id or not leave_type or not from_date or not to_date:
            raise ValidationError("Staff ID, leave type, from date, and to date are required")

        days_count = leave_days(from_date, to_date)
        staff = self._directory.get_staff(clinic_id=clinic_id, staff_id=staff_id)

        leave_id = self._leaves.create(
            clinic_id=int(clinic_id),
            staff_id=staff.staff_id,
            leave_type=LeaveType(leave_type),
            from_date=from_date,
            to_date=to_date,
            days_count=days_count,
            reason=clean_optional(reason),
            attachment_url=clean_optional(attachment_url),
        )
        _logger.info("Leave request %s created for staff %s (%s day(s))", leave_id, staff.staff_id, days_count)
        return self.get_leave(clinic_id=clinic_id, leave_id=leave_id)

    def get_leave(self, *, clinic_id: int, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get(clinic_id=int(clinic_id), leave_id=int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave

    def list_leave(
        self,
        *,
        clinic_id: int,
        status: Optional[LeaveStatus] = None,
        staff_id: Optional[int] = None,
        leave_type: Optional[LeaveType] = None,
    ) -> Sequence[LeaveRequest]:
        criteria = LeaveQuery(status=status, staff_id=staff_id, leave_type=leave_type)
        return self._leaves.list_requests(clinic_id=int(clinic_id), criteria=criteria)

    def review(
        self,
        *,
        clinic_id: int,
        leave_id: int,
        status: LeaveStatus,
        reviewer_id: Optional[int] = None,
        rejection_reason: Optional[str] = None,
        now: datetime | None = None,
    ) -> LeaveRequest:
        if status not in _REVIEW_TARGETS:
            raise ValidationError("Status must be approved, rejected or cancelled")

        rejection_reason = clean_optional(rejection_reason) if status == LeaveStatus.REJECTED else None
        if status == LeaveStatus.REJECTED and not rejection_reason:
            _logger.warning("Leave request %s rejected without a reason", leave_id)

        stamped = status in _STAMPED_TARGETS
        updated = self._leaves.review_pending(
            clinic_id=int(clinic_id),
            leave_id=int(leave_id),
            status=status,
            reviewed_by=int(reviewer_id) if stamped and reviewer_id is not None else None,
            reviewed_at=(now or datetime.now()) if stamped else None,
            rejection_reason=rejection_reason,
        )

        leave = self.get_leave(clinic_id=clinic_id, leave_id=leave_id)
        if not updated:
            raise ConflictError(f"Leave request is already {leave.status.value}")

        _logger.info("Leave request %s moved to %s", leave.leave_id, leave.status.value)
        return leave

    def delete_leave(self, *, clinic_id: int, leave_id: int) -> None:
        if self._leaves.delete_pending(clinic_id=int(clinic_id), leave_id=int(leave_id)):
            _logger.info("Leave request %s deleted", leave_id)
            return

        self.get_leave(clinic_id=clinic_id, leave_id=leave_id)
        raise ConflictError("Can only delete pending requests. Use cancel instead.")

    def assignment_conflicts(self, *, clinic_id: int, leave_id: int) -> Sequence[ScheduleBlock]:
        """Blocks the requester is still assigned to inside the leave window.

        Read-only: approving leave never edits assignments.
        """

        leave = self.get_leave(clinic_id=clinic_id, leave_id=leave_id)
        return self._blocks.blocks_for_staff(
            clinic_id=clinic_id,
            staff_id=leave.staff_id,
            start=leave.from_date,
            end=leave.to_date,
        )
