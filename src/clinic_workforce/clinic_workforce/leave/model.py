from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: a time-off application."""

    leave_id: int
    clinic_id: int
    staff_id: int
    leave_type: LeaveType
    from_date: date
    to_date: date
    days_count: int
    status: LeaveStatus
    reason: Optional[str] = None
    attachment_url: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


@dataclass(frozen=True)
class LeaveQuery:
    status: Optional[LeaveStatus] = None
    staff_id: Optional[int] = None
    leave_type: Optional[LeaveType] = None
