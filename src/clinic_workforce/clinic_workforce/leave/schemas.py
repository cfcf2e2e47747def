from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from ..common.schemas import RequestModel, ResponseModel
from ..core.enums import LeaveStatus, LeaveType


class LeaveListQuery(RequestModel):
    status: Optional[LeaveStatus] = None
    staff_id: Optional[int] = None
    leave_type: Optional[LeaveType] = Field(None, alias="type")


class LeaveCreate(RequestModel):
    staff_id: int
    leave_type: LeaveType
    from_date: date
    to_date: date
    reason: Optional[str] = None
    attachment_url: Optional[str] = None


class LeaveReview(RequestModel):
    status: LeaveStatus
    reviewer_id: Optional[int] = None
    rejection_reason: Optional[str] = None


class LeaveOut(ResponseModel):
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
