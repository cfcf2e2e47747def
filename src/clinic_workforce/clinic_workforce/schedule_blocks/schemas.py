from __future__ import annotations

from datetime import date, datetime, time
from typing import Optional

from pydantic import Field, model_validator

from ..common.schemas import RequestModel, ResponseModel
from ..core.enums import AssignAction
from .model import NewExternalCover


class BlockQuery(RequestModel):
    location: Optional[str] = None
    start: Optional[date] = None
    end: Optional[date] = None


class BlockCreate(RequestModel):
    work_date: date = Field(alias="date")
    start_time: time
    end_time: time
    role_needed: str
    qty_needed: int = 1
    location_id: Optional[int] = None
    notes: Optional[str] = None


class BlockUpdate(RequestModel):
    """Partial header update; only the keys present in the body are applied."""

    work_date: Optional[date] = Field(None, alias="date")
    start_time: Optional[time] = None
    end_time: Optional[time] = None
    role_needed: Optional[str] = None
    qty_needed: Optional[int] = None
    location_id: Optional[int] = None
    notes: Optional[str] = None


class AssignIn(RequestModel):
    staff_id: int
    action: AssignAction = AssignAction.ADD


class LocumIn(RequestModel):
    name: str
    phone: Optional[str] = None
    supervisor_id: Optional[int] = None
    role_covered: Optional[str] = None
    notes: Optional[str] = None

    def to_new_cover(self) -> NewExternalCover:
        return NewExternalCover(
            name=self.name,
            phone=self.phone,
            supervisor_id=self.supervisor_id,
            role_covered=self.role_covered,
            notes=self.notes,
        )


class CoverIn(RequestModel):
    action: AssignAction = AssignAction.ADD
    locum: Optional[LocumIn] = None
    locum_id: Optional[str] = None

    @model_validator(mode="after")
    def _check_action_payload(self) -> "CoverIn":
        if self.action == AssignAction.ADD and self.locum is None:
            raise ValueError("locum is required when adding cover")
        if self.action == AssignAction.REMOVE and not self.locum_id:
            raise ValueError("locumId is required when removing cover")
        return self


class ExternalCoverOut(ResponseModel):
    cover_id: str
    name: str
    phone: Optional[str] = None
    supervisor_id: Optional[int] = None
    role_covered: Optional[str] = None
    notes: Optional[str] = None


class ScheduleBlockOut(ResponseModel):
    block_id: int
    clinic_id: int
    location_id: Optional[int] = None
    work_date: date
    start_time: time
    end_time: time
    role_needed: str
    qty_needed: int
    assigned_staff_ids: list[int]
    external_covers: list[ExternalCoverOut]
    fill_count: int
    open_slots: int
    is_filled: bool
    is_overfilled: bool
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
