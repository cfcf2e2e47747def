from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional


@dataclass(frozen=True)
class NewExternalCover:
    """Locum details as supplied by the planner, before an id is issued."""

    name: str
    phone: Optional[str] = None
    supervisor_id: Optional[int] = None
    role_covered: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ExternalCover:
    """A non-staff locum filling one slot of a block."""

    cover_id: str
    block_id: int
    name: str
    phone: Optional[str] = None
    supervisor_id: Optional[int] = None
    role_covered: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ScheduleBlock:
    """Domain entity: one unit of coverage demand.

    ``qty_needed`` is the target headcount; the fill count is staff plus
    locums and may exceed it.
    """

    block_id: int
    clinic_id: int
    location_id: Optional[int]
    work_date: date
    start_time: time
    end_time: time
    role_needed: str
    qty_needed: int = 1
    assigned_staff_ids: tuple[int, ...] = ()
    external_covers: tuple[ExternalCover, ...] = ()
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def fill_count(self) -> int:
        return len(self.assigned_staff_ids) + len(self.external_covers)

    @property
    def open_slots(self) -> int:
        return max(self.qty_needed - self.fill_count, 0)

    @property
    def is_filled(self) -> bool:
        return self.fill_count >= self.qty_needed

    @property
    def is_overfilled(self) -> bool:
        return self.fill_count > self.qty_needed


@dataclass(frozen=True)
class BlockFilter:
    location_id: Optional[int] = None
    start: Optional[date] = None
    end: Optional[date] = None
    staff_id: Optional[int] = field(default=None)
