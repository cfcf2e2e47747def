from __future__ import annotations

from datetime import date, time
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import BlockFilter, NewExternalCover, ScheduleBlock


class ScheduleBlockRepository(Protocol):
    """Storage for blocks and their assignment/cover rows.

    Assignments and covers live in child tables so each add/remove is one
    atomic statement instead of a rewrite of the whole collection.
    """

    def create_block(
        self,
        *,
        clinic_id: int,
        location_id: Optional[int],
        work_date: date,
        start_time: time,
        end_time: time,
        role_needed: str,
        qty_needed: int,
        notes: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def get_block(self, *, clinic_id: int, block_id: int) -> Optional[ScheduleBlock]:
        raise NotImplementedError

    def list_blocks(self, *, clinic_id: int, criteria: BlockFilter) -> Sequence[ScheduleBlock]:
        """Ordered by date, then start time."""

        raise NotImplementedError

    def update_block(self, *, clinic_id: int, block_id: int, changes: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def delete_unfilled_block(self, *, clinic_id: int, block_id: int) -> bool:
        """Delete only if the block has no staff and no covers.

        Returns False when nothing was deleted (absent, other clinic, or filled).
        """

        raise NotImplementedError

    def add_staff(self, *, clinic_id: int, block_id: int, staff_id: int) -> bool:
        """Idempotent; returns True if a new assignment row was written.

        Writes nothing when the block belongs to another clinic.
        """

        raise NotImplementedError

    def remove_staff(self, *, clinic_id: int, block_id: int, staff_id: int) -> bool:
        raise NotImplementedError

    def add_cover(self, *, clinic_id: int, block_id: int, cover_id: str, cover: NewExternalCover) -> bool:
        raise NotImplementedError

    def remove_cover(self, *, clinic_id: int, block_id: int, cover_id: str) -> bool:
        raise NotImplementedError
