from __future__ import annotations

import logging
import uuid
from datetime import date, time
from typing import Any, Optional, Sequence

from ..common.validators import clean_optional, require_date_order, require_non_empty, require_positive_int
from ..core.constants import LOCUM_ID_PREFIX
from ..core.enums import AssignAction
from ..core.exceptions import ConflictError, NotFoundError, ValidationError
from ..directory.service import DirectoryService
from .model import BlockFilter, NewExternalCover, ScheduleBlock
from .repository import ScheduleBlockRepository

_logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"work_date", "start_time", "end_time", "role_needed", "qty_needed", "location_id", "notes"})
_REQUIRED_FIELDS = frozenset({"work_date", "start_time", "end_time", "role_needed", "qty_needed"})


def new_cover_id() -> str:
    return f"{LOCUM_ID_PREFIX}{uuid.uuid4().hex[:12]}"


class ScheduleBlockService:
    """Coverage blocks plus the staff/locum assignments that fill them."""

    def __init__(self, blocks: ScheduleBlockRepository, directory: DirectoryService):
        self._blocks = blocks
        self._directory = directory

    def _require_block(self, clinic_id: int, block_id: int) -> ScheduleBlock:
        block = self._blocks.get_block(clinic_id=int(clinic_id), block_id=int(block_id))
        if not block:
            raise NotFoundError("Schedule block not found")
        return block

    def create_block(
        self,
        *,
        clinic_id: int,
        work_date: date,
        start_time: time,
        end_time: time,
        role_needed: str,
        qty_needed: int = 1,
        location_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> ScheduleBlock:
        if work_date is None or start_time is None or end_time is None:
            raise ValidationError("Date, start time and end time are required")
        role_needed = require_non_empty(role_needed, "Role needed")
        qty_needed = require_positive_int(qty_needed, "Quantity needed")
        self._directory.ensure_clinic(clinic_id=clinic_id)
        self._directory.ensure_location(clinic_id=clinic_id, location_id=location_id)

        block_id = self._blocks.create_block(
            clinic_id=int(clinic_id),
            location_id=int(location_id) if location_id is not None else None,
            work_date=work_date,
            start_time=start_time,
            end_time=end_time,
            role_needed=role_needed,
            qty_needed=qty_needed,
            notes=clean_optional(notes),
        )
        _logger.info("Created schedule block %s for clinic %s on %s", block_id, clinic_id, work_date)
        return self._require_block(clinic_id, block_id)

    def get_block(self, *, clinic_id: int, block_id: int) -> ScheduleBlock:
        return self._require_block(clinic_id, block_id)

    def list_blocks(
        self,
        *,
        clinic_id: int,
        location_id: Optional[int] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[ScheduleBlock]:
        if start and end:
            require_date_order(start, end)
        criteria = BlockFilter(location_id=location_id, start=start, end=end)
        return self._blocks.list_blocks(clinic_id=int(clinic_id), criteria=criteria)

    def blocks_for_staff(self, *, clinic_id: int, staff_id: int, start: date, end: date) -> Sequence[ScheduleBlock]:
        criteria = BlockFilter(start=start, end=end, staff_id=int(staff_id))
        return self._blocks.list_blocks(clinic_id=int(clinic_id), criteria=criteria)

    def update_block(self, *, clinic_id: int, block_id: int, **changes: Any) -> ScheduleBlock:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Unknown field(s): {', '.join(sorted(unknown))}")

        for name in _REQUIRED_FIELDS & set(changes):
            if changes[name] is None:
                raise ValidationError(f"{name} cannot be null")

        if "role_needed" in changes:
            changes["role_needed"] = require_non_empty(changes["role_needed"], "Role needed")
        if "qty_needed" in changes:
            changes["qty_needed"] = require_positive_int(changes["qty_needed"], "Quantity needed")
        if "notes" in changes:
            changes["notes"] = clean_optional(changes["notes"])

        block = self._require_block(clinic_id, block_id)
        if changes.get("location_id") is not None:
            self._directory.ensure_location(clinic_id=clinic_id, location_id=changes["location_id"])

        self._blocks.update_block(clinic_id=int(clinic_id), block_id=block.block_id, changes=changes)
        return self._require_block(clinic_id, block_id)

    def delete_block(self, *, clinic_id: int, block_id: int) -> None:
        if self._blocks.delete_unfilled_block(clinic_id=int(clinic_id), block_id=int(block_id)):
            _logger.info("Deleted schedule block %s for clinic %s", block_id, clinic_id)
            return

        # Nothing deleted: either the block is not ours or it still has fills.
        self._require_block(clinic_id, block_id)
        raise ConflictError("Cannot delete a block that has staff or locum cover assigned")

    def assign(self, *, clinic_id: int, block_id: int, staff_id: int, action: AssignAction) -> ScheduleBlock:
        block = self._require_block(clinic_id, block_id)
        staff_id = require_positive_int(staff_id, "Staff id")

        if action == AssignAction.ADD:
            self._directory.get_staff(clinic_id=clinic_id, staff_id=staff_id)
            if self._blocks.add_staff(clinic_id=int(clinic_id), block_id=block.block_id, staff_id=staff_id):
                _logger.info("Assigned staff %s to block %s", staff_id, block.block_id)
        else:
            if self._blocks.remove_staff(clinic_id=int(clinic_id), block_id=block.block_id, staff_id=staff_id):
                _logger.info("Unassigned staff %s from block %s", staff_id, block.block_id)

        return self._refresh(clinic_id, block.block_id)

    def cover(
        self,
        *,
        clinic_id: int,
        block_id: int,
        action: AssignAction,
        locum: Optional[NewExternalCover] = None,
        locum_id: Optional[str] = None,
    ) -> ScheduleBlock:
        block = self._require_block(clinic_id, block_id)

        if action == AssignAction.ADD:
            if locum is None:
                raise ValidationError("Locum details are required")
            name = require_non_empty(locum.name, "Locum name")
            if locum.supervisor_id is not None:
                self._directory.get_staff(clinic_id=clinic_id, staff_id=locum.supervisor_id)

            cover_id = new_cover_id()
            added = self._blocks.add_cover(
                clinic_id=int(clinic_id),
                block_id=block.block_id,
                cover_id=cover_id,
                cover=NewExternalCover(
                    name=name,
                    phone=clean_optional(locum.phone),
                    supervisor_id=locum.supervisor_id,
                    role_covered=clean_optional(locum.role_covered),
                    notes=clean_optional(locum.notes),
                ),
            )
            if added:
                _logger.info("Added locum cover %s to block %s", cover_id, block.block_id)
        else:
            locum_id = (locum_id or "").strip()
            if not locum_id:
                raise ValidationError("Locum id is required")
            if self._blocks.remove_cover(clinic_id=int(clinic_id), block_id=block.block_id, cover_id=locum_id):
                _logger.info("Removed locum cover %s from block %s", locum_id, block.block_id)

        return self._refresh(clinic_id, block.block_id)

    def _refresh(self, clinic_id: int, block_id: int) -> ScheduleBlock:
        block = self._require_block(clinic_id, block_id)
        if block.is_overfilled:
            _logger.warning(
                "Block %s is over-assigned: %s filled for %s needed",
                block.block_id,
                block.fill_count,
                block.qty_needed,
            )
        return block
