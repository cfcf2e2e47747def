from __future__ import annotations

from datetime import date, time

import pytest

from src.clinic_workforce.clinic_workforce.core.enums import AssignAction
from src.clinic_workforce.clinic_workforce.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.clinic_workforce.clinic_workforce.directory.service import DirectoryService
from src.clinic_workforce.clinic_workforce.schedule_blocks.model import NewExternalCover
from src.clinic_workforce.clinic_workforce.schedule_blocks.service import ScheduleBlockService
from tests.fakes import InMemoryBlocks, make_directory


@pytest.fixture
def svc():
    return ScheduleBlockService(InMemoryBlocks(), DirectoryService(make_directory()))


@pytest.fixture
def block(svc):
    return svc.create_block(
        clinic_id=1,
        work_date=date(2025, 3, 3),
        start_time=time(8, 0),
        end_time=time(16, 0),
        role_needed=" Nurse ",
        qty_needed=2,
        location_id=10,
    )


def test_create_block_starts_unfilled(block):
    assert block.role_needed == "Nurse"
    assert block.assigned_staff_ids == ()
    assert block.open_slots == 2
    assert not block.is_filled


def test_create_block_validates_quantity_and_location(svc):
    with pytest.raises(ValidationError):
        svc.create_block(
            clinic_id=1, work_date=date(2025, 3, 3), start_time=time(8), end_time=time(9), role_needed="Nurse", qty_needed=0
        )
    with pytest.raises(NotFoundError):
        svc.create_block(
            clinic_id=1,
            work_date=date(2025, 3, 3),
            start_time=time(8),
            end_time=time(9),
            role_needed="Nurse",
            location_id=20,
        )


def test_block_from_other_clinic_is_not_found(svc, block):
    with pytest.raises(NotFoundError):
        svc.get_block(clinic_id=2, block_id=block.block_id)


def test_assign_add_is_idempotent(svc, block):
    svc.assign(clinic_id=1, block_id=block.block_id, staff_id=1, action=AssignAction.ADD)
    updated = svc.assign(clinic_id=1, block_id=block.block_id, staff_id=1, action=AssignAction.ADD)

    assert updated.assigned_staff_ids == (1,)
    assert updated.fill_count == 1


def test_assign_remove_absent_is_noop(svc, block):
    updated = svc.assign(clinic_id=1, block_id=block.block_id, staff_id=2, action=AssignAction.REMOVE)

    assert updated.assigned_staff_ids == ()


def test_assign_staff_from_other_clinic_is_rejected(svc, block):
    with pytest.raises(NotFoundError):
        svc.assign(clinic_id=1, block_id=block.block_id, staff_id=9, action=AssignAction.ADD)


def test_over_assignment_is_allowed(svc, block):
    for staff_id in (1, 2, 3):
        updated = svc.assign(clinic_id=1, block_id=block.block_id, staff_id=staff_id, action=AssignAction.ADD)

    assert updated.fill_count == 3
    assert updated.is_overfilled
    assert updated.open_slots == 0


def test_locum_cover_counts_towards_fill(svc, block):
    svc.assign(clinic_id=1, block_id=block.block_id, staff_id=1, action=AssignAction.ADD)
    updated = svc.cover(
        clinic_id=1,
        block_id=block.block_id,
        action=AssignAction.ADD,
        locum=NewExternalCover(name="Dr. Locum", phone="0700", supervisor_id=1),
    )

    assert updated.is_filled
    cover = updated.external_covers[0]
    assert cover.cover_id.startswith("lc_")
    assert cover.supervisor_id == 1

    removed = svc.cover(clinic_id=1, block_id=block.block_id, action=AssignAction.REMOVE, locum_id=cover.cover_id)
    assert removed.external_covers == ()


def test_locum_requires_name_and_clinic_supervisor(svc, block):
    with pytest.raises(ValidationError):
        svc.cover(clinic_id=1, block_id=block.block_id, action=AssignAction.ADD, locum=NewExternalCover(name="  "))
    with pytest.raises(NotFoundError):
        svc.cover(
            clinic_id=1,
            block_id=block.block_id,
            action=AssignAction.ADD,
            locum=NewExternalCover(name="Dr. Locum", supervisor_id=9),
        )


def test_delete_filled_block_conflicts(svc, block):
    svc.assign(clinic_id=1, block_id=block.block_id, staff_id=1, action=AssignAction.ADD)

    with pytest.raises(ConflictError):
        svc.delete_block(clinic_id=1, block_id=block.block_id)


def test_delete_unfilled_block(svc, block):
    svc.delete_block(clinic_id=1, block_id=block.block_id)

    with pytest.raises(NotFoundError):
        svc.get_block(clinic_id=1, block_id=block.block_id)


def test_delete_other_clinic_block_is_not_found(svc, block):
    with pytest.raises(NotFoundError):
        svc.delete_block(clinic_id=2, block_id=block.block_id)


def test_update_block_partial(svc, block):
    updated = svc.update_block(clinic_id=1, block_id=block.block_id, qty_needed=1, notes="  ")

    assert updated.qty_needed == 1
    assert updated.notes is None
    assert updated.start_time == time(8, 0)


def test_update_block_rejects_unknown_and_null_required(svc, block):
    with pytest.raises(ValidationError):
        svc.update_block(clinic_id=1, block_id=block.block_id, clinic_id_override=3)
    with pytest.raises(ValidationError):
        svc.update_block(clinic_id=1, block_id=block.block_id, work_date=None)


def test_list_blocks_by_range_and_location(svc, block):
    svc.create_block(
        clinic_id=1, work_date=date(2025, 3, 5), start_time=time(9), end_time=time(17), role_needed="Receptionist",
        location_id=11,
    )

    assert len(svc.list_blocks(clinic_id=1)) == 2
    assert [b.location_id for b in svc.list_blocks(clinic_id=1, location_id=11)] == [11]
    assert [b.block_id for b in svc.list_blocks(clinic_id=1, start=date(2025, 3, 3), end=date(2025, 3, 3))] == [block.block_id]
    assert svc.list_blocks(clinic_id=2) == []


def test_create_block_in_unknown_clinic_is_not_found(svc):
    with pytest.raises(NotFoundError, match="Clinic not found"):
        svc.create_block(
            clinic_id=999, work_date=date(2025, 3, 3), start_time=time(8), end_time=time(9), role_needed="Nurse"
        )


def test_child_rows_are_not_written_through_another_clinic():
    blocks = InMemoryBlocks()
    block_id = blocks.create_block(
        clinic_id=1,
        location_id=10,
        work_date=date(2025, 3, 3),
        start_time=time(8),
        end_time=time(16),
        role_needed="Nurse",
        qty_needed=1,
    )
    blocks.add_cover(clinic_id=1, block_id=block_id, cover_id="lc_keep", cover=NewExternalCover(name="Dr. Njeri"))
    blocks.add_staff(clinic_id=1, block_id=block_id, staff_id=1)

    assert blocks.add_staff(clinic_id=2, block_id=block_id, staff_id=9) is False
    assert blocks.remove_staff(clinic_id=2, block_id=block_id, staff_id=1) is False
    assert blocks.add_cover(clinic_id=2, block_id=block_id, cover_id="lc_x", cover=NewExternalCover(name="X")) is False
    assert blocks.remove_cover(clinic_id=2, block_id=block_id, cover_id="lc_keep") is False

    stored = blocks.get_block(clinic_id=1, block_id=block_id)
    assert stored.assigned_staff_ids == (1,)
    assert [c.cover_id for c in stored.external_covers] == ["lc_keep"]
