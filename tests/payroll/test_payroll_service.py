from __future__ import annotations

from datetime import date, datetime, timedelta
from decimal import Decimal

import pytest

from src.clinic_workforce.clinic_workforce.attendance.service import AttendanceService
from src.clinic_workforce.clinic_workforce.core.enums import PayrollStatus, PayType
from src.clinic_workforce.clinic_workforce.core.exceptions import ConflictError, NotFoundError, ValidationError
from src.clinic_workforce.clinic_workforce.directory.service import DirectoryService
from src.clinic_workforce.clinic_workforce.payroll.service import PayrollService, daily_payroll_key
from tests.fakes import InMemoryAttendance, InMemoryPayroll, make_directory

NOW = datetime(2025, 3, 10, 12, 0)


@pytest.fixture
def directory():
    return DirectoryService(make_directory())


@pytest.fixture
def attendance(directory):
    return AttendanceService(InMemoryAttendance(), directory)


@pytest.fixture
def svc(attendance, directory):
    return PayrollService(InMemoryPayroll(), attendance, directory)


def _line(svc, key="p_1_2025_03", **overrides):
    payload = dict(
        clinic_id=1,
        payroll_key=key,
        pay_type=PayType.MONTHLY,
        staff_id=1,
        period_label="March 2025",
        units=Decimal("1"),
        rate=85000,
    )
    payload.update(overrides)
    return svc.upsert(**payload)


def test_daily_payroll_key_format():
    assert daily_payroll_key(2, date(2025, 3, 3), 10) == "d_2_2025-03-03_10"
    assert daily_payroll_key(2, date(2025, 3, 3), None) == "d_2_2025-03-03_none"


def test_upsert_creates_draft_with_computed_amount(svc):
    entry = _line(svc, units=Decimal("0.5"), rate=3501)

    assert entry.status == PayrollStatus.DRAFT
    assert entry.amount == 1751


def test_upsert_explicit_amount_wins(svc):
    assert _line(svc, amount=1000).amount == 1000


def test_upsert_overwrites_payload_but_keeps_status(svc):
    _line(svc)
    svc.set_status(clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.SUBMITTED, now=NOW)

    entry = _line(svc, rate=90000, work_summary="adjusted")

    assert entry.rate == 90000
    assert entry.work_summary == "adjusted"
    assert entry.status == PayrollStatus.SUBMITTED
    assert len(svc.list_entries(clinic_id=1)) == 1


def test_upsert_with_different_status_on_existing_entry_is_conflict(svc):
    _line(svc)
    svc.set_status(clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.SUBMITTED, now=NOW)

    with pytest.raises(ConflictError):
        _line(svc, rate=90000, status=PayrollStatus.DRAFT)

    entry = _line(svc, rate=90000, status=PayrollStatus.SUBMITTED)
    assert (entry.rate, entry.status) == (90000, PayrollStatus.SUBMITTED)


def test_upsert_status_sets_initial_status_of_new_entry(svc):
    assert _line(svc, status=PayrollStatus.APPROVED).status == PayrollStatus.APPROVED


def test_upsert_in_unknown_clinic_is_not_found(svc):
    with pytest.raises(NotFoundError, match="Clinic not found"):
        _line(svc, clinic_id=999)


def test_upsert_requires_staff_or_location(svc):
    with pytest.raises(ValidationError):
        _line(svc, staff_id=None, location_id=None)


def test_upsert_location_only_line(svc):
    entry = _line(svc, key="loc_10_2025_03", staff_id=None, location_id=10, pay_type=PayType.DAILY)

    assert entry.location_id == 10
    assert entry.staff_id is None


def test_upsert_rejects_foreign_staff_and_negative_units(svc):
    with pytest.raises(NotFoundError):
        _line(svc, staff_id=9)
    with pytest.raises(ValidationError):
        _line(svc, units=Decimal("-1"))


def test_status_moves_forward_and_stamps(svc):
    _line(svc)

    approved = svc.set_status(clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.APPROVED, now=NOW)
    paid = svc.set_status(
        clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.PAID, now=NOW + timedelta(days=1)
    )

    assert approved.approved_at == NOW
    assert paid.status == PayrollStatus.PAID
    assert paid.paid_at == NOW + timedelta(days=1)
    assert paid.approved_at == NOW


def test_status_cannot_move_backward(svc):
    _line(svc)
    svc.set_status(clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.PAID, now=NOW)

    with pytest.raises(ConflictError):
        svc.set_status(clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.DRAFT, now=NOW)


def test_backward_move_allowed_when_not_forward_only(attendance, directory):
    svc = PayrollService(InMemoryPayroll(), attendance, directory, forward_only=False)
    _line(svc)
    svc.set_status(clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.APPROVED, now=NOW)

    entry = svc.set_status(clinic_id=1, payroll_key="p_1_2025_03", status=PayrollStatus.DRAFT, now=NOW)

    assert entry.status == PayrollStatus.DRAFT


def test_status_of_missing_entry_is_not_found(svc):
    with pytest.raises(NotFoundError):
        svc.set_status(clinic_id=1, payroll_key="nope", status=PayrollStatus.APPROVED, now=NOW)


def test_status_is_clinic_scoped(svc):
    _line(svc)

    with pytest.raises(NotFoundError):
        svc.set_status(clinic_id=2, payroll_key="p_1_2025_03", status=PayrollStatus.APPROVED, now=NOW)


def test_bulk_status_reports_missing_keys(svc):
    _line(svc)

    result = svc.bulk_set_status(
        clinic_id=1, payroll_keys=["p_1_2025_03", "ghost", "p_1_2025_03"], status=PayrollStatus.APPROVED, now=NOW
    )

    assert result.updated == 1
    assert result.missing_keys == ["ghost"]
    assert result.refused_keys == []
    assert svc.get_entry(clinic_id=1, payroll_key="p_1_2025_03").status == PayrollStatus.APPROVED


def test_bulk_status_skips_entries_that_would_move_backward(svc):
    _line(svc, key="a")
    _line(svc, key="b")
    svc.set_status(clinic_id=1, payroll_key="b", status=PayrollStatus.PAID, now=NOW)

    result = svc.bulk_set_status(
        clinic_id=1, payroll_keys=["a", "b", "zz"], status=PayrollStatus.SUBMITTED, now=NOW
    )

    assert result.updated == 1
    assert result.missing_keys == ["zz"]
    assert result.refused_keys == ["b"]
    assert svc.get_entry(clinic_id=1, payroll_key="b").status == PayrollStatus.PAID


def test_bulk_status_requires_keys(svc):
    with pytest.raises(ValidationError):
        svc.bulk_set_status(clinic_id=1, payroll_keys=["  "], status=PayrollStatus.APPROVED)


def test_list_entries_filters(svc):
    _line(svc, key="a")
    _line(svc, key="b", pay_type=PayType.DAILY, location_id=11)

    assert [e.payroll_key for e in svc.list_entries(clinic_id=1, pay_type=PayType.DAILY)] == ["b"]
    assert [e.payroll_key for e in svc.list_entries(clinic_id=1, location_id=11)] == ["b"]


def test_preview_daily_derives_units_for_daily_staff_only(svc, attendance):
    day = datetime(2025, 3, 3, 8, 0)
    attendance.clock_in(clinic_id=1, staff_id=2, now=day)
    attendance.clock_out(clinic_id=1, staff_id=2, now=day + timedelta(hours=9))
    attendance.clock_in(clinic_id=1, staff_id=3, now=day)
    attendance.clock_out(clinic_id=1, staff_id=3, now=day + timedelta(hours=5))
    attendance.clock_in(clinic_id=1, staff_id=1, now=day)
    attendance.clock_out(clinic_id=1, staff_id=1, now=day + timedelta(hours=9))
    attendance.clock_in(clinic_id=1, staff_id=2, now=day + timedelta(days=1))

    drafts = svc.preview_daily(clinic_id=1, start=date(2025, 3, 1), end=date(2025, 3, 31))

    by_key = {d.payroll_key: d for d in drafts}
    assert set(by_key) == {"d_2_2025-03-03_10", "d_3_2025-03-03_11"}
    brian = by_key["d_2_2025-03-03_10"]
    assert (brian.units, brian.rate, brian.amount) == (Decimal("1"), 3500, 3500)
    assert brian.hours_audit == Decimal("9.00")
    cynthia = by_key["d_3_2025-03-03_11"]
    assert (cynthia.units, cynthia.amount) == (Decimal("0.5"), 900)
    assert svc.list_entries(clinic_id=1) == []


def test_preview_daily_requires_range(svc):
    with pytest.raises(ValidationError):
        svc.preview_daily(clinic_id=1, start=None, end=date(2025, 3, 31))
