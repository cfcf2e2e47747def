import pytest

from src.clinic_workforce.clinic_workforce.core.enums import DutyStatus, PayType
from src.clinic_workforce.clinic_workforce.core.exceptions import NotFoundError, ValidationError
from src.clinic_workforce.clinic_workforce.directory.service import DirectoryService
from tests.fakes import make_directory


@pytest.fixture
def svc():
    return DirectoryService(make_directory())


def test_staff_lookup_is_clinic_scoped(svc):
    assert svc.get_staff(clinic_id=1, staff_id=1).full_name == "Amina Odhiambo"
    with pytest.raises(NotFoundError):
        svc.get_staff(clinic_id=2, staff_id=1)


def test_locations_primary_first(svc):
    assert [l.name for l in svc.list_locations(clinic_id=1)] == ["Main", "Annex"]


def test_ensure_location_ignores_none_and_rejects_foreign(svc):
    svc.ensure_location(clinic_id=1, location_id=None)
    with pytest.raises(NotFoundError):
        svc.ensure_location(clinic_id=1, location_id=20)


def test_create_staff(svc):
    staff = svc.create_staff(
        clinic_id=1, first_name=" Esther ", last_name="Chebet", location_id=11, pay_basis=PayType.DAILY, daily_rate=2000
    )

    assert staff.first_name == "Esther"
    assert staff.duty_status == DutyStatus.OFF
    assert [s.staff_id for s in svc.list_staff(clinic_id=1, location_id=11)] == [3, staff.staff_id]


def test_create_staff_validates(svc):
    with pytest.raises(ValidationError):
        svc.create_staff(clinic_id=1, first_name="  ", last_name="X")
    with pytest.raises(ValidationError):
        svc.create_staff(clinic_id=1, first_name="A", last_name="B", daily_rate=-1)
    with pytest.raises(NotFoundError):
        svc.create_staff(clinic_id=1, first_name="A", last_name="B", location_id=20)


def test_staff_by_id_drops_other_clinics(svc):
    assert set(svc.staff_by_id(clinic_id=1, staff_ids=[1, 2, 9])) == {1, 2}


def test_clinic_lookup(svc):
    assert svc.get_clinic(clinic_id=1).name == "Riverside Clinic"
    svc.ensure_clinic(clinic_id=2)
    with pytest.raises(NotFoundError, match="Clinic not found"):
        svc.ensure_clinic(clinic_id=999)


def test_create_staff_in_unknown_clinic_is_not_found(svc):
    with pytest.raises(NotFoundError, match="Clinic not found"):
        svc.create_staff(clinic_id=999, first_name="A", last_name="B")


def test_duty_status_update_is_clinic_scoped(svc):
    svc.set_duty_status(clinic_id=2, staff_id=2, duty_status=DutyStatus.ON_DUTY)
    assert svc.get_staff(clinic_id=1, staff_id=2).duty_status == DutyStatus.OFF

    svc.set_duty_status(clinic_id=1, staff_id=2, duty_status=DutyStatus.ON_DUTY)
    assert svc.get_staff(clinic_id=1, staff_id=2).duty_status == DutyStatus.ON_DUTY
