from decimal import Decimal

import pytest

from src.clinic_workforce.clinic_workforce.core.enums import AttendanceStatus
from src.clinic_workforce.clinic_workforce.payroll.calculator.daily_units_calculator import DailyUnitsCalculator


@pytest.mark.parametrize(
    "status, units",
    [
        (AttendanceStatus.PRESENT, Decimal("1")),
        (AttendanceStatus.HALF_DAY, Decimal("0.5")),
        (AttendanceStatus.ABSENT, Decimal("0")),
    ],
)
def test_units_per_status(status, units):
    assert DailyUnitsCalculator().units_for(status) == units


def test_amount_rounds_half_up():
    calc = DailyUnitsCalculator()

    assert calc.amount(Decimal("0.5"), 3500) == 1750
    assert calc.amount(Decimal("0.5"), 1801) == 901
    assert calc.amount(Decimal("1.25"), 10) == 13
    assert calc.amount(Decimal("0"), 3500) == 0
