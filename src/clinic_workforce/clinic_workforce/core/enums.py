from __future__ import annotations

from enum import Enum


class DutyStatus(str, Enum):
    """Live on-shift flag kept on the staff record."""

    ON_DUTY = "on_duty"
    OFF = "off"
    AVAILABLE = "available"
    ON_LEAVE = "on_leave"


class AssignAction(str, Enum):
    ADD = "add"
    REMOVE = "remove"


class ClockMethod(str, Enum):
    MANUAL = "manual"
    BIOMETRIC = "biometric"
    GPS = "gps"
    QR_CODE = "qr_code"


class AttendanceStatus(str, Enum):
    """Worked-time classification stored on an attendance record."""

    PRESENT = "present"
    HALF_DAY = "half_day"
    ABSENT = "absent"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    SICK = "sick"
    MATERNITY = "maternity"
    PATERNITY = "paternity"
    UNPAID = "unpaid"
    COMPASSIONATE = "compassionate"
    OTHER = "other"


class LeaveStatus(str, Enum):
    """Leave review workflow: pending -> approved | rejected | cancelled."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    CANCELLED = "cancelled"


class PayType(str, Enum):
    """Pay basis of a staff member, and type of a payroll entry."""

    MONTHLY = "MONTHLY"
    DAILY = "DAILY"


class PayrollStatus(str, Enum):
    """Payroll chain: draft -> submitted -> approved -> paid."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    APPROVED = "approved"
    PAID = "paid"

    @property
    def rank(self) -> int:
        return _PAYROLL_ORDER.index(self)


_PAYROLL_ORDER = [
    PayrollStatus.DRAFT,
    PayrollStatus.SUBMITTED,
    PayrollStatus.APPROVED,
    PayrollStatus.PAID,
]
