from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import PayrollStatus, PayType


@dataclass(frozen=True)
class PayrollDraft:
    """Payload of a payroll line, either supplied by the caller or derived."""

    payroll_key: str
    pay_type: PayType
    staff_id: Optional[int] = None
    location_id: Optional[int] = None
    period_label: Optional[str] = None
    entry_date: Optional[date] = None
    units: Decimal = Decimal("0")
    rate: int = 0
    amount: int = 0
    work_summary: Optional[str] = None
    hours_audit: Optional[Decimal] = None


@dataclass(frozen=True)
class PayrollEntry:
    """Domain entity: a stored payroll line, unique per (clinic_id, payroll_key)."""

    entry_id: int
    clinic_id: int
    payroll_key: str
    pay_type: PayType
    status: PayrollStatus
    staff_id: Optional[int] = None
    location_id: Optional[int] = None
    period_label: Optional[str] = None
    entry_date: Optional[date] = None
    units: Decimal = Decimal("0")
    rate: int = 0
    amount: int = 0
    work_summary: Optional[str] = None
    hours_audit: Optional[Decimal] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    approved_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayrollQuery:
    location_id: Optional[int] = None
    pay_type: Optional[PayType] = None
    status: Optional[PayrollStatus] = None


@dataclass(frozen=True)
class BulkStatusResult:
    status: PayrollStatus
    updated: int
    missing_keys: list[str] = field(default_factory=list)
    refused_keys: list[str] = field(default_factory=list)
