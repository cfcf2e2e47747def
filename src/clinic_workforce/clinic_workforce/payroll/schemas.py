from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from ..common.schemas import JsonDecimal, RequestModel, ResponseModel
from ..core.enums import PayrollStatus, PayType


class PayrollListQuery(RequestModel):
    location: Optional[str] = None
    pay_type: Optional[PayType] = Field(None, alias="type")
    status: Optional[PayrollStatus] = None


class PreviewQuery(RequestModel):
    start: Optional[date] = Field(None, alias="from")
    end: Optional[date] = Field(None, alias="to")


class PayrollUpsertIn(RequestModel):
    payroll_key: str
    pay_type: PayType
    staff_id: Optional[int] = None
    location_id: Optional[int] = None
    period_label: Optional[str] = None
    entry_date: Optional[date] = Field(None, alias="date")
    units: Decimal = Decimal("0")
    rate: int = 0
    amount: Optional[int] = None
    work_summary: Optional[str] = None
    hours_audit: Optional[Decimal] = None
    # Initial status of a new entry; an existing entry must already be in it.
    status: Optional[PayrollStatus] = None


class StatusIn(RequestModel):
    status: PayrollStatus


class BulkStatusIn(RequestModel):
    payroll_keys: list[str] = Field(min_length=1)
    status: PayrollStatus


class PayrollEntryOut(ResponseModel):
    entry_id: int
    clinic_id: int
    payroll_key: str
    pay_type: PayType
    status: PayrollStatus
    staff_id: Optional[int] = None
    location_id: Optional[int] = None
    period_label: Optional[str] = None
    entry_date: Optional[date] = None
    units: JsonDecimal
    rate: int
    amount: int
    work_summary: Optional[str] = None
    hours_audit: Optional[JsonDecimal] = None
    approved_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PayrollDraftOut(ResponseModel):
    payroll_key: str
    pay_type: PayType
    staff_id: Optional[int] = None
    location_id: Optional[int] = None
    entry_date: Optional[date] = None
    units: JsonDecimal
    rate: int
    amount: int
    work_summary: Optional[str] = None
    hours_audit: Optional[JsonDecimal] = None


class BulkStatusOut(ResponseModel):
    status: PayrollStatus
    updated: int
    missing_keys: list[str]
    refused_keys: list[str]
