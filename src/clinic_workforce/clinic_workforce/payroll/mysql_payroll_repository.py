from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Collection, Optional, Sequence

from ..core.enums import PayrollStatus, PayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import PayrollDraft, PayrollEntry, PayrollQuery
from .repository import PayrollRepository

_ENTRY_COLUMNS = """
    entry_id, clinic_id, payroll_key, pay_type, status, staff_id, location_id, period_label, entry_date,
    units, rate, amount, work_summary, hours_audit, created_at, updated_at, approved_at, paid_at
"""


def _to_entry(r: dict) -> PayrollEntry:
    return PayrollEntry(
        entry_id=int(r["entry_id"]),
        clinic_id=int(r["clinic_id"]),
        payroll_key=r["payroll_key"],
        pay_type=PayType(r["pay_type"]),
        status=PayrollStatus(r.get("status") or PayrollStatus.DRAFT.value),
        staff_id=r.get("staff_id"),
        location_id=r.get("location_id"),
        period_label=r.get("period_label"),
        entry_date=r.get("entry_date"),
        units=Decimal(str(r.get("units") or 0)),
        rate=int(r.get("rate") or 0),
        amount=int(r.get("amount") or 0),
        work_summary=r.get("work_summary"),
        hours_audit=Decimal(str(r["hours_audit"])) if r.get("hours_audit") is not None else None,
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
        approved_at=r.get("approved_at"),
        paid_at=r.get("paid_at"),
    )


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, *, clinic_id: int, draft: PayrollDraft, initial_status: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payroll_entries(clinic_id, payroll_key, pay_type, status, staff_id, location_id,
                                            period_label, entry_date, units, rate, amount, work_summary, hours_audit)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    pay_type=VALUES(pay_type),
                    staff_id=VALUES(staff_id),
                    location_id=VALUES(location_id),
                    period_label=VALUES(period_label),
                    entry_date=VALUES(entry_date),
                    units=VALUES(units),
                    rate=VALUES(rate),
                    amount=VALUES(amount),
                    work_summary=VALUES(work_summary),
                    hours_audit=VALUES(hours_audit),
                    updated_at=NOW()
                """,
                (
                    int(clinic_id),
                    draft.payroll_key,
                    draft.pay_type.value,
                    initial_status.value,
                    draft.staff_id,
                    draft.location_id,
                    draft.period_label,
                    draft.entry_date,
                    draft.units,
                    int(draft.rate),
                    int(draft.amount),
                    draft.work_summary,
                    draft.hours_audit,
                ),
            )
            # MySQL reports 1 affected row for an insert, 2 for an update.
            return cur.rowcount == 1

    def get_by_key(self, *, clinic_id: int, payroll_key: str) -> Optional[PayrollEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_ENTRY_COLUMNS} FROM payroll_entries WHERE clinic_id=%s AND payroll_key=%s",
                (int(clinic_id), payroll_key),
            )
            r = fetchone(cur)
            return _to_entry(r) if r else None

    def list_entries(self, *, clinic_id: int, criteria: PayrollQuery) -> Sequence[PayrollEntry]:
        clauses = ["clinic_id=%s"]
        params: list[object] = [int(clinic_id)]

        if criteria.location_id is not None:
            clauses.append("location_id=%s")
            params.append(int(criteria.location_id))
        if criteria.pay_type is not None:
            clauses.append("pay_type=%s")
            params.append(criteria.pay_type.value)
        if criteria.status is not None:
            clauses.append("status=%s")
            params.append(criteria.status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_ENTRY_COLUMNS}
                FROM payroll_entries
                WHERE {" AND ".join(clauses)}
                ORDER BY entry_date DESC, payroll_key ASC
                """,
                tuple(params),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def current_statuses(self, *, clinic_id: int, payroll_keys: Sequence[str]) -> dict[str, PayrollStatus]:
        keys = list(dict.fromkeys(payroll_keys))
        if not keys:
            return {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT payroll_key, status FROM payroll_entries "
                f"WHERE clinic_id=%s AND payroll_key IN ({in_clause(keys)})",
                (int(clinic_id), *keys),
            )
            return {r["payroll_key"]: PayrollStatus(r["status"]) for r in fetchall(cur)}

    def set_status(
        self,
        *,
        clinic_id: int,
        payroll_keys: Sequence[str],
        status: PayrollStatus,
        now: datetime,
        allowed_from: Optional[Collection[PayrollStatus]] = None,
    ) -> int:
        keys = list(dict.fromkeys(payroll_keys))
        if not keys:
            return 0

        sets = ["status=%s", "updated_at=%s"]
        set_params: list[object] = [status.value, now]
        if status == PayrollStatus.APPROVED:
            sets.append("approved_at=%s")
            set_params.append(now)
        elif status == PayrollStatus.PAID:
            sets.append("paid_at=%s")
            set_params.append(now)

        where = ["clinic_id=%s", f"payroll_key IN ({in_clause(keys)})"]
        where_params: list[object] = [int(clinic_id), *keys]
        if allowed_from is not None:
            allowed = [s.value for s in allowed_from]
            where.append(f"status IN ({in_clause(allowed)})")
            where_params.extend(allowed)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE payroll_entries SET {', '.join(sets)} WHERE {' AND '.join(where)}",
                (*set_params, *where_params),
            )
            return int(cur.rowcount)
