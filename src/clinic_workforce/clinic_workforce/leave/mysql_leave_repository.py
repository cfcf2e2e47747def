from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveQuery, LeaveRequest
from .repository import LeaveRepository

_LEAVE_COLUMNS = """
    leave_id, clinic_id, staff_id, leave_type, from_date, to_date, days_count, status,
    reason, attachment_url, reviewed_by, reviewed_at, rejection_reason, created_at, updated_at
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        clinic_id=int(r["clinic_id"]),
        staff_id=int(r["staff_id"]),
        leave_type=LeaveType(r["leave_type"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        days_count=int(r.get("days_count") or 0),
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        attachment_url=r.get("attachment_url"),
        reviewed_by=r.get("reviewed_by"),
        reviewed_at=r.get("reviewed_at"),
        rejection_reason=r.get("rejection_reason"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(
        self,
        *,
        clinic_id: int,
        staff_id: int,
        leave_type: LeaveType,
        from_date: date,
        to_date: date,
        days_count: int,
        reason: Optional[str] = None,
        attachment_url: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(clinic_id, staff_id, leave_type, from_date, to_date, days_count,
                                           reason, attachment_url, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(clinic_id),
                    int(staff_id),
                    leave_type.value,
                    from_date,
                    to_date,
                    int(days_count),
                    reason,
                    attachment_url,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, *, clinic_id: int, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_LEAVE_COLUMNS} FROM leave_requests WHERE leave_id=%s AND clinic_id=%s",
                (int(leave_id), int(clinic_id)),
            )
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list_requests(self, *, clinic_id: int, criteria: LeaveQuery) -> Sequence[LeaveRequest]:
        clauses = ["clinic_id=%s"]
        params: list[object] = [int(clinic_id)]

        if criteria.status is not None:
            clauses.append("status=%s")
            params.append(criteria.status.value)
        if criteria.staff_id is not None:
            clauses.append("staff_id=%s")
            params.append(int(criteria.staff_id))
        if criteria.leave_type is not None:
            clauses.append("leave_type=%s")
            params.append(criteria.leave_type.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_LEAVE_COLUMNS}
                FROM leave_requests
                WHERE {" AND ".join(clauses)}
                ORDER BY created_at DESC, leave_id DESC
                """,
                tuple(params),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def review_pending(
        self,
        *,
        clinic_id: int,
        leave_id: int,
        status: LeaveStatus,
        reviewed_by: Optional[int],
        reviewed_at: Optional[datetime],
        rejection_reason: Optional[str],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s,
                    reviewed_by=COALESCE(%s, reviewed_by),
                    reviewed_at=COALESCE(%s, reviewed_at),
                    rejection_reason=COALESCE(%s, rejection_reason),
                    updated_at=NOW()
                WHERE leave_id=%s AND clinic_id=%s AND status=%s
                """,
                (
                    status.value,
                    reviewed_by,
                    reviewed_at,
                    rejection_reason,
                    int(leave_id),
                    int(clinic_id),
                    LeaveStatus.PENDING.value,
                ),
            )
            return cur.rowcount > 0

    def delete_pending(self, *, clinic_id: int, leave_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM leave_requests WHERE leave_id=%s AND clinic_id=%s AND status=%s",
                (int(leave_id), int(clinic_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
