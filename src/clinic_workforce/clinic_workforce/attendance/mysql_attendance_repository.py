from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus, ClockMethod
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceQuery, AttendanceRecord, AttendanceReportRow
from .repository import AttendanceRepository

_RECORD_COLUMNS = """
    a.attendance_id, a.clinic_id, a.staff_id, a.location_id, a.work_date, a.clock_in, a.clock_out,
    a.clock_in_method, a.clock_out_method, a.hours_worked, a.overtime_hours, a.status, a.notes,
    TRIM(CONCAT(s.first_name, ' ', s.last_name)) AS staff_name, s.job_role
"""

_RECORD_FROM = """
    attendances a
    LEFT JOIN staff s ON s.staff_id = a.staff_id AND s.clinic_id = a.clinic_id
"""


def _decimal(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        clinic_id=int(r["clinic_id"]),
        staff_id=int(r["staff_id"]),
        location_id=r.get("location_id"),
        work_date=r["work_date"],
        clock_in=r["clock_in"],
        clock_out=r.get("clock_out"),
        clock_in_method=ClockMethod(r.get("clock_in_method") or ClockMethod.MANUAL.value),
        clock_out_method=ClockMethod(r["clock_out_method"]) if r.get("clock_out_method") else None,
        hours_worked=_decimal(r.get("hours_worked")),
        overtime_hours=_decimal(r.get("overtime_hours")),
        status=AttendanceStatus(r["status"]),
        notes=r.get("notes"),
        staff_name=r.get("staff_name"),
        job_role=r.get("job_role"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_staff_and_date(self, clinic_id: int, staff_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_RECORD_COLUMNS} FROM {_RECORD_FROM} "
                "WHERE a.clinic_id=%s AND a.staff_id=%s AND a.work_date=%s",
                (int(clinic_id), int(staff_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_clock_in(
        self,
        *,
        clinic_id: int,
        staff_id: int,
        work_date: date,
        clock_in: datetime,
        method: ClockMethod,
        status: AttendanceStatus,
        location_id: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendances(clinic_id, staff_id, location_id, work_date, clock_in,
                                        clock_in_method, status, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(clinic_id), int(staff_id), location_id, work_date, clock_in, method.value, status.value, notes),
            )
            return int(cur.lastrowid)

    def close_clock_in(
        self,
        *,
        clinic_id: int,
        attendance_id: int,
        clock_out: datetime,
        method: ClockMethod,
        hours_worked: Decimal,
        overtime_hours: Optional[Decimal],
        status: AttendanceStatus,
        notes: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendances
                SET clock_out=%s, clock_out_method=%s, hours_worked=%s, overtime_hours=%s, status=%s, notes=%s
                WHERE attendance_id=%s AND clinic_id=%s AND clock_out IS NULL
                """,
                (
                    clock_out,
                    method.value,
                    hours_worked,
                    overtime_hours,
                    status.value,
                    notes,
                    int(attendance_id),
                    int(clinic_id),
                ),
            )
            return cur.rowcount > 0

    def list_records(self, *, clinic_id: int, criteria: AttendanceQuery) -> Sequence[AttendanceRecord]:
        clauses = ["a.clinic_id=%s"]
        params: list[object] = [int(clinic_id)]

        if criteria.work_date is not None:
            clauses.append("a.work_date=%s")
            params.append(criteria.work_date)
        if criteria.start is not None:
            clauses.append("a.work_date >= %s")
            params.append(criteria.start)
        if criteria.end is not None:
            clauses.append("a.work_date <= %s")
            params.append(criteria.end)
        if criteria.staff_id is not None:
            clauses.append("a.staff_id=%s")
            params.append(int(criteria.staff_id))
        if criteria.status is not None:
            clauses.append("a.status=%s")
            params.append(criteria.status.value)

        sql = f"""
            SELECT {_RECORD_COLUMNS}
            FROM {_RECORD_FROM}
            WHERE {" AND ".join(clauses)}
            ORDER BY a.work_date DESC, a.clock_in DESC
        """

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_record(r) for r in fetchall(cur)]

    def get_report_rows(
        self,
        *,
        clinic_id: int,
        start: Optional[date] = None,
        end: Optional[date] = None,
        closed_only: bool = False,
    ) -> Sequence[AttendanceReportRow]:
        clauses = ["a.clinic_id=%s"]
        params: list[object] = [int(clinic_id)]

        if start is not None:
            clauses.append("a.work_date >= %s")
            params.append(start)
        if end is not None:
            clauses.append("a.work_date <= %s")
            params.append(end)
        if closed_only:
            clauses.append("a.hours_worked IS NOT NULL")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT a.staff_id, s.first_name, s.last_name, s.job_role,
                       a.work_date, a.clock_in, a.clock_out, a.hours_worked, a.status
                FROM attendances a
                LEFT JOIN staff s ON s.staff_id = a.staff_id
                WHERE {" AND ".join(clauses)}
                ORDER BY a.work_date DESC, a.clock_in DESC
                """,
                tuple(params),
            )
            return [
                AttendanceReportRow(
                    staff_id=int(r["staff_id"]),
                    first_name=r.get("first_name") or "Unknown",
                    last_name=r.get("last_name") or "",
                    job_role=r.get("job_role"),
                    work_date=r["work_date"],
                    clock_in=r["clock_in"],
                    clock_out=r.get("clock_out"),
                    hours_worked=_decimal(r.get("hours_worked")),
                    status=AttendanceStatus(r["status"]),
                )
                for r in fetchall(cur)
            ]
