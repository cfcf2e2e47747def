from __future__ import annotations

from typing import Iterable, Optional, Sequence

from ..core.enums import DutyStatus, PayType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Clinic, Location, Staff
from .repository import DirectoryRepository

_STAFF_COLUMNS = """
    staff_id, clinic_id, first_name, last_name, job_role, location_id,
    duty_status, employment_status, kyc_status, pay_basis, daily_rate, monthly_salary
"""


def _to_staff(r: dict) -> Staff:
    return Staff(
        staff_id=int(r["staff_id"]),
        clinic_id=int(r["clinic_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        job_role=r.get("job_role"),
        location_id=r.get("location_id"),
        duty_status=DutyStatus(r.get("duty_status") or DutyStatus.OFF.value),
        employment_status=r.get("employment_status") or "inactive",
        kyc_status=r.get("kyc_status") or "not_started",
        pay_basis=PayType(r.get("pay_basis") or PayType.MONTHLY.value),
        daily_rate=int(r.get("daily_rate") or 0),
        monthly_salary=int(r.get("monthly_salary") or 0),
    )


def _to_location(r: dict) -> Location:
    return Location(
        location_id=int(r["location_id"]),
        clinic_id=int(r["clinic_id"]),
        name=r["name"],
        town=r.get("town"),
        is_primary=bool(r.get("is_primary")),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLDirectoryRepository(DirectoryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_clinic(self, *, clinic_id: int) -> Optional[Clinic]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT clinic_id, name FROM clinics WHERE clinic_id=%s", (int(clinic_id),))
            r = fetchone(cur)
            return Clinic(clinic_id=int(r["clinic_id"]), name=r["name"]) if r else None

    def get_staff(self, *, clinic_id: int, staff_id: int) -> Optional[Staff]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_STAFF_COLUMNS} FROM staff WHERE staff_id=%s AND clinic_id=%s",
                (int(staff_id), int(clinic_id)),
            )
            r = fetchone(cur)
            return _to_staff(r) if r else None

    def get_staff_many(self, *, clinic_id: int, staff_ids: Iterable[int]) -> Sequence[Staff]:
        ids = sorted({int(s) for s in staff_ids})
        if not ids:
            return []
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_STAFF_COLUMNS} FROM staff WHERE clinic_id=%s AND staff_id IN ({in_clause(ids)})",
                (int(clinic_id), *ids),
            )
            return [_to_staff(r) for r in fetchall(cur)]

    def list_staff(self, *, clinic_id: int, location_id: Optional[int] = None) -> Sequence[Staff]:
        clauses = ["clinic_id=%s"]
        params: list[object] = [int(clinic_id)]
        if location_id is not None:
            clauses.append("location_id=%s")
            params.append(int(location_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_STAFF_COLUMNS} FROM staff WHERE {where} ORDER BY first_name, last_name",
                tuple(params),
            )
            return [_to_staff(r) for r in fetchall(cur)]

    def set_duty_status(self, *, clinic_id: int, staff_id: int, duty_status: DutyStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE staff SET duty_status=%s, updated_at=NOW() WHERE staff_id=%s AND clinic_id=%s",
                (duty_status.value, int(staff_id), int(clinic_id)),
            )
            return cur.rowcount > 0

    def create_staff(
        self,
        *,
        clinic_id: int,
        first_name: str,
        last_name: str,
        job_role: Optional[str],
        location_id: Optional[int] = None,
        pay_basis: PayType = PayType.MONTHLY,
        daily_rate: int = 0,
        monthly_salary: int = 0,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO staff(clinic_id, first_name, last_name, job_role, location_id,
                                  pay_basis, daily_rate, monthly_salary)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(clinic_id),
                    first_name,
                    last_name,
                    job_role,
                    location_id,
                    pay_basis.value,
                    int(daily_rate),
                    int(monthly_salary),
                ),
            )
            return int(cur.lastrowid)

    def get_location(self, *, clinic_id: int, location_id: int) -> Optional[Location]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT location_id, clinic_id, name, town, is_primary, is_active
                FROM clinic_locations
                WHERE location_id=%s AND clinic_id=%s
                """,
                (int(location_id), int(clinic_id)),
            )
            r = fetchone(cur)
            return _to_location(r) if r else None

    def list_locations(self, *, clinic_id: int, active_only: bool = False) -> Sequence[Location]:
        where = "clinic_id=%s AND is_active=1" if active_only else "clinic_id=%s"
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT location_id, clinic_id, name, town, is_primary, is_active
                FROM clinic_locations
                WHERE {where}
                ORDER BY is_primary DESC, name ASC
                """,
                (int(clinic_id),),
            )
            return [_to_location(r) for r in fetchall(cur)]
