from __future__ import annotations

from collections import defaultdict
from datetime import date, time
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_time
from .model import BlockFilter, ExternalCover, NewExternalCover, ScheduleBlock
from .repository import ScheduleBlockRepository

_BLOCK_COLUMNS = """
    b.block_id, b.clinic_id, b.location_id, b.work_date, b.start_time, b.end_time,
    b.role_needed, b.qty_needed, b.notes, b.created_at, b.updated_at
"""

# Column whitelist for update_block; values are the SQL column names.
_UPDATABLE_COLUMNS = {
    "work_date": "work_date",
    "start_time": "start_time",
    "end_time": "end_time",
    "role_needed": "role_needed",
    "qty_needed": "qty_needed",
    "location_id": "location_id",
    "notes": "notes",
}


def _to_cover(r: dict) -> ExternalCover:
    return ExternalCover(
        cover_id=r["cover_id"],
        block_id=int(r["block_id"]),
        name=r["name"],
        phone=r.get("phone"),
        supervisor_id=r.get("supervisor_id"),
        role_covered=r.get("role_covered"),
        notes=r.get("notes"),
    )


def _to_block(r: dict, staff_ids: Sequence[int], covers: Sequence[ExternalCover]) -> ScheduleBlock:
    return ScheduleBlock(
        block_id=int(r["block_id"]),
        clinic_id=int(r["clinic_id"]),
        location_id=r.get("location_id"),
        work_date=r["work_date"],
        start_time=normalize_mysql_time(r["start_time"]),
        end_time=normalize_mysql_time(r["end_time"]),
        role_needed=r["role_needed"],
        qty_needed=int(r.get("qty_needed") or 1),
        assigned_staff_ids=tuple(sorted(staff_ids)),
        external_covers=tuple(covers),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLScheduleBlockRepository(ScheduleBlockRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _hydrate(self, cur, rows: list[dict]) -> list[ScheduleBlock]:
        if not rows:
            return []

        ids = [int(r["block_id"]) for r in rows]
        placeholders = in_clause(ids)

        cur.execute(
            f"SELECT block_id, staff_id FROM schedule_block_staff WHERE block_id IN ({placeholders})",
            tuple(ids),
        )
        staff_by_block: dict[int, list[int]] = defaultdict(list)
        for r in fetchall(cur):
            staff_by_block[int(r["block_id"])].append(int(r["staff_id"]))

        cur.execute(
            f"""
            SELECT cover_id, block_id, name, phone, supervisor_id, role_covered, notes
            FROM schedule_block_covers
            WHERE block_id IN ({placeholders})
            ORDER BY created_at ASC, cover_id ASC
            """,
            tuple(ids),
        )
        covers_by_block: dict[int, list[ExternalCover]] = defaultdict(list)
        for r in fetchall(cur):
            cover = _to_cover(r)
            covers_by_block[cover.block_id].append(cover)

        return [
            _to_block(r, staff_by_block[int(r["block_id"])], covers_by_block[int(r["block_id"])])
            for r in rows
        ]

    def create_block(
        self,
        *,
        clinic_id: int,
        location_id: Optional[int],
        work_date: date,
        start_time: time,
        end_time: time,
        role_needed: str,
        qty_needed: int,
        notes: Optional[str] = None,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_blocks(clinic_id, location_id, work_date, start_time, end_time,
                                            role_needed, qty_needed, notes)
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(clinic_id), location_id, work_date, start_time, end_time, role_needed, int(qty_needed), notes),
            )
            return int(cur.lastrowid)

    def get_block(self, *, clinic_id: int, block_id: int) -> Optional[ScheduleBlock]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_BLOCK_COLUMNS} FROM schedule_blocks b WHERE b.block_id=%s AND b.clinic_id=%s",
                (int(block_id), int(clinic_id)),
            )
            r = fetchone(cur)
            if not r:
                return None
            return self._hydrate(cur, [r])[0]

    def list_blocks(self, *, clinic_id: int, criteria: BlockFilter) -> Sequence[ScheduleBlock]:
        clauses = ["b.clinic_id=%s"]
        params: list[object] = [int(clinic_id)]

        if criteria.location_id is not None:
            clauses.append("b.location_id=%s")
            params.append(int(criteria.location_id))
        if criteria.start is not None:
            clauses.append("b.work_date >= %s")
            params.append(criteria.start)
        if criteria.end is not None:
            clauses.append("b.work_date <= %s")
            params.append(criteria.end)
        if criteria.staff_id is not None:
            clauses.append(
                "EXISTS (SELECT 1 FROM schedule_block_staff s WHERE s.block_id=b.block_id AND s.staff_id=%s)"
            )
            params.append(int(criteria.staff_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_BLOCK_COLUMNS}
                FROM schedule_blocks b
                WHERE {where}
                ORDER BY b.work_date ASC, b.start_time ASC, b.block_id ASC
                """,
                tuple(params),
            )
            return self._hydrate(cur, fetchall(cur))

    def update_block(self, *, clinic_id: int, block_id: int, changes: Mapping[str, Any]) -> None:
        sets = []
        params: list[object] = []
        for field_name, value in changes.items():
            column = _UPDATABLE_COLUMNS.get(field_name)
            if column is None:
                raise KeyError(field_name)
            sets.append(f"{column}=%s")
            params.append(value)

        if not sets:
            return

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE schedule_blocks SET {', '.join(sets)}, updated_at=NOW() WHERE block_id=%s AND clinic_id=%s",
                (*params, int(block_id), int(clinic_id)),
            )

    def delete_unfilled_block(self, *, clinic_id: int, block_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE FROM schedule_blocks
                WHERE block_id=%s AND clinic_id=%s
                  AND NOT EXISTS (SELECT 1 FROM schedule_block_staff s WHERE s.block_id=schedule_blocks.block_id)
                  AND NOT EXISTS (SELECT 1 FROM schedule_block_covers c WHERE c.block_id=schedule_blocks.block_id)
                """,
                (int(block_id), int(clinic_id)),
            )
            return cur.rowcount > 0

    def add_staff(self, *, clinic_id: int, block_id: int, staff_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_block_staff(block_id, staff_id)
                SELECT b.block_id, %s FROM schedule_blocks b
                WHERE b.block_id=%s AND b.clinic_id=%s
                ON DUPLICATE KEY UPDATE assigned_at=assigned_at
                """,
                (int(staff_id), int(block_id), int(clinic_id)),
            )
            # rowcount is 1 for a new row and 0 when the row already existed or the block is not ours.
            return cur.rowcount == 1

    def remove_staff(self, *, clinic_id: int, block_id: int, staff_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE s FROM schedule_block_staff s
                JOIN schedule_blocks b ON b.block_id = s.block_id
                WHERE s.block_id=%s AND s.staff_id=%s AND b.clinic_id=%s
                """,
                (int(block_id), int(staff_id), int(clinic_id)),
            )
            return cur.rowcount > 0

    def add_cover(self, *, clinic_id: int, block_id: int, cover_id: str, cover: NewExternalCover) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO schedule_block_covers(cover_id, block_id, name, phone, supervisor_id, role_covered, notes)
                SELECT %s, b.block_id, %s, %s, %s, %s, %s FROM schedule_blocks b
                WHERE b.block_id=%s AND b.clinic_id=%s
                """,
                (
                    cover_id,
                    cover.name,
                    cover.phone,
                    cover.supervisor_id,
                    cover.role_covered,
                    cover.notes,
                    int(block_id),
                    int(clinic_id),
                ),
            )
            return cur.rowcount > 0

    def remove_cover(self, *, clinic_id: int, block_id: int, cover_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                DELETE c FROM schedule_block_covers c
                JOIN schedule_blocks b ON b.block_id = c.block_id
                WHERE c.block_id=%s AND c.cover_id=%s AND b.clinic_id=%s
                """,
                (int(block_id), cover_id, int(clinic_id)),
            )
            return cur.rowcount > 0
