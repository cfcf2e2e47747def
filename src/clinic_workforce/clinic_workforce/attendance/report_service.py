from __future__ import annotations

import csv
import io
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.datetime_utils import format_clock_time
from ..common.validators import require_date_order
from ..core.constants import ATTENDANCE_CSV_HEADER
from ..core.exceptions import ValidationError
from .repository import AttendanceRepository


@dataclass(frozen=True)
class StaffHoursSummary:
    staff_id: int
    name: str
    job_role: str
    days_worked: int
    total_hours: Decimal
    last_date: Optional[date]


class AttendanceReportService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def summary(self, *, clinic_id: int, start: Optional[date], end: Optional[date]) -> list[StaffHoursSummary]:
        """Per-staff totals over closed records in ``[start, end]``."""

        if not start or not end:
            raise ValidationError("From and to dates are required")
        require_date_order(start, end)

        rows = self._attendance.get_report_rows(clinic_id=int(clinic_id), start=start, end=end, closed_only=True)

        totals: dict[int, dict] = {}
        for r in rows:
            s = totals.get(r.staff_id)
            if not s:
                s = {
                    "staff_id": r.staff_id,
                    "name": r.full_name,
                    "job_role": r.job_role or "",
                    "days_worked": 0,
                    "total_hours": Decimal("0.00"),
                    "last_date": None,
                }
                totals[r.staff_id] = s
            s["days_worked"] += 1
            s["total_hours"] += r.hours_worked or Decimal("0")
            if s["last_date"] is None or r.work_date > s["last_date"]:
                s["last_date"] = r.work_date

        out = [StaffHoursSummary(**s) for s in totals.values()]
        out.sort(key=lambda x: (x.name.lower(), x.staff_id))
        return out

    def export_csv(self, *, clinic_id: int, start: Optional[date] = None, end: Optional[date] = None) -> str:
        """One quoted row per record, newest first, under a bare header line."""

        if start and end:
            require_date_order(start, end)

        rows = self._attendance.get_report_rows(clinic_id=int(clinic_id), start=start, end=end)

        out = io.StringIO()
        out.write(",".join(ATTENDANCE_CSV_HEADER) + "\n")
        writer = csv.writer(out, quoting=csv.QUOTE_ALL, lineterminator="\n")
        for r in rows:
            writer.writerow(
                [
                    r.full_name,
                    r.job_role or "",
                    r.work_date.strftime("%Y-%m-%d"),
                    format_clock_time(r.clock_in),
                    format_clock_time(r.clock_out),
                    f"{r.hours_worked}" if r.hours_worked is not None else "",
                    r.status.value,
                ]
            )
        return out.getvalue()
