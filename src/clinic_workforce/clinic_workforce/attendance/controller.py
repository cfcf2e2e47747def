from __future__ import annotations

from flask import Flask

from ..common.http import dump, dump_many, ok, parse_body, parse_query
from ..container import Container
from .schemas import (
    AttendanceListQuery,
    AttendanceOut,
    ClockInIn,
    ClockOutIn,
    DateRangeQuery,
    StaffHoursSummaryOut,
)


def register(app: Flask, container: Container) -> None:
    attendance = container.attendance_service
    reports = container.attendance_report_service

    @app.route("/api/clinics/<int:clinic_id>/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance(clinic_id: int):
        query = parse_query(AttendanceListQuery)
        records = attendance.list_attendance(
            clinic_id=clinic_id,
            work_date=query.work_date,
            start=query.start,
            end=query.end,
            staff_id=query.staff_id,
            status=query.status,
        )
        return ok(dump_many(AttendanceOut, records))

    @app.route("/api/clinics/<int:clinic_id>/attendance/clock-in", methods=["POST"], endpoint="clock_in")
    def clock_in(clinic_id: int):
        body = parse_body(ClockInIn)
        record = attendance.clock_in(
            clinic_id=clinic_id,
            staff_id=body.staff_id,
            method=body.method,
            location_id=body.location_id,
            notes=body.notes,
        )
        return ok(dump(AttendanceOut, record), status=201, message="Clocked in successfully")

    @app.route("/api/clinics/<int:clinic_id>/attendance/clock-out", methods=["POST"], endpoint="clock_out")
    def clock_out(clinic_id: int):
        body = parse_body(ClockOutIn)
        record = attendance.clock_out(
            clinic_id=clinic_id,
            staff_id=body.staff_id,
            method=body.method,
            notes=body.notes,
        )
        return ok(dump(AttendanceOut, record), message="Clocked out successfully")

    @app.route("/api/clinics/<int:clinic_id>/attendance/summary", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary(clinic_id: int):
        query = parse_query(DateRangeQuery)
        rows = reports.summary(clinic_id=clinic_id, start=query.start, end=query.end)
        return ok(
            dump_many(StaffHoursSummaryOut, rows),
            period={"from": query.start.isoformat(), "to": query.end.isoformat()},
        )

    @app.route("/api/clinics/<int:clinic_id>/attendance/export", methods=["GET"], endpoint="attendance_export")
    def attendance_export(clinic_id: int):
        query = parse_query(DateRangeQuery)
        csv_text = reports.export_csv(clinic_id=clinic_id, start=query.start, end=query.end)
        return app.response_class(
            csv_text.encode("utf-8"),
            mimetype="text/csv",
            headers={"Content-Disposition": "attachment; filename=attendance_export.csv"},
        )
