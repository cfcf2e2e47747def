from __future__ import annotations

from flask import Flask

from ..common.http import dump, dump_many, ok, parse_body, parse_query
from ..container import Container
from ..schedule_blocks.schemas import ScheduleBlockOut
from .schemas import LeaveCreate, LeaveListQuery, LeaveOut, LeaveReview


def register(app: Flask, container: Container) -> None:
    leaves = container.leave_service

    @app.route("/api/clinics/<int:clinic_id>/leave", methods=["GET"], endpoint="list_leave")
    def list_leave(clinic_id: int):
        query = parse_query(LeaveListQuery)
        items = leaves.list_leave(
            clinic_id=clinic_id,
            status=query.status,
            staff_id=query.staff_id,
            leave_type=query.leave_type,
        )
        return ok(dump_many(LeaveOut, items))

    @app.route("/api/clinics/<int:clinic_id>/leave", methods=["POST"], endpoint="create_leave")
    def create_leave(clinic_id: int):
        body = parse_body(LeaveCreate)
        leave = leaves.create_leave(clinic_id=clinic_id, **body.model_dump())
        return ok(
            dump(LeaveOut, leave),
            status=201,
            message=f"Leave request for {leave.days_count} day(s) submitted",
        )

    @app.route("/api/clinics/<int:clinic_id>/leave/<int:leave_id>", methods=["GET"], endpoint="get_leave")
    def get_leave(clinic_id: int, leave_id: int):
        return ok(dump(LeaveOut, leaves.get_leave(clinic_id=clinic_id, leave_id=leave_id)))

    @app.route("/api/clinics/<int:clinic_id>/leave/<int:leave_id>", methods=["PATCH"], endpoint="review_leave")
    def review_leave(clinic_id: int, leave_id: int):
        body = parse_body(LeaveReview)
        leave = leaves.review(
            clinic_id=clinic_id,
            leave_id=leave_id,
            status=body.status,
            reviewer_id=body.reviewer_id,
            rejection_reason=body.rejection_reason,
        )
        return ok(dump(LeaveOut, leave), message=f"Leave request {leave.status.value}")

    @app.route("/api/clinics/<int:clinic_id>/leave/<int:leave_id>", methods=["DELETE"], endpoint="delete_leave")
    def delete_leave(clinic_id: int, leave_id: int):
        leaves.delete_leave(clinic_id=clinic_id, leave_id=leave_id)
        return ok(message="Leave request deleted")

    @app.route(
        "/api/clinics/<int:clinic_id>/leave/<int:leave_id>/conflicts",
        methods=["GET"],
        endpoint="leave_conflicts",
    )
    def leave_conflicts(clinic_id: int, leave_id: int):
        blocks = leaves.assignment_conflicts(clinic_id=clinic_id, leave_id=leave_id)
        return ok(dump_many(ScheduleBlockOut, blocks))
