from __future__ import annotations

from flask import Flask, request

from ..common.http import dump, dump_many, ok, parse_body
from ..core.constants import ALL_LOCATIONS
from ..core.exceptions import ValidationError
from ..container import Container
from .schemas import LocationOut, StaffCreate, StaffOut


def parse_location_filter(value: str | None) -> int | None:
    """``?location=`` accepts an id, or ``ALL`` / empty for no filter."""

    if not value or value == ALL_LOCATIONS:
        return None
    try:
        return int(value)
    except ValueError:
        raise ValidationError("location must be an id or ALL")


def register(app: Flask, container: Container) -> None:
    @app.route("/api/clinics/<int:clinic_id>/staff", methods=["GET"], endpoint="list_staff")
    def list_staff(clinic_id: int):
        location_id = parse_location_filter(request.args.get("location"))
        staff = container.directory_service.list_staff(clinic_id=clinic_id, location_id=location_id)
        return ok(dump_many(StaffOut, staff))

    @app.route("/api/clinics/<int:clinic_id>/staff", methods=["POST"], endpoint="create_staff")
    def create_staff(clinic_id: int):
        body = parse_body(StaffCreate)
        staff = container.directory_service.create_staff(clinic_id=clinic_id, **body.model_dump())
        return ok(dump(StaffOut, staff), status=201)

    @app.route("/api/clinics/<int:clinic_id>/locations", methods=["GET"], endpoint="list_locations")
    def list_locations(clinic_id: int):
        active_only = request.args.get("active") == "true"
        locations = container.directory_service.list_locations(clinic_id=clinic_id, active_only=active_only)
        return ok(dump_many(LocationOut, locations))
