from __future__ import annotations

from flask import Flask

from ..common.http import dump, dump_many, ok, parse_body, parse_query
from ..container import Container
from ..directory.controller import parse_location_filter
from .schemas import (
    BulkStatusIn,
    BulkStatusOut,
    PayrollDraftOut,
    PayrollEntryOut,
    PayrollListQuery,
    PayrollUpsertIn,
    PreviewQuery,
    StatusIn,
)


def register(app: Flask, container: Container) -> None:
    payroll = container.payroll_service

    @app.route("/api/clinics/<int:clinic_id>/payroll", methods=["GET"], endpoint="list_payroll")
    def list_payroll(clinic_id: int):
        query = parse_query(PayrollListQuery)
        entries = payroll.list_entries(
            clinic_id=clinic_id,
            location_id=parse_location_filter(query.location),
            pay_type=query.pay_type,
            status=query.status,
        )
        return ok(dump_many(PayrollEntryOut, entries))

    @app.route("/api/clinics/<int:clinic_id>/payroll", methods=["POST"], endpoint="upsert_payroll")
    def upsert_payroll(clinic_id: int):
        body = parse_body(PayrollUpsertIn)
        entry = payroll.upsert(clinic_id=clinic_id, **body.model_dump())
        return ok(dump(PayrollEntryOut, entry))

    @app.route("/api/clinics/<int:clinic_id>/payroll/preview", methods=["GET"], endpoint="preview_payroll")
    def preview_payroll(clinic_id: int):
        query = parse_query(PreviewQuery)
        drafts = payroll.preview_daily(clinic_id=clinic_id, start=query.start, end=query.end)
        return ok(dump_many(PayrollDraftOut, drafts))

    @app.route("/api/clinics/<int:clinic_id>/payroll/bulk-status", methods=["PUT"], endpoint="bulk_payroll_status")
    def bulk_payroll_status(clinic_id: int):
        body = parse_body(BulkStatusIn)
        result = payroll.bulk_set_status(clinic_id=clinic_id, payroll_keys=body.payroll_keys, status=body.status)
        return ok(dump(BulkStatusOut, result), updated=result.updated)

    @app.route(
        "/api/clinics/<int:clinic_id>/payroll/<payroll_key>/status",
        methods=["PUT"],
        endpoint="set_payroll_status",
    )
    def set_payroll_status(clinic_id: int, payroll_key: str):
        body = parse_body(StatusIn)
        entry = payroll.set_status(clinic_id=clinic_id, payroll_key=payroll_key, status=body.status)
        return ok(dump(PayrollEntryOut, entry))
