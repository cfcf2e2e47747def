from __future__ import annotations

from flask import Flask

from ..common.http import dump, dump_many, ok, parse_body, parse_query
from ..container import Container
from ..directory.controller import parse_location_filter
from .schemas import AssignIn, BlockCreate, BlockQuery, BlockUpdate, CoverIn, ScheduleBlockOut


def register(app: Flask, container: Container) -> None:
    blocks = container.schedule_block_service

    @app.route("/api/clinics/<int:clinic_id>/schedule-blocks", methods=["GET"], endpoint="list_schedule_blocks")
    def list_schedule_blocks(clinic_id: int):
        query = parse_query(BlockQuery)
        items = blocks.list_blocks(
            clinic_id=clinic_id,
            location_id=parse_location_filter(query.location),
            start=query.start,
            end=query.end,
        )
        return ok(dump_many(ScheduleBlockOut, items))

    @app.route("/api/clinics/<int:clinic_id>/schedule-blocks", methods=["POST"], endpoint="create_schedule_block")
    def create_schedule_block(clinic_id: int):
        body = parse_body(BlockCreate)
        block = blocks.create_block(clinic_id=clinic_id, **body.model_dump())
        return ok(dump(ScheduleBlockOut, block), status=201)

    @app.route(
        "/api/clinics/<int:clinic_id>/schedule-blocks/<int:block_id>",
        methods=["GET"],
        endpoint="get_schedule_block",
    )
    def get_schedule_block(clinic_id: int, block_id: int):
        block = blocks.get_block(clinic_id=clinic_id, block_id=block_id)
        return ok(dump(ScheduleBlockOut, block))

    @app.route(
        "/api/clinics/<int:clinic_id>/schedule-blocks/<int:block_id>",
        methods=["PUT"],
        endpoint="update_schedule_block",
    )
    def update_schedule_block(clinic_id: int, block_id: int):
        body = parse_body(BlockUpdate)
        block = blocks.update_block(clinic_id=clinic_id, block_id=block_id, **body.model_dump(exclude_unset=True))
        return ok(dump(ScheduleBlockOut, block))

    @app.route(
        "/api/clinics/<int:clinic_id>/schedule-blocks/<int:block_id>",
        methods=["DELETE"],
        endpoint="delete_schedule_block",
    )
    def delete_schedule_block(clinic_id: int, block_id: int):
        blocks.delete_block(clinic_id=clinic_id, block_id=block_id)
        return ok({"blockId": block_id})

    @app.route(
        "/api/clinics/<int:clinic_id>/schedule-blocks/<int:block_id>/assign",
        methods=["PUT"],
        endpoint="assign_schedule_block",
    )
    def assign_schedule_block(clinic_id: int, block_id: int):
        body = parse_body(AssignIn)
        block = blocks.assign(clinic_id=clinic_id, block_id=block_id, staff_id=body.staff_id, action=body.action)
        return ok(dump(ScheduleBlockOut, block))

    @app.route(
        "/api/clinics/<int:clinic_id>/schedule-blocks/<int:block_id>/locum",
        methods=["PUT"],
        endpoint="cover_schedule_block",
    )
    def cover_schedule_block(clinic_id: int, block_id: int):
        body = parse_body(CoverIn)
        block = blocks.cover(
            clinic_id=clinic_id,
            block_id=block_id,
            action=body.action,
            locum=body.locum.to_new_cover() if body.locum else None,
            locum_id=body.locum_id,
        )
        return ok(dump(ScheduleBlockOut, block))
