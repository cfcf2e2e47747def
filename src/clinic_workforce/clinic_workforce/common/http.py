"""JSON helpers shared by the feature controllers."""

from __future__ import annotations

import logging
from typing import Iterable, TypeVar

import pydantic
from flask import Flask, jsonify, request
from werkzeug.exceptions import HTTPException

from ..core.exceptions import ConflictError, DomainError, NotFoundError, StoreError, ValidationError
from .schemas import RequestModel, ResponseModel

_logger = logging.getLogger(__name__)

RequestT = TypeVar("RequestT", bound=RequestModel)

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (NotFoundError, 404),
    (ConflictError, 409),
    (ValidationError, 400),
    (StoreError, 500),
)


def status_for(exc: DomainError) -> int:
    for exc_type, status in _STATUS_BY_ERROR:
        if isinstance(exc, exc_type):
            return status
    return 400


def _describe(exc: pydantic.ValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ())) or "body"
        parts.append(f"{loc}: {err.get('msg')}")
    return "; ".join(parts)


def parse_body(model: type[RequestT]) -> RequestT:
    payload = request.get_json(silent=True)
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return model.model_validate(payload)
    except pydantic.ValidationError as e:
        raise ValidationError(_describe(e)) from e


def parse_query(model: type[RequestT]) -> RequestT:
    try:
        return model.model_validate(request.args.to_dict())
    except pydantic.ValidationError as e:
        raise ValidationError(_describe(e)) from e


def ok(data=None, *, status: int = 200, **extra):
    body = {"success": True, "data": data}
    body.update(extra)
    return jsonify(body), status


def dump(schema: type[ResponseModel], obj) -> dict:
    return schema.model_validate(obj).to_json()


def dump_many(schema: type[ResponseModel], items: Iterable) -> list[dict]:
    return [dump(schema, item) for item in items]


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        status = status_for(e)
        if isinstance(e, StoreError):
            _logger.error("Store failure on %s %s: %s", request.method, request.path, e, exc_info=e)
            return jsonify({"success": False, "error": "Server error"}), status
        return jsonify({"success": False, "error": str(e)}), status

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"success": False, "error": e.description}), e.code or 500

    @app.errorhandler(Exception)
    def handle_unexpected(e: Exception):
        _logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "error": "Server error"}), 500
