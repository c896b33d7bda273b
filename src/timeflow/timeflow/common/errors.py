from __future__ import annotations

import logging

from flask import Flask, jsonify

from ..core.exceptions import (
    DomainError,
    InvalidState,
    InvalidTransition,
    NetworkFailure,
    RemoteRejected,
    ShiftConflictError,
    ValidationError,
)

logger = logging.getLogger(__name__)


def status_for(error: DomainError) -> int:
    if isinstance(error, (InvalidState, ValidationError)):
        return 400
    if isinstance(error, InvalidTransition):
        return 409
    if isinstance(error, RemoteRejected):
        return 502
    if isinstance(error, NetworkFailure):
        return 503
    return 500


def error_body(error: DomainError) -> dict:
    body = {"error": type(error).__name__, "message": str(error)}
    if isinstance(error, ShiftConflictError) and error.conflicting is not None:
        conflicting = error.conflicting
        body["conflicting"] = conflicting.to_dict() if hasattr(conflicting, "to_dict") else conflicting
    if isinstance(error, RemoteRejected) and error.status_code is not None:
        body["upstream_status"] = error.status_code
    return body


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        if status >= 500:
            logger.warning("request failed: %s", error)
        return jsonify(error_body(error)), status
