from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_clock
from ..container import Container
from .model import SessionSnapshot


def _snapshot_json(snapshot: SessionSnapshot):
    body = snapshot.to_dict()
    body["elapsed"] = format_clock(snapshot.elapsed_seconds)
    body["break"] = format_clock(snapshot.break_seconds)
    return jsonify(body)


def register(app: Flask, container: Container) -> None:
    @app.get("/api/employees/<employee_id>/clock", endpoint="clock_status")
    def clock_status(employee_id: str):
        return _snapshot_json(container.time_clock_service.current(employee_id))

    @app.post("/api/employees/<employee_id>/clock/in", endpoint="clock_in")
    def clock_in(employee_id: str):
        payload = request.get_json(silent=True) or {}
        shift_id = payload.get("shift_id") or None
        return _snapshot_json(container.time_clock_service.clock_in(employee_id, shift_id))

    @app.post("/api/employees/<employee_id>/clock/out", endpoint="clock_out")
    def clock_out(employee_id: str):
        return _snapshot_json(container.time_clock_service.clock_out(employee_id))

    @app.post("/api/employees/<employee_id>/clock/break/start", endpoint="break_start")
    def break_start(employee_id: str):
        return _snapshot_json(container.time_clock_service.start_break(employee_id))

    @app.post("/api/employees/<employee_id>/clock/break/end", endpoint="break_end")
    def break_end(employee_id: str):
        return _snapshot_json(container.time_clock_service.end_break(employee_id))
