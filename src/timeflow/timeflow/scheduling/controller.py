from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import local_date
from ..common.request_args import optional_date, required_instant
from ..container import Container
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service
    tz = container.tz

    @app.get("/api/schedule/grid", endpoint="schedule_grid")
    def schedule_grid():
        week = optional_date(request.args.get("week"), "week") or local_date(container.clock(), tz)
        grid = service.slot_grid(
            week_of=week,
            company_id=request.args.get("company") or None,
            department_id=request.args.get("department") or None,
        )
        return jsonify(
            {
                "slots": [s.to_dict() for s in service.slots],
                "days": [
                    {
                        "date": day.isoformat(),
                        "slots": {slot_id: [s.to_dict() for s in shifts] for slot_id, shifts in by_slot.items()},
                    }
                    for day, by_slot in grid.items()
                ],
            }
        )

    @app.post("/api/shifts", endpoint="shift_create")
    def shift_create():
        payload = request.get_json(silent=True) or {}
        common = {
            "employee_id": payload.get("employee_id"),
            "company_id": payload.get("company_id"),
            "department_id": payload.get("department_id") or None,
            "break_minutes": payload.get("break_minutes"),
            "hourly_rate": payload.get("hourly_rate"),
        }
        if payload.get("slot_id"):
            day = optional_date(payload.get("date"), "date")
            if day is None:
                raise ValidationError("date is required with slot_id")
            shift = service.create_in_slot(day=day, slot_id=str(payload["slot_id"]), **common)
        else:
            shift = service.create_shift(
                start_time=required_instant(payload.get("start_time"), "start_time", tz),
                end_time=required_instant(payload.get("end_time"), "end_time", tz),
                notes=payload.get("notes") or None,
                **common,
            )
        return jsonify(shift.to_dict()), 201

    @app.patch("/api/shifts/<shift_id>", endpoint="shift_move")
    def shift_move(shift_id: str):
        payload = request.get_json(silent=True) or {}
        if payload.get("slot_id"):
            day = optional_date(payload.get("date"), "date")
            if day is None:
                raise ValidationError("date is required with slot_id")
            shift = service.move_to_slot(
                shift_id,
                day=day,
                slot_id=str(payload["slot_id"]),
                employee_id=payload.get("employee_id") or None,
            )
        else:
            shift = service.move_shift(
                shift_id,
                start_time=required_instant(payload.get("start_time"), "start_time", tz),
                end_time=required_instant(payload.get("end_time"), "end_time", tz),
                employee_id=payload.get("employee_id") or None,
                department_id=payload.get("department_id") or None,
            )
        return jsonify(shift.to_dict())

    @app.delete("/api/shifts/<shift_id>", endpoint="shift_delete")
    def shift_delete(shift_id: str):
        service.delete_shift(shift_id)
        return "", 204

    @app.post("/api/shifts/missed/sweep", endpoint="shift_missed_sweep")
    def shift_missed_sweep():
        payload = request.get_json(silent=True) or {}
        result = container.missed_shift_sweeper.sweep(company_id=payload.get("company_id") or None)
        return jsonify(result.to_dict())

    @app.get("/api/shifts/missed", endpoint="shift_missed_list")
    def shift_missed_list():
        missed = container.missed_shift_sweeper.list_missed(
            company_id=request.args.get("company") or None,
            exclude_employee_id=request.args.get("exclude_employee") or None,
        )
        return jsonify([m.to_dict() for m in missed])
