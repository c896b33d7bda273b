from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import format_hours_minutes
from ..common.request_args import optional_date
from ..container import Container
from .model import AttendanceSummary


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    def _summary_json(summary: AttendanceSummary):
        return jsonify(
            {
                "start": summary.start.isoformat(),
                "end": summary.end.isoformat(),
                "worked_seconds": summary.worked_seconds,
                "break_seconds": summary.break_seconds,
                "worked_hours": format_hours_minutes(summary.worked_seconds),
                "days_worked": summary.days_worked,
                "days": service.aggregator.to_rows(summary),
            }
        )

    @app.get("/api/employees/<employee_id>/reports/daily", endpoint="report_daily")
    def report_daily(employee_id: str):
        day = optional_date(request.args.get("date"), "date")
        return _summary_json(service.daily_for_employee(employee_id, day=day))

    @app.get("/api/employees/<employee_id>/reports/weekly", endpoint="report_weekly")
    def report_weekly(employee_id: str):
        day = optional_date(request.args.get("date"), "date")
        return _summary_json(service.weekly_for_employee(employee_id, day=day))
