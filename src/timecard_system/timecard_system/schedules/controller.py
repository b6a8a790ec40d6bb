from __future__ import annotations

from datetime import date

from flask import Flask, jsonify, request

from ..common.http import current_user_id, json_body, login_required, optional_date
from ..container import Container
from ..core.exceptions import ValidationError
from .schema import schedule_fields, schedule_to_dict


def register(app: Flask, container: Container) -> None:
    service = container.schedule_service

    def _with_pay(schedule):
        return schedule_to_dict(schedule, service.preview_pay(schedule))

    @app.route("/api/schedules", methods=["GET"], endpoint="schedules_list")
    @login_required
    def schedules_list():
        start = optional_date(request.args.get("startDate"), "startDate")
        end = optional_date(request.args.get("endDate"), "endDate")
        schedules = service.list_for_user(current_user_id(), start=start, end=end)
        return jsonify([_with_pay(s) for s in schedules])

    @app.route("/api/schedules", methods=["POST"], endpoint="schedules_create")
    @login_required
    def schedules_create():
        fields = schedule_fields(json_body())
        missing = [k for k in ("title", "work_date", "start_time", "end_time") if k not in fields]
        if missing:
            raise ValidationError("Title, date, start time and end time are required")
        schedule = service.create(current_user_id(), **fields)
        return jsonify(_with_pay(schedule)), 201

    @app.route("/api/schedules/summary", methods=["GET"], endpoint="schedules_summary")
    @login_required
    def schedules_summary():
        today = date.today()
        start = optional_date(request.args.get("startDate"), "startDate") or today.replace(day=1)
        end = optional_date(request.args.get("endDate"), "endDate") or today
        summary = service.work_summary(current_user_id(), start=start, end=end)
        return jsonify({"start": start.isoformat(), "end": end.isoformat(), **summary.as_dict()})

    @app.route("/api/schedules/<int:schedule_id>", methods=["PUT"], endpoint="schedules_update")
    @login_required
    def schedules_update(schedule_id: int):
        schedule = service.update(current_user_id(), schedule_id, **schedule_fields(json_body()))
        return jsonify(_with_pay(schedule))

    @app.route("/api/schedules/<int:schedule_id>", methods=["DELETE"], endpoint="schedules_delete")
    @login_required
    def schedules_delete(schedule_id: int):
        service.delete(current_user_id(), schedule_id)
        return jsonify({"message": "Schedule deleted successfully"})
