from __future__ import annotations

from flask import Flask, Response, jsonify, request

from ..common.datetime_utils import overnight_interval, parse_clock_time
from ..common.http import current_user_id, json_body, login_required, optional_date, optional_datetime
from ..container import Container
from ..core.exceptions import ValidationError
from .schema import timecard_to_dict
from .service import IMPORT_TEMPLATE, IMPORT_TEMPLATE_NAME


def register(app: Flask, container: Container) -> None:
    service = container.timecard_service

    @app.route("/api/timecards", methods=["GET"], endpoint="timecards_list")
    @login_required
    def timecards_list():
        start = optional_date(request.args.get("startDate"), "startDate")
        end = optional_date(request.args.get("endDate"), "endDate")
        cards = service.list_for_user(current_user_id(), start=start, end=end)
        return jsonify([timecard_to_dict(c) for c in cards])

    @app.route("/api/timecards/active", methods=["GET"], endpoint="timecards_active")
    @login_required
    def timecards_active():
        card = service.get_active(current_user_id())
        return jsonify(timecard_to_dict(card) if card else None)

    @app.route("/api/timecards/clockin", methods=["POST"], endpoint="timecards_clockin")
    @login_required
    def timecards_clockin():
        card = service.clock_in(current_user_id(), notes=json_body().get("notes"))
        return jsonify(timecard_to_dict(card)), 201

    @app.route("/api/timecards/clockout", methods=["POST"], endpoint="timecards_clockout")
    @login_required
    def timecards_clockout():
        card = service.clock_out(current_user_id(), notes=json_body().get("notes"))
        return jsonify(timecard_to_dict(card))

    @app.route("/api/timecards/history", methods=["POST"], endpoint="timecards_history")
    @login_required
    def timecards_history():
        """Back-fill a past shift.

        Accepts either full ISO datetimes for timeIn/timeOut (taken as is), or
        HH:MM wall-clock times which are placed on ``date`` and rolled past
        midnight when needed.
        """
        data = json_body()
        work_date = optional_date(data.get("date"), "date")
        time_in_s = (data.get("timeIn") or "").strip()
        time_out_s = (data.get("timeOut") or "").strip()
        if not work_date or not time_in_s or not time_out_s:
            raise ValidationError("Date, time in, and time out are required")

        if "T" in time_in_s or "T" in time_out_s:
            card = service.add_historical(
                current_user_id(),
                work_date=work_date,
                time_in=optional_datetime(time_in_s, "timeIn"),
                time_out=optional_datetime(time_out_s, "timeOut"),
                notes=data.get("notes"),
            )
        else:
            card = service.add_historical_from_clock(
                current_user_id(),
                work_date=work_date,
                time_in=_clock(time_in_s, "timeIn"),
                time_out=_clock(time_out_s, "timeOut"),
                notes=data.get("notes"),
            )
        return jsonify(timecard_to_dict(card)), 201

    @app.route("/api/timecards/import", methods=["POST"], endpoint="timecards_import")
    @login_required
    def timecards_import():
        upload = request.files.get("file")
        if upload is not None:
            text = upload.read().decode("utf-8-sig")
        else:
            text = request.get_data(as_text=True)
        if not text.strip():
            raise ValidationError("No data to import")

        result = service.import_csv(current_user_id(), text)
        status = 201 if result.imported else 400
        return jsonify({"imported": result.imported, "failed": result.failed, "errors": result.errors}), status

    @app.route("/api/timecards/import/template", methods=["GET"], endpoint="timecards_import_template")
    @login_required
    def timecards_import_template():
        return Response(
            IMPORT_TEMPLATE,
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={IMPORT_TEMPLATE_NAME}"},
        )

    @app.route("/api/timecards/preview", methods=["POST"], endpoint="timecards_preview")
    @login_required
    def timecards_preview():
        data = json_body()
        work_date = optional_date(data.get("date"), "date")
        if not work_date:
            raise ValidationError("date is required")
        start, end = overnight_interval(
            work_date,
            _clock(data.get("timeIn") or "", "timeIn"),
            _clock(data.get("timeOut") or "", "timeOut"),
        )
        pay = container.calculator.breakdown(start, end)
        return jsonify({"time_in": start.isoformat(), "time_out": end.isoformat(), **pay.as_dict()})

    @app.route("/api/timecards/<int:timecard_id>", methods=["PUT"], endpoint="timecards_update")
    @login_required
    def timecards_update(timecard_id: int):
        data = json_body()
        card = service.update(
            current_user_id(),
            timecard_id,
            time_in=optional_datetime(data.get("timeIn"), "timeIn"),
            time_out=optional_datetime(data.get("timeOut"), "timeOut"),
            notes=data.get("notes"),
        )
        return jsonify(timecard_to_dict(card))

    @app.route("/api/timecards/<int:timecard_id>", methods=["DELETE"], endpoint="timecards_delete")
    @login_required
    def timecards_delete(timecard_id: int):
        service.delete(current_user_id(), timecard_id)
        return jsonify({"message": "Time card deleted successfully"})


def _clock(value: str, field_name: str):
    try:
        return parse_clock_time(value)
    except ValueError:
        raise ValidationError(f"{field_name} must be HH:MM") from None
