from __future__ import annotations

from datetime import date

from flask import Flask, Response, jsonify, request

from ..common.http import current_user_id, login_required, optional_date
from ..container import Container
from ..core.constants import DEFAULT_HISTORY_MONTHS
from ..core.enums import ReportPeriod
from ..core.exceptions import ValidationError
from ..timecards.schema import timecard_to_dict
from .service import ReportData


def register(app: Flask, container: Container) -> None:
    service = container.payroll_report_service

    def _build_report() -> ReportData:
        start = optional_date(request.args.get("startDate"), "startDate")
        end = optional_date(request.args.get("endDate"), "endDate")
        if start and end:
            return service.build_timecard_report(current_user_id(), start=start, end=end)
        kind = request.args.get("type") or ReportPeriod.MONTHLY.value
        return service.build_period_report(current_user_id(), kind=kind)

    @app.route("/api/reports", methods=["GET"], endpoint="reports")
    @login_required
    def reports():
        report = _build_report()
        return jsonify(
            {
                "start": report.start.isoformat(),
                "end": report.end.isoformat(),
                "summary": report.summary.as_dict(),
                "daily": [
                    {"date": d.work_date.isoformat(), "hours": d.hours, "earnings": d.earnings}
                    for d in report.daily
                ],
                "timecards": [timecard_to_dict(c) for c in report.rows],
            }
        )

    @app.route("/api/reports/monthly", methods=["GET"], endpoint="reports_monthly")
    @login_required
    def reports_monthly():
        months = request.args.get("months", DEFAULT_HISTORY_MONTHS)
        try:
            months = int(months)
        except (TypeError, ValueError):
            raise ValidationError("months must be a number") from None

        history = service.monthly_history(current_user_id(), months=months)
        c = history.comparison
        return jsonify(
            {
                "months": [
                    {
                        "month": m.month.strftime("%Y-%m"),
                        "label": m.month.strftime("%b %Y"),
                        "total_hours": m.total_hours,
                        "total_pay": m.total_pay,
                    }
                    for m in history.months
                ],
                "comparison": {
                    "current": c.current,
                    "previous": c.previous,
                    "difference": c.difference,
                    "percentage": c.percentage,
                    "is_increase": c.is_increase,
                },
            }
        )

    @app.route("/api/reports/export.csv", methods=["GET"], endpoint="reports_export")
    @login_required
    def reports_export():
        report = _build_report()
        filename = f"timecard-report-{date.today().strftime('%Y-%m-%d')}.csv"
        return Response(
            service.export_csv(report),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
