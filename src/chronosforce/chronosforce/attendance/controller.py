from __future__ import annotations

from datetime import timedelta

from flask import Flask, jsonify, request

from ..common.datetime_utils import org_date, parse_iso_date, utc_now
from ..common.serializers import activity_log_to_dict, employee_to_dict, record_to_dict, worked_row_to_dict
from ..common.web import current_employee_id, json_body, login_required
from ..container import Container
from ..core.constants import DEFAULT_REPORT_DAYS


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/api/attendance/transition", methods=["POST"], endpoint="attendance_transition")
    @login_required
    def transition():
        data = json_body()
        result = service.record_transition(
            current_employee_id(),
            data.get("status", ""),
            data.get("project_id") or None,
        )
        return jsonify(
            {
                "employee": employee_to_dict(result.employee),
                "record": record_to_dict(result.record) if result.record else None,
            }
        )

    @app.route("/api/attendance/today", methods=["GET"], endpoint="attendance_today")
    @login_required
    def today():
        day = org_date(utc_now(), service.zone)
        records = service.list_records_for_day(current_employee_id(), day)
        return jsonify({"date": day.isoformat(), "records": [record_to_dict(r) for r in records]})

    @app.route("/api/attendance/activity-logs", methods=["GET"], endpoint="activity_logs")
    @login_required
    def activity_logs():
        logs = service.list_activity_logs(current_employee_id())
        return jsonify({"logs": [activity_log_to_dict(log) for log in logs]})

    @app.route("/api/attendance/activity-logs", methods=["POST"], endpoint="activity_logs_submit")
    @login_required
    def activity_logs_submit():
        data = json_body()
        work_date = data.get("date")
        log = service.submit_activity_log(
            current_employee_id(),
            work_date=parse_iso_date(work_date) if work_date else org_date(utc_now(), service.zone),
            start_time=data.get("start_time", ""),
            end_time=data.get("end_time", ""),
            overtime_hours=data.get("overtime_hours", 0),
            project_ids=data.get("project_ids"),
            note=data.get("note", ""),
        )
        return jsonify({"log": activity_log_to_dict(log)}), 201

    @app.route("/api/reports/worked-time", methods=["GET"], endpoint="worked_time_report")
    @login_required
    def worked_time_report():
        today = org_date(utc_now(), service.zone)
        end = parse_iso_date(request.args["end"]) if request.args.get("end") else today
        start = (
            parse_iso_date(request.args["start"])
            if request.args.get("start")
            else end - timedelta(days=DEFAULT_REPORT_DAYS - 1)
        )

        data = container.report_service.build_report(
            start=start,
            end=end,
            viewer_id=current_employee_id(),
            employee_id=request.args.get("employee_id") or None,
        )
        return jsonify(
            {
                "start": start.isoformat(),
                "end": end.isoformat(),
                "rows": [worked_row_to_dict(row) for row in data.rows],
                "summary": data.summary,
            }
        )
