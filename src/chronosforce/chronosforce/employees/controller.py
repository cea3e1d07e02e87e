from __future__ import annotations

from flask import Flask, jsonify, session

from ..common.serializers import employee_to_dict, login_status_to_dict
from ..common.web import current_employee_id, json_body, login_required
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/login", methods=["POST"], endpoint="login")
    def login():
        data = json_body()
        s_employee = container.auth_service.authenticate(data.get("login", ""), data.get("password", ""))

        # The cached status may be stale (no clock-out before the browser closed);
        # the event log is authoritative.
        employee, login_status = container.attendance_service.sync_login_status(s_employee.employee_id)

        session.clear()
        session["employee_id"] = s_employee.employee_id
        session["name"] = s_employee.name
        session["role"] = s_employee.role.value
        session["shift_info"] = s_employee.shift_info

        if container.boundary_scheduler.running:
            container.boundary_scheduler.watch(employee.employee_id)

        return jsonify({"employee": employee_to_dict(employee), "login_status": login_status_to_dict(login_status)})

    @app.route("/api/logout", methods=["POST"], endpoint="logout")
    def logout():
        employee_id = session.get("employee_id")
        if employee_id:
            container.boundary_scheduler.unwatch(str(employee_id))
        session.clear()
        return jsonify({"ok": True})

    @app.route("/api/me", methods=["GET"], endpoint="me")
    @login_required
    def me():
        employee = container.employee_service.get(current_employee_id())
        return jsonify({"employee": employee_to_dict(employee)})

    @app.route("/api/me/password", methods=["POST"], endpoint="change_password")
    @login_required
    def change_password():
        data = json_body()
        container.auth_service.change_password(
            employee_id=current_employee_id(),
            new_password=data.get("new_password", ""),
            confirm_password=data.get("confirm_password", ""),
        )
        return jsonify({"ok": True})

    @app.route("/api/team", methods=["GET"], endpoint="team")
    @login_required
    def team():
        viewer_id = current_employee_id()
        reports = container.employee_service.list_reports(viewer_id=viewer_id)
        employees = []
        for e in reports:
            row = employee_to_dict(e)
            row["editable"] = container.employee_service.can_edit(actor_id=viewer_id, target_id=e.employee_id)
            employees.append(row)
        return jsonify({"employees": employees})
