from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date
from ..common.serializers import leave_to_dict, outcome_to_dict
from ..common.validators import require_enum
from ..common.web import current_employee_id, json_body, login_required
from ..container import Container
from ..core.enums import RequestStatus


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    @app.route("/api/leaves", methods=["GET"], endpoint="leaves_visible")
    @login_required
    def leaves_visible():
        status_arg = request.args.get("status")
        status = require_enum(status_arg, RequestStatus, "Status") if status_arg else None

        viewer = container.employee_service.get(current_employee_id())
        items = []
        for r in service.list_visible(viewer_id=viewer.employee_id, status=status):
            stage = service.active_stage_for(r, viewer)
            items.append(leave_to_dict(r, active_stage=stage.value if stage else None))
        return jsonify({"requests": items})

    @app.route("/api/leaves/mine", methods=["GET"], endpoint="leaves_mine")
    @login_required
    def leaves_mine():
        items = service.list_mine(employee_id=current_employee_id())
        return jsonify({"requests": [leave_to_dict(r) for r in items]})

    @app.route("/api/leaves", methods=["POST"], endpoint="leaves_submit")
    @login_required
    def leaves_submit():
        data = json_body()
        r = service.submit(
            employee_id=current_employee_id(),
            start_date=parse_iso_date(data.get("start_date", "")),
            end_date=parse_iso_date(data.get("end_date", "")),
            reason=data.get("reason", ""),
        )
        return jsonify({"request": leave_to_dict(r)}), 201

    @app.route("/api/leaves/<request_id>/approve", methods=["POST"], endpoint="leaves_approve")
    @login_required
    def leaves_approve(request_id: str):
        outcome = service.approve(request_id=request_id, viewer_id=current_employee_id())
        return jsonify(outcome_to_dict(outcome))

    @app.route("/api/leaves/<request_id>/reject", methods=["POST"], endpoint="leaves_reject")
    @login_required
    def leaves_reject(request_id: str):
        outcome = service.reject(request_id=request_id, viewer_id=current_employee_id())
        return jsonify(outcome_to_dict(outcome))

    @app.route("/api/leaves/<request_id>", methods=["DELETE"], endpoint="leaves_dismiss")
    @login_required
    def leaves_dismiss(request_id: str):
        service.dismiss(request_id=request_id, viewer_id=current_employee_id())
        return jsonify({"ok": True})
