"""JSON-ready views of domain objects for the controller layer."""

from __future__ import annotations

from datetime import date, datetime, time
from typing import Any, Optional

from ..attendance.model import AttendanceRecord, DailyActivityLog, LoginStatus
from ..employees.model import Employee
from ..leaves.model import ApprovalOutcome, LeaveRequest
from ..reports.model import WorkedTimeRow


def _iso(value: Optional[date | datetime | time]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def employee_to_dict(e: Employee) -> dict[str, Any]:
    # password_hash never leaves the service layer
    return {
        "id": e.employee_id,
        "code": e.code,
        "name": e.name,
        "username": e.username,
        "email": e.email,
        "role": e.role.value,
        "supervisor_id": e.supervisor_id,
        "shift": {"start": e.shift.start.strftime("%H:%M"), "end": e.shift.end.strftime("%H:%M")},
        "allowed_project_ids": list(e.allowed_project_ids),
        "active_project_id": e.active_project_id,
        "status": e.status.value,
        "last_action_time": _iso(e.last_action_time),
        "total_minutes_worked_today": e.total_minutes_worked_today,
        "ot_enabled": e.ot_enabled,
    }


def record_to_dict(r: AttendanceRecord) -> dict[str, Any]:
    return {
        "id": r.record_id,
        "employee_id": r.employee_id,
        "type": r.type.value,
        "timestamp": _iso(r.timestamp),
        "project_id": r.project_id,
        "automatic": r.automatic,
    }


def login_status_to_dict(s: LoginStatus) -> dict[str, Any]:
    return {
        "status": s.status.value,
        "active_project_id": s.active_project_id,
        "clock_in_reminder": s.clock_in_reminder,
    }


def activity_log_to_dict(log: DailyActivityLog) -> dict[str, Any]:
    return {
        "id": log.log_id,
        "employee_id": log.employee_id,
        "date": _iso(log.work_date),
        "start_time": log.start_time.strftime("%H:%M"),
        "end_time": log.end_time.strftime("%H:%M"),
        "overtime_hours": log.overtime_hours,
        "project_ids": list(log.project_ids),
        "note": log.note,
        "submitted_at": _iso(log.submitted_at),
    }


def leave_to_dict(r: LeaveRequest, *, active_stage: Optional[str] = None) -> dict[str, Any]:
    return {
        "id": r.request_id,
        "employee_id": r.employee_id,
        "employee_name": r.employee_name,
        "start_date": _iso(r.start_date),
        "end_date": _iso(r.end_date),
        "reason": r.reason,
        "created_at": _iso(r.created_at),
        "team_lead_status": r.team_lead_status.value,
        "supervisor_status": r.supervisor_status.value,
        "director_status": r.director_status.value,
        "final_status": r.final_status.value,
        "decided_at": _iso(r.decided_at),
        "active_stage": active_stage,
    }


def outcome_to_dict(o: ApprovalOutcome) -> dict[str, Any]:
    return {
        "changed": o.changed,
        "stage": o.stage.value if o.stage else None,
        "completed": o.completed,
        "request": leave_to_dict(o.request),
    }


def worked_row_to_dict(row: WorkedTimeRow) -> dict[str, Any]:
    return {
        "employee_id": row.employee_id,
        "employee_name": row.employee_name,
        "employee_code": row.employee_code,
        "supervisor_name": row.supervisor_name,
        "date": _iso(row.work_date),
        "shift": row.shift,
        "first_in": _iso(row.worked.first_in),
        "last_out": _iso(row.worked.last_out),
        "worked_minutes": row.worked.worked_minutes,
        "break_minutes": row.worked.break_minutes,
        "project_ids": list(row.worked.project_ids),
        "ot_enabled": row.ot_enabled,
    }
