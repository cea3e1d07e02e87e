from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .attendance.factory import AttendanceEventFactory, TransitionPolicyFactory
from .attendance.scheduler import ShiftBoundaryScheduler
from .attendance.service import AttendanceService
from .attendance.sql_attendance_repository import SqlAttendanceRepository
from .common.datetime_utils import load_zone
from .core.constants import (
    DEFAULT_DATABASE_URL,
    DEFAULT_ORG_TIMEZONE,
    DEFAULT_ROOT_EMPLOYEE_ID,
    DEFAULT_TICK_INTERVAL_SECONDS,
)
from .database.connection import DatabaseConnection, DBConfig
from .database.seed import ensure_demo_data
from .employees.service import AuthService, EmployeeService
from .employees.sql_employee_repository import SqlEmployeeRepository
from .leaves.service import LeaveRequestService
from .leaves.sql_leave_repository import SqlLeaveRequestRepository
from .projects.sql_project_repository import SqlProjectRepository
from .reports.service import WorkedTimeReportService


@dataclass(frozen=True)
class Container:
    conn_factory: DatabaseConnection

    employees_repo: SqlEmployeeRepository
    projects_repo: SqlProjectRepository
    attendance_repo: SqlAttendanceRepository
    leaves_repo: SqlLeaveRequestRepository

    auth_service: AuthService
    employee_service: EmployeeService
    attendance_service: AttendanceService
    leave_service: LeaveRequestService
    report_service: WorkedTimeReportService
    boundary_scheduler: ShiftBoundaryScheduler


def build_container(*, settings: Mapping[str, Any]) -> Container:
    zone = load_zone(str(settings.get("ORG_TIMEZONE", DEFAULT_ORG_TIMEZONE)))
    root_id = str(settings.get("ROOT_EMPLOYEE_ID", DEFAULT_ROOT_EMPLOYEE_ID))

    conn_factory = DatabaseConnection(
        DBConfig(
            url=str(settings.get("DATABASE_URL") or DEFAULT_DATABASE_URL),
            echo=bool(settings.get("DATABASE_ECHO", False)),
        )
    )
    conn_factory.create_schema()

    employees_repo = SqlEmployeeRepository(conn_factory)
    projects_repo = SqlProjectRepository(conn_factory)
    attendance_repo = SqlAttendanceRepository(conn_factory)
    leaves_repo = SqlLeaveRequestRepository(conn_factory)

    if settings.get("SEED_DEMO_DATA", False):
        ensure_demo_data(employees_repo, projects_repo)

    auth_service = AuthService(employees_repo)
    employee_service = EmployeeService(employees_repo, root_employee_id=root_id)
    attendance_service = AttendanceService(
        attendance_repo,
        employees_repo,
        projects_repo,
        conn_factory,
        zone=zone,
        leaves=leaves_repo,
        policy=TransitionPolicyFactory(strict=bool(settings.get("STRICT_TRANSITIONS", False))).build(),
        event_factory=AttendanceEventFactory(),
        suppress_noop_project_change=bool(settings.get("SUPPRESS_NOOP_PROJECT_CHANGE", False)),
    )
    leave_service = LeaveRequestService(leaves_repo, employees_repo, conn_factory, root_employee_id=root_id)
    report_service = WorkedTimeReportService(attendance_service, employees_repo, root_employee_id=root_id)
    boundary_scheduler = ShiftBoundaryScheduler(
        attendance_service,
        interval_seconds=int(settings.get("TICK_INTERVAL_SECONDS", DEFAULT_TICK_INTERVAL_SECONDS)),
    )

    return Container(
        conn_factory=conn_factory,
        employees_repo=employees_repo,
        projects_repo=projects_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        auth_service=auth_service,
        employee_service=employee_service,
        attendance_service=attendance_service,
        leave_service=leave_service,
        report_service=report_service,
        boundary_scheduler=boundary_scheduler,
    )
