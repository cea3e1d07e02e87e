from __future__ import annotations

from datetime import datetime, timezone

import pytest
from werkzeug.security import generate_password_hash

from src.chronosforce.chronosforce.attendance.service import AttendanceService
from src.chronosforce.chronosforce.attendance.sql_attendance_repository import SqlAttendanceRepository
from src.chronosforce.chronosforce.common.datetime_utils import load_zone
from src.chronosforce.chronosforce.core.enums import Role
from src.chronosforce.chronosforce.database.connection import DatabaseConnection, DBConfig
from src.chronosforce.chronosforce.employees.model import Employee
from src.chronosforce.chronosforce.employees.sql_employee_repository import SqlEmployeeRepository
from src.chronosforce.chronosforce.leaves.service import LeaveRequestService
from src.chronosforce.chronosforce.leaves.sql_leave_repository import SqlLeaveRequestRepository
from src.chronosforce.chronosforce.projects.model import Project
from src.chronosforce.chronosforce.projects.sql_project_repository import SqlProjectRepository
from src.chronosforce.chronosforce.shifts.model import Shift

NEW_YORK = load_zone("America/New_York")
PASSWORD_HASH = generate_password_hash("secret-pw")


def _ny(year, month, day, hour, minute=0, second=0) -> datetime:
    """New York wall-clock time as an aware UTC instant."""
    return datetime(year, month, day, hour, minute, second, tzinfo=NEW_YORK).astimezone(timezone.utc)


def _make_employee(employee_id: str, role: Role = Role.EMPLOYEE, **kwargs) -> Employee:
    values = dict(
        employee_id=employee_id,
        code=employee_id.upper(),
        name=f"Employee {employee_id}",
        username=employee_id,
        role=role,
        shift=Shift.from_hhmm("09:00", "17:00"),
        password_hash=PASSWORD_HASH,
        allowed_project_ids=("p1", "p2"),
        active_project_id="p1",
    )
    values.update(kwargs)
    return Employee(**values)


@pytest.fixture
def ny():
    return _ny


@pytest.fixture
def make_employee():
    return _make_employee


@pytest.fixture
def fixed_now():
    # Monday 09:30 in New York (EDT)
    return _ny(2024, 6, 3, 9, 30)


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite:///{tmp_path / 'chronosforce.db'}"


@pytest.fixture
def conn_factory(database_url):
    factory = DatabaseConnection(DBConfig(url=database_url))
    factory.create_schema()
    yield factory
    factory.dispose()


@pytest.fixture
def employees_repo(conn_factory):
    return SqlEmployeeRepository(conn_factory)


@pytest.fixture
def projects_repo(conn_factory):
    repo = SqlProjectRepository(conn_factory)
    repo.save(Project("p1", "Alpha Prime", "Nebula Corp"))
    repo.save(Project("p2", "Zion Portal", "Future Systems"))
    return repo


@pytest.fixture
def attendance_repo(conn_factory):
    return SqlAttendanceRepository(conn_factory)


@pytest.fixture
def attendance_service(attendance_repo, employees_repo, projects_repo, leaves_repo, conn_factory):
    return AttendanceService(
        attendance_repo, employees_repo, projects_repo, conn_factory, zone=NEW_YORK, leaves=leaves_repo
    )


@pytest.fixture
def leaves_repo(conn_factory):
    return SqlLeaveRequestRepository(conn_factory)


@pytest.fixture
def leave_service(leaves_repo, employees_repo, conn_factory):
    return LeaveRequestService(leaves_repo, employees_repo, conn_factory, root_employee_id="dev-root")


@pytest.fixture
def org_chart(employees_repo):
    """root (unattached), dir1 <- sup1 <- tl1 <- e1, plus unrelated outsider."""
    people = [
        _make_employee("dev-root", Role.ADMIN),
        _make_employee("tm1", Role.TOP_MANAGEMENT),
        _make_employee("dir1", Role.DIRECTOR, supervisor_id="tm1"),
        _make_employee("sup1", Role.SUPERVISOR, supervisor_id="dir1"),
        _make_employee("tl1", Role.TEAM_LEAD, supervisor_id="sup1"),
        _make_employee("e1", Role.EMPLOYEE, supervisor_id="tl1"),
        _make_employee("outsider", Role.DIRECTOR),
    ]
    for person in people:
        employees_repo.save(person)
    return {p.employee_id: p for p in people}
