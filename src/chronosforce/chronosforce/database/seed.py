from __future__ import annotations

import logging
from datetime import date

from werkzeug.security import generate_password_hash

from ..core.constants import DEFAULT_TEMPORARY_PASSWORD
from ..core.enums import EmployeeStatus, ProjectStatus, ProjectType, Role
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..projects.model import Project
from ..projects.repository import ProjectRepository
from ..shifts.model import Shift

logger = logging.getLogger(__name__)

DEMO_PROJECTS = (
    Project("p1", "Alpha Prime", "Nebula Corp", ProjectType.PERMANENT, ProjectStatus.ACTIVE, "dir1", "tl1", date(2023, 1, 1)),
    Project(
        "p2",
        "Zion Portal",
        "Future Systems",
        ProjectType.TEMPORARY,
        ProjectStatus.ACTIVE,
        "dir1",
        "tl1",
        date(2024, 2, 15),
        date(2024, 12, 31),
    ),
    Project("p3", "Core Infrastructure", "Internal", ProjectType.PERMANENT, ProjectStatus.ACTIVE, "tm1", None, date(2020, 1, 1)),
)

# (id, code, name, username, role, shift, projects, active project, supervisor, ot)
_DEMO_ROSTER = (
    ("dev-root", "DEV-ROOT", "Root Admin", "root", Role.ADMIN, ("00:00", "23:59"), ("p1", "p2", "p3"), "p3", None, True),
    ("tm1", "TM001", "Sarah Connor", "sarah", Role.TOP_MANAGEMENT, ("08:00", "16:00"), ("p1", "p2", "p3"), "p3", None, True),
    ("dir1", "DIR001", "Eleanor Vance", "eleanor", Role.DIRECTOR, ("09:00", "17:00"), ("p1", "p2"), "p1", "tm1", False),
    ("tl1", "TL001", "Marcus Thorne", "marcus", Role.TEAM_LEAD, ("09:00", "17:00"), ("p1",), "p1", "dir1", False),
    ("sup1", "SUP001", "James Holden", "james", Role.SUPERVISOR, ("09:00", "17:00"), ("p1",), "p1", "tl1", True),
    ("e2", "EMP002", "David Chen", "david", Role.EMPLOYEE, ("09:00", "17:00"), ("p1",), "p1", "sup1", True),
)


def ensure_demo_data(
    employees: EmployeeRepository,
    projects: ProjectRepository,
    *,
    password: str = DEFAULT_TEMPORARY_PASSWORD,
) -> None:
    """Load the demo roster; existing ids are left untouched."""
    for project in DEMO_PROJECTS:
        if projects.get_by_id(project.project_id) is None:
            projects.save(project)

    password_hash = generate_password_hash(password)
    created = 0
    for emp_id, code, name, username, role, (start, end), allowed, active, supervisor_id, ot in _DEMO_ROSTER:
        if employees.get_by_id(emp_id) is not None:
            continue
        employees.save(
            Employee(
                employee_id=emp_id,
                code=code,
                name=name,
                username=username,
                role=role,
                shift=Shift.from_hhmm(start, end),
                password_hash=password_hash,
                email=f"{username}@chronos.example",
                supervisor_id=supervisor_id,
                allowed_project_ids=allowed,
                active_project_id=active,
                status=EmployeeStatus.OFF,
                ot_enabled=ot,
            )
        )
        created += 1

    logger.info("demo data ready (%d employees created)", created)
