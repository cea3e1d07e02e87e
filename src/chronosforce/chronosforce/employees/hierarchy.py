"""Reporting-line queries over the ``supervisor_id`` forest."""

from __future__ import annotations

import logging
from typing import Iterator, Optional

from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


def iter_supervisors(employees: EmployeeRepository, employee_id: str) -> Iterator[str]:
    """Yield the ids above ``employee_id``, nearest first.

    The walk stops at a null supervisor, at a missing employee record, and at
    the first repeated id, so malformed (cyclic) data cannot hang it.
    """
    visited = {employee_id}
    current = employees.get_by_id(employee_id)
    while current is not None and current.supervisor_id:
        supervisor_id = current.supervisor_id
        if supervisor_id in visited:
            logger.warning("supervisor cycle detected at %s (starting from %s)", supervisor_id, employee_id)
            return
        visited.add(supervisor_id)
        yield supervisor_id
        current = employees.get_by_id(supervisor_id)


def is_transitive_supervisor(employees: EmployeeRepository, *, viewer_id: str, employee_id: str) -> bool:
    return any(supervisor_id == viewer_id for supervisor_id in iter_supervisors(employees, employee_id))


def can_view(
    employees: EmployeeRepository,
    *,
    viewer_id: str,
    employee_id: str,
    root_id: Optional[str] = None,
) -> bool:
    """Viewer sees the employee's records when above them in the hierarchy.

    The root identity sees everyone.
    """
    if root_id and viewer_id == root_id:
        return True
    return is_transitive_supervisor(employees, viewer_id=viewer_id, employee_id=employee_id)


def can_edit(actor: Employee, target: Employee) -> bool:
    if actor.role.is_top_level:
        return True
    return actor.role > target.role
