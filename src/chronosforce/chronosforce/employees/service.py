from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_MIN_PASSWORD_LENGTH, DEFAULT_ROOT_EMPLOYEE_ID, DEFAULT_TEMPORARY_PASSWORD
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, NotFoundError, ValidationError
from .hierarchy import can_edit, can_view
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionEmployee:
    """What we store into Flask session after login."""

    employee_id: str
    name: str
    role: Role
    shift_info: str


class AuthService:
    """Use case: authenticate an employee at session start."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def authenticate(self, login: str, password: str) -> SessionEmployee:
        employee = self._employees.get_by_login(login)
        if not employee or not employee.is_active:
            raise AuthenticationError("Invalid credentials")

        try:
            ok = check_password_hash(employee.password_hash, password or "")
        except (TypeError, ValueError):
            # e.g. empty or corrupted hashes
            ok = False

        if not ok:
            logger.info("failed login for %r", login)
            raise AuthenticationError("Invalid credentials")

        return SessionEmployee(
            employee_id=employee.employee_id,
            name=employee.name,
            role=employee.role,
            shift_info=employee.shift.label(),
        )

    def change_password(self, *, employee_id: str, new_password: str, confirm_password: str) -> None:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")

        require_min_length(new_password, "Password", DEFAULT_MIN_PASSWORD_LENGTH)
        if new_password == DEFAULT_TEMPORARY_PASSWORD:
            raise ValidationError("You cannot use the default temporary password")
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match")

        self._employees.save(replace(employee, password_hash=generate_password_hash(new_password)))
        logger.info("%s: password changed", employee_id)


class EmployeeService:
    """Read side of the roster, scoped by the reporting line."""

    def __init__(self, employees: EmployeeRepository, *, root_employee_id: str = DEFAULT_ROOT_EMPLOYEE_ID):
        self._employees = employees
        self._root_employee_id = root_employee_id

    def get(self, employee_id: str) -> Employee:
        employee_id = require_non_empty(employee_id, "Employee id")
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def list_reports(self, *, viewer_id: str) -> Sequence[Employee]:
        """Everyone below the viewer (everyone, for the root identity)."""
        viewer = self.get(viewer_id)
        return [
            e
            for e in self._employees.list_all()
            if e.employee_id != viewer.employee_id
            and can_view(
                self._employees,
                viewer_id=viewer.employee_id,
                employee_id=e.employee_id,
                root_id=self._root_employee_id,
            )
        ]

    def can_edit(self, *, actor_id: str, target_id: str) -> bool:
        return can_edit(self.get(actor_id), self.get(target_id))
