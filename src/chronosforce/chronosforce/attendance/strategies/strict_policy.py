from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceEventType, EmployeeStatus
from ...core.exceptions import ValidationError
from ...employees.model import Employee
from .base import TransitionPolicy


class StrictTransitionPolicy(TransitionPolicy):
    """Reject transitions that record nothing meaningful."""

    def check(
        self,
        *,
        employee: Employee,
        requested: EmployeeStatus,
        project_id: Optional[str],
        event_type: AttendanceEventType,
    ) -> None:
        current = employee.status

        if event_type == AttendanceEventType.CLOCK_OUT and current == EmployeeStatus.OFF:
            raise ValidationError("Already clocked out")

        if event_type == AttendanceEventType.BREAK_START and current != EmployeeStatus.ACTIVE:
            raise ValidationError("A break can only start while working")

        if event_type == AttendanceEventType.PROJECT_CHANGE:
            if current not in {EmployeeStatus.ACTIVE, EmployeeStatus.BREAK}:
                raise ValidationError("Clock in before switching projects")
            if not project_id or project_id == employee.active_project_id:
                raise ValidationError("Already working on this project")
