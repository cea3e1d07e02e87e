from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceEventType, EmployeeStatus
from ...employees.model import Employee
from .base import TransitionPolicy


class TolerantTransitionPolicy(TransitionPolicy):
    """Accept every transition; repeated clock-outs become extra events."""

    def check(
        self,
        *,
        employee: Employee,
        requested: EmployeeStatus,
        project_id: Optional[str],
        event_type: AttendanceEventType,
    ) -> None:
        return None
