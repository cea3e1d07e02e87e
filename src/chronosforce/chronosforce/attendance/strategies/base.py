from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...core.enums import AttendanceEventType, EmployeeStatus
from ...employees.model import Employee


class TransitionPolicy(ABC):
    """Strategy Pattern: the single hook deciding whether a classified transition is accepted.

    Policies never change the classification; they only accept it or raise
    ``ValidationError``.
    """

    @abstractmethod
    def check(
        self,
        *,
        employee: Employee,
        requested: EmployeeStatus,
        project_id: Optional[str],
        event_type: AttendanceEventType,
    ) -> None:
        raise NotImplementedError
