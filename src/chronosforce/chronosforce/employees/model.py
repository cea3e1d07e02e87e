from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..core.enums import EmployeeStatus, Role
from ..shifts.model import Shift


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    Note: Plain data object. Engines return updated copies (``dataclasses.replace``)
    and the repository stores them; nothing here touches storage.
    """

    employee_id: str
    code: str
    name: str
    username: str
    role: Role
    shift: Shift
    password_hash: str = ""
    email: str = ""
    supervisor_id: Optional[str] = None
    allowed_project_ids: tuple[str, ...] = field(default_factory=tuple)
    active_project_id: Optional[str] = None
    status: EmployeeStatus = EmployeeStatus.OFF
    last_action_time: Optional[datetime] = None
    last_tick_time: Optional[datetime] = None
    total_minutes_worked_today: int = 0
    ot_enabled: bool = False
    is_active: bool = True

    def matches_login(self, login: str) -> bool:
        """Name and username are both accepted, case-insensitively."""
        key = (login or "").strip().casefold()
        return bool(key) and key in {self.name.casefold(), self.username.casefold()}

    def may_work_on(self, project_id: str) -> bool:
        return project_id in self.allowed_project_ids
