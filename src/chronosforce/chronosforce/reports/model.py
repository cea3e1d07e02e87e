from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class WorkedTime:
    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    worked_minutes: int = 0
    break_minutes: int = 0
    project_ids: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class WorkedTimeRow:
    """Read-model for one employee on one organisational day."""

    employee_id: str
    employee_name: str
    employee_code: str
    supervisor_name: Optional[str]
    work_date: date
    shift: str
    worked: WorkedTime
    ot_enabled: bool
