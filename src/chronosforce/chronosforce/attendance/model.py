from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time
from typing import Optional

from ..core.enums import AttendanceEventType, EmployeeStatus
from ..employees.model import Employee


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one immutable attendance event (append-only log)."""

    record_id: str
    employee_id: str
    type: AttendanceEventType
    timestamp: datetime
    project_id: Optional[str] = None
    automatic: bool = False


@dataclass(frozen=True)
class TransitionResult:
    employee: Employee
    record: Optional[AttendanceRecord]


@dataclass(frozen=True)
class LoginStatus:
    """Status reconstructed from the event log at session start."""

    status: EmployeeStatus
    active_project_id: Optional[str]
    clock_in_reminder: bool = False
    last_record: Optional[AttendanceRecord] = None


@dataclass(frozen=True)
class TickResult:
    employee: Optional[Employee] = None
    forced_clock_out: bool = False
    minutes_added: int = 0
    record: Optional[AttendanceRecord] = None


@dataclass(frozen=True)
class DailyActivityLog:
    """Self-reported work summary; not part of the status state machine."""

    log_id: str
    employee_id: str
    work_date: date
    start_time: time
    end_time: time
    overtime_hours: float
    project_ids: tuple[str, ...] = field(default_factory=tuple)
    note: str = ""
    submitted_at: Optional[datetime] = None
