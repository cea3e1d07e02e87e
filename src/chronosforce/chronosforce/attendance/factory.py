from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from ..core.enums import AttendanceEventType, EmployeeStatus
from .model import AttendanceRecord
from .strategies.base import TransitionPolicy
from .strategies.strict_policy import StrictTransitionPolicy
from .strategies.tolerant_policy import TolerantTransitionPolicy


def classify_transition(
    *,
    current: EmployeeStatus,
    requested: EmployeeStatus,
) -> AttendanceEventType:
    """Map a status transition onto the event it records.

    The clock and break rules are checked in this exact order; PROJECT_CHANGE is
    only the fallback, so e.g. OFF -> ACTIVE is CLOCK_IN whatever the project.
    """
    if requested == EmployeeStatus.ACTIVE and current == EmployeeStatus.OFF:
        return AttendanceEventType.CLOCK_IN
    if requested == EmployeeStatus.OFF:
        return AttendanceEventType.CLOCK_OUT
    if requested == EmployeeStatus.BREAK:
        return AttendanceEventType.BREAK_START
    if requested == EmployeeStatus.ACTIVE and current == EmployeeStatus.BREAK:
        return AttendanceEventType.BREAK_END
    return AttendanceEventType.PROJECT_CHANGE


def _new_record_id() -> str:
    return uuid.uuid4().hex


@dataclass
class AttendanceEventFactory:
    """Factory Pattern: build the immutable record for a transition."""

    id_factory: Callable[[], str] = _new_record_id

    def create(
        self,
        *,
        employee_id: str,
        event_type: AttendanceEventType,
        timestamp: datetime,
        project_id: Optional[str],
        automatic: bool = False,
    ) -> AttendanceRecord:
        return AttendanceRecord(
            record_id=self.id_factory(),
            employee_id=employee_id,
            type=event_type,
            timestamp=timestamp,
            project_id=project_id,
            automatic=automatic,
        )


@dataclass
class TransitionPolicyFactory:
    """Choose the validation policy from configuration."""

    strict: bool = False

    def build(self) -> TransitionPolicy:
        if self.strict:
            return StrictTransitionPolicy()
        return TolerantTransitionPolicy()
