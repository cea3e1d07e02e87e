from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Organisational role, totally ordered by ``weight``."""

    EMPLOYEE = "EMPLOYEE"
    TEAM_LEAD = "TEAM_LEAD"
    SUPERVISOR = "SUPERVISOR"
    DIRECTOR = "DIRECTOR"
    TOP_MANAGEMENT = "TOP_MANAGEMENT"
    ADMIN = "ADMIN"

    @property
    def weight(self) -> int:
        return _ROLE_WEIGHTS[self]

    @property
    def is_top_level(self) -> bool:
        """ADMIN and TOP_MANAGEMENT may act anywhere in the approval chain."""
        return self in {Role.ADMIN, Role.TOP_MANAGEMENT}

    def __lt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.weight < other.weight

    def __le__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.weight <= other.weight

    def __gt__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.weight > other.weight

    def __ge__(self, other):
        if not isinstance(other, Role):
            return NotImplemented
        return self.weight >= other.weight


_ROLE_WEIGHTS = {
    Role.EMPLOYEE: 0,
    Role.TEAM_LEAD: 1,
    Role.SUPERVISOR: 2,
    Role.DIRECTOR: 3,
    Role.TOP_MANAGEMENT: 4,
    Role.ADMIN: 5,
}


class EmployeeStatus(str, Enum):
    """Live attendance state cached on the employee."""

    ACTIVE = "ACTIVE"
    BREAK = "BREAK"
    OFF = "OFF"
    LEAVE = "LEAVE"


class AttendanceEventType(str, Enum):
    CLOCK_IN = "CLOCK_IN"
    CLOCK_OUT = "CLOCK_OUT"
    BREAK_START = "BREAK_START"
    BREAK_END = "BREAK_END"
    PROJECT_CHANGE = "PROJECT_CHANGE"


class ApprovalStatus(str, Enum):
    """Per-lane approval state of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    NOT_REQUIRED = "NOT_REQUIRED"

    @property
    def is_resolved(self) -> bool:
        return self in {ApprovalStatus.APPROVED, ApprovalStatus.NOT_REQUIRED}


class RequestStatus(str, Enum):
    """Final decision of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"

    @property
    def is_terminal(self) -> bool:
        return self != RequestStatus.PENDING


class ApprovalStage(str, Enum):
    """Approval lane, listed from the lowest to the highest."""

    TEAM_LEAD = "TEAM_LEAD"
    SUPERVISOR = "SUPERVISOR"
    DIRECTOR = "DIRECTOR"


class ProjectType(str, Enum):
    PERMANENT = "PERMANENT"
    TEMPORARY = "TEMPORARY"


class ProjectStatus(str, Enum):
    ACTIVE = "ACTIVE"
    ENDED = "ENDED"
