from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import ApprovalStage, ApprovalStatus, RequestStatus


@dataclass(frozen=True)
class LeaveRequest:
    """Domain entity: leave request with three independent approval lanes.

    ``final_status`` is derived from the lanes, except that a rejection sets it
    directly. ``version`` grows on every write (compare-and-set key).
    """

    request_id: str
    employee_id: str
    employee_name: str
    start_date: date
    end_date: date
    reason: str
    created_at: datetime
    team_lead_status: ApprovalStatus = ApprovalStatus.PENDING
    supervisor_status: ApprovalStatus = ApprovalStatus.PENDING
    director_status: ApprovalStatus = ApprovalStatus.PENDING
    final_status: RequestStatus = RequestStatus.PENDING
    decided_at: Optional[datetime] = None
    version: int = 1

    def lane(self, stage: ApprovalStage) -> ApprovalStatus:
        return getattr(self, _LANE_FIELDS[stage])

    def lanes(self) -> dict[ApprovalStage, ApprovalStatus]:
        return {stage: self.lane(stage) for stage in ApprovalStage}


_LANE_FIELDS = {
    ApprovalStage.TEAM_LEAD: "team_lead_status",
    ApprovalStage.SUPERVISOR: "supervisor_status",
    ApprovalStage.DIRECTOR: "director_status",
}


def lane_field(stage: ApprovalStage) -> str:
    return _LANE_FIELDS[stage]


@dataclass(frozen=True)
class ApprovalOutcome:
    """Result of approve/reject: ``changed`` is False for no-op actions."""

    request: LeaveRequest
    changed: bool
    stage: Optional[ApprovalStage] = None
    completed: bool = False
