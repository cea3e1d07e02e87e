"""Leave approval state machine.

Pure functions over ``LeaveRequest``: no storage, no clock. The service layer
loads a request, runs one of these and writes the result back with
compare-and-set.

Lanes run Team Lead -> Supervisor -> Director. Lanes below the submitter's own
level start as NOT_REQUIRED. A request is APPROVED exactly when every lane is
APPROVED or NOT_REQUIRED; a rejection at any active stage ends it.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime
from typing import Callable, Dict, Optional

from ..core.enums import ApprovalStage, ApprovalStatus, RequestStatus, Role
from .model import ApprovalOutcome, LeaveRequest, lane_field

_P = ApprovalStatus.PENDING
_N = ApprovalStatus.NOT_REQUIRED

INITIAL_LANES: Dict[Role, tuple[ApprovalStatus, ApprovalStatus, ApprovalStatus]] = {
    # (team lead, supervisor, director)
    Role.EMPLOYEE: (_P, _P, _P),
    Role.TEAM_LEAD: (_N, _P, _P),
    Role.SUPERVISOR: (_N, _N, _P),
    Role.DIRECTOR: (_N, _N, _P),
    Role.TOP_MANAGEMENT: (_N, _N, _P),
    Role.ADMIN: (_N, _N, _P),
}

# Checked in this order when a viewer could act on several lanes.
STAGE_PRECEDENCE = (ApprovalStage.DIRECTOR, ApprovalStage.SUPERVISOR, ApprovalStage.TEAM_LEAD)


def initial_lanes(submitter_role: Role) -> dict[ApprovalStage, ApprovalStatus]:
    team_lead, supervisor, director = INITIAL_LANES[submitter_role]
    return {
        ApprovalStage.TEAM_LEAD: team_lead,
        ApprovalStage.SUPERVISOR: supervisor,
        ApprovalStage.DIRECTOR: director,
    }


def stage_in_turn(request: LeaveRequest, stage: ApprovalStage) -> bool:
    """Whether ``stage`` is the next lane in the normal (non-bypass) order."""
    if stage == ApprovalStage.TEAM_LEAD:
        return request.team_lead_status == ApprovalStatus.PENDING
    if stage == ApprovalStage.SUPERVISOR:
        return request.team_lead_status.is_resolved and request.supervisor_status == ApprovalStatus.PENDING
    return request.supervisor_status.is_resolved and request.director_status == ApprovalStatus.PENDING


def _lane_pending(request: LeaveRequest, stage: ApprovalStage) -> bool:
    return request.lane(stage) == ApprovalStatus.PENDING


_StageCheck = Callable[[LeaveRequest, ApprovalStage], bool]

_ANY_STAGE: Dict[ApprovalStage, _StageCheck] = {stage: _lane_pending for stage in ApprovalStage}

# Canonical "may this role act on this lane now" table. Directors may close the
# director lane before the lower lanes are resolved.
STAGE_PERMISSIONS: Dict[Role, Dict[ApprovalStage, _StageCheck]] = {
    Role.ADMIN: _ANY_STAGE,
    Role.TOP_MANAGEMENT: _ANY_STAGE,
    Role.DIRECTOR: {ApprovalStage.DIRECTOR: _lane_pending},
    Role.SUPERVISOR: {ApprovalStage.SUPERVISOR: stage_in_turn},
    Role.TEAM_LEAD: {ApprovalStage.TEAM_LEAD: stage_in_turn},
    Role.EMPLOYEE: {},
}


def can_act(role: Role, stage: ApprovalStage, request: LeaveRequest) -> bool:
    if request.final_status.is_terminal:
        return False
    check = STAGE_PERMISSIONS[role].get(stage)
    return bool(check and check(request, stage))


def resolve_active_stage(request: LeaveRequest, role: Role) -> Optional[ApprovalStage]:
    """The single lane ``role`` may act on now, or None."""
    for stage in STAGE_PRECEDENCE:
        if can_act(role, stage, request):
            return stage
    return None


def derive_final_status(
    lanes: dict[ApprovalStage, ApprovalStatus],
    current: RequestStatus = RequestStatus.PENDING,
) -> RequestStatus:
    if current == RequestStatus.REJECTED:
        return RequestStatus.REJECTED
    if all(status.is_resolved for status in lanes.values()):
        return RequestStatus.APPROVED
    return RequestStatus.PENDING


def approve(request: LeaveRequest, acting_role: Role, *, now: datetime) -> ApprovalOutcome:
    stage = resolve_active_stage(request, acting_role)
    if stage is None:
        return ApprovalOutcome(request=request, changed=False)

    lanes = request.lanes()
    lanes[stage] = ApprovalStatus.APPROVED

    # Top-level roles approve every open lane at once; a director approval is
    # the last word, so lanes it skipped are closed with it.
    if acting_role.is_top_level or stage == ApprovalStage.DIRECTOR:
        for other, status in lanes.items():
            if status == ApprovalStatus.PENDING:
                lanes[other] = ApprovalStatus.APPROVED

    final_status = derive_final_status(lanes, request.final_status)
    completed = final_status == RequestStatus.APPROVED
    updated = replace(
        request,
        **{lane_field(s): status for s, status in lanes.items()},
        final_status=final_status,
        decided_at=now if completed else request.decided_at,
        version=request.version + 1,
    )
    return ApprovalOutcome(request=updated, changed=True, stage=stage, completed=completed)


def reject(request: LeaveRequest, acting_role: Role, *, now: datetime) -> ApprovalOutcome:
    """Reject at the viewer's active stage; lanes stay as they are."""
    stage = resolve_active_stage(request, acting_role)
    if stage is None:
        return ApprovalOutcome(request=request, changed=False)

    updated = replace(
        request,
        final_status=RequestStatus.REJECTED,
        decided_at=now,
        version=request.version + 1,
    )
    return ApprovalOutcome(request=updated, changed=True, stage=stage)
