from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import as_utc, utc_now
from ..common.validators import require_non_empty
from ..core.constants import DEFAULT_ROOT_EMPLOYEE_ID
from ..core.enums import ApprovalStage, EmployeeStatus, RequestStatus
from ..core.exceptions import AuthorizationError, ConcurrencyError, NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_transaction
from ..employees.hierarchy import can_view
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from . import workflow
from .model import ApprovalOutcome, LeaveRequest
from .repository import LeaveRequestRepository

logger = logging.getLogger(__name__)


class LeaveRequestService:
    """Approval workflow engine: submission, stage actions and hierarchy-scoped lists."""

    def __init__(
        self,
        requests: LeaveRequestRepository,
        employees: EmployeeRepository,
        conn_factory: DatabaseConnection,
        *,
        root_employee_id: str = DEFAULT_ROOT_EMPLOYEE_ID,
    ):
        self._requests = requests
        self._employees = employees
        self._conn_factory = conn_factory
        self._root_employee_id = root_employee_id

    def submit(
        self,
        *,
        employee_id: str,
        start_date: date,
        end_date: date,
        reason: str,
        now: datetime | None = None,
    ) -> LeaveRequest:
        employee = self._require_employee(employee_id)
        if end_date < start_date:
            raise ValidationError("End date must not be before start date")
        reason = require_non_empty(reason, "Reason")

        lanes = workflow.initial_lanes(employee.role)
        request = LeaveRequest(
            request_id=uuid.uuid4().hex,
            employee_id=employee.employee_id,
            employee_name=employee.name,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            created_at=as_utc(now or utc_now()),
            team_lead_status=lanes[ApprovalStage.TEAM_LEAD],
            supervisor_status=lanes[ApprovalStage.SUPERVISOR],
            director_status=lanes[ApprovalStage.DIRECTOR],
        )
        self._requests.create(request)
        logger.info(
            "leave request %s submitted by %s (%s) for %s..%s",
            request.request_id,
            employee.employee_id,
            employee.role.value,
            start_date.isoformat(),
            end_date.isoformat(),
        )
        return request

    def approve(self, *, request_id: str, viewer_id: str, now: datetime | None = None) -> ApprovalOutcome:
        now = as_utc(now or utc_now())
        with db_transaction(self._conn_factory):
            viewer = self._require_employee(viewer_id)
            request = self._require_request(request_id)
            if not self.is_visible_to(request, viewer):
                logger.debug("approve of %s by %s ignored: not in reporting line", request_id, viewer_id)
                return ApprovalOutcome(request=request, changed=False)

            outcome = workflow.approve(request, viewer.role, now=now)
            if not outcome.changed:
                logger.debug("approve of %s by %s ignored: no active stage", request_id, viewer_id)
                return outcome

            self._write(outcome.request, expected_version=request.version)
            logger.info("leave request %s approved at %s stage by %s", request_id, outcome.stage.value, viewer_id)

            if outcome.completed:
                self._grant_leave(outcome.request)
            return outcome

    def reject(self, *, request_id: str, viewer_id: str, now: datetime | None = None) -> ApprovalOutcome:
        now = as_utc(now or utc_now())
        with db_transaction(self._conn_factory):
            viewer = self._require_employee(viewer_id)
            request = self._require_request(request_id)
            if not self.is_visible_to(request, viewer):
                logger.debug("reject of %s by %s ignored: not in reporting line", request_id, viewer_id)
                return ApprovalOutcome(request=request, changed=False)

            outcome = workflow.reject(request, viewer.role, now=now)
            if not outcome.changed:
                logger.debug("reject of %s by %s ignored: no active stage", request_id, viewer_id)
                return outcome

            self._write(outcome.request, expected_version=request.version)
            logger.info("leave request %s rejected at %s stage by %s", request_id, outcome.stage.value, viewer_id)
            return outcome

    def dismiss(self, *, request_id: str, viewer_id: str) -> None:
        """Hard delete; only someone who can see the request may dismiss it."""
        with db_transaction(self._conn_factory):
            viewer = self._require_employee(viewer_id)
            request = self._require_request(request_id)
            if not self.is_visible_to(request, viewer):
                raise AuthorizationError("You cannot dismiss this request")
            self._requests.delete(request.request_id)
        logger.info("leave request %s dismissed by %s", request_id, viewer_id)

    def active_stage_for(self, request: LeaveRequest, viewer: Employee) -> Optional[ApprovalStage]:
        if not self.is_visible_to(request, viewer):
            return None
        return workflow.resolve_active_stage(request, viewer.role)

    def is_visible_to(self, request: LeaveRequest, viewer: Employee) -> bool:
        return can_view(
            self._employees,
            viewer_id=viewer.employee_id,
            employee_id=request.employee_id,
            root_id=self._root_employee_id,
        )

    def list_visible(self, *, viewer_id: str, status: Optional[RequestStatus] = None) -> Sequence[LeaveRequest]:
        viewer = self._require_employee(viewer_id)
        return [r for r in self._requests.list_all(status=status) if self.is_visible_to(r, viewer)]

    def list_mine(self, *, employee_id: str) -> Sequence[LeaveRequest]:
        return self._requests.list_all(employee_id=employee_id)

    def get(self, request_id: str) -> LeaveRequest:
        return self._require_request(request_id)

    def _write(self, request: LeaveRequest, *, expected_version: int) -> None:
        if not self._requests.compare_and_set(request, expected_version=expected_version):
            logger.warning("lost update on leave request %s (expected v%d)", request.request_id, expected_version)
            raise ConcurrencyError("The request was changed by someone else; reload and try again")

    def _grant_leave(self, request: LeaveRequest) -> None:
        requester = self._employees.get_by_id(request.employee_id)
        if requester is None:
            logger.warning("leave request %s approved for missing employee %s", request.request_id, request.employee_id)
            return
        self._employees.save(replace(requester, status=EmployeeStatus.LEAVE, last_tick_time=None))
        logger.info("%s: status -> LEAVE (request %s approved)", requester.employee_id, request.request_id)

    def _require_employee(self, employee_id: str) -> Employee:
        if not employee_id:
            raise ValidationError("Employee id is required")
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def _require_request(self, request_id: str) -> LeaveRequest:
        if not request_id:
            raise ValidationError("Request id is required")
        request = self._requests.get(request_id)
        if not request:
            raise NotFoundError(f"Leave request {request_id} does not exist")
        return request
