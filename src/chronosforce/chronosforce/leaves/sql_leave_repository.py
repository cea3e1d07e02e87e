from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError

from ..core.enums import ApprovalStatus, RequestStatus
from ..database.connection import DatabaseConnection
from ..database.schema import leave_requests
from ..database.sql_base import db_transaction, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRequestRepository


class SqlLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, request: LeaveRequest) -> None:
        with db_transaction(self._conn_factory) as conn:
            try:
                conn.execute(leave_requests.insert().values(request_id=request.request_id, **_to_row(request)))
            except IntegrityError as exc:
                raise ValueError(f"Duplicate leave request id: {request.request_id}") from exc

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        with db_transaction(self._conn_factory) as conn:
            row = fetchone(conn.execute(select(leave_requests).where(leave_requests.c.request_id == request_id)))
            return _to_request(row) if row else None

    def list_all(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        query = select(leave_requests)
        if status is not None:
            query = query.where(leave_requests.c.final_status == status.value)
        if employee_id is not None:
            query = query.where(leave_requests.c.employee_id == employee_id)
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(
                conn.execute(query.order_by(leave_requests.c.created_at.desc(), leave_requests.c.request_id))
            )
        return [_to_request(r) for r in rows]

    def compare_and_set(self, request: LeaveRequest, *, expected_version: int) -> bool:
        with db_transaction(self._conn_factory) as conn:
            result = conn.execute(
                update(leave_requests)
                .where(
                    leave_requests.c.request_id == request.request_id,
                    leave_requests.c.version == int(expected_version),
                )
                .values(**_to_row(request))
            )
            return result.rowcount == 1

    def delete(self, request_id: str) -> bool:
        with db_transaction(self._conn_factory) as conn:
            result = conn.execute(delete(leave_requests).where(leave_requests.c.request_id == request_id))
            return result.rowcount > 0


def _to_row(request: LeaveRequest) -> Dict[str, Any]:
    return {
        "employee_id": request.employee_id,
        "employee_name": request.employee_name,
        "start_date": request.start_date,
        "end_date": request.end_date,
        "reason": request.reason,
        "created_at": request.created_at,
        "team_lead_status": request.team_lead_status.value,
        "supervisor_status": request.supervisor_status.value,
        "director_status": request.director_status.value,
        "final_status": request.final_status.value,
        "decided_at": request.decided_at,
        "version": int(request.version),
    }


def _to_request(r: Dict[str, Any]) -> LeaveRequest:
    return LeaveRequest(
        request_id=r["request_id"],
        employee_id=r["employee_id"],
        employee_name=r["employee_name"],
        start_date=r["start_date"],
        end_date=r["end_date"],
        reason=r["reason"],
        created_at=r["created_at"],
        team_lead_status=ApprovalStatus(r["team_lead_status"]),
        supervisor_status=ApprovalStatus(r["supervisor_status"]),
        director_status=ApprovalStatus(r["director_status"]),
        final_status=RequestStatus(r["final_status"]),
        decided_at=r.get("decided_at"),
        version=int(r["version"]),
    )
