from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import LeaveRequest


class LeaveRequestRepository(Protocol):
    def create(self, request: LeaveRequest) -> None:
        raise NotImplementedError

    def get(self, request_id: str) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_all(
        self,
        *,
        status: Optional[RequestStatus] = None,
        employee_id: Optional[str] = None,
    ) -> Sequence[LeaveRequest]:
        """Newest first."""

        raise NotImplementedError

    def compare_and_set(self, request: LeaveRequest, *, expected_version: int) -> bool:
        """Replace the stored request only if its version is still ``expected_version``.

        Lanes and final status are written together as one unit.
        """

        raise NotImplementedError

    def delete(self, request_id: str) -> bool:
        raise NotImplementedError
