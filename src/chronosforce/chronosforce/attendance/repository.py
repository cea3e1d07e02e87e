from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import AttendanceRecord, DailyActivityLog


class AttendanceRepository(Protocol):
    def append(self, record: AttendanceRecord) -> None:
        """Append-only: records are never updated or removed."""

        raise NotImplementedError

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        """Records with ``start <= timestamp < end``, ascending by timestamp."""

        raise NotImplementedError

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def add_activity_log(self, log: DailyActivityLog) -> None:
        raise NotImplementedError

    def list_activity_logs(self, employee_id: str) -> Sequence[DailyActivityLog]:
        raise NotImplementedError
