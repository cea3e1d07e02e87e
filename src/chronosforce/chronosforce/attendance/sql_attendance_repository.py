from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from ..common.datetime_utils import as_utc
from ..core.enums import AttendanceEventType
from ..database.connection import DatabaseConnection
from ..database.schema import activity_logs, attendance_records
from ..database.sql_base import db_transaction, fetchall
from .model import AttendanceRecord, DailyActivityLog
from .repository import AttendanceRepository


class SqlAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def append(self, record: AttendanceRecord) -> None:
        with db_transaction(self._conn_factory) as conn:
            try:
                conn.execute(
                    attendance_records.insert().values(
                        record_id=record.record_id,
                        employee_id=record.employee_id,
                        type=record.type.value,
                        timestamp=as_utc(record.timestamp),
                        project_id=record.project_id,
                        automatic=bool(record.automatic),
                    )
                )
            except IntegrityError as exc:
                raise ValueError(f"Duplicate attendance record id: {record.record_id}") from exc

    def list_between(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        query = select(attendance_records).where(
            attendance_records.c.timestamp >= as_utc(start),
            attendance_records.c.timestamp < as_utc(end),
        )
        if employee_id is not None:
            query = query.where(attendance_records.c.employee_id == employee_id)
        return self._ordered(query)

    def list_for_employee(self, employee_id: str) -> Sequence[AttendanceRecord]:
        return self._ordered(select(attendance_records).where(attendance_records.c.employee_id == employee_id))

    def add_activity_log(self, log: DailyActivityLog) -> None:
        with db_transaction(self._conn_factory) as conn:
            conn.execute(
                activity_logs.insert().values(
                    log_id=log.log_id,
                    employee_id=log.employee_id,
                    work_date=log.work_date,
                    start_time=log.start_time,
                    end_time=log.end_time,
                    overtime_hours=float(log.overtime_hours),
                    project_ids=list(log.project_ids),
                    note=log.note,
                    submitted_at=log.submitted_at,
                )
            )

    def list_activity_logs(self, employee_id: str) -> Sequence[DailyActivityLog]:
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(
                conn.execute(
                    select(activity_logs)
                    .where(activity_logs.c.employee_id == employee_id)
                    .order_by(activity_logs.c.work_date, activity_logs.c.start_time)
                )
            )
        return [_to_log(r) for r in rows]

    def _ordered(self, query) -> list[AttendanceRecord]:
        # seq breaks ties so same-instant events keep their append order.
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(conn.execute(query.order_by(attendance_records.c.timestamp, attendance_records.c.seq)))
        return [_to_record(r) for r in rows]


def _to_record(r: Dict[str, Any]) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=r["record_id"],
        employee_id=r["employee_id"],
        type=AttendanceEventType(r["type"]),
        timestamp=r["timestamp"],
        project_id=r.get("project_id"),
        automatic=bool(r.get("automatic")),
    )


def _to_log(r: Dict[str, Any]) -> DailyActivityLog:
    return DailyActivityLog(
        log_id=r["log_id"],
        employee_id=r["employee_id"],
        work_date=r["work_date"],
        start_time=r["start_time"],
        end_time=r["end_time"],
        overtime_hours=float(r["overtime_hours"]),
        project_ids=tuple(r.get("project_ids") or ()),
        note=r.get("note") or "",
        submitted_at=r.get("submitted_at"),
    )
