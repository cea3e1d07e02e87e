from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    Float,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    Time,
)
from sqlalchemy.types import TypeDecorator


class UtcDateTime(TypeDecorator):
    """Stores aware datetimes as naive UTC and hands them back as aware UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


metadata = MetaData()

employees = Table(
    "employees",
    metadata,
    Column("employee_id", String(64), primary_key=True),
    Column("code", String(32), nullable=False),
    Column("name", String(120), nullable=False),
    Column("username", String(64), nullable=False, unique=True),
    Column("role", String(32), nullable=False),
    Column("shift_start", Time, nullable=False),
    Column("shift_end", Time, nullable=False),
    Column("password_hash", String(255), nullable=False, default=""),
    Column("email", String(255), nullable=False, default=""),
    Column("supervisor_id", String(64), nullable=True, index=True),
    Column("allowed_project_ids", JSON, nullable=False),
    Column("active_project_id", String(64), nullable=True),
    Column("status", String(16), nullable=False),
    Column("last_action_time", UtcDateTime(), nullable=True),
    Column("last_tick_time", UtcDateTime(), nullable=True),
    Column("total_minutes_worked_today", Integer, nullable=False, default=0),
    Column("ot_enabled", Boolean, nullable=False, default=False),
    Column("is_active", Boolean, nullable=False, default=True),
)

projects = Table(
    "projects",
    metadata,
    Column("project_id", String(64), primary_key=True),
    Column("name", String(120), nullable=False),
    Column("client", String(120), nullable=False, default=""),
    Column("type", String(16), nullable=False),
    Column("status", String(16), nullable=False),
    Column("director_id", String(64), nullable=True),
    Column("team_lead_id", String(64), nullable=True),
    Column("start_date", Date, nullable=True),
    Column("end_date", Date, nullable=True),
)

# Append-only; seq keeps same-instant events in insertion order.
attendance_records = Table(
    "attendance_records",
    metadata,
    Column("seq", Integer, primary_key=True, autoincrement=True),
    Column("record_id", String(64), nullable=False, unique=True),
    Column("employee_id", String(64), nullable=False),
    Column("type", String(16), nullable=False),
    Column("timestamp", UtcDateTime(), nullable=False),
    Column("project_id", String(64), nullable=True),
    Column("automatic", Boolean, nullable=False, default=False),
    Index("ix_attendance_records_employee_ts", "employee_id", "timestamp"),
)

activity_logs = Table(
    "activity_logs",
    metadata,
    Column("log_id", String(64), primary_key=True),
    Column("employee_id", String(64), nullable=False, index=True),
    Column("work_date", Date, nullable=False),
    Column("start_time", Time, nullable=False),
    Column("end_time", Time, nullable=False),
    Column("overtime_hours", Float, nullable=False, default=0),
    Column("project_ids", JSON, nullable=False),
    Column("note", Text, nullable=False, default=""),
    Column("submitted_at", UtcDateTime(), nullable=True),
)

leave_requests = Table(
    "leave_requests",
    metadata,
    Column("request_id", String(64), primary_key=True),
    Column("employee_id", String(64), nullable=False, index=True),
    Column("employee_name", String(120), nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=False),
    Column("reason", Text, nullable=False),
    Column("created_at", UtcDateTime(), nullable=False),
    Column("team_lead_status", String(16), nullable=False),
    Column("supervisor_status", String(16), nullable=False),
    Column("director_status", String(16), nullable=False),
    Column("final_status", String(16), nullable=False, index=True),
    Column("decided_at", UtcDateTime(), nullable=True),
    Column("version", Integer, nullable=False, default=1),
)
