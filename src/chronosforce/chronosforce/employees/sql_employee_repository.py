from __future__ import annotations

from typing import Any, Dict, Optional, Sequence

from sqlalchemy import func, or_, select, update

from ..core.enums import EmployeeStatus, Role
from ..database.connection import DatabaseConnection
from ..database.schema import employees
from ..database.sql_base import db_transaction, fetchall, fetchone
from ..shifts.model import Shift
from .model import Employee
from .repository import EmployeeRepository


class SqlEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        if employee_id is None:
            return None
        with db_transaction(self._conn_factory) as conn:
            row = fetchone(conn.execute(select(employees).where(employees.c.employee_id == str(employee_id))))
            return _to_employee(row) if row else None

    def get_by_login(self, login: str) -> Optional[Employee]:
        key = (login or "").strip().lower()
        if not key:
            return None
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(
                conn.execute(
                    select(employees)
                    .where(or_(func.lower(employees.c.name) == key, func.lower(employees.c.username) == key))
                    .order_by(employees.c.employee_id)
                )
            )
        # SQL lower() is ASCII-only on some backends; matches_login has the final say.
        for row in rows:
            employee = _to_employee(row)
            if employee.matches_login(login):
                return employee
        return None

    def list_all(self) -> Sequence[Employee]:
        with db_transaction(self._conn_factory) as conn:
            rows = fetchall(conn.execute(select(employees).order_by(employees.c.employee_id)))
            return [_to_employee(r) for r in rows]

    def save(self, employee: Employee) -> None:
        values = _to_row(employee)
        with db_transaction(self._conn_factory) as conn:
            updated = conn.execute(
                update(employees).where(employees.c.employee_id == employee.employee_id).values(**values)
            )
            if updated.rowcount == 0:
                conn.execute(employees.insert().values(employee_id=employee.employee_id, **values))


def _to_row(employee: Employee) -> Dict[str, Any]:
    return {
        "code": employee.code,
        "name": employee.name,
        "username": employee.username,
        "role": employee.role.value,
        "shift_start": employee.shift.start,
        "shift_end": employee.shift.end,
        "password_hash": employee.password_hash,
        "email": employee.email,
        "supervisor_id": employee.supervisor_id,
        "allowed_project_ids": list(employee.allowed_project_ids),
        "active_project_id": employee.active_project_id,
        "status": employee.status.value,
        "last_action_time": employee.last_action_time,
        "last_tick_time": employee.last_tick_time,
        "total_minutes_worked_today": int(employee.total_minutes_worked_today),
        "ot_enabled": bool(employee.ot_enabled),
        "is_active": bool(employee.is_active),
    }


def _to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=r["employee_id"],
        code=r["code"],
        name=r["name"],
        username=r["username"],
        role=Role(r["role"]),
        shift=Shift(start=r["shift_start"], end=r["shift_end"]),
        password_hash=r.get("password_hash") or "",
        email=r.get("email") or "",
        supervisor_id=r.get("supervisor_id"),
        allowed_project_ids=tuple(r.get("allowed_project_ids") or ()),
        active_project_id=r.get("active_project_id"),
        status=EmployeeStatus(r["status"]),
        last_action_time=r.get("last_action_time"),
        last_tick_time=r.get("last_tick_time"),
        total_minutes_worked_today=int(r.get("total_minutes_worked_today") or 0),
        ot_enabled=bool(r.get("ot_enabled")),
        is_active=bool(r.get("is_active")),
    )
