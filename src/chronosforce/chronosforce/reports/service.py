from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..attendance.model import AttendanceRecord
from ..attendance.service import AttendanceService
from ..common.datetime_utils import org_date
from ..core.constants import DEFAULT_ROOT_EMPLOYEE_ID
from ..employees.hierarchy import can_view
from ..employees.repository import EmployeeRepository
from .calculator.base import WorkedTimeCalculator
from .calculator.standard_calculator import StandardWorkedTimeCalculator
from .model import WorkedTimeRow


@dataclass(frozen=True)
class ReportData:
    rows: list[WorkedTimeRow]
    summary: list[dict]


class WorkedTimeReportService:
    def __init__(
        self,
        attendance: AttendanceService,
        employees: EmployeeRepository,
        *,
        calculator: Optional[WorkedTimeCalculator] = None,
        root_employee_id: str = DEFAULT_ROOT_EMPLOYEE_ID,
    ):
        self._attendance = attendance
        self._employees = employees
        self._calculator = calculator or StandardWorkedTimeCalculator()
        self._root_employee_id = root_employee_id

    def build_report(
        self,
        *,
        start: date,
        end: date,
        viewer_id: str,
        employee_id: Optional[str] = None,
    ) -> ReportData:
        """Per employee-day worked time for the viewer and everyone below them."""
        records = self._attendance.list_records(start_day=start, end_day=end, employee_id=employee_id)

        grouped: dict[tuple[str, date], list[AttendanceRecord]] = defaultdict(list)
        for r in records:
            if self._may_see(viewer_id, r.employee_id):
                grouped[(r.employee_id, org_date(r.timestamp, self._attendance.zone))].append(r)

        rows: list[WorkedTimeRow] = []
        totals: dict[str, dict] = {}
        for (emp_id, day), day_records in sorted(grouped.items(), key=lambda item: (item[0][1], item[0][0])):
            employee = self._employees.get_by_id(emp_id)
            if employee is None:
                continue
            supervisor = self._employees.get_by_id(employee.supervisor_id) if employee.supervisor_id else None
            worked = self._calculator.summarize(day_records)

            rows.append(
                WorkedTimeRow(
                    employee_id=emp_id,
                    employee_name=employee.name,
                    employee_code=employee.code,
                    supervisor_name=supervisor.name if supervisor else None,
                    work_date=day,
                    shift=employee.shift.label(),
                    worked=worked,
                    ot_enabled=employee.ot_enabled,
                )
            )

            s = totals.get(emp_id)
            if not s:
                s = {"employee_id": emp_id, "employee_name": employee.name, "worked_minutes": 0, "break_minutes": 0}
                totals[emp_id] = s
            s["worked_minutes"] += worked.worked_minutes
            s["break_minutes"] += worked.break_minutes

        summary = sorted(totals.values(), key=lambda x: x["worked_minutes"], reverse=True)
        return ReportData(rows=rows, summary=summary)

    def _may_see(self, viewer_id: str, employee_id: str) -> bool:
        if viewer_id == employee_id:
            return True
        return can_view(self._employees, viewer_id=viewer_id, employee_id=employee_id, root_id=self._root_employee_id)
