from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterable, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import (
    as_utc,
    org_date,
    org_day_bounds,
    parse_hhmm,
    to_org_time,
    utc_now,
    whole_minutes_between,
)
from ..common.validators import require_enum
from ..core.enums import AttendanceEventType, EmployeeStatus, RequestStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..database.connection import DatabaseConnection
from ..database.sql_base import db_transaction
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.model import LeaveRequest
from ..leaves.repository import LeaveRequestRepository
from ..projects.repository import ProjectRepository
from .factory import AttendanceEventFactory, classify_transition
from .model import AttendanceRecord, DailyActivityLog, LoginStatus, TickResult, TransitionResult
from .repository import AttendanceRepository
from .strategies.base import TransitionPolicy
from .strategies.tolerant_policy import TolerantTransitionPolicy

logger = logging.getLogger(__name__)

_ON_SHIFT = {EmployeeStatus.ACTIVE, EmployeeStatus.BREAK}
_WORKING_EVENTS = {
    AttendanceEventType.CLOCK_IN,
    AttendanceEventType.BREAK_END,
    AttendanceEventType.PROJECT_CHANGE,
}


class AttendanceService:
    """Attendance state engine.

    Owns the event log and keeps each employee's cached ``status`` reconcilable
    with it. Business mismatches (clocking out while off, ...) are recorded, not
    rejected, unless the configured ``TransitionPolicy`` says otherwise.
    """

    def __init__(
        self,
        attendance: AttendanceRepository,
        employees: EmployeeRepository,
        projects: ProjectRepository,
        conn_factory: DatabaseConnection,
        *,
        zone: ZoneInfo,
        leaves: LeaveRequestRepository | None = None,
        policy: TransitionPolicy | None = None,
        event_factory: AttendanceEventFactory | None = None,
        suppress_noop_project_change: bool = False,
    ):
        self._attendance = attendance
        self._employees = employees
        self._projects = projects
        self._conn_factory = conn_factory
        self._zone = zone
        self._leaves = leaves
        self._policy = policy or TolerantTransitionPolicy()
        self._events = event_factory or AttendanceEventFactory()
        self._suppress_noop_project_change = bool(suppress_noop_project_change)
        self._last_rollover: Optional[date] = None

    @property
    def zone(self) -> ZoneInfo:
        return self._zone

    # Transitions

    def record_transition(
        self,
        employee_id: str,
        requested_status,
        project_id: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> TransitionResult:
        requested = require_enum(requested_status, EmployeeStatus, "Status")
        if requested == EmployeeStatus.LEAVE:
            raise ValidationError("LEAVE is granted by leave approval, not by clocking")
        now = as_utc(now or utc_now())

        with db_transaction(self._conn_factory):
            employee = self._require_employee(employee_id)
            project_id = self._validate_project(employee, project_id)
            event_type = classify_transition(current=employee.status, requested=requested)

            if self._suppress_noop_project_change and self._is_noop(employee, requested, project_id, event_type):
                logger.debug("ignored no-op project change for %s", employee.employee_id)
                return TransitionResult(employee=employee, record=None)

            self._policy.check(employee=employee, requested=requested, project_id=project_id, event_type=event_type)
            return self._apply(employee, event_type=event_type, status=requested, project_id=project_id, now=now)

    @staticmethod
    def _is_noop(employee: Employee, requested: EmployeeStatus, project_id: Optional[str], event_type) -> bool:
        return (
            event_type == AttendanceEventType.PROJECT_CHANGE
            and requested == employee.status
            and (project_id is None or project_id == employee.active_project_id)
        )

    def _apply(
        self,
        employee: Employee,
        *,
        event_type: AttendanceEventType,
        status: EmployeeStatus,
        project_id: Optional[str],
        now: datetime,
        automatic: bool = False,
    ) -> TransitionResult:
        effective_project = project_id or employee.active_project_id
        record = self._events.create(
            employee_id=employee.employee_id,
            event_type=event_type,
            timestamp=now,
            project_id=effective_project,
            automatic=automatic,
        )
        # Minute accrual restarts whenever the employee leaves or re-enters ACTIVE.
        keep_tick = status == EmployeeStatus.ACTIVE and employee.status == EmployeeStatus.ACTIVE
        updated = replace(
            employee,
            status=status,
            active_project_id=effective_project,
            last_action_time=now,
            last_tick_time=employee.last_tick_time if keep_tick else None,
        )

        with db_transaction(self._conn_factory):
            self._attendance.append(record)
            self._employees.save(updated)

        logger.info(
            "%s: %s -> %s (%s%s)",
            employee.employee_id,
            employee.status.value,
            status.value,
            event_type.value,
            ", automatic" if automatic else "",
        )
        return TransitionResult(employee=updated, record=record)

    # Session start

    def derive_login_status(
        self,
        employee: Employee,
        records: Iterable[AttendanceRecord],
        *,
        now: datetime,
        approved_leaves: Iterable[LeaveRequest] = (),
    ) -> LoginStatus:
        """Reconstruct the live status from today's part of the event log.

        Pure: the same inputs always give the same answer. The cached ``status``
        is never consulted; LEAVE comes only from an approved request covering
        today.
        """
        today = org_date(now, self._zone)
        todays = sorted(
            (
                r
                for r in records
                if r.employee_id == employee.employee_id and org_date(r.timestamp, self._zone) == today
            ),
            key=lambda r: as_utc(r.timestamp),
        )
        last = todays[-1] if todays else None

        if last is None and any(_covers(r, employee.employee_id, today) for r in approved_leaves):
            return LoginStatus(status=EmployeeStatus.LEAVE, active_project_id=employee.active_project_id)

        if last is None or last.type == AttendanceEventType.CLOCK_OUT:
            wall_clock = to_org_time(now, self._zone).time()
            return LoginStatus(
                status=EmployeeStatus.OFF,
                active_project_id=employee.active_project_id,
                clock_in_reminder=employee.shift.has_started(wall_clock),
                last_record=last,
            )

        if last.type in _WORKING_EVENTS:
            return LoginStatus(
                status=EmployeeStatus.ACTIVE,
                active_project_id=last.project_id or employee.active_project_id,
                last_record=last,
            )

        return LoginStatus(status=EmployeeStatus.BREAK, active_project_id=employee.active_project_id, last_record=last)

    def sync_login_status(self, employee_id: str, *, now: datetime | None = None) -> tuple[Employee, LoginStatus]:
        now = as_utc(now or utc_now())
        with db_transaction(self._conn_factory):
            employee = self._require_employee(employee_id)
            records = self.list_records_for_day(employee.employee_id, org_date(now, self._zone))
            approved = (
                self._leaves.list_all(status=RequestStatus.APPROVED, employee_id=employee.employee_id)
                if self._leaves is not None
                else ()
            )
            derived = self.derive_login_status(employee, records, now=now, approved_leaves=approved)

            if (employee.status, employee.active_project_id) != (derived.status, derived.active_project_id):
                logger.info(
                    "%s: cached status %s reconciled to %s from the event log",
                    employee.employee_id,
                    employee.status.value,
                    derived.status.value,
                )
                keep_tick = employee.status == derived.status
                employee = replace(
                    employee,
                    status=derived.status,
                    active_project_id=derived.active_project_id,
                    last_tick_time=employee.last_tick_time if keep_tick else None,
                )
                self._employees.save(employee)

        return employee, derived

    # Periodic checks

    def tick_shift_boundary(self, employee_id: str, *, now: datetime | None = None) -> TickResult:
        """Force clock-out after shift end (unless OT) and accrue worked minutes.

        The only place where status changes without a user action. The accrual
        baseline lives on the employee row, so it survives restarts and rolls
        back with the rest of the tick.
        """
        now = as_utc(now or utc_now())
        with db_transaction(self._conn_factory):
            employee = self._require_employee(employee_id)

            if employee.status in _ON_SHIFT and not employee.ot_enabled and self._shift_is_over(employee, now):
                result = self._apply(
                    employee,
                    event_type=AttendanceEventType.CLOCK_OUT,
                    status=EmployeeStatus.OFF,
                    project_id=None,
                    now=now,
                    automatic=True,
                )
                return TickResult(employee=result.employee, forced_clock_out=True, record=result.record)

            if employee.status != EmployeeStatus.ACTIVE:
                if employee.last_tick_time is not None:
                    employee = replace(employee, last_tick_time=None)
                    self._employees.save(employee)
                return TickResult(employee=employee)

            baseline = employee.last_tick_time
            if baseline is None:
                # No previous tick known: count the tick itself as one minute.
                minutes, next_baseline = 1, now
            else:
                minutes = whole_minutes_between(baseline, now)
                if minutes == 0:
                    return TickResult(employee=employee)
                # Advance by whole minutes only so partial minutes carry over.
                next_baseline = baseline + timedelta(minutes=minutes)

            employee = replace(
                employee,
                total_minutes_worked_today=employee.total_minutes_worked_today + minutes,
                last_tick_time=next_baseline,
            )
            self._employees.save(employee)
            return TickResult(employee=employee, minutes_added=minutes)

    def _shift_is_over(self, employee: Employee, now: datetime) -> bool:
        """Whether ``now`` is past the end of the shift occurrence the employee clocked into."""
        clocked_in = self._last_clock_in(employee.employee_id, now) or employee.last_action_time or now
        shift_end = employee.shift.end_for(to_org_time(clocked_in, self._zone))
        return as_utc(shift_end) <= now

    def _last_clock_in(self, employee_id: str, now: datetime) -> Optional[datetime]:
        # A shift never spans more than two organisational days.
        today = org_date(now, self._zone)
        start, _ = org_day_bounds(today - timedelta(days=1), self._zone)
        records = self._attendance.list_between(start=start, end=now + timedelta(microseconds=1), employee_id=employee_id)
        clock_ins = [r.timestamp for r in records if r.type == AttendanceEventType.CLOCK_IN]
        return clock_ins[-1] if clock_ins else None

    def reset_daily_totals(self, day: date) -> int:
        """Zero every worked-minutes counter once per organisational day."""
        with db_transaction(self._conn_factory):
            if self._last_rollover == day:
                return 0
            count = 0
            for employee in self._employees.list_all():
                if employee.total_minutes_worked_today or employee.last_tick_time is not None:
                    self._employees.save(replace(employee, total_minutes_worked_today=0, last_tick_time=None))
                    if employee.total_minutes_worked_today:
                        count += 1
            self._last_rollover = day

        logger.info("day rollover %s: reset %d worked-minute counters", day.isoformat(), count)
        return count

    def roll_over(self, *, now: datetime | None = None) -> int:
        return self.reset_daily_totals(org_date(as_utc(now or utc_now()), self._zone))

    # Queries

    def list_records_for_day(self, employee_id: str, day: date) -> Sequence[AttendanceRecord]:
        start, end = org_day_bounds(day, self._zone)
        return self._attendance.list_between(start=start, end=end, employee_id=employee_id)

    def list_records(
        self,
        *,
        start_day: date,
        end_day: date,
        employee_id: Optional[str] = None,
    ) -> Sequence[AttendanceRecord]:
        if end_day < start_day:
            raise ValidationError("End date must not be before start date")
        start, _ = org_day_bounds(start_day, self._zone)
        _, end = org_day_bounds(end_day, self._zone)
        return self._attendance.list_between(start=start, end=end, employee_id=employee_id)

    # Daily activity logs

    def submit_activity_log(
        self,
        employee_id: str,
        *,
        work_date: date,
        start_time: str,
        end_time: str,
        overtime_hours: float = 0,
        project_ids: Optional[Sequence[str]] = (),
        note: str = "",
        now: datetime | None = None,
    ) -> DailyActivityLog:
        employee = self._require_employee(employee_id)

        start_t = parse_hhmm(start_time)
        end_t = parse_hhmm(end_time)
        if end_t < start_t:
            raise ValidationError("End time must not be before start time")

        try:
            overtime = float(overtime_hours or 0)
        except (TypeError, ValueError):
            raise ValidationError("Overtime hours must be a number")
        if overtime < 0:
            raise ValidationError("Overtime hours must not be negative")

        if project_ids is None:
            project_ids = ()
        if not isinstance(project_ids, (list, tuple)):
            raise ValidationError("Project ids must be a list")
        projects = tuple(dict.fromkeys(str(p) for p in project_ids))
        for project_id in projects:
            self._validate_project(employee, project_id)

        log = DailyActivityLog(
            log_id=uuid.uuid4().hex,
            employee_id=employee.employee_id,
            work_date=work_date,
            start_time=start_t,
            end_time=end_t,
            overtime_hours=overtime,
            project_ids=projects,
            note=(note or "").strip(),
            submitted_at=as_utc(now or utc_now()),
        )
        self._attendance.add_activity_log(log)
        logger.info("%s: activity log submitted for %s", employee.employee_id, work_date.isoformat())
        return log

    def list_activity_logs(self, employee_id: str) -> Sequence[DailyActivityLog]:
        return self._attendance.list_activity_logs(employee_id)

    # Helpers

    def _require_employee(self, employee_id: str) -> Employee:
        if not employee_id:
            raise ValidationError("Employee id is required")
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError(f"Employee {employee_id} does not exist")
        return employee

    def _validate_project(self, employee: Employee, project_id: Optional[str]) -> Optional[str]:
        if not project_id:
            return None
        project = self._projects.get_by_id(project_id)
        if project is None:
            raise ValidationError(f"Unknown project {project_id}")
        if not project.is_open:
            raise ValidationError(f"Project {project.name} has ended")
        if not employee.may_work_on(project_id):
            raise ValidationError(f"{employee.name} is not assigned to project {project.name}")
        return project_id


def _covers(request: LeaveRequest, employee_id: str, day: date) -> bool:
    return (
        request.employee_id == employee_id
        and request.final_status == RequestStatus.APPROVED
        and request.start_date <= day <= request.end_date
    )
