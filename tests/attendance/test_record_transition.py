from __future__ import annotations

from datetime import date

import pytest

from src.chronosforce.chronosforce.attendance.service import AttendanceService
from src.chronosforce.chronosforce.attendance.strategies.strict_policy import StrictTransitionPolicy
from src.chronosforce.chronosforce.common.datetime_utils import load_zone
from src.chronosforce.chronosforce.core.enums import AttendanceEventType, EmployeeStatus, ProjectStatus
from src.chronosforce.chronosforce.core.exceptions import NotFoundError, ValidationError
from src.chronosforce.chronosforce.projects.model import Project

NEW_YORK = load_zone("America/New_York")


def test_clock_in_appends_record_and_updates_employee(attendance_service, employees_repo, make_employee, fixed_now):
    employees_repo.save(make_employee("e1"))

    result = attendance_service.record_transition("e1", "active", "p2", now=fixed_now)

    assert result.record.type == AttendanceEventType.CLOCK_IN
    assert result.record.project_id == "p2"
    assert result.record.automatic is False
    stored = employees_repo.get_by_id("e1")
    assert stored.status == EmployeeStatus.ACTIVE
    assert stored.active_project_id == "p2"
    assert stored.last_action_time == fixed_now
    assert list(attendance_service.list_records_for_day("e1", date(2024, 6, 3))) == [result.record]


def test_record_falls_back_to_active_project(attendance_service, employees_repo, make_employee, fixed_now):
    employees_repo.save(make_employee("e1", status=EmployeeStatus.ACTIVE, active_project_id="p1"))

    result = attendance_service.record_transition("e1", EmployeeStatus.BREAK, now=fixed_now)

    assert result.record.type == AttendanceEventType.BREAK_START
    assert result.record.project_id == "p1"
    assert result.employee.active_project_id == "p1"


def test_repeated_clock_out_is_recorded_not_rejected(attendance_service, employees_repo, make_employee, fixed_now):
    employees_repo.save(make_employee("e1"))

    first = attendance_service.record_transition("e1", "OFF", now=fixed_now)
    second = attendance_service.record_transition("e1", "OFF", now=fixed_now)

    assert first.record.type == second.record.type == AttendanceEventType.CLOCK_OUT
    assert len(attendance_service.list_records_for_day("e1", date(2024, 6, 3))) == 2


def test_noop_project_change_emits_event_by_default(attendance_service, employees_repo, make_employee, fixed_now):
    employees_repo.save(make_employee("e1", status=EmployeeStatus.ACTIVE))

    result = attendance_service.record_transition("e1", "ACTIVE", "p1", now=fixed_now)

    assert result.record.type == AttendanceEventType.PROJECT_CHANGE


def test_noop_project_change_can_be_suppressed(
    attendance_repo, employees_repo, projects_repo, conn_factory, make_employee, fixed_now
):
    svc = AttendanceService(
        attendance_repo, employees_repo, projects_repo, conn_factory, zone=NEW_YORK, suppress_noop_project_change=True
    )
    employees_repo.save(make_employee("e1", status=EmployeeStatus.ACTIVE))

    result = svc.record_transition("e1", "ACTIVE", "p1", now=fixed_now)

    assert result.record is None
    assert svc.list_records_for_day("e1", date(2024, 6, 3)) == []
    # A real project switch still goes through.
    assert svc.record_transition("e1", "ACTIVE", "p2", now=fixed_now).record is not None


def test_leave_cannot_be_requested_by_clocking(attendance_service, employees_repo, make_employee, fixed_now):
    employees_repo.save(make_employee("e1"))

    with pytest.raises(ValidationError):
        attendance_service.record_transition("e1", "LEAVE", now=fixed_now)


def test_unknown_status_and_employee(attendance_service, employees_repo, make_employee, fixed_now):
    employees_repo.save(make_employee("e1"))

    with pytest.raises(ValidationError):
        attendance_service.record_transition("e1", "SLEEPING", now=fixed_now)
    with pytest.raises(NotFoundError):
        attendance_service.record_transition("ghost", "ACTIVE", now=fixed_now)


def test_project_must_exist_be_open_and_assigned(
    attendance_service, employees_repo, projects_repo, make_employee, fixed_now
):
    projects_repo.save(Project("p9", "Closed", status=ProjectStatus.ENDED))
    projects_repo.save(Project("p3", "Elsewhere"))
    employees_repo.save(make_employee("e1", allowed_project_ids=("p1", "p9")))

    for project_id in ("nope", "p9", "p3"):
        with pytest.raises(ValidationError):
            attendance_service.record_transition("e1", "ACTIVE", project_id, now=fixed_now)

    assert employees_repo.get_by_id("e1").status == EmployeeStatus.OFF


def test_failed_write_rolls_back_append_and_update(
    attendance_service, attendance_repo, employees_repo, make_employee, fixed_now, monkeypatch
):
    employees_repo.save(make_employee("e1"))

    def boom(employee):
        raise RuntimeError("disk full")

    monkeypatch.setattr(employees_repo, "save", boom)

    with pytest.raises(RuntimeError):
        attendance_service.record_transition("e1", "ACTIVE", now=fixed_now)

    assert attendance_repo.list_for_employee("e1") == []
    assert employees_repo.get_by_id("e1").status == EmployeeStatus.OFF


def test_strict_policy_rejects_meaningless_transitions(
    attendance_repo, employees_repo, projects_repo, conn_factory, make_employee, fixed_now
):
    svc = AttendanceService(
        attendance_repo, employees_repo, projects_repo, conn_factory, zone=NEW_YORK, policy=StrictTransitionPolicy()
    )
    employees_repo.save(make_employee("off"))
    employees_repo.save(make_employee("brk", status=EmployeeStatus.BREAK))
    employees_repo.save(make_employee("act", status=EmployeeStatus.ACTIVE))

    with pytest.raises(ValidationError):
        svc.record_transition("off", "OFF", now=fixed_now)
    with pytest.raises(ValidationError):
        svc.record_transition("brk", "BREAK", now=fixed_now)
    with pytest.raises(ValidationError):
        svc.record_transition("act", "ACTIVE", "p1", now=fixed_now)

    assert svc.record_transition("act", "ACTIVE", "p2", now=fixed_now).record.type == AttendanceEventType.PROJECT_CHANGE
    assert svc.record_transition("off", "ACTIVE", now=fixed_now).record.type == AttendanceEventType.CLOCK_IN


def test_list_records_rejects_inverted_range(attendance_service):
    with pytest.raises(ValidationError):
        attendance_service.list_records(start_day=date(2024, 6, 3), end_day=date(2024, 6, 1))


def test_records_are_grouped_by_organisational_day(attendance_service, employees_repo, make_employee, ny):
    employees_repo.save(make_employee("e1"))

    # 23:30 New York on June 3 is already June 4 in UTC.
    late = ny(2024, 6, 3, 23, 30)
    attendance_service.record_transition("e1", "ACTIVE", now=late)

    assert len(attendance_service.list_records_for_day("e1", date(2024, 6, 3))) == 1
    assert attendance_service.list_records_for_day("e1", date(2024, 6, 4)) == []
