from __future__ import annotations

from datetime import date

from src.chronosforce.chronosforce.reports.service import WorkedTimeReportService


def _work_day(attendance_service, ny, employee_id, day, start_hour, end_hour):
    attendance_service.record_transition(employee_id, "ACTIVE", now=ny(2024, 6, day, start_hour))
    attendance_service.record_transition(employee_id, "OFF", now=ny(2024, 6, day, end_hour))


def test_report_is_scoped_to_viewer_and_reporting_line(attendance_service, employees_repo, org_chart, ny):
    _work_day(attendance_service, ny, "e1", 3, 9, 17)
    _work_day(attendance_service, ny, "e1", 4, 9, 12)
    _work_day(attendance_service, ny, "tl1", 3, 8, 16)
    _work_day(attendance_service, ny, "outsider", 3, 9, 10)
    service = WorkedTimeReportService(attendance_service, employees_repo, root_employee_id="dev-root")

    lead_view = service.build_report(start=date(2024, 6, 3), end=date(2024, 6, 4), viewer_id="tl1")

    assert [(row.employee_id, row.work_date) for row in lead_view.rows] == [
        ("e1", date(2024, 6, 3)),
        ("tl1", date(2024, 6, 3)),
        ("e1", date(2024, 6, 4)),
    ]
    first = lead_view.rows[0]
    assert first.worked.worked_minutes == 480
    assert first.supervisor_name == "Employee tl1"
    assert first.shift == "09:00 - 17:00"
    assert lead_view.summary[0] == {
        "employee_id": "e1",
        "employee_name": "Employee e1",
        "worked_minutes": 660,
        "break_minutes": 0,
    }


def test_root_sees_everyone_and_filter_narrows(attendance_service, employees_repo, org_chart, ny):
    _work_day(attendance_service, ny, "e1", 3, 9, 17)
    _work_day(attendance_service, ny, "outsider", 3, 9, 10)
    service = WorkedTimeReportService(attendance_service, employees_repo, root_employee_id="dev-root")

    everyone = service.build_report(start=date(2024, 6, 3), end=date(2024, 6, 3), viewer_id="dev-root")
    only_e1 = service.build_report(
        start=date(2024, 6, 3), end=date(2024, 6, 3), viewer_id="dev-root", employee_id="e1"
    )
    employee_view = service.build_report(start=date(2024, 6, 3), end=date(2024, 6, 3), viewer_id="e1")

    assert {row.employee_id for row in everyone.rows} == {"e1", "outsider"}
    assert [row.employee_id for row in only_e1.rows] == ["e1"]
    assert [row.employee_id for row in employee_view.rows] == ["e1"]
