"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the attendance and approval rules live in the services.
"""

from datetime import date, datetime, timezone

from src.chronosforce.chronosforce.container import build_container
from src.chronosforce.chronosforce.main import load_settings


def main():
    settings = load_settings({"SEED_DEMO_DATA": True, "DATABASE_URL": "sqlite://"})
    container = build_container(settings=settings)

    # 09:30 and 12:00 in New York (EDT)
    morning = datetime(2024, 6, 3, 13, 30, tzinfo=timezone.utc)
    noon = datetime(2024, 6, 3, 16, 0, tzinfo=timezone.utc)

    _, status = container.attendance_service.sync_login_status("e2", now=morning)
    print("login:", status.status.value, "reminder" if status.clock_in_reminder else "")

    container.attendance_service.record_transition("e2", "ACTIVE", "p1", now=morning)
    container.attendance_service.record_transition("e2", "BREAK", now=noon)

    request = container.leave_service.submit(
        employee_id="e2",
        start_date=date(2024, 6, 10),
        end_date=date(2024, 6, 12),
        reason="Family trip",
        now=noon,
    )
    for approver in ("tl1", "sup1", "dir1"):
        outcome = container.leave_service.approve(request_id=request.request_id, viewer_id=approver, now=noon)
        print(approver, "->", outcome.stage.value if outcome.stage else None, outcome.request.final_status.value)

    report = container.report_service.build_report(start=date(2024, 6, 3), end=date(2024, 6, 3), viewer_id="dev-root")
    for row in report.rows:
        print(row.employee_name, row.work_date, row.worked.worked_minutes, "min worked")


if __name__ == "__main__":
    main()
