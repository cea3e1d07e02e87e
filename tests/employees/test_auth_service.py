from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from src.chronosforce.chronosforce.core.enums import Role
from src.chronosforce.chronosforce.core.exceptions import AuthenticationError, ValidationError
from src.chronosforce.chronosforce.employees.service import AuthService, EmployeeService


def test_login_by_username_or_name(employees_repo, make_employee):
    employees_repo.save(make_employee("e1", name="David Chen", username="david"))
    auth = AuthService(employees_repo)

    by_username = auth.authenticate("DAVID", "secret-pw")
    by_name = auth.authenticate("david chen", "secret-pw")

    assert by_username.employee_id == by_name.employee_id == "e1"
    assert by_username.role == Role.EMPLOYEE
    assert by_username.shift_info == "09:00 - 17:00"


@pytest.mark.parametrize("login,password", [("david", "wrong"), ("nobody", "secret-pw"), ("", "")])
def test_bad_credentials(employees_repo, make_employee, login, password):
    employees_repo.save(make_employee("e1", username="david"))

    with pytest.raises(AuthenticationError):
        AuthService(employees_repo).authenticate(login, password)


def test_inactive_or_corrupt_accounts_cannot_log_in(employees_repo, make_employee):
    employees_repo.save(make_employee("e1", username="gone", is_active=False))
    employees_repo.save(make_employee("e2", username="broken", password_hash="not-a-hash"))
    auth = AuthService(employees_repo)

    with pytest.raises(AuthenticationError):
        auth.authenticate("gone", "secret-pw")
    with pytest.raises(AuthenticationError):
        auth.authenticate("broken", "secret-pw")


def test_change_password(employees_repo, make_employee):
    employees_repo.save(make_employee("e1"))
    auth = AuthService(employees_repo)

    for new, confirm in (("short", "short"), ("password123", "password123"), ("long-enough", "different")):
        with pytest.raises(ValidationError):
            auth.change_password(employee_id="e1", new_password=new, confirm_password=confirm)

    auth.change_password(employee_id="e1", new_password="long-enough", confirm_password="long-enough")

    assert check_password_hash(employees_repo.get_by_id("e1").password_hash, "long-enough")


def test_reports_and_edit_rights(employees_repo, org_chart):
    service = EmployeeService(employees_repo, root_employee_id="dev-root")

    assert {e.employee_id for e in service.list_reports(viewer_id="sup1")} == {"tl1", "e1"}
    assert {e.employee_id for e in service.list_reports(viewer_id="dev-root")} == set(org_chart) - {"dev-root"}
    assert service.list_reports(viewer_id="e1") == []
    assert service.can_edit(actor_id="sup1", target_id="tl1")
    assert not service.can_edit(actor_id="tl1", target_id="sup1")
