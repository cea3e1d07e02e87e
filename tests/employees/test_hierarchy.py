from __future__ import annotations

from src.chronosforce.chronosforce.core.enums import Role
from src.chronosforce.chronosforce.employees.hierarchy import can_edit, can_view, iter_supervisors


def test_transitive_visibility(employees_repo, make_employee):
    # A <- B <- C, D unrelated
    for emp in (
        make_employee("A", Role.DIRECTOR),
        make_employee("B", Role.SUPERVISOR, supervisor_id="A"),
        make_employee("C", Role.EMPLOYEE, supervisor_id="B"),
        make_employee("D", Role.DIRECTOR),
        make_employee("dev-root", Role.ADMIN),
    ):
        employees_repo.save(emp)

    def sees(viewer, employee):
        return can_view(employees_repo, viewer_id=viewer, employee_id=employee, root_id="dev-root")

    assert sees("A", "C")
    assert sees("B", "C")
    assert sees("A", "B")
    assert not sees("C", "A")
    assert not sees("D", "C")
    assert not sees("C", "C")
    assert sees("dev-root", "C")
    assert sees("dev-root", "D")


def test_supervisor_walk_order(employees_repo, make_employee):
    employees_repo.save(make_employee("A"))
    employees_repo.save(make_employee("B", supervisor_id="A"))
    employees_repo.save(make_employee("C", supervisor_id="B"))

    assert list(iter_supervisors(employees_repo, "C")) == ["B", "A"]


def test_cycle_terminates_as_not_visible(employees_repo, make_employee):
    employees_repo.save(make_employee("X", supervisor_id="Y"))
    employees_repo.save(make_employee("Y", supervisor_id="X"))
    employees_repo.save(make_employee("Z"))

    assert list(iter_supervisors(employees_repo, "X")) == ["Y"]
    assert not can_view(employees_repo, viewer_id="Z", employee_id="X")


def test_missing_supervisor_record_ends_walk(employees_repo, make_employee):
    employees_repo.save(make_employee("C", supervisor_id="deleted"))

    assert list(iter_supervisors(employees_repo, "C")) == ["deleted"]
    assert not can_view(employees_repo, viewer_id="someone", employee_id="C")
    assert not can_view(employees_repo, viewer_id="someone", employee_id="unknown")


def test_edit_permission_follows_role_weight(make_employee):
    admin = make_employee("a", Role.ADMIN)
    top = make_employee("t", Role.TOP_MANAGEMENT)
    director = make_employee("d", Role.DIRECTOR)
    other_director = make_employee("d2", Role.DIRECTOR)
    lead = make_employee("l", Role.TEAM_LEAD)

    assert can_edit(admin, top)
    assert can_edit(top, admin)
    assert can_edit(director, lead)
    assert not can_edit(director, other_director)
    assert not can_edit(lead, director)


def test_role_order():
    assert Role.EMPLOYEE < Role.TEAM_LEAD < Role.SUPERVISOR < Role.DIRECTOR < Role.TOP_MANAGEMENT < Role.ADMIN
    assert max(Role) == Role.ADMIN
