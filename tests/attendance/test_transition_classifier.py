import pytest

from src.chronosforce.chronosforce.attendance.factory import (
    AttendanceEventFactory,
    TransitionPolicyFactory,
    classify_transition,
)
from src.chronosforce.chronosforce.attendance.strategies.strict_policy import StrictTransitionPolicy
from src.chronosforce.chronosforce.attendance.strategies.tolerant_policy import TolerantTransitionPolicy
from src.chronosforce.chronosforce.core.enums import AttendanceEventType as T
from src.chronosforce.chronosforce.core.enums import EmployeeStatus as S

EXPECTED = {
    (S.OFF, S.ACTIVE): T.CLOCK_IN,
    (S.OFF, S.OFF): T.CLOCK_OUT,
    (S.OFF, S.BREAK): T.BREAK_START,
    (S.OFF, S.LEAVE): T.PROJECT_CHANGE,
    (S.ACTIVE, S.ACTIVE): T.PROJECT_CHANGE,
    (S.ACTIVE, S.OFF): T.CLOCK_OUT,
    (S.ACTIVE, S.BREAK): T.BREAK_START,
    (S.ACTIVE, S.LEAVE): T.PROJECT_CHANGE,
    (S.BREAK, S.ACTIVE): T.BREAK_END,
    (S.BREAK, S.OFF): T.CLOCK_OUT,
    (S.BREAK, S.BREAK): T.BREAK_START,
    (S.BREAK, S.LEAVE): T.PROJECT_CHANGE,
    (S.LEAVE, S.ACTIVE): T.PROJECT_CHANGE,
    (S.LEAVE, S.OFF): T.CLOCK_OUT,
    (S.LEAVE, S.BREAK): T.BREAK_START,
    (S.LEAVE, S.LEAVE): T.PROJECT_CHANGE,
}


def test_expected_table_covers_every_combination():
    assert set(EXPECTED) == {(c, r) for c in S for r in S}


@pytest.mark.parametrize("current,requested", sorted(EXPECTED, key=lambda k: (k[0].value, k[1].value)))
def test_classification_for_every_combination(current, requested):
    assert classify_transition(current=current, requested=requested) == EXPECTED[(current, requested)]


def test_event_factory_uses_injected_ids(fixed_now):
    ids = iter(["r1", "r2"])
    factory = AttendanceEventFactory(id_factory=lambda: next(ids))

    rec = factory.create(employee_id="e1", event_type=T.CLOCK_IN, timestamp=fixed_now, project_id="p1")
    auto = factory.create(
        employee_id="e1", event_type=T.CLOCK_OUT, timestamp=fixed_now, project_id="p1", automatic=True
    )

    assert (rec.record_id, rec.automatic) == ("r1", False)
    assert (auto.record_id, auto.automatic) == ("r2", True)


def test_policy_factory_picks_policy_from_flag():
    assert isinstance(TransitionPolicyFactory(strict=False).build(), TolerantTransitionPolicy)
    assert isinstance(TransitionPolicyFactory(strict=True).build(), StrictTransitionPolicy)
