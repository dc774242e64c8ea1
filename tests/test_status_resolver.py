from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest

from coursework.services.status_resolver import AssignmentStatus, lateness, resolve

DEADLINE = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_assignment(*student_ids, deadline=DEADLINE):
    return SimpleNamespace(
        deadline=deadline,
        status="Pending",
        submissions=[SimpleNamespace(student_id=s) for s in student_ids],
    )


@pytest.mark.parametrize("viewer", [1, 2, 99])
def test_past_deadline_without_submissions_is_overdue_for_everyone(viewer):
    now = datetime(2024, 1, 2, tzinfo=timezone.utc)
    assert resolve(make_assignment(), viewer, now) is AssignmentStatus.OVERDUE


def test_deadline_itself_is_not_overdue():
    assert resolve(make_assignment(), 1, DEADLINE) is AssignmentStatus.PENDING


def test_moving_now_past_deadline_turns_pending_into_overdue():
    assignment = make_assignment()
    assert resolve(assignment, 1, DEADLINE - timedelta(days=1)) is AssignmentStatus.PENDING
    assert resolve(assignment, 1, DEADLINE + timedelta(seconds=1)) is AssignmentStatus.OVERDUE


def test_submitted_is_stable_regardless_of_time():
    assignment = make_assignment(1)
    for now in (DEADLINE - timedelta(days=30), DEADLINE, DEADLINE + timedelta(days=30)):
        assert resolve(assignment, 1, now) is AssignmentStatus.SUBMITTED


def test_status_is_relative_to_viewer():
    assignment = make_assignment(1)
    now = DEADLINE + timedelta(hours=1)
    assert resolve(assignment, 1, now) is AssignmentStatus.SUBMITTED
    assert resolve(assignment, 2, now) is AssignmentStatus.OVERDUE


def test_resolve_does_not_touch_stored_status():
    assignment = make_assignment(1)
    resolve(assignment, 1, DEADLINE)
    resolve(assignment, 2, DEADLINE + timedelta(days=1))
    assert assignment.status == "Pending"


def test_naive_deadline_is_read_as_utc():
    assignment = make_assignment(deadline=datetime(2024, 1, 1))
    now = datetime(2024, 1, 1, 0, 30, tzinfo=timezone(timedelta(hours=1)))  # 23:30 UTC the day before
    assert resolve(assignment, 1, now) is AssignmentStatus.PENDING


def test_lateness():
    assert lateness(DEADLINE, DEADLINE) == (False, 0)
    assert lateness(DEADLINE, DEADLINE + timedelta(minutes=90, seconds=30)) == (True, 90)
