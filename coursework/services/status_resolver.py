"""Viewer-relative assignment status.

The status depends on who is looking and when, so it is derived on every read
and never written back to the stored ``Assignment.status`` column.
"""
from datetime import datetime
from enum import Enum
from typing import Any

from coursework.core.clock import as_utc


class AssignmentStatus(str, Enum):
    PENDING = "Pending"
    OVERDUE = "Overdue"
    SUBMITTED = "Submitted"


def has_submitted(assignment: Any, viewer_id: int) -> bool:
    return any(sub.student_id == viewer_id for sub in assignment.submissions)


def resolve(assignment: Any, viewer_id: int, now: datetime) -> AssignmentStatus:
    """Submitted beats Overdue, which beats Pending.

    Overdue requires ``now`` to be strictly after the deadline.
    """
    if has_submitted(assignment, viewer_id):
        return AssignmentStatus.SUBMITTED
    if as_utc(now) > as_utc(assignment.deadline):
        return AssignmentStatus.OVERDUE
    return AssignmentStatus.PENDING


def lateness(deadline: datetime, submitted_at: datetime) -> tuple[bool, int]:
    """
    Returns: (is_late, late_by_minutes)

    late_by_minutes is 0 for on-time submissions.
    """
    due = as_utc(deadline)
    submitted = as_utc(submitted_at)
    if submitted <= due:
        return (False, 0)
    return (True, int((submitted - due).total_seconds() // 60))
