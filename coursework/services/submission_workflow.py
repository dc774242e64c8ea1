import logging
from datetime import datetime, timedelta

from coursework.core.actor import Actor
from coursework.core.clock import as_utc
from coursework.core.config import ACCEPT_LATE_SUBMISSIONS, LATE_GRACE_PERIOD_MINUTES
from coursework.core.errors import Forbidden
from coursework.core.permissions import AccessControl
from coursework.models.assignment import Assignment
from coursework.services.assignment_store import AssignmentStore
from coursework.services.lookups import EnrollmentIndex

logger = logging.getLogger(__name__)


class SubmissionWorkflow:
    """Appends a student's submission once every precondition holds.

    Order of checks: role, assignment exists, active enrollment, late policy,
    then the atomic insert (which is where duplicates are caught).
    """

    def __init__(
        self,
        store: AssignmentStore,
        access: AccessControl,
        enrollments: EnrollmentIndex,
        accept_late: bool = ACCEPT_LATE_SUBMISSIONS,
        grace_period: timedelta = timedelta(minutes=LATE_GRACE_PERIOD_MINUTES),
    ):
        self.store = store
        self.access = access
        self.enrollments = enrollments
        self.accept_late = accept_late
        self.grace_period = grace_period

    def submit(self, actor: Actor, assignment_id: int, now: datetime) -> Assignment:
        self.access.can_submit(actor)

        assignment = self.store.get(assignment_id)

        if not self.enrollments.is_actively_enrolled(actor.id, assignment.course_id):
            raise Forbidden("You are not enrolled in this course", reason="not_enrolled")

        if not self.accept_late and as_utc(now) > as_utc(assignment.deadline) + self.grace_period:
            raise Forbidden("The submission deadline has passed", reason="deadline_passed")

        # the row may be deleted concurrently; only the id is used from here on
        self.store.append_submission(assignment_id, actor.id, as_utc(now))
        logger.info("Submission recorded assignment=%s student=%s", assignment_id, actor.id)

        return self.store.get(assignment_id)
