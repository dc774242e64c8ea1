"""Request-level entry points for assignment operations.

Each method runs the access checks, touches the store, and annotates what it
returns with the viewer's status. Domain errors come back as a failed
:class:`ServiceResult` instead of propagating.
"""
import logging
from datetime import datetime, timedelta
from functools import wraps

from sqlalchemy.orm import Session

from coursework.core.actor import Actor
from coursework.core.config import ACCEPT_LATE_SUBMISSIONS, LATE_GRACE_PERIOD_MINUTES
from coursework.core.errors import CourseworkError, ServiceResult
from coursework.core.permissions import AccessControl, Action
from coursework.models.assignment import Assignment
from coursework.schemas.assignment import AssignmentCreate, AssignmentDetail, AssignmentRead, AssignmentUpdate
from coursework.schemas.submission import SubmissionRead
from coursework.services.assignment_store import AssignmentStore
from coursework.services.lookups import SqlCourseRegistry, SqlEnrollmentIndex
from coursework.services.status_resolver import has_submitted, lateness, resolve
from coursework.services.submission_workflow import SubmissionWorkflow

logger = logging.getLogger(__name__)


def _as_result(method):
    @wraps(method)
    def wrapper(self, actor: Actor, *args, **kwargs) -> ServiceResult:
        try:
            return method(self, actor, *args, **kwargs)
        except CourseworkError as exc:
            logger.info(
                "%s failed for actor=%s role=%s: %s (%s)",
                method.__name__,
                actor.id,
                actor.role.value,
                exc.code,
                exc.reason,
            )
            return ServiceResult.fail(exc)

    return wrapper


def _columns(assignment: Assignment) -> dict:
    return {column.key: getattr(assignment, column.key) for column in Assignment.__table__.columns}


def present(assignment: Assignment, viewer_id: int, now: datetime) -> AssignmentRead:
    return AssignmentRead.model_validate(
        {
            **_columns(assignment),
            "user_status": resolve(assignment, viewer_id, now),
            "has_submitted": has_submitted(assignment, viewer_id),
        }
    )


def present_detail(assignment: Assignment, viewer_id: int, now: datetime) -> AssignmentDetail:
    submissions = []
    for sub in assignment.submissions:
        is_late, late_by_minutes = lateness(assignment.deadline, sub.submitted_at)
        submissions.append(
            SubmissionRead(
                id=sub.id,
                student_id=sub.student_id,
                submitted_at=sub.submitted_at,
                is_late=is_late,
                late_by_minutes=late_by_minutes,
            )
        )
    return AssignmentDetail.model_validate(
        {
            **present(assignment, viewer_id, now).model_dump(),
            "submissions": submissions,
        }
    )


class AssignmentService:
    def __init__(
        self,
        db: Session,
        accept_late: bool = ACCEPT_LATE_SUBMISSIONS,
        grace_period: timedelta = timedelta(minutes=LATE_GRACE_PERIOD_MINUTES),
    ):
        self.enrollments = SqlEnrollmentIndex(db)
        self.access = AccessControl(self.enrollments)
        self.store = AssignmentStore(db, SqlCourseRegistry(db))
        self.workflow = SubmissionWorkflow(
            self.store,
            self.access,
            self.enrollments,
            accept_late=accept_late,
            grace_period=grace_period,
        )

    @_as_result
    def list_assignments(self, actor: Actor, now: datetime) -> ServiceResult[list[AssignmentRead]]:
        scope = self.access.can_list(actor)
        items = [present(a, actor.id, now) for a in self.store.list(scope)]
        return ServiceResult.ok(items)

    @_as_result
    def get_assignment(self, actor: Actor, assignment_id: int, now: datetime) -> ServiceResult[AssignmentDetail]:
        assignment = self.store.get(assignment_id)
        return ServiceResult.ok(present_detail(assignment, actor.id, now))

    @_as_result
    def create_assignment(
        self, actor: Actor, payload: AssignmentCreate, now: datetime
    ) -> ServiceResult[AssignmentDetail]:
        self.access.ensure_role(actor, Action.CREATE)
        course = self.store.require_course(payload.course_id)
        self.access.can_create(actor, course)

        assignment = self.store.create(course, payload.model_dump(exclude={"course_id"}), actor.id)
        logger.info("Assignment %s created in course=%s by faculty=%s", assignment.id, course.id, actor.id)
        return ServiceResult.ok(present_detail(assignment, actor.id, now))

    @_as_result
    def update_assignment(
        self, actor: Actor, assignment_id: int, payload: AssignmentUpdate, now: datetime
    ) -> ServiceResult[AssignmentDetail]:
        assignment = self.store.get(assignment_id)
        self.access.can_mutate(actor, assignment, Action.UPDATE)

        fields = payload.model_dump(exclude_unset=True, exclude_none=True)
        assignment = self.store.update(assignment, fields)
        logger.info("Assignment %s updated by actor=%s fields=%s", assignment.id, actor.id, sorted(fields))
        return ServiceResult.ok(present_detail(assignment, actor.id, now))

    @_as_result
    def delete_assignment(self, actor: Actor, assignment_id: int) -> ServiceResult[None]:
        assignment = self.store.get(assignment_id)
        self.access.can_mutate(actor, assignment, Action.DELETE)

        self.store.delete(assignment)
        logger.info("Assignment %s deleted by actor=%s", assignment_id, actor.id)
        return ServiceResult.ok(message="Assignment deleted")

    @_as_result
    def submit(self, actor: Actor, assignment_id: int, now: datetime) -> ServiceResult[AssignmentDetail]:
        assignment = self.workflow.submit(actor, assignment_id, now)
        return ServiceResult.ok(
            present_detail(assignment, actor.id, now),
            message="Assignment submitted successfully",
        )
