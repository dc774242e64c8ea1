import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from coursework.core.errors import Conflict, NotFound
from coursework.core.permissions import ListScope
from coursework.models.assignment import Assignment
from coursework.models.course import Course
from coursework.models.submission import Submission
from coursework.services.lookups import CourseRegistry

logger = logging.getLogger(__name__)


class AssignmentStore:
    """Persistence for assignments and their submissions.

    Authorization happens before any of these methods are called; the store
    only guarantees that a failed write leaves nothing behind.
    """

    def __init__(self, db: Session, courses: CourseRegistry):
        self.db = db
        self.courses = courses

    def require_course(self, course_id: int) -> Course:
        course = self.courses.get(course_id)
        if course is None:
            raise NotFound("Course not found", reason="course_not_found")
        return course

    def create(self, course: Course, fields: dict, faculty_id: int) -> Assignment:
        assignment = Assignment(course_id=course.id, faculty_id=faculty_id, **fields)
        self.db.add(assignment)
        self._commit()
        self.db.refresh(assignment)
        return assignment

    def get(self, assignment_id: int) -> Assignment:
        assignment = (
            self.db.query(Assignment)
            .options(selectinload(Assignment.submissions))
            .filter(Assignment.id == assignment_id)
            .first()
        )
        if assignment is None:
            raise NotFound("Assignment not found", reason="assignment_not_found")
        return assignment

    def list(self, scope: ListScope) -> list[Assignment]:
        query = self.db.query(Assignment).options(selectinload(Assignment.submissions))

        if scope.faculty_id is not None:
            query = query.filter(Assignment.faculty_id == scope.faculty_id)
        if scope.course_ids is not None:
            if not scope.course_ids:
                return []
            query = query.filter(Assignment.course_id.in_(scope.course_ids))

        return query.order_by(Assignment.deadline.desc(), Assignment.id.desc()).all()

    def update(self, assignment: Assignment, fields: dict) -> Assignment:
        for name, value in fields.items():
            setattr(assignment, name, value)
        self._commit()
        self.db.refresh(assignment)
        return assignment

    def delete(self, assignment: Assignment) -> None:
        self.db.delete(assignment)
        self._commit()

    def append_submission(self, assignment_id: int, student_id: int, submitted_at: datetime) -> Submission:
        """Insert one submission, relying on uq_submission_assignment_student.

        The unique constraint is the check: there is no read of existing
        submissions beforehand, so two racing inserts cannot both succeed.
        """
        submission = Submission(
            assignment_id=assignment_id,
            student_id=student_id,
            submitted_at=submitted_at,
        )
        self.db.add(submission)

        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            if self._exists(assignment_id):
                raise Conflict("You have already submitted this assignment", reason="already_submitted")
            raise NotFound("Assignment not found", reason="assignment_not_found")

        return submission

    def _exists(self, assignment_id: int) -> bool:
        return self.db.query(Assignment.id).filter(Assignment.id == assignment_id).first() is not None

    def _commit(self) -> None:
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
