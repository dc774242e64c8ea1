"""Narrow read-only views onto the course and enrollment subsystems."""
from typing import Protocol

from sqlalchemy.orm import Session

from coursework.models.course import Course
from coursework.models.enrollment import Enrollment, EnrollmentStatus

ACTIVE = EnrollmentStatus.ENROLLED.value


class CourseRegistry(Protocol):
    def get(self, course_id: int) -> Course | None: ...


class EnrollmentIndex(Protocol):
    def is_actively_enrolled(self, student_id: int, course_id: int) -> bool: ...

    def courses_for(self, student_id: int, status: str = ACTIVE) -> set[int]: ...


class SqlCourseRegistry:
    def __init__(self, db: Session):
        self.db = db

    def get(self, course_id: int) -> Course | None:
        return self.db.query(Course).filter(Course.id == course_id).first()


class SqlEnrollmentIndex:
    def __init__(self, db: Session):
        self.db = db

    def is_actively_enrolled(self, student_id: int, course_id: int) -> bool:
        return (
            self.db.query(Enrollment.id)
            .filter(
                Enrollment.student_id == student_id,
                Enrollment.course_id == course_id,
                Enrollment.status == ACTIVE,
            )
            .first()
            is not None
        )

    def courses_for(self, student_id: int, status: str = ACTIVE) -> set[int]:
        rows = (
            self.db.query(Enrollment.course_id)
            .filter(Enrollment.student_id == student_id, Enrollment.status == status)
            .all()
        )
        return {row.course_id for row in rows}
