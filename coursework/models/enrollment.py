from enum import Enum

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, UniqueConstraint, func
from sqlalchemy.orm import relationship

from coursework.db.base_class import Base


class EnrollmentStatus(str, Enum):
    ENROLLED = "enrolled"
    NOT_ENROLLED = "not-enrolled"


class Enrollment(Base):
    __tablename__ = "enrollments"

    id = Column(Integer, primary_key=True, index=True)
    student_id = Column(Integer, nullable=False, index=True)
    course_id = Column(
        Integer,
        ForeignKey("courses.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # free-form upstream; only "enrolled" grants rights here
    status = Column(String(30), nullable=False, default=EnrollmentStatus.ENROLLED.value)
    created_at = Column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "student_id", "course_id", name="uq_enrollments_student_course"
        ),
    )

    course = relationship("Course", back_populates="enrollments")
