from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from coursework.db.base_class import Base


class Course(Base):
    """Read-only mirror of the course registry."""

    __tablename__ = "courses"

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    code: Mapped[str | None] = mapped_column(String(50))
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    # unset means any faculty member may publish into the course
    instructor_id: Mapped[int | None] = mapped_column(nullable=True, index=True)

    enrollments = relationship(
        "Enrollment", back_populates="course", cascade="all, delete-orphan"
    )

    assignments = relationship(
        "Assignment", back_populates="course", cascade="all, delete-orphan"
    )
