import os
from datetime import datetime, timezone
from types import SimpleNamespace

TEST_DB_FILE = "test_coursework.db"
TEST_DB_URL = f"sqlite:///./{TEST_DB_FILE}"

# must be set before the app creates its engine
os.environ.setdefault("COURSEWORK_DATABASE_URL", TEST_DB_URL)

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402

from coursework.core.deps import get_db, get_now  # noqa: E402
from coursework.db.base_class import Base  # noqa: E402
from coursework.db.session import enable_sqlite_foreign_keys  # noqa: E402
from coursework.main import app  # noqa: E402
from coursework.models.assignment import Assignment  # noqa: E402
from coursework.models.course import Course  # noqa: E402
from coursework.models.enrollment import Enrollment, EnrollmentStatus  # noqa: E402
from coursework.models.submission import Submission  # noqa: E402
from tests.helpers import CLASSMATE_ID, DROPPED_STUDENT_ID, FACULTY_ID, NOW, OTHER_FACULTY_ID, STUDENT_ID  # noqa: E402

engine = create_engine(
    TEST_DB_URL,
    connect_args={"check_same_thread": False, "timeout": 30},
)
enable_sqlite_foreign_keys(engine)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()


def override_get_now():
    return NOW


@pytest.fixture(scope="session", autouse=True)
def setup_test_db():
    """Create a fresh schema once for the whole test session."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()
    if os.path.exists(TEST_DB_FILE):
        os.remove(TEST_DB_FILE)


@pytest.fixture(autouse=True)
def seed_data():
    """Seed a clean minimal dataset for each test.

    course "owned"   -> instructor FACULTY_ID; STUDENT_ID and CLASSMATE_ID enrolled,
                        DROPPED_STUDENT_ID has a not-enrolled record
    course "open"    -> no instructor; STUDENT_ID enrolled
    course "foreign" -> instructor OTHER_FACULTY_ID; nobody enrolled
    """
    db = TestingSessionLocal()
    try:
        # Clear tables (child -> parent)
        db.query(Submission).delete()
        db.query(Enrollment).delete()
        db.query(Assignment).delete()
        db.query(Course).delete()
        db.commit()

        owned = Course(code="CS5004", title="Object-Oriented Design", instructor_id=FACULTY_ID)
        open_course = Course(code="CS5800", title="Algorithms", instructor_id=None)
        foreign = Course(code="CS6200", title="Information Retrieval", instructor_id=OTHER_FACULTY_ID)
        db.add_all([owned, open_course, foreign])
        db.commit()

        db.add_all(
            [
                Enrollment(student_id=STUDENT_ID, course_id=owned.id),
                Enrollment(student_id=CLASSMATE_ID, course_id=owned.id),
                Enrollment(
                    student_id=DROPPED_STUDENT_ID,
                    course_id=owned.id,
                    status=EnrollmentStatus.NOT_ENROLLED.value,
                ),
                Enrollment(student_id=STUDENT_ID, course_id=open_course.id),
            ]
        )

        hw1 = Assignment(
            course_id=owned.id,
            faculty_id=FACULTY_ID,
            title="HW1",
            description="Design a class hierarchy",
            deadline=datetime(2024, 2, 1, tzinfo=timezone.utc),
        )
        hw0 = Assignment(
            course_id=owned.id,
            faculty_id=FACULTY_ID,
            title="HW0",
            description="Set up your environment",
            deadline=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        ir1 = Assignment(
            course_id=foreign.id,
            faculty_id=OTHER_FACULTY_ID,
            title="IR1",
            description="Build an inverted index",
            deadline=datetime(2024, 3, 1, tzinfo=timezone.utc),
        )
        db.add_all([hw1, hw0, ir1])
        db.commit()

        yield SimpleNamespace(
            owned_course_id=owned.id,
            open_course_id=open_course.id,
            foreign_course_id=foreign.id,
            hw1_id=hw1.id,
            hw0_id=hw0.id,
            ir1_id=ir1.id,
        )
    finally:
        db.close()


@pytest.fixture()
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client():
    """Test client that uses the test DB session and a pinned clock."""
    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_now] = override_get_now
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()



@pytest.fixture()
def session_factory():
    return TestingSessionLocal
