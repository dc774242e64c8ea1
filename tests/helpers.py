from datetime import datetime, timezone

from coursework.core.actor import Actor, Role
from coursework.core.security import create_access_token

NOW = datetime(2024, 1, 15, 12, 0, tzinfo=timezone.utc)

ADMIN_ID = 1
FACULTY_ID = 10
OTHER_FACULTY_ID = 11
STUDENT_ID = 100
CLASSMATE_ID = 101
DROPPED_STUDENT_ID = 102
OUTSIDER_ID = 103

ADMIN = Actor(ADMIN_ID, Role.ADMIN)
FACULTY = Actor(FACULTY_ID, Role.FACULTY)
OTHER_FACULTY = Actor(OTHER_FACULTY_ID, Role.INSTRUCTOR)
STUDENT = Actor(STUDENT_ID, Role.STUDENT)
CLASSMATE = Actor(CLASSMATE_ID, Role.STUDENT)
DROPPED_STUDENT = Actor(DROPPED_STUDENT_ID, Role.STUDENT)
OUTSIDER = Actor(OUTSIDER_ID, Role.STUDENT)


def auth_header(actor: Actor) -> dict:
    token = create_access_token({"sub": str(actor.id), "role": actor.role.value})
    return {"Authorization": f"Bearer {token}"}
