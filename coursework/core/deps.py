from datetime import datetime

from fastapi import Depends
from sqlalchemy.orm import Session

from coursework.core.clock import utcnow
from coursework.db.session import SessionLocal
from coursework.services.assignment_service import AssignmentService


# every request that needs DB will get a fresh session, and it will always close.
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# overridden in tests to pin the clock
def get_now() -> datetime:
    return utcnow()


def get_assignment_service(db: Session = Depends(get_db)) -> AssignmentService:
    return AssignmentService(db)
