from typing import Literal, Optional

from pydantic import BaseModel, Field

from coursework.schemas.submission import SubmissionRead
from coursework.schemas.types import UtcDatetime
from coursework.services.status_resolver import AssignmentStatus

StoredStatus = Literal["Pending", "Overdue", "Submitted"]


class AssignmentCreate(BaseModel):
    title: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=1000)
    course_id: int
    deadline: UtcDatetime


class AssignmentUpdate(BaseModel):
    # course and faculty are fixed once created
    title: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = Field(None, min_length=1, max_length=1000)
    deadline: Optional[UtcDatetime] = None
    status: Optional[StoredStatus] = None


class AssignmentRead(BaseModel):
    id: int
    course_id: int
    faculty_id: int
    title: str
    description: str
    deadline: UtcDatetime
    status: str
    created_at: UtcDatetime
    updated_at: UtcDatetime

    # computed per viewer on every read
    user_status: AssignmentStatus
    has_submitted: bool

    class Config:
        from_attributes = True


class AssignmentDetail(AssignmentRead):
    submissions: list[SubmissionRead] = []
