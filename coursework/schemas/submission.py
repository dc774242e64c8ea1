from pydantic import BaseModel

from coursework.schemas.types import UtcDatetime


class SubmissionRead(BaseModel):
    id: int
    student_id: int
    submitted_at: UtcDatetime

    # computed against the deadline at read time
    is_late: bool = False
    late_by_minutes: int = 0

    class Config:
        from_attributes = True
