from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class ErrorDetail(BaseModel):
    code: str
    reason: Optional[str] = None
    message: str
    details: Optional[list[Any]] = None


class Envelope(BaseModel, Generic[T]):
    success: bool
    count: Optional[int] = None
    message: Optional[str] = None
    data: Optional[T] = None
    error: Optional[ErrorDetail] = None
