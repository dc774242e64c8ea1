"""Typed errors raised by the policy, store and workflow layers.

Services catch :class:`CourseworkError` and hand it back inside a
:class:`ServiceResult`, so nothing here escapes a request as an unhandled fault.
"""
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


class CourseworkError(Exception):
    code = "error"

    def __init__(self, message: str, reason: str | None = None):
        super().__init__(message)
        self.message = message
        self.reason = reason

    def as_dict(self) -> dict:
        return {"code": self.code, "reason": self.reason, "message": self.message}


class NotFound(CourseworkError):
    code = "not_found"


class Forbidden(CourseworkError):
    code = "forbidden"


class Conflict(CourseworkError):
    code = "conflict"


class ValidationError(CourseworkError):
    code = "validation_error"


@dataclass(frozen=True)
class ServiceResult(Generic[T]):
    success: bool
    data: T | None = None
    error: CourseworkError | None = None
    message: str | None = None

    @classmethod
    def ok(cls, data: T | None = None, message: str | None = None) -> "ServiceResult[T]":
        return cls(success=True, data=data, message=message)

    @classmethod
    def fail(cls, error: CourseworkError) -> "ServiceResult[T]":
        return cls(success=False, error=error)
