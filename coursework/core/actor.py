from dataclasses import dataclass
from enum import Enum


class Role(str, Enum):
    STUDENT = "student"
    FACULTY = "faculty"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "Role":
        """Map a raw role claim onto the closed set; anything unknown is OTHER."""
        try:
            return cls((value or "").lower())
        except ValueError:
            return cls.OTHER


TEACHING_ROLES = frozenset({Role.FACULTY, Role.INSTRUCTOR})


@dataclass(frozen=True)
class Actor:
    id: int
    role: Role
