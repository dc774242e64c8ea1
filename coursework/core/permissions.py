"""Who may do what with an assignment.

Mutating rules live in ``POLICY``, keyed by ``(action, role)``. A missing key
means the role may never perform the action; a present key holds the
ownership predicate that must also hold for the target. Listing rules live in
``LIST_SCOPES`` and turn a role into a filter for the store.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from coursework.core.actor import TEACHING_ROLES, Actor, Role
from coursework.core.errors import Forbidden
from coursework.services.lookups import ACTIVE, EnrollmentIndex


class Action(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SUBMIT = "submit"


@dataclass(frozen=True)
class ListScope:
    """Filter applied to assignment listings. Both fields unset means everything."""

    faculty_id: int | None = None
    course_ids: frozenset[int] | None = None

    @property
    def unrestricted(self) -> bool:
        return self.faculty_id is None and self.course_ids is None


Rule = Callable[[Actor, Any], bool]


def _anyone(actor: Actor, target: Any) -> bool:
    return True


def _owns_course(actor: Actor, course: Any) -> bool:
    return course.instructor_id is None or course.instructor_id == actor.id


def _owns_assignment(actor: Actor, assignment: Any) -> bool:
    return assignment.faculty_id == actor.id


POLICY: dict[tuple[Action, Role], Rule] = {
    **{(Action.CREATE, role): _owns_course for role in TEACHING_ROLES},
    **{(action, role): _owns_assignment for action in (Action.UPDATE, Action.DELETE) for role in Role},
    (Action.UPDATE, Role.ADMIN): _anyone,
    (Action.DELETE, Role.ADMIN): _anyone,
    (Action.SUBMIT, Role.STUDENT): _anyone,
}

# (reason, message) when the role itself is not allowed
ROLE_DENIALS = {
    Action.CREATE: ("role_not_permitted", "Only faculty can create assignments"),
    Action.SUBMIT: ("role_not_permitted", "Only students can submit assignments"),
}

# (reason, message) when the role is allowed but the ownership predicate fails
OWNERSHIP_DENIALS = {
    Action.CREATE: ("not_course_instructor", "You can only create assignments for your courses"),
    Action.UPDATE: ("not_owner", "Not authorized to update this assignment"),
    Action.DELETE: ("not_owner", "Not authorized to delete this assignment"),
}


def _faculty_scope(actor: Actor, enrollments: EnrollmentIndex) -> ListScope:
    return ListScope(faculty_id=actor.id)


def _student_scope(actor: Actor, enrollments: EnrollmentIndex) -> ListScope:
    return ListScope(course_ids=frozenset(enrollments.courses_for(actor.id, ACTIVE)))


LIST_SCOPES = {
    Role.FACULTY: _faculty_scope,
    Role.INSTRUCTOR: _faculty_scope,
    Role.STUDENT: _student_scope,
}


class AccessControl:
    def __init__(self, enrollments: EnrollmentIndex):
        self.enrollments = enrollments

    def can_list(self, actor: Actor) -> ListScope:
        build = LIST_SCOPES.get(actor.role)
        return build(actor, self.enrollments) if build else ListScope()

    def ensure_role(self, actor: Actor, action: Action) -> None:
        """Fail fast on role alone, before any target has been looked up."""
        if (action, actor.role) not in POLICY:
            reason, message = ROLE_DENIALS.get(action) or OWNERSHIP_DENIALS[action]
            self._deny(actor, action, reason, message)

    def check(self, actor: Actor, action: Action, target: Any) -> None:
        self.ensure_role(actor, action)
        if not POLICY[(action, actor.role)](actor, target):
            reason, message = OWNERSHIP_DENIALS[action]
            self._deny(actor, action, reason, message)

    def can_create(self, actor: Actor, course: Any) -> None:
        self.check(actor, Action.CREATE, course)

    def can_mutate(self, actor: Actor, assignment: Any, action: Action = Action.UPDATE) -> None:
        self.check(actor, action, assignment)

    def can_submit(self, actor: Actor, assignment: Any = None) -> None:
        # the submission is always made for the actor themself
        self.check(actor, Action.SUBMIT, assignment)

    def _deny(self, actor: Actor, action: Action, reason: str, message: str) -> None:
        # logged once by the service layer that catches it
        raise Forbidden(message, reason=reason)
