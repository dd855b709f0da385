"""Role-based authorization guard.

The guard is a pure predicate over the caller's role and the operation being
attempted. It never looks at the target resource, so a denial cannot tell the
caller whether that resource exists. Finer-grained participant rules live in
the services.
"""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass

from educonnect.core.errors import Forbidden
from educonnect.models.user import UserRole


class Operation(str, enum.Enum):
    # Open to any authenticated caller
    CREATE_SESSION_REQUEST = "session_request:create"
    RESPOND_SESSION_REQUEST = "session_request:respond"
    VIEW_SESSION_REQUEST = "session_request:view"
    LIST_OWN_SESSION_REQUESTS = "session_request:list_own"
    SUBMIT_FEEDBACK = "feedback:submit"
    SEARCH_DIRECTORY = "directory:search"
    VIEW_PROFILE = "profile:view"
    UPDATE_PROFILE = "profile:update"
    LIST_TUTORS = "directory:list_tutors"

    # Admin console
    LIST_USERS = "admin:list_users"
    VERIFY_TUTOR = "admin:verify_tutor"
    LIST_ALL_SESSION_REQUESTS = "admin:list_session_requests"
    LIST_ALL_FEEDBACK = "admin:list_feedback"
    VIEW_DASHBOARD = "admin:dashboard"


ADMIN_ONLY_OPERATIONS = frozenset(
    {
        Operation.LIST_USERS,
        Operation.VERIFY_TUTOR,
        Operation.LIST_ALL_SESSION_REQUESTS,
        Operation.LIST_ALL_FEEDBACK,
        Operation.VIEW_DASHBOARD,
    }
)


@dataclass(frozen=True)
class CallerContext:
    """Who is calling, as established by the authentication layer."""

    user_id: uuid.UUID
    role: UserRole | None

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


def parse_role(value: object) -> UserRole | None:
    if isinstance(value, UserRole):
        return value
    if not isinstance(value, str):
        return None
    try:
        return UserRole(value)
    except ValueError:
        return None


def is_allowed(role: object, operation: Operation) -> bool:
    parsed = parse_role(role)
    if operation in ADMIN_ONLY_OPERATIONS:
        return parsed is UserRole.ADMIN
    return parsed is not None


def authorize(caller: CallerContext | None, operation: Operation) -> CallerContext:
    if caller is None or not is_allowed(caller.role, operation):
        raise Forbidden()
    return caller
