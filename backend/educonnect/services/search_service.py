from __future__ import annotations

import logging

from sqlalchemy.orm import Session, selectinload

from educonnect.core.errors import Forbidden, InvalidRole
from educonnect.core.permissions import CallerContext, parse_role
from educonnect.models.user import User, UserRole

logger = logging.getLogger(__name__)

# Who each role is looking for in the directory.
SEARCH_TARGETS = {
    UserRole.STUDENT: UserRole.TUTOR,
    UserRole.TUTOR: UserRole.STUDENT,
}


def _matches(user: User, needle: str) -> bool:
    if not needle:
        return True
    if needle in (user.name or "").casefold():
        return True
    if user.role is UserRole.TUTOR and user.tutor_profile is not None:
        return any(needle in subject.casefold() for subject in user.tutor_profile.subjects or [])
    return False


def search_directory(
    db: Session,
    caller: CallerContext,
    query: str | None = None,
    requested_role: str | None = None,
) -> list[User]:
    """Find counterparts for the caller.

    Students search tutors by name or subject, tutors search students by name.
    The query is a literal, case-insensitive substring.
    """
    if requested_role is not None:
        role = parse_role(requested_role)
        if role is None:
            raise InvalidRole()
        if role is not caller.role:
            raise Forbidden()

    target = SEARCH_TARGETS.get(caller.role)
    if target is None:
        raise InvalidRole()

    users = (
        db.query(User)
        .options(selectinload(User.tutor_profile), selectinload(User.student_profile))
        .filter(User.role == target)
        .order_by(User.name)
        .all()
    )
    needle = (query or "").strip().casefold()
    results = [user for user in users if _matches(user, needle)]
    logger.debug(
        "Directory search by %s returned %d %s(s)", caller.user_id, len(results), target.value
    )
    return results
