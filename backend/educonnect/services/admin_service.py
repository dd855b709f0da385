from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import func
from sqlalchemy.orm import Session

from educonnect.models.feedback import Feedback
from educonnect.models.session_request import SessionRequest, SessionRequestStatus
from educonnect.models.tutor import TutorProfile, VerificationStatus
from educonnect.models.user import User, UserRole
from educonnect.schemas.admin import AdminDashboardResponse


def _to_float(value: Any) -> float | None:
    if value is None:
        return None
    if isinstance(value, Decimal):
        return float(value)
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def _role_key(value: Any) -> str:
    return getattr(value, "value", value)


class AdminService:
    """Read-only rollups for the admin console."""

    def __init__(self, db: Session):
        self.db = db

    def dashboard(self) -> AdminDashboardResponse:
        users_by_role = {role.value: 0 for role in UserRole}
        for role, count in self.db.query(User.role, func.count(User.id)).group_by(User.role).all():
            users_by_role[_role_key(role)] = count

        requests_by_status = {status.value: 0 for status in SessionRequestStatus}
        for status, count in (
            self.db.query(SessionRequest.status, func.count(SessionRequest.id))
            .group_by(SessionRequest.status)
            .all()
        ):
            requests_by_status[status] = count

        # Tutors without a profile row or a stored status are pending.
        verification = func.coalesce(
            TutorProfile.verification_status, VerificationStatus.PENDING.value
        )
        tutors_by_status = {status.value: 0 for status in VerificationStatus}
        for status, count in (
            self.db.query(verification, func.count(User.id))
            .select_from(User)
            .outerjoin(TutorProfile, TutorProfile.user_id == User.id)
            .filter(User.role == UserRole.TUTOR)
            .group_by(verification)
            .all()
        ):
            tutors_by_status[status] = count

        total_feedback, average_rating = self.db.query(
            func.count(Feedback.id), func.avg(Feedback.rating)
        ).one()

        return AdminDashboardResponse(
            users_by_role=users_by_role,
            session_requests_by_status=requests_by_status,
            tutors_by_verification_status=tutors_by_status,
            total_users=sum(users_by_role.values()),
            total_session_requests=sum(requests_by_status.values()),
            total_feedback=total_feedback or 0,
            average_rating=_to_float(average_rating),
        )
