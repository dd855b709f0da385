"""Session request lifecycle.

    pending --(tutor accepts)--> accepted
    pending --(tutor declines)--> declined

Both resolutions are terminal. A resolution is written with a conditional
UPDATE keyed on ``status = 'pending'`` so that of two racing responses exactly
one wins and the other gets a ConflictError.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone

from sqlalchemy import update
from sqlalchemy.orm import Session, aliased

from educonnect.core.db import commit
from educonnect.core.errors import (
    ConflictError,
    Forbidden,
    InvalidParticipant,
    InvalidRole,
    InvalidStatus,
    NotFound,
    ValidationError,
)
from educonnect.core.permissions import CallerContext, parse_role
from educonnect.models.session_request import (
    RESOLUTION_STATUSES,
    SessionRequest,
    SessionRequestStatus,
)
from educonnect.models.user import User, UserRole
from educonnect.schemas.session_request import (
    ParticipantSessionRequest,
    SessionRequestCreate,
    SessionRequestDetail,
    SessionRequestResponse,
)

logger = logging.getLogger(__name__)


def _to_naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def parse_resolution(value: object) -> SessionRequestStatus:
    try:
        resolution = SessionRequestStatus(value)
    except ValueError:
        raise InvalidStatus() from None
    if resolution not in RESOLUTION_STATUSES:
        raise InvalidStatus()
    return resolution


def _fields(request: SessionRequest) -> dict:
    return {
        "id": request.id,
        "student_id": request.student_id,
        "tutor_id": request.tutor_id,
        "subject": request.subject,
        "requested_time": request.requested_time,
        "status": request.status,
        "created_at": request.created_at,
        "updated_at": request.updated_at,
    }


def to_session_request_response(request: SessionRequest) -> SessionRequestResponse:
    return SessionRequestResponse(**_fields(request))


def _detail(
    request: SessionRequest, student_name: str | None, tutor_name: str | None
) -> SessionRequestDetail:
    return SessionRequestDetail(
        **_fields(request), student_name=student_name, tutor_name=tutor_name
    )


class SessionRequestService:
    def __init__(self, db: Session):
        self.db = db

    def _participant(self, user_id: uuid.UUID, role: UserRole) -> User | None:
        user = self.db.get(User, user_id)
        if user is None or user.role is not role:
            return None
        return user

    def create(self, caller: CallerContext, payload: SessionRequestCreate) -> SessionRequest:
        student_id = payload.student_id or caller.user_id
        if not caller.is_admin and (
            caller.role is not UserRole.STUDENT or student_id != caller.user_id
        ):
            raise Forbidden()

        subject = payload.subject.strip()
        if not subject:
            raise ValidationError("Subject is required")

        if self._participant(student_id, UserRole.STUDENT) is None:
            raise InvalidParticipant("student")
        if self._participant(payload.tutor_id, UserRole.TUTOR) is None:
            raise InvalidParticipant("tutor")

        request = SessionRequest(
            student_id=student_id,
            tutor_id=payload.tutor_id,
            subject=subject,
            requested_time=_to_naive_utc(payload.requested_time),
            status=SessionRequestStatus.PENDING.value,
        )
        self.db.add(request)
        commit(self.db)
        self.db.refresh(request)
        logger.info(
            "Session request %s created: student=%s tutor=%s",
            request.id,
            request.student_id,
            request.tutor_id,
        )
        return request

    def get_for_participant(self, caller: CallerContext, request_id: uuid.UUID) -> SessionRequest:
        """Load a request the caller takes part in (admins see every request).

        Non-admin callers get the same Forbidden for a missing request and for
        one they are not part of.
        """
        request = self.db.get(SessionRequest, request_id)
        if caller.is_admin:
            if request is None:
                raise NotFound("Session request not found")
            return request
        if request is None or caller.user_id not in (request.student_id, request.tutor_id):
            raise Forbidden()
        return request

    def get_detail(self, caller: CallerContext, request_id: uuid.UUID) -> SessionRequestDetail:
        request = self.get_for_participant(caller, request_id)
        student = self.db.get(User, request.student_id)
        tutor = self.db.get(User, request.tutor_id)
        return _detail(
            request,
            student.name if student else None,
            tutor.name if tutor else None,
        )

    def respond(
        self, caller: CallerContext, request_id: uuid.UUID, status: object
    ) -> SessionRequest:
        resolution = parse_resolution(status)

        request = self.db.get(SessionRequest, request_id)
        if request is None or caller.user_id != request.tutor_id:
            raise Forbidden()

        result = self.db.execute(
            update(SessionRequest)
            .where(
                SessionRequest.id == request_id,
                SessionRequest.status == SessionRequestStatus.PENDING.value,
            )
            .values(status=resolution.value, updated_at=datetime.utcnow())
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            self.db.rollback()
            logger.warning(
                "Refused to resolve session request %s as %s: already resolved",
                request_id,
                resolution.value,
            )
            raise ConflictError("Session request has already been resolved")

        commit(self.db)
        self.db.refresh(request)
        logger.info("Session request %s %s by tutor %s", request.id, request.status, caller.user_id)
        return request

    def list_for_participant(
        self,
        caller: CallerContext,
        role: str | None = None,
        user_id: uuid.UUID | None = None,
    ) -> list[ParticipantSessionRequest]:
        participant_role = parse_role(role) if role is not None else caller.role
        if participant_role not in (UserRole.STUDENT, UserRole.TUTOR):
            raise InvalidRole("Invalid user role")

        participant_id = user_id or caller.user_id
        if not caller.is_admin and (
            participant_role is not caller.role or participant_id != caller.user_id
        ):
            raise Forbidden()

        counterpart = aliased(User)
        if participant_role is UserRole.STUDENT:
            query = (
                self.db.query(SessionRequest, counterpart.name)
                .outerjoin(counterpart, counterpart.id == SessionRequest.tutor_id)
                .filter(SessionRequest.student_id == participant_id)
            )
        else:
            query = (
                self.db.query(SessionRequest, counterpart.name)
                .outerjoin(counterpart, counterpart.id == SessionRequest.student_id)
                .filter(SessionRequest.tutor_id == participant_id)
            )

        results = []
        for request, counterpart_name in query.order_by(SessionRequest.requested_time).all():
            counterpart_id = (
                request.tutor_id if participant_role is UserRole.STUDENT else request.student_id
            )
            results.append(
                ParticipantSessionRequest(
                    **_fields(request),
                    counterpart_id=counterpart_id,
                    counterpart_name=counterpart_name,
                )
            )
        return results

    def list_all(self) -> list[SessionRequestDetail]:
        student = aliased(User)
        tutor = aliased(User)
        rows = (
            self.db.query(SessionRequest, student.name, tutor.name)
            .outerjoin(student, student.id == SessionRequest.student_id)
            .outerjoin(tutor, tutor.id == SessionRequest.tutor_id)
            .order_by(SessionRequest.requested_time)
            .all()
        )
        return [_detail(*row) for row in rows]
