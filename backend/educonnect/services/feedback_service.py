"""Feedback ledger.

Entries are append-only: a participant may leave several ratings for the same
session and nothing here edits or removes one.
"""

from __future__ import annotations

import logging
import uuid

from sqlalchemy.orm import Session, selectinload

from educonnect.core.db import commit
from educonnect.core.errors import Forbidden, InvalidRating, ValidationError
from educonnect.core.permissions import CallerContext
from educonnect.models.feedback import Feedback
from educonnect.models.session_request import SessionRequest, SessionRequestStatus
from educonnect.schemas.feedback import (
    FeedbackCreate,
    FeedbackParticipant,
    FeedbackResponse,
    FeedbackWithParticipants,
)

logger = logging.getLogger(__name__)

MIN_RATING = 1
MAX_RATING = 5


def validate_rating(value: object) -> int:
    if isinstance(value, bool):
        raise InvalidRating()
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidRating()
        value = int(value)
    if not isinstance(value, int) or not MIN_RATING <= value <= MAX_RATING:
        raise InvalidRating()
    return value


def to_feedback_response(feedback: Feedback) -> FeedbackResponse:
    return FeedbackResponse(
        id=feedback.id,
        session_request_id=feedback.session_request_id,
        from_user_id=feedback.from_user_id,
        to_user_id=feedback.to_user_id,
        rating=feedback.rating,
        comments=feedback.comments,
        created_at=feedback.created_at,
    )


def _participant(user) -> FeedbackParticipant:
    return FeedbackParticipant(id=user.id, name=user.name, role=user.role.value)


class FeedbackService:
    def __init__(self, db: Session):
        self.db = db

    def submit(
        self, caller: CallerContext, request_id: uuid.UUID, payload: FeedbackCreate
    ) -> Feedback:
        rating = validate_rating(payload.rating)

        request = self.db.get(SessionRequest, request_id)
        if request is None or caller.user_id not in (request.student_id, request.tutor_id):
            raise Forbidden()
        if request.status != SessionRequestStatus.ACCEPTED.value:
            raise ValidationError("Feedback can only be left for an accepted session request")

        from_user_id = payload.from_user_id or caller.user_id
        if from_user_id != caller.user_id:
            raise Forbidden()

        counterpart_id = (
            request.tutor_id if caller.user_id == request.student_id else request.student_id
        )
        to_user_id = payload.to_user_id or counterpart_id
        if to_user_id != counterpart_id:
            raise ValidationError("Feedback must be addressed to the other session participant")

        feedback = Feedback(
            session_request_id=request.id,
            from_user_id=from_user_id,
            to_user_id=to_user_id,
            rating=rating,
            comments=payload.comments,
        )
        self.db.add(feedback)
        commit(self.db)
        self.db.refresh(feedback)
        logger.info(
            "Feedback %s recorded for session request %s (rating=%s)",
            feedback.id,
            request.id,
            rating,
        )
        return feedback

    def list_all(self) -> list[FeedbackWithParticipants]:
        rows = (
            self.db.query(Feedback)
            .options(selectinload(Feedback.reviewer), selectinload(Feedback.reviewee))
            .order_by(Feedback.created_at.desc())
            .all()
        )
        return [
            FeedbackWithParticipants(
                **to_feedback_response(row).model_dump(),
                reviewer=_participant(row.reviewer),
                reviewee=_participant(row.reviewee),
            )
            for row in rows
        ]
