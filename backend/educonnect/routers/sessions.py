import uuid

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from educonnect.core.db import get_db
from educonnect.core.deps import require_operation
from educonnect.core.permissions import CallerContext, Operation
from educonnect.schemas.feedback import FeedbackCreate, FeedbackEnvelope
from educonnect.schemas.session_request import (
    ParticipantSessionRequestList,
    SessionEnvelope,
    SessionRequestCreate,
    SessionRequestCreated,
    SessionRequestEnvelope,
    SessionRequestRespond,
)
from educonnect.services.feedback_service import FeedbackService, to_feedback_response
from educonnect.services.session_request_service import (
    SessionRequestService,
    to_session_request_response,
)

router = APIRouter(tags=["sessions"])


@router.post(
    "/session/request",
    response_model=SessionRequestCreated,
    status_code=status.HTTP_201_CREATED,
)
def create_session_request(
    payload: SessionRequestCreate,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(require_operation(Operation.CREATE_SESSION_REQUEST)),
):
    request = SessionRequestService(db).create(caller, payload)
    return SessionRequestCreated(
        message="Session request created successfully",
        session_request_id=request.id,
    )


@router.put("/session/{request_id}/respond", response_model=SessionRequestEnvelope)
def respond_to_session_request(
    request_id: uuid.UUID,
    payload: SessionRequestRespond,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(require_operation(Operation.RESPOND_SESSION_REQUEST)),
):
    request = SessionRequestService(db).respond(caller, request_id, payload.status)
    return SessionRequestEnvelope(
        message=f"Session request {request.status}",
        session_request=to_session_request_response(request),
    )


@router.get("/session/{request_id}", response_model=SessionEnvelope)
def get_session_request(
    request_id: uuid.UUID,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(require_operation(Operation.VIEW_SESSION_REQUEST)),
):
    return SessionEnvelope(session=SessionRequestService(db).get_detail(caller, request_id))


@router.post(
    "/session/{request_id}/feedback",
    response_model=FeedbackEnvelope,
    status_code=status.HTTP_201_CREATED,
)
def submit_feedback(
    request_id: uuid.UUID,
    payload: FeedbackCreate,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(require_operation(Operation.SUBMIT_FEEDBACK)),
):
    feedback = FeedbackService(db).submit(caller, request_id, payload)
    return FeedbackEnvelope(
        message="Feedback submitted successfully",
        feedback=to_feedback_response(feedback),
    )


@router.get("/session-requests", response_model=ParticipantSessionRequestList)
def list_session_requests(
    role: str | None = None,
    user_id: uuid.UUID | None = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(require_operation(Operation.LIST_OWN_SESSION_REQUESTS)),
):
    requests = SessionRequestService(db).list_for_participant(caller, role, user_id)
    return ParticipantSessionRequestList(requests=requests)
