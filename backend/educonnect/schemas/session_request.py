import uuid
from datetime import datetime

from pydantic import constr

from educonnect.schemas.base import CamelModel


class SessionRequestCreate(CamelModel):
    # Defaults to the caller when omitted.
    student_id: uuid.UUID | None = None
    tutor_id: uuid.UUID
    # Blank subjects are refused by the service as a ValidationError.
    subject: constr(max_length=255)
    requested_time: datetime


class SessionRequestRespond(CamelModel):
    # Kept as a plain string so unknown values reach the service as InvalidStatus.
    status: str


class SessionRequestCreated(CamelModel):
    message: str
    session_request_id: uuid.UUID


class SessionRequestResponse(CamelModel):
    id: uuid.UUID
    student_id: uuid.UUID
    tutor_id: uuid.UUID
    subject: str
    requested_time: datetime
    status: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class SessionRequestDetail(SessionRequestResponse):
    student_name: str | None = None
    tutor_name: str | None = None


class ParticipantSessionRequest(SessionRequestResponse):
    """A request as listed for one participant: only the other side's name."""

    counterpart_id: uuid.UUID
    counterpart_name: str | None = None


class SessionRequestEnvelope(CamelModel):
    message: str
    session_request: SessionRequestResponse


class SessionEnvelope(CamelModel):
    session: SessionRequestDetail


class ParticipantSessionRequestList(CamelModel):
    requests: list[ParticipantSessionRequest]
