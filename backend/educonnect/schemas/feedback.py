import uuid
from datetime import datetime

from pydantic import Field

from educonnect.schemas.base import CamelModel


class FeedbackCreate(CamelModel):
    # int | float so that 3.5 reaches the ledger and is refused there as InvalidRating.
    rating: int | float
    comments: str | None = Field(default=None, max_length=2000)
    from_user_id: uuid.UUID | None = Field(default=None, alias="from")
    to_user_id: uuid.UUID | None = Field(default=None, alias="to")


class FeedbackResponse(CamelModel):
    id: uuid.UUID
    session_request_id: uuid.UUID
    from_user_id: uuid.UUID = Field(alias="from")
    to_user_id: uuid.UUID = Field(alias="to")
    rating: int
    comments: str | None = None
    created_at: datetime | None = None


class FeedbackParticipant(CamelModel):
    id: uuid.UUID
    name: str
    role: str


class FeedbackWithParticipants(FeedbackResponse):
    reviewer: FeedbackParticipant
    reviewee: FeedbackParticipant


class FeedbackEnvelope(CamelModel):
    message: str
    feedback: FeedbackResponse
