from pydantic import Field

from educonnect.schemas.base import CamelModel
from educonnect.schemas.feedback import FeedbackWithParticipants
from educonnect.schemas.session_request import SessionRequestDetail
from educonnect.schemas.user import UserPublic


class VerifyTutorRequest(CamelModel):
    verification_status: str


class VerifyTutorResponse(CamelModel):
    message: str
    user: UserPublic


class AdminUserList(CamelModel):
    users: list[UserPublic]


class AdminTutorList(CamelModel):
    tutors: list[UserPublic]


class AdminStudentList(CamelModel):
    students: list[UserPublic]


class AdminSessionRequestList(CamelModel):
    session_requests: list[SessionRequestDetail]


class AdminFeedbackList(CamelModel):
    feedbacks: list[FeedbackWithParticipants]


class AdminDashboardResponse(CamelModel):
    users_by_role: dict[str, int] = Field(default_factory=dict)
    session_requests_by_status: dict[str, int] = Field(default_factory=dict)
    tutors_by_verification_status: dict[str, int] = Field(default_factory=dict)
    total_users: int
    total_session_requests: int
    total_feedback: int
    average_rating: float | None = None
