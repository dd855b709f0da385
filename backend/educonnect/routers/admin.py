import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from educonnect.core.db import get_db
from educonnect.core.deps import require_operation
from educonnect.core.errors import InvalidRole
from educonnect.core.permissions import CallerContext, Operation, parse_role
from educonnect.models.user import UserRole
from educonnect.schemas.admin import (
    AdminDashboardResponse,
    AdminFeedbackList,
    AdminSessionRequestList,
    AdminStudentList,
    AdminTutorList,
    AdminUserList,
    VerifyTutorRequest,
    VerifyTutorResponse,
)
from educonnect.services.admin_service import AdminService
from educonnect.services.feedback_service import FeedbackService
from educonnect.services.session_request_service import SessionRequestService
from educonnect.services.user_service import UserService, to_user_public

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/users", response_model=AdminUserList)
def list_users(
    role: str | None = None,
    db: Session = Depends(get_db),
    _admin: CallerContext = Depends(require_operation(Operation.LIST_USERS)),
):
    role_filter = None
    if role is not None:
        role_filter = parse_role(role)
        if role_filter is None:
            raise InvalidRole()
    users = UserService(db).list_users(role_filter)
    return AdminUserList(users=[to_user_public(user) for user in users])


@router.get("/tutors", response_model=AdminTutorList)
def list_tutors(
    db: Session = Depends(get_db),
    _admin: CallerContext = Depends(require_operation(Operation.LIST_USERS)),
):
    users = UserService(db).list_users(UserRole.TUTOR)
    return AdminTutorList(tutors=[to_user_public(user) for user in users])


@router.get("/students", response_model=AdminStudentList)
def list_students(
    db: Session = Depends(get_db),
    _admin: CallerContext = Depends(require_operation(Operation.LIST_USERS)),
):
    users = UserService(db).list_users(UserRole.STUDENT)
    return AdminStudentList(students=[to_user_public(user) for user in users])


@router.put("/users/{user_id}/verify", response_model=VerifyTutorResponse)
def verify_tutor(
    user_id: uuid.UUID,
    payload: VerifyTutorRequest,
    db: Session = Depends(get_db),
    _admin: CallerContext = Depends(require_operation(Operation.VERIFY_TUTOR)),
):
    user = UserService(db).verify_tutor(user_id, payload.verification_status)
    return VerifyTutorResponse(
        message=f"Tutor {payload.verification_status} successfully",
        user=to_user_public(user),
    )


@router.get("/session-requests", response_model=AdminSessionRequestList)
def list_session_requests(
    db: Session = Depends(get_db),
    _admin: CallerContext = Depends(require_operation(Operation.LIST_ALL_SESSION_REQUESTS)),
):
    return AdminSessionRequestList(session_requests=SessionRequestService(db).list_all())


@router.get("/feedbacks", response_model=AdminFeedbackList)
def list_feedbacks(
    db: Session = Depends(get_db),
    _admin: CallerContext = Depends(require_operation(Operation.LIST_ALL_FEEDBACK)),
):
    return AdminFeedbackList(feedbacks=FeedbackService(db).list_all())


@router.get("/dashboard", response_model=AdminDashboardResponse)
def dashboard(
    db: Session = Depends(get_db),
    _admin: CallerContext = Depends(require_operation(Operation.VIEW_DASHBOARD)),
):
    return AdminService(db).dashboard()
