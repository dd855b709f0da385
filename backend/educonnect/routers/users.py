import uuid

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from educonnect.core.db import get_db
from educonnect.core.deps import require_operation
from educonnect.core.permissions import CallerContext, Operation
from educonnect.schemas.user import (
    ProfileEnvelope,
    ProfileUpdate,
    ProfileUpdatedResponse,
    TutorList,
)
from educonnect.services.user_service import UserService, to_user_public

router = APIRouter(tags=["users"])


@router.get("/profile/{user_id}", response_model=ProfileEnvelope)
def get_profile(
    user_id: uuid.UUID,
    db: Session = Depends(get_db),
    _caller: CallerContext = Depends(require_operation(Operation.VIEW_PROFILE)),
):
    user = UserService(db).get_user(user_id)
    return ProfileEnvelope(user=to_user_public(user))


@router.put("/profile/{user_id}", response_model=ProfileUpdatedResponse)
def update_profile(
    user_id: uuid.UUID,
    payload: ProfileUpdate,
    db: Session = Depends(get_db),
    caller: CallerContext = Depends(require_operation(Operation.UPDATE_PROFILE)),
):
    user = UserService(db).update_profile(caller, user_id, payload)
    return ProfileUpdatedResponse(message="Profile updated successfully", user=to_user_public(user))


@router.get("/tutors", response_model=TutorList)
def list_tutors(
    db: Session = Depends(get_db),
    _caller: CallerContext = Depends(require_operation(Operation.LIST_TUTORS)),
):
    return TutorList(tutors=[to_user_public(user) for user in UserService(db).list_tutors()])
