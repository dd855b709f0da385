from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.orm import Session

from educonnect.core import security
from educonnect.core.config import settings
from educonnect.core.db import get_db
from educonnect.core.deps import get_current_user
from educonnect.models.user import User
from educonnect.schemas.auth import Login, Token
from educonnect.schemas.user import RegisterResponse, UserPublic, UserRegister
from educonnect.services.user_service import UserService, to_user_public

router = APIRouter(tags=["auth"])


@router.post("/login/access-token", response_model=Token)
def login_access_token(
    login_data: Login,
    db: Session = Depends(get_db),
) -> Token:
    """
    OAuth2 compatible token login, get an access token for future requests
    """
    user = UserService(db).authenticate(login_data.email, login_data.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )

    access_token = security.create_access_token(
        user.id, expires_delta=timedelta(seconds=settings.JWT_EXPIRES_SECONDS)
    )
    return Token(access_token=access_token, expires_in=settings.JWT_EXPIRES_SECONDS)


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
)
def register(
    payload: Annotated[UserRegister, Body(discriminator="role")],
    db: Session = Depends(get_db),
) -> RegisterResponse:
    user = UserService(db).register(payload)
    return RegisterResponse(message="User registered successfully", user_id=user.id)


@router.get("/auth/me", response_model=UserPublic)
def get_me(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserPublic:
    return to_user_public(UserService(db).get_user(current_user.id))
