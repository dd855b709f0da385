import uuid
from collections.abc import Callable

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from educonnect.core.db import get_db
from educonnect.core.permissions import CallerContext, Operation, authorize, parse_role
from educonnect.core.security import decode_access_token
from educonnect.models.user import User

reusable_oauth2 = OAuth2PasswordBearer(tokenUrl="/api/v1/login/access-token")


def get_current_user(db: Session = Depends(get_db), token: str = Depends(reusable_oauth2)) -> User:
    try:
        user_id = uuid.UUID(decode_access_token(token).sub)
    except (JWTError, ValidationError, TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Could not validate credentials",
        )
    user = db.get(User, user_id)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def get_caller(current_user: User = Depends(get_current_user)) -> CallerContext:
    # The role always comes from the stored user, never from the request.
    return CallerContext(user_id=current_user.id, role=parse_role(current_user.role))


def require_operation(operation: Operation) -> Callable[..., CallerContext]:
    def dependency(caller: CallerContext = Depends(get_caller)) -> CallerContext:
        return authorize(caller, operation)

    return dependency
