from pydantic import BaseModel, EmailStr

from educonnect.schemas.base import CamelModel


class Login(CamelModel):
    email: EmailStr
    password: str


class Token(BaseModel):
    # OAuth2 field names stay snake_case on the wire.
    access_token: str
    token_type: str = "bearer"
    expires_in: int


class TokenPayload(BaseModel):
    sub: str | None = None
