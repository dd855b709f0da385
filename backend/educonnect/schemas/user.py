import uuid
from datetime import datetime
from typing import Annotated, Literal, Union

from pydantic import EmailStr, Field, constr

from educonnect.schemas.base import CamelModel

Name = constr(strip_whitespace=True, min_length=1, max_length=255)
Password = constr(min_length=6, max_length=128)


class AvailabilitySlot(CamelModel):
    day: constr(strip_whitespace=True, min_length=1, max_length=20)
    time: constr(strip_whitespace=True, min_length=1, max_length=50)


############################
### REGISTRATION SCHEMAS ###
############################


class _RegisterBase(CamelModel):
    name: Name
    email: EmailStr
    password: Password


class StudentRegister(_RegisterBase):
    role: Literal["student"]
    learning_goals: str | None = Field(default=None, max_length=2000)
    preferred_subjects: list[str] = Field(default_factory=list)


class TutorRegister(_RegisterBase):
    role: Literal["tutor"]
    subjects: list[str] = Field(default_factory=list)
    location: str | None = Field(default=None, max_length=255)
    availability: list[AvailabilitySlot] = Field(default_factory=list)
    verification_document: str | None = None


class AdminRegister(_RegisterBase):
    role: Literal["admin"]


# Routers bind this with Body(discriminator="role").
UserRegister = Union[StudentRegister, TutorRegister, AdminRegister]


class RegisterResponse(CamelModel):
    message: str
    user_id: uuid.UUID


############################
##### PROFILE SCHEMAS ######
############################


class StudentProfileData(CamelModel):
    role: Literal["student"] = "student"
    learning_goals: str | None = None
    preferred_subjects: list[str] = Field(default_factory=list)


class TutorProfileData(CamelModel):
    role: Literal["tutor"] = "tutor"
    subjects: list[str] = Field(default_factory=list)
    location: str | None = None
    availability: list[AvailabilitySlot] = Field(default_factory=list)
    verification_document: str | None = None
    verification_status: str = "pending"


class AdminProfileData(CamelModel):
    role: Literal["admin"] = "admin"


ProfileData = Annotated[
    Union[StudentProfileData, TutorProfileData, AdminProfileData],
    Field(discriminator="role"),
]


class UserPublic(CamelModel):
    """A user as other callers may see it; credentials are never included."""

    id: uuid.UUID
    name: str
    email: str
    role: str
    created_at: datetime | None = None
    profile: ProfileData


class ProfileUpdate(CamelModel):
    name: Name | None = None
    # tutor
    subjects: list[str] | None = None
    location: str | None = Field(default=None, max_length=255)
    availability: list[AvailabilitySlot] | None = None
    verification_document: str | None = None
    # student
    learning_goals: str | None = Field(default=None, max_length=2000)
    preferred_subjects: list[str] | None = None


class ProfileEnvelope(CamelModel):
    user: UserPublic


class ProfileUpdatedResponse(CamelModel):
    message: str
    user: UserPublic


class TutorList(CamelModel):
    tutors: list[UserPublic]


class SearchResults(CamelModel):
    results: list[UserPublic]
