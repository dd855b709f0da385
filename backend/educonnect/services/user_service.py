"""Identity and role-profile store.

Users carry an immutable role; role-specific attributes live in exactly one
profile row (``TutorProfile`` or ``StudentProfile``) matching that role.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from educonnect.core.config import settings
from educonnect.core.db import commit
from educonnect.core.errors import (
    ConflictError,
    Forbidden,
    InvalidStatus,
    NotFound,
    ValidationError,
)
from educonnect.core.permissions import CallerContext
from educonnect.core.security import get_password_hash, verify_password
from educonnect.models.student import StudentProfile
from educonnect.models.tutor import TutorProfile, VerificationStatus
from educonnect.models.user import User, UserRole
from educonnect.schemas.user import (
    AdminProfileData,
    AvailabilitySlot,
    ProfileUpdate,
    StudentProfileData,
    TutorProfileData,
    UserPublic,
)

logger = logging.getLogger(__name__)

TUTOR_FIELDS = ("subjects", "location", "availability", "verification_document")
STUDENT_FIELDS = ("learning_goals", "preferred_subjects")
VERIFICATION_DECISIONS = (VerificationStatus.VERIFIED, VerificationStatus.REJECTED)


def clean_subjects(values: list[str] | None) -> list[str]:
    """Strip, drop blanks and de-duplicate case-insensitively, keeping order."""
    seen: set[str] = set()
    cleaned: list[str] = []
    for value in values or []:
        subject = value.strip()
        key = subject.casefold()
        if not subject or key in seen:
            continue
        seen.add(key)
        cleaned.append(subject)
    return cleaned


def _dump_slots(slots: list[AvailabilitySlot] | None) -> list[dict[str, str]]:
    return [slot.model_dump() for slot in slots or []]


def to_user_public(user: User) -> UserPublic:
    if user.role is UserRole.TUTOR:
        tutor = user.tutor_profile
        profile = TutorProfileData()
        if tutor is not None:
            profile = TutorProfileData(
                subjects=tutor.subjects or [],
                location=tutor.location,
                availability=tutor.availability or [],
                verification_document=tutor.verification_document,
                verification_status=tutor.effective_verification_status.value,
            )
    elif user.role is UserRole.STUDENT:
        student = user.student_profile
        profile = StudentProfileData()
        if student is not None:
            profile = StudentProfileData(
                learning_goals=student.learning_goals,
                preferred_subjects=student.preferred_subjects or [],
            )
    else:
        profile = AdminProfileData()

    return UserPublic(
        id=user.id,
        name=user.name,
        email=user.email,
        role=user.role.value,
        created_at=user.created_at,
        profile=profile,
    )


class UserService:
    def __init__(self, db: Session):
        self.db = db

    def _query(self):
        return self.db.query(User).options(
            selectinload(User.tutor_profile), selectinload(User.student_profile)
        )

    def get_user(self, user_id: uuid.UUID) -> User:
        user = self._query().filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")
        return user

    def authenticate(self, email: str, password: str) -> User | None:
        """Return the user for these credentials, or None for any mismatch."""
        user = self.db.query(User).filter(User.email == email.lower()).first()
        if not user or not verify_password(password, user.hashed_password):
            return None
        return user

    def register(self, payload) -> User:
        email = payload.email.lower()
        role = UserRole(payload.role)

        if role is UserRole.ADMIN and not settings.ALLOW_ADMIN_REGISTRATION:
            raise Forbidden()

        if self.db.query(User.id).filter(User.email == email).first():
            raise ConflictError("Email already registered")

        user = User(
            name=payload.name,
            email=email,
            hashed_password=get_password_hash(payload.password),
            role=role,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as exc:
            self.db.rollback()
            raise ConflictError("Email already registered") from exc

        if role is UserRole.TUTOR:
            self.db.add(
                TutorProfile(
                    user_id=user.id,
                    subjects=clean_subjects(payload.subjects),
                    location=payload.location,
                    availability=_dump_slots(payload.availability),
                    verification_document=payload.verification_document,
                    verification_status=VerificationStatus.PENDING.value,
                )
            )
        elif role is UserRole.STUDENT:
            self.db.add(
                StudentProfile(
                    user_id=user.id,
                    learning_goals=payload.learning_goals,
                    preferred_subjects=clean_subjects(payload.preferred_subjects),
                )
            )

        commit(self.db)
        logger.info("Registered %s user %s", role.value, user.id)
        return self.get_user(user.id)

    def update_profile(
        self, caller: CallerContext, user_id: uuid.UUID, payload: ProfileUpdate
    ) -> User:
        if caller.user_id != user_id:
            raise Forbidden()

        user = self.get_user(user_id)
        data = payload.model_dump(exclude_unset=True)

        own_fields = {
            UserRole.TUTOR: TUTOR_FIELDS,
            UserRole.STUDENT: STUDENT_FIELDS,
        }.get(user.role, ())
        foreign = sorted(
            key for key in data if key in TUTOR_FIELDS + STUDENT_FIELDS and key not in own_fields
        )
        if foreign:
            raise ValidationError(
                f"Fields not applicable to a {user.role.value} profile: {', '.join(foreign)}"
            )

        if data.get("name"):
            user.name = data["name"]

        if user.role is UserRole.TUTOR:
            tutor = user.tutor_profile or TutorProfile(user_id=user.id)
            if "subjects" in data:
                tutor.subjects = clean_subjects(data["subjects"])
            if "location" in data:
                tutor.location = data["location"]
            if "availability" in data:
                tutor.availability = _dump_slots(payload.availability)
            if "verification_document" in data:
                tutor.verification_document = data["verification_document"]
            self.db.add(tutor)
        elif user.role is UserRole.STUDENT:
            student = user.student_profile or StudentProfile(user_id=user.id)
            if "learning_goals" in data:
                student.learning_goals = data["learning_goals"]
            if "preferred_subjects" in data:
                student.preferred_subjects = clean_subjects(data["preferred_subjects"])
            self.db.add(student)

        user.updated_at = datetime.utcnow()
        self.db.add(user)
        commit(self.db)
        return self.get_user(user.id)

    def list_users(self, role: UserRole | None = None) -> list[User]:
        query = self._query()
        if role is not None:
            query = query.filter(User.role == role)
        return query.order_by(User.name).all()

    def list_tutors(self) -> list[User]:
        return self.list_users(UserRole.TUTOR)

    def verify_tutor(self, user_id: uuid.UUID, verification_status: str) -> User:
        user = self.db.query(User).filter(User.id == user_id).first()
        if not user:
            raise NotFound("User not found")
        if user.role is not UserRole.TUTOR:
            raise ValidationError("Invalid user or user is not a tutor")

        try:
            decision = VerificationStatus(verification_status)
        except ValueError:
            decision = None
        if decision not in VERIFICATION_DECISIONS:
            raise InvalidStatus("Invalid verification status")

        tutor = user.tutor_profile or TutorProfile(user_id=user.id)
        tutor.verification_status = decision.value
        user.updated_at = datetime.utcnow()
        self.db.add(tutor)
        self.db.add(user)
        commit(self.db)
        logger.info("Tutor %s verification set to %s", user.id, decision.value)
        return self.get_user(user.id)
