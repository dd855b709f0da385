import logging
import sys

# Add current directory to sys.path to resolve 'educonnect' modules
sys.path.append(".")

from sqlalchemy.exc import SQLAlchemyError

from educonnect.core.config import settings
from educonnect.core.db import SessionLocal
from educonnect.core.security import get_password_hash
from educonnect.models.student import StudentProfile
from educonnect.models.tutor import TutorProfile, VerificationStatus
from educonnect.models.user import User, UserRole

logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)

DEFAULT_PASSWORD = "educonnect"

DEMO_USERS = [
    ("admin@educonnect.com", "EduConnect Admin", UserRole.ADMIN),
    ("tutor@educonnect.com", "Tara Tutor", UserRole.TUTOR),
    ("student@educonnect.com", "Sam Student", UserRole.STUDENT),
]


def _get_or_create_user(db, email: str, name: str, role: UserRole) -> User:
    user = db.query(User).filter_by(email=email).first()
    if user:
        return user
    user = User(
        email=email,
        name=name,
        hashed_password=get_password_hash(DEFAULT_PASSWORD),
        role=role,
    )
    db.add(user)
    db.flush()
    logger.info("Created %s user: %s", role.value, email)
    return user


def seed_db():
    db = SessionLocal()
    try:
        logger.info("Seeding database...")
        users = {
            role: _get_or_create_user(db, email, name, role) for email, name, role in DEMO_USERS
        }

        tutor = users[UserRole.TUTOR]
        if not db.query(TutorProfile).filter_by(user_id=tutor.id).first():
            db.add(
                TutorProfile(
                    user_id=tutor.id,
                    subjects=["Mathematics", "Physics"],
                    location="Online",
                    availability=[{"day": "Monday", "time": "16:00-18:00"}],
                    verification_document="docs/tutor-certificate.pdf",
                    verification_status=VerificationStatus.VERIFIED.value,
                )
            )
            logger.info("Created tutor profile for %s", tutor.email)

        student = users[UserRole.STUDENT]
        if not db.query(StudentProfile).filter_by(user_id=student.id).first():
            db.add(
                StudentProfile(
                    user_id=student.id,
                    learning_goals="Prepare for the calculus exam",
                    preferred_subjects=["Mathematics"],
                )
            )
            logger.info("Created student profile for %s", student.email)

        db.commit()
        logger.info("Seeding completed. Demo password: %s", DEFAULT_PASSWORD)
        for role, user in users.items():
            logger.info("%s user ID: %s", role.value.capitalize(), user.id)

    except SQLAlchemyError:
        logger.exception("Seeding failed")
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    seed_db()
