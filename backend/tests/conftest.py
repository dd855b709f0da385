import os

os.environ.setdefault("DATABASE_URL", "sqlite://")

from datetime import datetime  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from educonnect.core.db import Base, get_db  # noqa: E402
from educonnect.core.permissions import CallerContext  # noqa: E402
from educonnect.core.security import create_access_token, get_password_hash  # noqa: E402
from educonnect.main import app  # noqa: E402
from educonnect.models.session_request import SessionRequest  # noqa: E402
from educonnect.models.student import StudentProfile  # noqa: E402
from educonnect.models.tutor import TutorProfile  # noqa: E402
from educonnect.models.user import User, UserRole  # noqa: E402

PASSWORD = "secret123"

engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(autouse=True)
def _schema():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client():
    def override_get_db():
        session = TestingSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db):
    def _make_user(name: str, role: UserRole, email: str | None = None, **profile) -> User:
        user = User(
            name=name,
            email=email or f"{name.lower().replace(' ', '.')}@example.com",
            hashed_password=get_password_hash(PASSWORD),
            role=role,
        )
        db.add(user)
        db.flush()
        if role is UserRole.TUTOR:
            db.add(TutorProfile(user_id=user.id, **profile))
        elif role is UserRole.STUDENT:
            db.add(StudentProfile(user_id=user.id, **profile))
        db.commit()
        db.refresh(user)
        return user

    return _make_user


@pytest.fixture
def make_session_request(db):
    def _make_session_request(
        student: User,
        tutor: User,
        subject: str = "Mathematics",
        status: str = "pending",
        requested_time: datetime = datetime(2026, 11, 2, 16, 0),
    ) -> SessionRequest:
        request = SessionRequest(
            student_id=student.id,
            tutor_id=tutor.id,
            subject=subject,
            requested_time=requested_time,
            status=status,
        )
        db.add(request)
        db.commit()
        db.refresh(request)
        return request

    return _make_session_request


@pytest.fixture
def student(make_user):
    return make_user("Sam Student", UserRole.STUDENT, preferred_subjects=["Mathematics"])


@pytest.fixture
def tutor(make_user):
    return make_user(
        "Tara Tutor",
        UserRole.TUTOR,
        subjects=["Mathematics", "Physics"],
        location="Online",
        availability=[{"day": "Monday", "time": "16:00-18:00"}],
    )


@pytest.fixture
def admin(make_user):
    return make_user("Ada Admin", UserRole.ADMIN)


@pytest.fixture
def headers_for():
    def _headers_for(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token(user.id)}"}

    return _headers_for


@pytest.fixture
def caller_for():
    def _caller_for(user: User) -> CallerContext:
        return CallerContext(user_id=user.id, role=user.role)

    return _caller_for
