import enum
import uuid
from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from educonnect.core.db import Base


class SessionRequestStatus(str, enum.Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


RESOLUTION_STATUSES = (SessionRequestStatus.ACCEPTED, SessionRequestStatus.DECLINED)


class SessionRequest(Base):
    __tablename__ = "session_requests"
    __table_args__ = (
        Index("idx_session_requests_student", "student_id"),
        Index("idx_session_requests_tutor", "tutor_id"),
        Index("idx_session_requests_status", "status"),
    )

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", name="session_requests_student_id_fkey"),
        nullable=False,
    )
    tutor_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", name="session_requests_tutor_id_fkey"),
        nullable=False,
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False)
    requested_time: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    status: Mapped[str] = mapped_column(
        String(20), default=SessionRequestStatus.PENDING.value, nullable=False
    )  # pending, accepted, declined
    created_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP"), nullable=True
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime, server_default=text("CURRENT_TIMESTAMP"), nullable=True
    )

    student = relationship("User", foreign_keys=[student_id])
    tutor = relationship("User", foreign_keys=[tutor_id])
