import enum
import uuid

from sqlalchemy import JSON, ForeignKey, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from educonnect.core.db import Base


class VerificationStatus(str, enum.Enum):
    PENDING = "pending"
    VERIFIED = "verified"
    REJECTED = "rejected"


class TutorProfile(Base):
    __tablename__ = "tutor_profiles"

    id: Mapped[uuid.UUID] = mapped_column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("users.id", name="tutor_profiles_user_id_fkey", ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    subjects: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=True
    )
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Ordered list of {"day": ..., "time": ...}
    availability: Mapped[list | None] = mapped_column(
        JSON().with_variant(JSONB, "postgresql"), nullable=True
    )
    verification_document: Mapped[str | None] = mapped_column(Text, nullable=True)
    # NULL reads as pending (rows created before verification existed).
    verification_status: Mapped[str | None] = mapped_column(
        String(20), default=VerificationStatus.PENDING.value, nullable=True
    )

    user = relationship("User", back_populates="tutor_profile")

    @property
    def effective_verification_status(self) -> VerificationStatus:
        if not self.verification_status:
            return VerificationStatus.PENDING
        return VerificationStatus(self.verification_status)
