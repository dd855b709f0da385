"""initial schema: users, role profiles, session requests, feedback

Revision ID: 1b7e4c2a9d10
Revises:
Create Date: 2026-10-19 10:12:41.302118

"""

from __future__ import annotations

import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

from alembic import op

revision: str = "1b7e4c2a9d10"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None

JSON_COLUMN = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("hashed_password", sa.String(length=255), nullable=False),
        sa.Column("role", sa.String(length=20), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email", name="users_email_key"),
    )
    op.create_index("idx_users_email", "users", ["email"])
    op.create_index("idx_users_role", "users", ["role"])

    op.create_table(
        "tutor_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("subjects", JSON_COLUMN, nullable=True),
        sa.Column("location", sa.String(length=255), nullable=True),
        sa.Column("availability", JSON_COLUMN, nullable=True),
        sa.Column("verification_document", sa.Text(), nullable=True),
        sa.Column("verification_status", sa.String(length=20), nullable=True),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="tutor_profiles_user_id_fkey", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
    )

    op.create_table(
        "student_profiles",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("learning_goals", sa.Text(), nullable=True),
        sa.Column("preferred_subjects", JSON_COLUMN, nullable=True),
        sa.ForeignKeyConstraint(
            ["user_id"], ["users.id"], name="student_profiles_user_id_fkey", ondelete="CASCADE"
        ),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", name="student_profiles_user_id_key"),
    )

    op.create_table(
        "session_requests",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("student_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("tutor_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("subject", sa.String(length=255), nullable=False),
        sa.Column("requested_time", sa.DateTime(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True
        ),
        sa.Column(
            "updated_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True
        ),
        sa.ForeignKeyConstraint(
            ["student_id"], ["users.id"], name="session_requests_student_id_fkey"
        ),
        sa.ForeignKeyConstraint(["tutor_id"], ["users.id"], name="session_requests_tutor_id_fkey"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_session_requests_student", "session_requests", ["student_id"])
    op.create_index("idx_session_requests_tutor", "session_requests", ["tutor_id"])
    op.create_index("idx_session_requests_status", "session_requests", ["status"])

    op.create_table(
        "feedback",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("session_request_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("from_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("to_user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("rating", sa.Integer(), nullable=False),
        sa.Column("comments", sa.Text(), nullable=True),
        sa.Column(
            "created_at", sa.DateTime(), server_default=sa.text("CURRENT_TIMESTAMP"), nullable=True
        ),
        sa.CheckConstraint("rating >= 1 AND rating <= 5", name="feedback_rating_range"),
        sa.ForeignKeyConstraint(
            ["session_request_id"],
            ["session_requests.id"],
            name="feedback_session_request_id_fkey",
        ),
        sa.ForeignKeyConstraint(["from_user_id"], ["users.id"], name="feedback_from_user_id_fkey"),
        sa.ForeignKeyConstraint(["to_user_id"], ["users.id"], name="feedback_to_user_id_fkey"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_feedback_session_request", "feedback", ["session_request_id"])


def downgrade() -> None:
    op.drop_index("idx_feedback_session_request", table_name="feedback")
    op.drop_table("feedback")
    op.drop_index("idx_session_requests_status", table_name="session_requests")
    op.drop_index("idx_session_requests_tutor", table_name="session_requests")
    op.drop_index("idx_session_requests_student", table_name="session_requests")
    op.drop_table("session_requests")
    op.drop_table("student_profiles")
    op.drop_table("tutor_profiles")
    op.drop_index("idx_users_role", table_name="users")
    op.drop_index("idx_users_email", table_name="users")
    op.drop_table("users")
