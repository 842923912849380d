"""initial schema

Revision ID: 0001
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

json_content = sa.JSON(none_as_null=True).with_variant(postgresql.JSONB(none_as_null=True), "postgresql")


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    op.create_table(
        "users",
        sa.Column("uuid", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_users_external_id", "users", ["external_id"], unique=True)

    op.create_table(
        "documents",
        sa.Column("uuid", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.UUID(as_uuid=True), sa.ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", json_content, nullable=True),
        sa.Column("status", sa.Enum("draft", "published", name="document_status"), nullable=False),
        sa.Column("published_content", json_content, nullable=True),
        sa.Column("published_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_documents_user_id", "documents", ["user_id"])

    op.create_table(
        "document_versions",
        sa.Column("uuid", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "document_id", sa.UUID(as_uuid=True),
            sa.ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("content", json_content, nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("version_number", sa.Integer(), nullable=False),
        sa.Column("created_by", sa.UUID(as_uuid=True), sa.ForeignKey("users.uuid"), nullable=False),
        sa.Column("annotation", sa.String(500), nullable=True),
        *_timestamps(),
        sa.UniqueConstraint("document_id", "version_number", name="uq_document_versions_number"),
    )
    op.create_index("ix_document_versions_document_id", "document_versions", ["document_id"])

    op.create_table(
        "shares",
        sa.Column("uuid", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "document_id", sa.UUID(as_uuid=True),
            sa.ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("token", sa.String(128), nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("revoked", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_shares_document_id", "shares", ["document_id"])
    op.create_index("ix_shares_token", "shares", ["token"], unique=True)

    op.create_table(
        "comments",
        sa.Column("uuid", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column(
            "document_id", sa.UUID(as_uuid=True),
            sa.ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("share_id", sa.UUID(as_uuid=True), sa.ForeignKey("shares.uuid", ondelete="SET NULL"), nullable=True),
        sa.Column("author_name", sa.String(100), nullable=False),
        sa.Column("author_email", sa.String(255), nullable=True),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("selection_start", sa.Integer(), nullable=False),
        sa.Column("selection_end", sa.Integer(), nullable=False),
        sa.Column("selection_text", sa.String(1000), nullable=False),
        sa.Column("resolved", sa.Boolean(), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_comments_document_id", "comments", ["document_id"])


def downgrade():
    op.drop_table("comments")
    op.drop_table("shares")
    op.drop_table("document_versions")
    op.drop_table("documents")
    op.drop_table("users")
    sa.Enum(name="document_status").drop(op.get_bind(), checkfirst=True)
