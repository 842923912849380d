"""folders and tags

Revision ID: 0002
Revises: 0001
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = "0002"
down_revision = "0001"
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade():
    op.create_table(
        "folders",
        sa.Column("uuid", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.UUID(as_uuid=True), sa.ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "parent_id", sa.UUID(as_uuid=True),
            sa.ForeignKey("folders.uuid", ondelete="SET NULL"), nullable=True
        ),
        sa.Column("name", sa.String(255), nullable=False),
        *_timestamps(),
    )
    op.create_index("ix_folders_user_id", "folders", ["user_id"])

    op.create_table(
        "tags",
        sa.Column("uuid", sa.UUID(as_uuid=True), primary_key=True),
        sa.Column("user_id", sa.UUID(as_uuid=True), sa.ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(50), nullable=False),
        sa.Column("color", sa.String(7), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_tags_user_id", "tags", ["user_id"])

    op.create_table(
        "document_tags",
        sa.Column(
            "document_id", sa.UUID(as_uuid=True),
            sa.ForeignKey("documents.uuid", ondelete="CASCADE"), primary_key=True
        ),
        sa.Column(
            "tag_id", sa.UUID(as_uuid=True),
            sa.ForeignKey("tags.uuid", ondelete="CASCADE"), primary_key=True
        ),
    )

    with op.batch_alter_table("documents") as batch_op:
        batch_op.add_column(sa.Column("folder_id", sa.UUID(as_uuid=True), nullable=True))
        batch_op.create_foreign_key(
            "fk_documents_folder_id_folders", "folders", ["folder_id"], ["uuid"], ondelete="SET NULL"
        )
        batch_op.create_index("ix_documents_folder_id", ["folder_id"])


def downgrade():
    with op.batch_alter_table("documents") as batch_op:
        batch_op.drop_index("ix_documents_folder_id")
        batch_op.drop_constraint("fk_documents_folder_id_folders", type_="foreignkey")
        batch_op.drop_column("folder_id")

    op.drop_table("document_tags")
    op.drop_table("tags")
    op.drop_table("folders")
