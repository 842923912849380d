from sqlalchemy import (
    Column, String, Integer, ForeignKey, UUID, DateTime, Enum, UniqueConstraint
)
from sqlalchemy.orm import relationship

from jotter.db.base import BaseModel, JsonContent

DOCUMENT_STATUSES = ("draft", "published")


class Document(BaseModel):
    __tablename__ = "documents"

    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    folder_id = Column(
        UUID(as_uuid=True), ForeignKey("folders.uuid", ondelete="SET NULL"), nullable=True, index=True
    )
    title = Column(String(255), nullable=False)
    content = Column(JsonContent, nullable=True)
    status = Column(Enum(*DOCUMENT_STATUSES, name="document_status"), nullable=False, default="draft")
    published_content = Column(JsonContent, nullable=True)
    published_at = Column(DateTime(timezone=True), nullable=True)

    # Relationships
    owner = relationship("User", back_populates="owned_documents")
    folder = relationship("Folder", back_populates="documents")
    tags = relationship("Tag", secondary="document_tags", back_populates="documents", passive_deletes=True)
    versions = relationship(
        "DocumentVersion", back_populates="document", cascade="all, delete-orphan", passive_deletes=True
    )
    shares = relationship("Share", back_populates="document", cascade="all, delete-orphan", passive_deletes=True)
    comments = relationship(
        "Comment", back_populates="document", cascade="all, delete-orphan", passive_deletes=True
    )


class DocumentVersion(BaseModel):
    __tablename__ = "document_versions"
    __table_args__ = (
        UniqueConstraint("document_id", "version_number", name="uq_document_versions_number"),
    )

    document_id = Column(
        UUID(as_uuid=True), ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    content = Column(JsonContent, nullable=True)
    title = Column(String(255), nullable=False)
    version_number = Column(Integer, nullable=False)
    created_by = Column(UUID(as_uuid=True), ForeignKey("users.uuid"), nullable=False)
    annotation = Column(String(500), nullable=True)

    # Relationships
    document = relationship("Document", back_populates="versions")
    creator = relationship("User")
