from sqlalchemy import Column, String, ForeignKey, UUID, Table
from sqlalchemy.orm import relationship

from jotter.core.db import Base
from jotter.db.base import BaseModel

document_tags = Table(
    "document_tags",
    Base.metadata,
    Column("document_id", UUID(as_uuid=True), ForeignKey("documents.uuid", ondelete="CASCADE"), primary_key=True),
    Column("tag_id", UUID(as_uuid=True), ForeignKey("tags.uuid", ondelete="CASCADE"), primary_key=True),
)


class Folder(BaseModel):
    __tablename__ = "folders"

    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    # При удалении родителя вложенные папки поднимаются в корень
    parent_id = Column(UUID(as_uuid=True), ForeignKey("folders.uuid", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), nullable=False)

    # Relationships
    documents = relationship("Document", back_populates="folder", passive_deletes=True)


class Tag(BaseModel):
    __tablename__ = "tags"

    user_id = Column(
        UUID(as_uuid=True), ForeignKey("users.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    name = Column(String(50), nullable=False)
    color = Column(String(7), nullable=True)

    # Relationships
    documents = relationship("Document", secondary=document_tags, back_populates="tags", passive_deletes=True)
