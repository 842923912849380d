from sqlalchemy import Column, String, Integer, Text, ForeignKey, UUID, Boolean, DateTime
from sqlalchemy.orm import relationship

from jotter.db.base import BaseModel


class Share(BaseModel):
    __tablename__ = "shares"

    document_id = Column(
        UUID(as_uuid=True), ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    email = Column(String(255), nullable=False)
    token = Column(String(128), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    revoked = Column(Boolean, nullable=False, default=False)

    # Relationships
    document = relationship("Document", back_populates="shares")
    comments = relationship("Comment", back_populates="share")


class Comment(BaseModel):
    __tablename__ = "comments"

    document_id = Column(
        UUID(as_uuid=True), ForeignKey("documents.uuid", ondelete="CASCADE"), nullable=False, index=True
    )
    share_id = Column(UUID(as_uuid=True), ForeignKey("shares.uuid", ondelete="SET NULL"), nullable=True)
    author_name = Column(String(100), nullable=False)
    author_email = Column(String(255), nullable=True)
    content = Column(Text, nullable=False)
    selection_start = Column(Integer, nullable=False)
    selection_end = Column(Integer, nullable=False)
    selection_text = Column(String(1000), nullable=False, default="")
    resolved = Column(Boolean, nullable=False, default=False)

    # Relationships
    document = relationship("Document", back_populates="comments")
    share = relationship("Share", back_populates="comments")
