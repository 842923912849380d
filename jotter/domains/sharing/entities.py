import secrets
import uuid
from datetime import datetime
from typing import Optional

from jotter.core.errors import ValidationError
from jotter.db.base import utcnow


class Share:
    """Ссылка только для чтения, выданная на email"""

    def __init__(
        self,
        uuid: uuid.UUID,
        document_id: uuid.UUID,
        email: str,
        token: str,
        expires_at: Optional[datetime] = None,
        revoked: bool = False,
        created_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.document_id = document_id
        self.email = email
        self.token = token
        self.expires_at = expires_at
        self.revoked = revoked
        self.created_at = created_at or utcnow()

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        return self.expires_at < (now or utcnow())

    def revoke(self) -> None:
        self.revoked = True

    def unrevoke(self) -> None:
        if not self.revoked:
            raise ValidationError("Share is not revoked", field="revoked")
        self.revoked = False

    @classmethod
    def create_share(
        cls,
        document_id: uuid.UUID,
        email: str,
        expires_at: Optional[datetime] = None,
        token_bytes: int = 24
    ) -> "Share":
        return cls(
            uuid=uuid.uuid4(),
            document_id=document_id,
            email=email,
            token=secrets.token_urlsafe(token_bytes),
            expires_at=expires_at
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Share):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Share(uuid={self.uuid}, document_id={self.document_id}, revoked={self.revoked})"


class Comment:
    """Комментарий к выделенному фрагменту документа"""

    def __init__(
        self,
        uuid: uuid.UUID,
        document_id: uuid.UUID,
        author_name: str,
        content: str,
        selection_start: int,
        selection_end: int,
        selection_text: str = "",
        author_email: Optional[str] = None,
        share_id: Optional[uuid.UUID] = None,
        resolved: bool = False,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.document_id = document_id
        self.share_id = share_id
        self.author_name = author_name
        self.author_email = author_email
        self.content = content
        self.selection_start = selection_start
        self.selection_end = selection_end
        self.selection_text = selection_text
        self.resolved = resolved
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def update(self, content: Optional[str] = None, resolved: Optional[bool] = None) -> None:
        if content is not None:
            self.content = content
        if resolved is not None:
            self.resolved = resolved
        self.updated_at = utcnow()

    @classmethod
    def create_comment(
        cls,
        document_id: uuid.UUID,
        author_name: str,
        content: str,
        selection_start: int,
        selection_end: int,
        selection_text: str = "",
        author_email: Optional[str] = None,
        share_id: Optional[uuid.UUID] = None
    ) -> "Comment":
        return cls(
            uuid=uuid.uuid4(),
            document_id=document_id,
            share_id=share_id,
            author_name=author_name,
            author_email=author_email,
            content=content,
            selection_start=selection_start,
            selection_end=selection_end,
            selection_text=selection_text
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Comment):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Comment(uuid={self.uuid}, document_id={self.document_id}, resolved={self.resolved})"
