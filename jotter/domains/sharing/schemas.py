from pydantic import BaseModel, EmailStr, Field, field_validator, model_validator, ConfigDict
from typing import Any, Dict, Optional, List
import uuid
from datetime import datetime, timezone

from jotter.domains.documents.entities import DocumentStatus


class ShareCreate(BaseModel):
    """Схема для создания ссылки"""
    email: EmailStr
    expires_at: Optional[datetime] = None

    @field_validator('expires_at')
    @classmethod
    def validate_expires_at(cls, v):
        # Время без зоны считаем UTC, остальное приводим к UTC
        if v is None:
            return v
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class ShareResponse(BaseModel):
    """Схема для ответа с данными ссылки"""
    uuid: uuid.UUID
    document_id: uuid.UUID
    email: str
    token: str
    url: str
    expires_at: Optional[datetime] = None
    revoked: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class SharedDocumentResponse(BaseModel):
    """Документ, открытый по ссылке"""
    uuid: uuid.UUID
    title: str
    content: Optional[Dict[str, Any]] = None
    status: DocumentStatus
    published_at: Optional[datetime] = None
    updated_at: datetime


class CommentCreate(BaseModel):
    """Схема для создания комментария"""
    author_name: str = Field(..., min_length=1, max_length=100)
    author_email: Optional[EmailStr] = None
    content: str = Field(..., min_length=1, max_length=10000)
    selection_start: int = Field(..., ge=0)
    selection_end: int = Field(..., ge=0)
    selection_text: str = Field(default="", max_length=1000)

    @field_validator('author_name', 'content')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('Value cannot be empty')
        return v.strip()

    @model_validator(mode='after')
    def validate_selection(self):
        if self.selection_end < self.selection_start:
            raise ValueError('selection_end must not be before selection_start')
        return self


class CommentUpdate(BaseModel):
    """Схема для изменения комментария владельцем документа"""
    content: Optional[str] = Field(None, min_length=1, max_length=10000)
    resolved: Optional[bool] = None


class CommentResponse(BaseModel):
    """Схема для ответа с данными комментария"""
    uuid: uuid.UUID
    document_id: uuid.UUID
    share_id: Optional[uuid.UUID] = None
    author_name: str
    author_email: Optional[str] = None
    content: str
    selection_start: int
    selection_end: int
    selection_text: str
    resolved: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CommentListResponse(BaseModel):
    """Схема для страницы комментариев"""
    comments: List[CommentResponse]
    total: int
    limit: int
    offset: int
    has_more: bool
