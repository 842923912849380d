from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Any, Dict, Optional, List
import uuid
from datetime import datetime

from jotter.content import DiffType, PreviewKind
from jotter.domains.documents.entities import DocumentStatus


def _clean_title(v):
    if v is not None and not v.strip():
        raise ValueError('Title cannot be empty')
    return v.strip() if v else v


class DocumentCreate(BaseModel):
    """Схема для создания документа"""
    title: str = Field(default="Untitled", min_length=1, max_length=255)
    content: Optional[Dict[str, Any]] = None
    folder_id: Optional[uuid.UUID] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)


class DocumentUpdate(BaseModel):
    """Схема для обновления документа.

    content=null очищает содержимое; отсутствующее поле не меняет его.
    folder_id=null переносит документ в корень.
    """
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    content: Optional[Dict[str, Any]] = None
    folder_id: Optional[uuid.UUID] = None

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        return _clean_title(v)

    @property
    def content_provided(self) -> bool:
        return "content" in self.model_fields_set

    @property
    def folder_provided(self) -> bool:
        return "folder_id" in self.model_fields_set


class DocumentResponse(BaseModel):
    """Схема для ответа с данными документа"""
    uuid: uuid.UUID
    user_id: uuid.UUID
    folder_id: Optional[uuid.UUID] = None
    title: str
    content: Optional[Dict[str, Any]] = None
    status: DocumentStatus
    published_content: Optional[Dict[str, Any]] = None
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    excerpt: str
    word_count: int

    model_config = ConfigDict(from_attributes=True)


class DocumentListResponse(BaseModel):
    """Схема для списка документов"""
    documents: List[DocumentResponse]
    total: int
    limit: int
    offset: int


class DocumentVersionResponse(BaseModel):
    """Схема для ответа с данными версии документа"""
    uuid: uuid.UUID
    document_id: uuid.UUID
    version_number: int
    title: str
    content: Optional[Dict[str, Any]] = None
    annotation: Optional[str] = None
    created_by: uuid.UUID
    created_by_name: Optional[str] = None
    created_at: datetime
    word_count: int

    model_config = ConfigDict(from_attributes=True)


class VersionAnnotationUpdate(BaseModel):
    """Схема для изменения подписи версии"""
    # Длину проверяет DocumentVersion.annotate после обрезки пробелов
    annotation: Optional[str] = None


class DiffSegmentResponse(BaseModel):
    type: DiffType
    text: str


class VersionCompareResponse(BaseModel):
    """Схема для ответа со сравнением версий"""
    document_id: uuid.UUID
    version_id: uuid.UUID
    against: Optional[uuid.UUID] = None
    segments: List[DiffSegmentResponse]
    summary: Dict[str, int]


class PreviewElementResponse(BaseModel):
    type: PreviewKind
    text: Optional[str] = None
    level: Optional[int] = None
    src: Optional[str] = None
    alt: Optional[str] = None
    is_bold: Optional[bool] = None


class PreviewResponse(BaseModel):
    """Схема для структурного превью документа"""
    document_id: uuid.UUID
    profile: str
    elements: List[PreviewElementResponse]
