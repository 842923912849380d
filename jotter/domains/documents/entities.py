import copy
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from jotter.content import count_words, extract_text, truncate_text
from jotter.core.errors import ValidationError
from jotter.db.base import utcnow

EXCERPT_LENGTH = 100
ANNOTATION_MAX_LENGTH = 500


class DocumentStatus(str, Enum):
    DRAFT = "draft"
    PUBLISHED = "published"


class Document:
    """Сущность документа: текущий черновик и последний опубликованный снимок"""

    def __init__(
        self,
        uuid: uuid.UUID,
        user_id: uuid.UUID,
        title: str,
        content: Any = None,
        status: DocumentStatus = DocumentStatus.DRAFT,
        published_content: Any = None,
        published_at: Optional[datetime] = None,
        folder_id: Optional[uuid.UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.user_id = user_id
        self.title = title
        self.content = content
        self.status = DocumentStatus(status)
        self.published_content = published_content
        self.published_at = published_at
        self.folder_id = folder_id
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    @property
    def is_published(self) -> bool:
        return self.status is DocumentStatus.PUBLISHED

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        return self.user_id == user_id

    def update(self, title: Optional[str] = None, content: Any = None, replace_content: bool = False) -> None:
        """Правка черновика; версии при этом не создаются"""
        if title is not None:
            self.title = title
        if replace_content:
            self.content = content
        self.updated_at = utcnow()

    def move_to(self, folder_id: Optional[uuid.UUID]) -> None:
        """Перенос в папку; None возвращает документ в корень"""
        self.folder_id = folder_id
        self.updated_at = utcnow()

    def snapshot(self, version_number: int, created_by: uuid.UUID) -> "DocumentVersion":
        """Неизменяемая копия текущих заголовка и содержимого"""
        return DocumentVersion.create_version(
            document_id=self.uuid,
            title=self.title,
            content=self.content,
            version_number=version_number,
            created_by=created_by
        )

    def publish(self) -> None:
        self.published_content = copy.deepcopy(self.content)
        self.status = DocumentStatus.PUBLISHED
        self.published_at = utcnow()
        self.updated_at = self.published_at

    def unpublish(self) -> None:
        # published_content и published_at сохраняются до следующей публикации
        if not self.is_published:
            raise ValidationError("Document is not published", field="status")
        self.status = DocumentStatus.DRAFT
        self.updated_at = utcnow()

    def restore_from(self, version: "DocumentVersion") -> None:
        """Подмена черновика содержимым версии; статус не меняется"""
        self.title = version.title
        self.content = copy.deepcopy(version.content)
        self.updated_at = utcnow()

    def get_text(self) -> str:
        return extract_text(self.content)

    def get_excerpt(self, max_length: int = EXCERPT_LENGTH) -> str:
        return truncate_text(self.get_text(), max_length)

    def get_word_count(self) -> int:
        return count_words(self.get_text())

    @classmethod
    def create_document(
        cls,
        title: str,
        user_id: uuid.UUID,
        content: Any = None,
        folder_id: Optional[uuid.UUID] = None
    ) -> "Document":
        """Создание нового документа"""
        return cls(
            uuid=uuid.uuid4(),
            user_id=user_id,
            title=title,
            content=content,
            folder_id=folder_id
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Document):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Document(uuid={self.uuid}, title={self.title}, status={self.status.value})"


class DocumentVersion:
    """Сущность версии документа"""

    def __init__(
        self,
        uuid: uuid.UUID,
        document_id: uuid.UUID,
        title: str,
        content: Any,
        version_number: int,
        created_by: uuid.UUID,
        annotation: Optional[str] = None,
        created_at: Optional[datetime] = None,
        created_by_name: Optional[str] = None
    ):
        self.uuid = uuid
        self.document_id = document_id
        self.title = title
        self.content = content
        self.version_number = version_number
        self.created_by = created_by
        self.annotation = annotation
        self.created_at = created_at or utcnow()
        self.created_by_name = created_by_name

    def annotate(self, annotation: Optional[str]) -> None:
        """Единственное изменяемое поле версии"""
        if annotation is not None:
            annotation = annotation.strip()
            if len(annotation) > ANNOTATION_MAX_LENGTH:
                raise ValidationError(
                    f"Annotation must be at most {ANNOTATION_MAX_LENGTH} characters",
                    field="annotation"
                )
        self.annotation = annotation or None

    def get_text(self) -> str:
        return extract_text(self.content)

    def get_word_count(self) -> int:
        return count_words(self.get_text())

    @classmethod
    def create_version(
        cls,
        document_id: uuid.UUID,
        title: str,
        content: Any,
        version_number: int,
        created_by: uuid.UUID
    ) -> "DocumentVersion":
        """Создание новой версии документа"""
        return cls(
            uuid=uuid.uuid4(),
            document_id=document_id,
            title=title,
            content=copy.deepcopy(content),
            version_number=version_number,
            created_by=created_by
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, DocumentVersion):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"DocumentVersion(uuid={self.uuid}, document_id={self.document_id}, version={self.version_number})"
