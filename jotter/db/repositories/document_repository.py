from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func, and_
import uuid

from jotter.db.base import as_utc
from jotter.db.models.document import Document as DocumentModel, DocumentVersion as DocumentVersionModel
from jotter.db.models.organization import document_tags
from jotter.db.models.user import User as UserModel
from jotter.domains.documents.entities import Document, DocumentVersion


class DocumentRepository:
    """Репозиторий для работы с документами.

    Методы не фиксируют транзакцию: commit/rollback остаются за сервисом,
    чтобы переходы жизненного цикла записывались одной единицей работы.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, document: Document) -> Document:
        """Создание нового документа"""
        db_document = DocumentModel(
            uuid=document.uuid,
            user_id=document.user_id,
            folder_id=document.folder_id,
            title=document.title,
            content=document.content,
            status=document.status.value,
            published_content=document.published_content,
            published_at=document.published_at,
            created_at=document.created_at,
            updated_at=document.updated_at
        )

        self.session.add(db_document)
        await self.session.flush()
        return self._to_domain(db_document)

    async def get_owned(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Optional[Document]:
        """Документ пользователя; чужой документ неотличим от отсутствующего"""
        result = await self.session.execute(
            select(DocumentModel).where(
                and_(DocumentModel.uuid == document_uuid, DocumentModel.user_id == user_id)
            )
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def get_by_uuid(self, document_uuid: uuid.UUID) -> Optional[Document]:
        """Получение документа по UUID без проверки владельца"""
        result = await self.session.execute(
            select(DocumentModel).where(DocumentModel.uuid == document_uuid)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def lock_owned(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Optional[Document]:
        """Документ пользователя с блокировкой строки до конца транзакции.

        На PostgreSQL это SELECT ... FOR UPDATE; SQLite сериализует
        транзакции через BEGIN IMMEDIATE (см. jotter.core.db).
        """
        result = await self.session.execute(
            select(DocumentModel)
            .where(and_(DocumentModel.uuid == document_uuid, DocumentModel.user_id == user_id))
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        db_document = result.scalar_one_or_none()
        return self._to_domain(db_document) if db_document else None

    async def list_by_owner(
        self,
        user_id: uuid.UUID,
        limit: int = 20,
        offset: int = 0,
        folder_id: Optional[uuid.UUID] = None,
        tag_id: Optional[uuid.UUID] = None
    ) -> Tuple[List[Document], int]:
        """Документы пользователя (новые изменения первыми) и их общее количество"""
        conditions = [DocumentModel.user_id == user_id]
        if folder_id is not None:
            conditions.append(DocumentModel.folder_id == folder_id)
        if tag_id is not None:
            conditions.append(
                DocumentModel.uuid.in_(
                    select(document_tags.c.document_id).where(document_tags.c.tag_id == tag_id)
                )
            )

        result = await self.session.execute(
            select(DocumentModel)
            .where(and_(*conditions))
            .order_by(DocumentModel.updated_at.desc())
            .offset(offset)
            .limit(limit)
        )
        documents = [self._to_domain(doc) for doc in result.scalars().all()]

        total = await self.session.execute(
            select(func.count(DocumentModel.uuid)).where(and_(*conditions))
        )
        return documents, total.scalar() or 0

    async def update(self, document: Document) -> Document:
        """Обновление документа"""
        stmt = (
            update(DocumentModel)
            .where(DocumentModel.uuid == document.uuid)
            .values(
                folder_id=document.folder_id,
                title=document.title,
                content=document.content,
                status=document.status.value,
                published_content=document.published_content,
                published_at=document.published_at,
                updated_at=document.updated_at
            )
        )

        await self.session.execute(stmt)
        return document

    async def delete(self, document_uuid: uuid.UUID) -> bool:
        """Удаление документа (версии, ссылки и комментарии удаляются каскадом)"""
        stmt = delete(DocumentModel).where(DocumentModel.uuid == document_uuid)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    def _to_domain(self, db_document: DocumentModel) -> Document:
        """Преобразование модели БД в доменную сущность"""
        return Document(
            uuid=db_document.uuid,
            user_id=db_document.user_id,
            folder_id=db_document.folder_id,
            title=db_document.title,
            content=db_document.content,
            status=db_document.status,
            published_content=db_document.published_content,
            published_at=as_utc(db_document.published_at),
            created_at=as_utc(db_document.created_at),
            updated_at=as_utc(db_document.updated_at)
        )


class DocumentVersionRepository:
    """Репозиторий для работы с версиями документов"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def next_version_number(self, document_id: uuid.UUID) -> int:
        """max(version_number) + 1, либо 1 для документа без версий.

        Вызывать только под блокировкой документа (DocumentRepository.lock_owned).
        """
        result = await self.session.execute(
            select(func.max(DocumentVersionModel.version_number))
            .where(DocumentVersionModel.document_id == document_id)
        )
        current = result.scalar()
        return (current or 0) + 1

    async def create(self, version: DocumentVersion) -> DocumentVersion:
        """Создание новой версии документа"""
        db_version = DocumentVersionModel(
            uuid=version.uuid,
            document_id=version.document_id,
            title=version.title,
            content=version.content,
            version_number=version.version_number,
            created_by=version.created_by,
            annotation=version.annotation,
            created_at=version.created_at,
            updated_at=version.created_at
        )

        self.session.add(db_version)
        await self.session.flush()
        return self._to_domain(db_version)

    async def get_for_document(
        self,
        document_id: uuid.UUID,
        version_uuid: uuid.UUID
    ) -> Optional[DocumentVersion]:
        """Версия, принадлежащая указанному документу"""
        result = await self.session.execute(
            select(DocumentVersionModel, UserModel.name, UserModel.email)
            .outerjoin(UserModel, UserModel.uuid == DocumentVersionModel.created_by)
            .where(
                and_(
                    DocumentVersionModel.uuid == version_uuid,
                    DocumentVersionModel.document_id == document_id
                )
            )
        )
        row = result.one_or_none()
        if row is None:
            return None
        return self._to_domain(row[0], row[1] or row[2])

    async def get_by_document(self, document_id: uuid.UUID) -> List[DocumentVersion]:
        """Версии документа, новые первыми, с именем автора"""
        result = await self.session.execute(
            select(DocumentVersionModel, UserModel.name, UserModel.email)
            .outerjoin(UserModel, UserModel.uuid == DocumentVersionModel.created_by)
            .where(DocumentVersionModel.document_id == document_id)
            .order_by(DocumentVersionModel.version_number.desc())
        )
        return [self._to_domain(row[0], row[1] or row[2]) for row in result.all()]

    async def update_annotation(self, version: DocumentVersion) -> DocumentVersion:
        """Изменение подписи версии; остальные поля не трогаем"""
        stmt = (
            update(DocumentVersionModel)
            .where(DocumentVersionModel.uuid == version.uuid)
            .values(annotation=version.annotation)
        )
        await self.session.execute(stmt)
        return version

    def _to_domain(
        self,
        db_version: DocumentVersionModel,
        created_by_name: Optional[str] = None
    ) -> DocumentVersion:
        """Преобразование модели БД в доменную сущность"""
        return DocumentVersion(
            uuid=db_version.uuid,
            document_id=db_version.document_id,
            title=db_version.title,
            content=db_version.content,
            version_number=db_version.version_number,
            created_by=db_version.created_by,
            annotation=db_version.annotation,
            created_at=as_utc(db_version.created_at),
            created_by_name=created_by_name
        )
