from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from jotter.content import (
    DiffSegment, PreviewElement, PreviewProfile, HOVER,
    diff_texts, extract_text, extract_structural_elements, summarize_diff
)
from jotter.core.errors import NotFoundError
from jotter.core.logging import get_logger
from jotter.db.repositories.document_repository import DocumentRepository, DocumentVersionRepository
from jotter.db.repositories.organization_repository import FolderRepository
from jotter.domains.documents.entities import Document, DocumentVersion
from jotter.domains.documents.schemas import DocumentCreate, DocumentUpdate

logger = get_logger(__name__)


class DocumentService:
    """Сервис для работы с документами"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.document_repository = DocumentRepository(session)
        self.folder_repository = FolderRepository(session)

    async def _check_folder(self, folder_uuid: Optional[uuid.UUID], user_id: uuid.UUID) -> None:
        if folder_uuid is not None and not await self.folder_repository.get_owned(folder_uuid, user_id):
            raise NotFoundError("folder", folder_uuid)

    async def create_document(self, document_data: DocumentCreate, user_id: uuid.UUID) -> Document:
        """Создание нового документа (черновик)"""
        await self._check_folder(document_data.folder_id, user_id)

        document = Document.create_document(
            title=document_data.title,
            user_id=user_id,
            content=document_data.content,
            folder_id=document_data.folder_id
        )

        created_document = await self.document_repository.create(document)
        await self.session.commit()

        logger.info("Document %s created by %s", created_document.uuid, user_id)
        return created_document

    async def get_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Document:
        """Получение документа пользователя"""
        document = await self.document_repository.get_owned(document_uuid, user_id)

        if not document:
            raise NotFoundError("document", document_uuid)

        return document

    async def list_documents(
        self,
        user_id: uuid.UUID,
        limit: int = 20,
        offset: int = 0,
        folder_id: Optional[uuid.UUID] = None,
        tag_id: Optional[uuid.UUID] = None
    ) -> Tuple[List[Document], int]:
        """Получение документов пользователя, при необходимости по папке или метке"""
        return await self.document_repository.list_by_owner(user_id, limit, offset, folder_id, tag_id)

    async def update_document(
        self,
        document_uuid: uuid.UUID,
        update_data: DocumentUpdate,
        user_id: uuid.UUID
    ) -> Document:
        """Обновление черновика; версии не создаются"""
        document = await self.get_document(document_uuid, user_id)

        document.update(
            title=update_data.title,
            content=update_data.content,
            replace_content=update_data.content_provided
        )
        if update_data.folder_provided:
            await self._check_folder(update_data.folder_id, user_id)
            document.move_to(update_data.folder_id)

        await self.document_repository.update(document)
        await self.session.commit()
        return document

    async def delete_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> None:
        """Удаление документа вместе с версиями, ссылками и комментариями"""
        await self.get_document(document_uuid, user_id)

        await self.document_repository.delete(document_uuid)
        await self.session.commit()

        logger.info("Document %s deleted by %s", document_uuid, user_id)

    async def get_preview(
        self,
        document_uuid: uuid.UUID,
        user_id: uuid.UUID,
        profile: PreviewProfile = HOVER,
        max_elements: Optional[int] = None
    ) -> List[PreviewElement]:
        """Структурное превью текущего черновика"""
        document = await self.get_document(document_uuid, user_id)
        return extract_structural_elements(document.content, max_elements, profile)


class DocumentVersionService:
    """Жизненный цикл документа: публикация, история версий, восстановление.

    Каждая операция, создающая версию, выполняется одной транзакцией:
    блокировка строки документа, вычисление следующего номера, вставка
    версии, обновление документа, commit. Ошибка на любом шаге откатывает
    все изменения (rollback делает get_db либо вызывающий код).
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.version_repository = DocumentVersionRepository(session)
        self.document_repository = DocumentRepository(session)

    async def _lock_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Document:
        document = await self.document_repository.lock_owned(document_uuid, user_id)
        if not document:
            raise NotFoundError("document", document_uuid)
        return document

    async def _get_owned_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Document:
        document = await self.document_repository.get_owned(document_uuid, user_id)
        if not document:
            raise NotFoundError("document", document_uuid)
        return document

    async def _get_version(self, document_uuid: uuid.UUID, version_uuid: uuid.UUID) -> DocumentVersion:
        version = await self.version_repository.get_for_document(document_uuid, version_uuid)
        if not version:
            raise NotFoundError("version", version_uuid)
        return version

    async def _snapshot(self, document: Document, user_id: uuid.UUID) -> DocumentVersion:
        version_number = await self.version_repository.next_version_number(document.uuid)
        return await self.version_repository.create(document.snapshot(version_number, user_id))

    async def publish(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Document:
        """Публикация: новая версия с текущим содержимым и замороженная копия"""
        document = await self._lock_document(document_uuid, user_id)

        version = await self._snapshot(document, user_id)
        document.publish()
        await self.document_repository.update(document)
        await self.session.commit()

        logger.info("Document %s published as version %d", document.uuid, version.version_number)
        return document

    async def unpublish(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Document:
        """Снятие с публикации; версия не создается"""
        document = await self._lock_document(document_uuid, user_id)

        document.unpublish()
        await self.document_repository.update(document)
        await self.session.commit()

        logger.info("Document %s unpublished", document.uuid)
        return document

    async def list_versions(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> List[DocumentVersion]:
        """Версии документа, новые первыми"""
        await self._get_owned_document(document_uuid, user_id)
        return await self.version_repository.get_by_document(document_uuid)

    async def get_version(
        self,
        document_uuid: uuid.UUID,
        version_uuid: uuid.UUID,
        user_id: uuid.UUID
    ) -> DocumentVersion:
        """Получение конкретной версии документа"""
        await self._get_owned_document(document_uuid, user_id)
        return await self._get_version(document_uuid, version_uuid)

    async def restore_version(
        self,
        document_uuid: uuid.UUID,
        version_uuid: uuid.UUID,
        user_id: uuid.UUID
    ) -> Document:
        """Восстановление документа из версии.

        Текущее состояние сначала сохраняется новой версией, поэтому
        восстановление ничего не теряет и само может быть отменено.
        """
        document = await self._lock_document(document_uuid, user_id)
        target = await self._get_version(document_uuid, version_uuid)

        backup = await self._snapshot(document, user_id)
        document.restore_from(target)
        await self.document_repository.update(document)
        await self.session.commit()

        logger.info(
            "Document %s restored to version %d (previous state saved as version %d)",
            document.uuid, target.version_number, backup.version_number
        )
        return document

    async def annotate_version(
        self,
        document_uuid: uuid.UUID,
        version_uuid: uuid.UUID,
        annotation: Optional[str],
        user_id: uuid.UUID
    ) -> DocumentVersion:
        """Изменение подписи версии"""
        await self._get_owned_document(document_uuid, user_id)
        version = await self._get_version(document_uuid, version_uuid)

        version.annotate(annotation)
        await self.version_repository.update_annotation(version)
        await self.session.commit()
        return version

    async def compare_versions(
        self,
        document_uuid: uuid.UUID,
        version_uuid: uuid.UUID,
        user_id: uuid.UUID,
        against: Optional[uuid.UUID] = None
    ) -> Tuple[List[DiffSegment], dict]:
        """Пословное сравнение версии с другой версией или с текущим черновиком"""
        document = await self._get_owned_document(document_uuid, user_id)
        base = await self._get_version(document_uuid, version_uuid)

        if against is not None:
            new_text = (await self._get_version(document_uuid, against)).get_text()
        else:
            new_text = extract_text(document.content)

        segments = diff_texts(base.get_text(), new_text)
        return segments, summarize_diff(segments)
