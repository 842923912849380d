from typing import List, Optional
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from jotter.core.errors import NotFoundError, ValidationError
from jotter.core.logging import get_logger
from jotter.db.repositories.document_repository import DocumentRepository
from jotter.db.repositories.organization_repository import FolderRepository, TagRepository
from jotter.domains.organization.entities import Folder, Tag
from jotter.domains.organization.schemas import FolderCreate, FolderUpdate, TagCreate, TagUpdate

logger = get_logger(__name__)


class FolderService:
    """Сервис для работы с папками"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.folder_repository = FolderRepository(session)

    async def get_folder(self, folder_uuid: uuid.UUID, user_id: uuid.UUID) -> Folder:
        """Получение папки пользователя"""
        folder = await self.folder_repository.get_owned(folder_uuid, user_id)
        if not folder:
            raise NotFoundError("folder", folder_uuid)
        return folder

    async def list_folders(self, user_id: uuid.UUID) -> List[Folder]:
        """Получение папок пользователя"""
        return await self.folder_repository.list_by_owner(user_id)

    async def create_folder(self, folder_data: FolderCreate, user_id: uuid.UUID) -> Folder:
        """Создание папки"""
        if folder_data.parent_id is not None:
            await self._get_parent(folder_data.parent_id, user_id)

        folder = Folder.create_folder(
            name=folder_data.name,
            user_id=user_id,
            parent_id=folder_data.parent_id
        )

        created_folder = await self.folder_repository.create(folder)
        await self.session.commit()

        logger.info("Folder %s created by %s", created_folder.uuid, user_id)
        return created_folder

    async def update_folder(
        self,
        folder_uuid: uuid.UUID,
        update_data: FolderUpdate,
        user_id: uuid.UUID
    ) -> Folder:
        """Переименование и перенос папки"""
        folder = await self.get_folder(folder_uuid, user_id)

        if update_data.name is not None:
            folder.rename(update_data.name)
        if update_data.parent_provided:
            folder.move_to(update_data.parent_id)
            if update_data.parent_id is not None:
                await self._check_not_descendant(folder, update_data.parent_id, user_id)

        await self.folder_repository.update(folder)
        await self.session.commit()
        return folder

    async def delete_folder(self, folder_uuid: uuid.UUID, user_id: uuid.UUID) -> None:
        """Удаление папки; её документы остаются без папки"""
        await self.get_folder(folder_uuid, user_id)

        await self.folder_repository.delete(folder_uuid)
        await self.session.commit()

        logger.info("Folder %s deleted by %s", folder_uuid, user_id)

    async def _get_parent(self, parent_uuid: uuid.UUID, user_id: uuid.UUID) -> Folder:
        parent = await self.folder_repository.get_owned(parent_uuid, user_id)
        if not parent:
            raise NotFoundError("parent_folder", parent_uuid)
        return parent

    async def _check_not_descendant(self, folder: Folder, parent_uuid: uuid.UUID, user_id: uuid.UUID) -> None:
        """Новый родитель не может лежать внутри переносимой папки"""
        ancestor: Optional[Folder] = await self._get_parent(parent_uuid, user_id)
        seen = set()
        while ancestor is not None and ancestor.uuid not in seen:
            if ancestor.uuid == folder.uuid:
                raise ValidationError("Folder cannot be moved into its own subfolder", field="parent_id")
            seen.add(ancestor.uuid)
            if ancestor.parent_id is None:
                break
            ancestor = await self.folder_repository.get_owned(ancestor.parent_id, user_id)


class TagService:
    """Сервис для работы с метками документов"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.tag_repository = TagRepository(session)
        self.document_repository = DocumentRepository(session)

    async def get_tag(self, tag_uuid: uuid.UUID, user_id: uuid.UUID) -> Tag:
        """Получение метки пользователя"""
        tag = await self.tag_repository.get_owned(tag_uuid, user_id)
        if not tag:
            raise NotFoundError("tag", tag_uuid)
        return tag

    async def list_tags(self, user_id: uuid.UUID) -> List[Tag]:
        """Получение меток пользователя"""
        return await self.tag_repository.list_by_owner(user_id)

    async def create_tag(self, tag_data: TagCreate, user_id: uuid.UUID) -> Tag:
        """Создание метки"""
        tag = Tag.create_tag(name=tag_data.name, user_id=user_id, color=tag_data.color)

        created_tag = await self.tag_repository.create(tag)
        await self.session.commit()

        logger.info("Tag %s created by %s", created_tag.uuid, user_id)
        return created_tag

    async def update_tag(self, tag_uuid: uuid.UUID, update_data: TagUpdate, user_id: uuid.UUID) -> Tag:
        """Обновление метки"""
        tag = await self.get_tag(tag_uuid, user_id)

        tag.update(
            name=update_data.name,
            color=update_data.color,
            replace_color=update_data.color_provided
        )

        await self.tag_repository.update(tag)
        await self.session.commit()
        return tag

    async def delete_tag(self, tag_uuid: uuid.UUID, user_id: uuid.UUID) -> None:
        """Удаление метки; документы при этом не затрагиваются"""
        await self.get_tag(tag_uuid, user_id)

        await self.tag_repository.delete(tag_uuid)
        await self.session.commit()

        logger.info("Tag %s deleted by %s", tag_uuid, user_id)

    async def list_document_tags(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> List[Tag]:
        """Метки документа пользователя"""
        await self._get_owned_document(document_uuid, user_id)
        return await self.tag_repository.get_by_document(document_uuid)

    async def attach_tag(self, document_uuid: uuid.UUID, tag_uuid: uuid.UUID, user_id: uuid.UUID) -> List[Tag]:
        """Привязка метки к документу; возвращает метки документа"""
        await self._get_owned_document(document_uuid, user_id)
        await self.get_tag(tag_uuid, user_id)

        if await self.tag_repository.attach(document_uuid, tag_uuid):
            await self.session.commit()
            logger.info("Tag %s attached to document %s", tag_uuid, document_uuid)

        return await self.tag_repository.get_by_document(document_uuid)

    async def detach_tag(self, document_uuid: uuid.UUID, tag_uuid: uuid.UUID, user_id: uuid.UUID) -> None:
        """Снятие метки с документа; отсутствующая привязка не ошибка"""
        await self._get_owned_document(document_uuid, user_id)

        await self.tag_repository.detach(document_uuid, tag_uuid)
        await self.session.commit()

    async def _get_owned_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> None:
        document = await self.document_repository.get_owned(document_uuid, user_id)
        if not document:
            raise NotFoundError("document", document_uuid)
