from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, and_, insert
import uuid

from jotter.db.base import as_utc
from jotter.db.models.organization import Folder as FolderModel, Tag as TagModel, document_tags
from jotter.domains.organization.entities import Folder, Tag


class FolderRepository:
    """Репозиторий для работы с папками"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, folder: Folder) -> Folder:
        """Создание папки"""
        db_folder = FolderModel(
            uuid=folder.uuid,
            user_id=folder.user_id,
            parent_id=folder.parent_id,
            name=folder.name,
            created_at=folder.created_at,
            updated_at=folder.updated_at
        )

        self.session.add(db_folder)
        await self.session.flush()
        return self._to_domain(db_folder)

    async def get_owned(self, folder_uuid: uuid.UUID, user_id: uuid.UUID) -> Optional[Folder]:
        """Папка пользователя; чужая папка неотличима от отсутствующей"""
        result = await self.session.execute(
            select(FolderModel).where(
                and_(FolderModel.uuid == folder_uuid, FolderModel.user_id == user_id)
            )
        )
        db_folder = result.scalar_one_or_none()
        return self._to_domain(db_folder) if db_folder else None

    async def list_by_owner(self, user_id: uuid.UUID) -> List[Folder]:
        """Все папки пользователя по имени"""
        result = await self.session.execute(
            select(FolderModel)
            .where(FolderModel.user_id == user_id)
            .order_by(FolderModel.name, FolderModel.created_at)
        )
        return [self._to_domain(folder) for folder in result.scalars().all()]

    async def update(self, folder: Folder) -> Folder:
        """Обновление папки"""
        stmt = (
            update(FolderModel)
            .where(FolderModel.uuid == folder.uuid)
            .values(
                name=folder.name,
                parent_id=folder.parent_id,
                updated_at=folder.updated_at
            )
        )

        await self.session.execute(stmt)
        return folder

    async def delete(self, folder_uuid: uuid.UUID) -> bool:
        """Удаление папки; документы и вложенные папки переходят в корень"""
        stmt = delete(FolderModel).where(FolderModel.uuid == folder_uuid)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    def _to_domain(self, db_folder: FolderModel) -> Folder:
        """Преобразование модели БД в доменную сущность"""
        return Folder(
            uuid=db_folder.uuid,
            user_id=db_folder.user_id,
            name=db_folder.name,
            parent_id=db_folder.parent_id,
            created_at=as_utc(db_folder.created_at),
            updated_at=as_utc(db_folder.updated_at)
        )


class TagRepository:
    """Репозиторий для работы с метками и их привязкой к документам"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, tag: Tag) -> Tag:
        """Создание метки"""
        db_tag = TagModel(
            uuid=tag.uuid,
            user_id=tag.user_id,
            name=tag.name,
            color=tag.color,
            created_at=tag.created_at,
            updated_at=tag.updated_at
        )

        self.session.add(db_tag)
        await self.session.flush()
        return self._to_domain(db_tag)

    async def get_owned(self, tag_uuid: uuid.UUID, user_id: uuid.UUID) -> Optional[Tag]:
        """Метка пользователя"""
        result = await self.session.execute(
            select(TagModel).where(and_(TagModel.uuid == tag_uuid, TagModel.user_id == user_id))
        )
        db_tag = result.scalar_one_or_none()
        return self._to_domain(db_tag) if db_tag else None

    async def list_by_owner(self, user_id: uuid.UUID) -> List[Tag]:
        """Все метки пользователя по имени"""
        result = await self.session.execute(
            select(TagModel)
            .where(TagModel.user_id == user_id)
            .order_by(TagModel.name, TagModel.created_at)
        )
        return [self._to_domain(tag) for tag in result.scalars().all()]

    async def get_by_document(self, document_id: uuid.UUID) -> List[Tag]:
        """Метки документа по имени"""
        result = await self.session.execute(
            select(TagModel)
            .join(document_tags, document_tags.c.tag_id == TagModel.uuid)
            .where(document_tags.c.document_id == document_id)
            .order_by(TagModel.name, TagModel.created_at)
        )
        return [self._to_domain(tag) for tag in result.scalars().all()]

    async def update(self, tag: Tag) -> Tag:
        """Обновление метки"""
        stmt = (
            update(TagModel)
            .where(TagModel.uuid == tag.uuid)
            .values(
                name=tag.name,
                color=tag.color,
                updated_at=tag.updated_at
            )
        )

        await self.session.execute(stmt)
        return tag

    async def delete(self, tag_uuid: uuid.UUID) -> bool:
        """Удаление метки вместе с привязками к документам"""
        stmt = delete(TagModel).where(TagModel.uuid == tag_uuid)
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def attach(self, document_id: uuid.UUID, tag_id: uuid.UUID) -> bool:
        """Привязка метки к документу; повторная привязка ничего не меняет"""
        existing = await self.session.execute(
            select(document_tags.c.tag_id).where(
                and_(document_tags.c.document_id == document_id, document_tags.c.tag_id == tag_id)
            )
        )
        if existing.first() is not None:
            return False

        await self.session.execute(
            insert(document_tags).values(document_id=document_id, tag_id=tag_id)
        )
        return True

    async def detach(self, document_id: uuid.UUID, tag_id: uuid.UUID) -> bool:
        """Снятие метки с документа"""
        stmt = delete(document_tags).where(
            and_(document_tags.c.document_id == document_id, document_tags.c.tag_id == tag_id)
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    def _to_domain(self, db_tag: TagModel) -> Tag:
        """Преобразование модели БД в доменную сущность"""
        return Tag(
            uuid=db_tag.uuid,
            user_id=db_tag.user_id,
            name=db_tag.name,
            color=db_tag.color,
            created_at=as_utc(db_tag.created_at),
            updated_at=as_utc(db_tag.updated_at)
        )
