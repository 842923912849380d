from typing import Optional, List, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete, func
import uuid

from jotter.db.base import as_utc
from jotter.db.models.sharing import Share as ShareModel, Comment as CommentModel
from jotter.domains.sharing.entities import Share, Comment


class ShareRepository:
    """Репозиторий для работы со ссылками на документы"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, share: Share) -> Share:
        """Создание ссылки"""
        db_share = ShareModel(
            uuid=share.uuid,
            document_id=share.document_id,
            email=share.email,
            token=share.token,
            expires_at=share.expires_at,
            revoked=share.revoked,
            created_at=share.created_at
        )

        self.session.add(db_share)
        await self.session.flush()
        return self._to_domain(db_share)

    async def get_by_uuid(self, share_uuid: uuid.UUID) -> Optional[Share]:
        """Получение ссылки по UUID"""
        result = await self.session.execute(
            select(ShareModel).where(ShareModel.uuid == share_uuid)
        )
        db_share = result.scalar_one_or_none()
        return self._to_domain(db_share) if db_share else None

    async def get_by_token(self, token: str) -> Optional[Share]:
        """Получение ссылки по токену"""
        result = await self.session.execute(
            select(ShareModel).where(ShareModel.token == token)
        )
        db_share = result.scalar_one_or_none()
        return self._to_domain(db_share) if db_share else None

    async def get_by_document(self, document_id: uuid.UUID) -> List[Share]:
        """Ссылки документа, новые первыми"""
        result = await self.session.execute(
            select(ShareModel)
            .where(ShareModel.document_id == document_id)
            .order_by(ShareModel.created_at.desc())
        )
        return [self._to_domain(share) for share in result.scalars().all()]

    async def set_revoked(self, share: Share) -> Share:
        """Сохранение признака отзыва"""
        await self.session.execute(
            update(ShareModel).where(ShareModel.uuid == share.uuid).values(revoked=share.revoked)
        )
        return share

    def _to_domain(self, db_share: ShareModel) -> Share:
        """Преобразование модели БД в доменную сущность"""
        return Share(
            uuid=db_share.uuid,
            document_id=db_share.document_id,
            email=db_share.email,
            token=db_share.token,
            expires_at=as_utc(db_share.expires_at),
            revoked=db_share.revoked,
            created_at=as_utc(db_share.created_at)
        )


class CommentRepository:
    """Репозиторий для работы с комментариями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, comment: Comment) -> Comment:
        """Создание комментария"""
        db_comment = CommentModel(
            uuid=comment.uuid,
            document_id=comment.document_id,
            share_id=comment.share_id,
            author_name=comment.author_name,
            author_email=comment.author_email,
            content=comment.content,
            selection_start=comment.selection_start,
            selection_end=comment.selection_end,
            selection_text=comment.selection_text,
            resolved=comment.resolved,
            created_at=comment.created_at,
            updated_at=comment.updated_at
        )

        self.session.add(db_comment)
        await self.session.flush()
        return self._to_domain(db_comment)

    async def get_by_uuid(self, comment_uuid: uuid.UUID) -> Optional[Comment]:
        """Получение комментария по UUID"""
        result = await self.session.execute(
            select(CommentModel).where(CommentModel.uuid == comment_uuid)
        )
        db_comment = result.scalar_one_or_none()
        return self._to_domain(db_comment) if db_comment else None

    async def get_by_document(
        self,
        document_id: uuid.UUID,
        limit: Optional[int] = None,
        offset: int = 0
    ) -> Tuple[List[Comment], int]:
        """Комментарии документа (новые первыми) и их общее количество"""
        query = (
            select(CommentModel)
            .where(CommentModel.document_id == document_id)
            .order_by(CommentModel.created_at.desc())
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        comments = [self._to_domain(c) for c in result.scalars().all()]

        total = await self.session.execute(
            select(func.count(CommentModel.uuid)).where(CommentModel.document_id == document_id)
        )
        return comments, total.scalar() or 0

    async def update(self, comment: Comment) -> Comment:
        """Обновление текста и статуса комментария"""
        await self.session.execute(
            update(CommentModel)
            .where(CommentModel.uuid == comment.uuid)
            .values(
                content=comment.content,
                resolved=comment.resolved,
                updated_at=comment.updated_at
            )
        )
        return comment

    async def delete(self, comment_uuid: uuid.UUID) -> bool:
        """Удаление комментария"""
        result = await self.session.execute(
            delete(CommentModel).where(CommentModel.uuid == comment_uuid)
        )
        return result.rowcount > 0

    def _to_domain(self, db_comment: CommentModel) -> Comment:
        """Преобразование модели БД в доменную сущность"""
        return Comment(
            uuid=db_comment.uuid,
            document_id=db_comment.document_id,
            share_id=db_comment.share_id,
            author_name=db_comment.author_name,
            author_email=db_comment.author_email,
            content=db_comment.content,
            selection_start=db_comment.selection_start,
            selection_end=db_comment.selection_end,
            selection_text=db_comment.selection_text,
            resolved=db_comment.resolved,
            created_at=as_utc(db_comment.created_at),
            updated_at=as_utc(db_comment.updated_at)
        )
