from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from jotter.core.config import settings
from jotter.core.errors import NotFoundError, UnauthorizedError
from jotter.core.logging import get_logger
from jotter.db.repositories.document_repository import DocumentRepository
from jotter.db.repositories.sharing_repository import ShareRepository, CommentRepository
from jotter.domains.documents.entities import Document
from jotter.domains.sharing.entities import Share, Comment
from jotter.domains.sharing.schemas import ShareCreate, CommentCreate, CommentUpdate

logger = get_logger(__name__)


def share_url(share: Share) -> str:
    return f"{settings.web_url.rstrip('/')}/shared/{share.token}"


class ShareService:
    """Сервис для выдачи ссылок на документы и доступа по ним"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.share_repository = ShareRepository(session)
        self.document_repository = DocumentRepository(session)

    async def _get_owned_document(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> Document:
        document = await self.document_repository.get_owned(document_uuid, user_id)
        if not document:
            raise NotFoundError("document", document_uuid)
        return document

    async def _get_managed_share(self, share_uuid: uuid.UUID, user_id: uuid.UUID) -> Share:
        """Ссылка, которой управляет пользователь: 404 если нет, 403 если чужая"""
        share = await self.share_repository.get_by_uuid(share_uuid)
        if not share:
            raise NotFoundError("share", share_uuid)

        document = await self.document_repository.get_by_uuid(share.document_id)
        if not document or not document.is_owned_by(user_id):
            raise UnauthorizedError("You don't have permission to manage this share")
        return share

    async def create_share(
        self,
        document_uuid: uuid.UUID,
        share_data: ShareCreate,
        user_id: uuid.UUID
    ) -> Share:
        """Создание ссылки на документ"""
        document = await self._get_owned_document(document_uuid, user_id)

        share = Share.create_share(
            document_id=document.uuid,
            email=share_data.email,
            expires_at=share_data.expires_at,
            token_bytes=settings.share_token_bytes
        )
        created_share = await self.share_repository.create(share)
        await self.session.commit()

        # Письмо получателю не отправляется, ссылку передает владелец
        logger.info("Document %s shared with %s", document.uuid, share_data.email)
        return created_share

    async def list_shares(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> List[Share]:
        """Ссылки документа"""
        await self._get_owned_document(document_uuid, user_id)
        return await self.share_repository.get_by_document(document_uuid)

    async def revoke_share(self, share_uuid: uuid.UUID, user_id: uuid.UUID) -> Share:
        """Отзыв ссылки"""
        share = await self._get_managed_share(share_uuid, user_id)

        share.revoke()
        await self.share_repository.set_revoked(share)
        await self.session.commit()

        logger.info("Share %s revoked", share.uuid)
        return share

    async def restore_share(self, share_uuid: uuid.UUID, user_id: uuid.UUID) -> Share:
        """Возврат отозванной ссылки"""
        share = await self._get_managed_share(share_uuid, user_id)

        share.unrevoke()
        await self.share_repository.set_revoked(share)
        await self.session.commit()

        logger.info("Share %s restored", share.uuid)
        return share

    async def open_shared(self, token: str) -> Tuple[Share, Document]:
        """Документ по токену ссылки: 404 если токен неизвестен, 403 если ссылка недействительна"""
        share = await self.share_repository.get_by_token(token)
        if not share:
            raise NotFoundError("share")

        if share.revoked:
            raise UnauthorizedError("This share has been revoked")
        if share.is_expired():
            raise UnauthorizedError("This share has expired")

        document = await self.document_repository.get_by_uuid(share.document_id)
        if not document:
            raise NotFoundError("document", share.document_id)

        return share, document


class CommentService:
    """Сервис для работы с комментариями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.comment_repository = CommentRepository(session)
        self.document_repository = DocumentRepository(session)
        self.share_service = ShareService(session)

    async def _get_managed_comment(self, comment_uuid: uuid.UUID, user_id: uuid.UUID) -> Comment:
        comment = await self.comment_repository.get_by_uuid(comment_uuid)
        if not comment:
            raise NotFoundError("comment", comment_uuid)

        document = await self.document_repository.get_by_uuid(comment.document_id)
        if not document or not document.is_owned_by(user_id):
            raise UnauthorizedError("You don't have permission to manage this comment")
        return comment

    async def _add_comment(
        self,
        document_uuid: uuid.UUID,
        comment_data: CommentCreate,
        share_id: Optional[uuid.UUID] = None
    ) -> Comment:
        comment = Comment.create_comment(
            document_id=document_uuid,
            share_id=share_id,
            author_name=comment_data.author_name,
            author_email=comment_data.author_email,
            content=comment_data.content,
            selection_start=comment_data.selection_start,
            selection_end=comment_data.selection_end,
            selection_text=comment_data.selection_text
        )
        created_comment = await self.comment_repository.create(comment)
        await self.session.commit()

        logger.info("Comment %s added to document %s by %s",
                    created_comment.uuid, document_uuid, comment_data.author_name)
        return created_comment

    async def list_shared_comments(
        self,
        token: str,
        limit: int = 20,
        offset: int = 0
    ) -> Tuple[List[Comment], int]:
        """Комментарии к документу, открытому по ссылке"""
        _, document = await self.share_service.open_shared(token)
        return await self.comment_repository.get_by_document(document.uuid, limit, offset)

    async def create_shared_comment(self, token: str, comment_data: CommentCreate) -> Comment:
        """Комментарий от получателя ссылки"""
        share, document = await self.share_service.open_shared(token)
        return await self._add_comment(document.uuid, comment_data, share_id=share.uuid)

    async def list_document_comments(self, document_uuid: uuid.UUID, user_id: uuid.UUID) -> List[Comment]:
        """Все комментарии документа для владельца"""
        document = await self.document_repository.get_owned(document_uuid, user_id)
        if not document:
            raise NotFoundError("document", document_uuid)

        comments, _ = await self.comment_repository.get_by_document(document_uuid)
        return comments

    async def create_document_comment(
        self,
        document_uuid: uuid.UUID,
        comment_data: CommentCreate,
        user_id: uuid.UUID
    ) -> Comment:
        """Комментарий владельца к своему документу"""
        document = await self.document_repository.get_owned(document_uuid, user_id)
        if not document:
            raise NotFoundError("document", document_uuid)

        return await self._add_comment(document.uuid, comment_data)

    async def update_comment(
        self,
        comment_uuid: uuid.UUID,
        update_data: CommentUpdate,
        user_id: uuid.UUID
    ) -> Comment:
        """Изменение текста или статуса комментария"""
        comment = await self._get_managed_comment(comment_uuid, user_id)

        comment.update(content=update_data.content, resolved=update_data.resolved)
        await self.comment_repository.update(comment)
        await self.session.commit()
        return comment

    async def delete_comment(self, comment_uuid: uuid.UUID, user_id: uuid.UUID) -> None:
        """Удаление комментария"""
        await self._get_managed_comment(comment_uuid, user_id)

        await self.comment_repository.delete(comment_uuid)
        await self.session.commit()
