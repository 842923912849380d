from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from jotter.core.auth import get_current_user
from jotter.core.db import get_db
from jotter.domains.identity.entities import User
from jotter.domains.sharing.entities import Comment
from jotter.domains.sharing.schemas import CommentCreate, CommentUpdate, CommentResponse
from jotter.domains.sharing.services import CommentService

router = APIRouter(tags=["comments"])


def comment_response(comment: Comment) -> CommentResponse:
    return CommentResponse(
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


@router.get("/documents/{document_uuid}/comments", response_model=List[CommentResponse])
async def list_document_comments(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Комментарии к документу"""
    comment_service = CommentService(db)
    comments = await comment_service.list_document_comments(document_uuid, current_user.uuid)
    return [comment_response(c) for c in comments]


@router.post(
    "/documents/{document_uuid}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_document_comment(
    document_uuid: uuid.UUID,
    comment_data: CommentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Комментарий владельца к документу"""
    comment_service = CommentService(db)
    comment = await comment_service.create_document_comment(document_uuid, comment_data, current_user.uuid)
    return comment_response(comment)


@router.patch("/comments/{comment_uuid}", response_model=CommentResponse)
async def update_comment(
    comment_uuid: uuid.UUID,
    update_data: CommentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Изменение комментария"""
    comment_service = CommentService(db)
    comment = await comment_service.update_comment(comment_uuid, update_data, current_user.uuid)
    return comment_response(comment)


@router.delete("/comments/{comment_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление комментария"""
    comment_service = CommentService(db)
    await comment_service.delete_comment(comment_uuid, current_user.uuid)
