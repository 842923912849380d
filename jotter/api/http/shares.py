from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from jotter.api.http.comments import comment_response
from jotter.core.auth import get_current_user
from jotter.core.db import get_db
from jotter.domains.identity.entities import User
from jotter.domains.sharing.entities import Share
from jotter.domains.sharing.schemas import (
    ShareCreate, ShareResponse, SharedDocumentResponse,
    CommentCreate, CommentResponse, CommentListResponse
)
from jotter.domains.sharing.services import ShareService, CommentService, share_url

router = APIRouter(tags=["sharing"])


def share_response(share: Share) -> ShareResponse:
    return ShareResponse(
        uuid=share.uuid,
        document_id=share.document_id,
        email=share.email,
        token=share.token,
        url=share_url(share),
        expires_at=share.expires_at,
        revoked=share.revoked,
        created_at=share.created_at
    )


@router.post(
    "/documents/{document_uuid}/shares",
    response_model=ShareResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_share(
    document_uuid: uuid.UUID,
    share_data: ShareCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание ссылки на документ"""
    share_service = ShareService(db)
    share = await share_service.create_share(document_uuid, share_data, current_user.uuid)
    return share_response(share)


@router.get("/documents/{document_uuid}/shares", response_model=List[ShareResponse])
async def list_shares(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Ссылки документа"""
    share_service = ShareService(db)
    shares = await share_service.list_shares(document_uuid, current_user.uuid)
    return [share_response(s) for s in shares]


@router.delete("/shares/{share_uuid}", response_model=ShareResponse)
async def revoke_share(
    share_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Отзыв ссылки"""
    share_service = ShareService(db)
    share = await share_service.revoke_share(share_uuid, current_user.uuid)
    return share_response(share)


@router.post("/shares/{share_uuid}/restore", response_model=ShareResponse)
async def restore_share(
    share_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Возврат отозванной ссылки"""
    share_service = ShareService(db)
    share = await share_service.restore_share(share_uuid, current_user.uuid)
    return share_response(share)


@router.get("/shared/{token}", response_model=SharedDocumentResponse)
async def open_shared_document(
    token: str,
    db: AsyncSession = Depends(get_db)
):
    """Документ по ссылке (без авторизации)"""
    share_service = ShareService(db)
    _, document = await share_service.open_shared(token)

    return SharedDocumentResponse(
        uuid=document.uuid,
        title=document.title,
        content=document.published_content if document.published_content is not None else document.content,
        status=document.status,
        published_at=document.published_at,
        updated_at=document.updated_at
    )


@router.get("/shared/{token}/comments", response_model=CommentListResponse)
async def list_shared_comments(
    token: str,
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db)
):
    """Комментарии к документу по ссылке"""
    comment_service = CommentService(db)
    comments, total = await comment_service.list_shared_comments(token, limit, offset)

    return CommentListResponse(
        comments=[comment_response(c) for c in comments],
        total=total,
        limit=limit,
        offset=offset,
        has_more=offset + len(comments) < total
    )


@router.post(
    "/shared/{token}/comments",
    response_model=CommentResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_shared_comment(
    token: str,
    comment_data: CommentCreate,
    db: AsyncSession = Depends(get_db)
):
    """Комментарий от получателя ссылки"""
    comment_service = CommentService(db)
    comment = await comment_service.create_shared_comment(token, comment_data)
    return comment_response(comment)
