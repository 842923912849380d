from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from jotter.core.auth import get_current_user
from jotter.core.db import get_db
from jotter.domains.identity.entities import User
from jotter.domains.organization.entities import Tag
from jotter.domains.organization.schemas import TagCreate, TagUpdate, TagResponse
from jotter.domains.organization.services import TagService

router = APIRouter(tags=["tags"])


def tag_response(tag: Tag) -> TagResponse:
    return TagResponse(
        uuid=tag.uuid,
        user_id=tag.user_id,
        name=tag.name,
        color=tag.color,
        created_at=tag.created_at
    )


@router.get("/tags", response_model=List[TagResponse])
async def list_tags(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение списка меток"""
    tag_service = TagService(db)
    tags = await tag_service.list_tags(current_user.uuid)
    return [tag_response(t) for t in tags]


@router.post("/tags", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    tag_data: TagCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание метки"""
    tag_service = TagService(db)
    tag = await tag_service.create_tag(tag_data, current_user.uuid)
    return tag_response(tag)


@router.get("/tags/{tag_uuid}", response_model=TagResponse)
async def get_tag(
    tag_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение метки по UUID"""
    tag_service = TagService(db)
    tag = await tag_service.get_tag(tag_uuid, current_user.uuid)
    return tag_response(tag)


@router.patch("/tags/{tag_uuid}", response_model=TagResponse)
async def update_tag(
    tag_uuid: uuid.UUID,
    update_data: TagUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Обновление метки"""
    tag_service = TagService(db)
    tag = await tag_service.update_tag(tag_uuid, update_data, current_user.uuid)
    return tag_response(tag)


@router.delete("/tags/{tag_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление метки"""
    tag_service = TagService(db)
    await tag_service.delete_tag(tag_uuid, current_user.uuid)


@router.get("/documents/{document_uuid}/tags", response_model=List[TagResponse])
async def list_document_tags(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Метки документа"""
    tag_service = TagService(db)
    tags = await tag_service.list_document_tags(document_uuid, current_user.uuid)
    return [tag_response(t) for t in tags]


@router.post("/documents/{document_uuid}/tags/{tag_uuid}", response_model=List[TagResponse])
async def attach_tag(
    document_uuid: uuid.UUID,
    tag_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Привязка метки к документу"""
    tag_service = TagService(db)
    tags = await tag_service.attach_tag(document_uuid, tag_uuid, current_user.uuid)
    return [tag_response(t) for t in tags]


@router.delete("/documents/{document_uuid}/tags/{tag_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def detach_tag(
    document_uuid: uuid.UUID,
    tag_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Снятие метки с документа"""
    tag_service = TagService(db)
    await tag_service.detach_tag(document_uuid, tag_uuid, current_user.uuid)
