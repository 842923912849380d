from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional
import uuid

from jotter.content import PROFILES
from jotter.core.auth import get_current_user
from jotter.core.db import get_db
from jotter.core.errors import ValidationError
from jotter.domains.documents.entities import Document
from jotter.domains.documents.schemas import (
    DocumentCreate, DocumentUpdate, DocumentResponse, DocumentListResponse,
    PreviewElementResponse, PreviewResponse
)
from jotter.domains.documents.services import DocumentService
from jotter.domains.identity.entities import User

router = APIRouter(prefix="/documents", tags=["documents"])


def document_response(document: Document) -> DocumentResponse:
    return DocumentResponse(
        uuid=document.uuid,
        user_id=document.user_id,
        folder_id=document.folder_id,
        title=document.title,
        content=document.content,
        status=document.status,
        published_content=document.published_content,
        published_at=document.published_at,
        created_at=document.created_at,
        updated_at=document.updated_at,
        excerpt=document.get_excerpt(),
        word_count=document.get_word_count()
    )


@router.post("", response_model=DocumentResponse, status_code=status.HTTP_201_CREATED)
async def create_document(
    document_data: DocumentCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание нового документа"""
    document_service = DocumentService(db)
    document = await document_service.create_document(document_data, current_user.uuid)
    return document_response(document)


@router.get("", response_model=DocumentListResponse)
async def list_documents(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    folder_id: Optional[uuid.UUID] = Query(None),
    tag_id: Optional[uuid.UUID] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение списка документов"""
    document_service = DocumentService(db)
    documents, total = await document_service.list_documents(
        current_user.uuid, limit, offset, folder_id=folder_id, tag_id=tag_id
    )

    return DocumentListResponse(
        documents=[document_response(doc) for doc in documents],
        total=total,
        limit=limit,
        offset=offset
    )


@router.get("/{document_uuid}", response_model=DocumentResponse)
async def get_document(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение документа по UUID"""
    document_service = DocumentService(db)
    document = await document_service.get_document(document_uuid, current_user.uuid)
    return document_response(document)


@router.patch("/{document_uuid}", response_model=DocumentResponse)
async def update_document(
    document_uuid: uuid.UUID,
    update_data: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Обновление документа"""
    document_service = DocumentService(db)
    document = await document_service.update_document(document_uuid, update_data, current_user.uuid)
    return document_response(document)


@router.delete("/{document_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_document(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление документа"""
    document_service = DocumentService(db)
    await document_service.delete_document(document_uuid, current_user.uuid)


@router.get("/{document_uuid}/preview", response_model=PreviewResponse)
async def get_document_preview(
    document_uuid: uuid.UUID,
    profile: str = Query("hover"),
    max_elements: Optional[int] = Query(None, ge=1, le=50),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Структурное превью документа"""
    preview_profile = PROFILES.get(profile)
    if preview_profile is None:
        raise ValidationError(
            f"Unknown preview profile, expected one of: {', '.join(sorted(PROFILES))}",
            field="profile"
        )

    document_service = DocumentService(db)
    elements = await document_service.get_preview(
        document_uuid, current_user.uuid, preview_profile, max_elements
    )

    return PreviewResponse(
        document_id=document_uuid,
        profile=preview_profile.name,
        elements=[
            PreviewElementResponse(
                type=element.type,
                text=element.text,
                level=element.level,
                src=element.src,
                alt=element.alt,
                is_bold=element.is_bold
            )
            for element in elements
        ]
    )
