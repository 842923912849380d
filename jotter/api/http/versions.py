from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List, Optional
import uuid

from jotter.api.http.documents import document_response
from jotter.core.auth import get_current_user
from jotter.core.db import get_db
from jotter.domains.documents.entities import DocumentVersion
from jotter.domains.documents.schemas import (
    DocumentResponse, DocumentVersionResponse, VersionAnnotationUpdate,
    DiffSegmentResponse, VersionCompareResponse
)
from jotter.domains.documents.services import DocumentVersionService
from jotter.domains.identity.entities import User

router = APIRouter(prefix="/documents/{document_uuid}", tags=["versions"])


def version_response(version: DocumentVersion) -> DocumentVersionResponse:
    return DocumentVersionResponse(
        uuid=version.uuid,
        document_id=version.document_id,
        version_number=version.version_number,
        title=version.title,
        content=version.content,
        annotation=version.annotation,
        created_by=version.created_by,
        created_by_name=version.created_by_name,
        created_at=version.created_at,
        word_count=version.get_word_count()
    )


@router.post("/publish", response_model=DocumentResponse)
async def publish_document(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Публикация документа с созданием новой версии"""
    version_service = DocumentVersionService(db)
    document = await version_service.publish(document_uuid, current_user.uuid)
    return document_response(document)


@router.post("/unpublish", response_model=DocumentResponse)
async def unpublish_document(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Снятие документа с публикации"""
    version_service = DocumentVersionService(db)
    document = await version_service.unpublish(document_uuid, current_user.uuid)
    return document_response(document)


@router.get("/versions", response_model=List[DocumentVersionResponse])
async def list_versions(
    document_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """История версий документа"""
    version_service = DocumentVersionService(db)
    versions = await version_service.list_versions(document_uuid, current_user.uuid)
    return [version_response(v) for v in versions]


@router.get("/versions/{version_uuid}", response_model=DocumentVersionResponse)
async def get_version(
    document_uuid: uuid.UUID,
    version_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение конкретной версии документа"""
    version_service = DocumentVersionService(db)
    version = await version_service.get_version(document_uuid, version_uuid, current_user.uuid)
    return version_response(version)


@router.patch("/versions/{version_uuid}", response_model=DocumentVersionResponse)
async def annotate_version(
    document_uuid: uuid.UUID,
    version_uuid: uuid.UUID,
    annotation_data: VersionAnnotationUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Изменение подписи версии"""
    version_service = DocumentVersionService(db)
    version = await version_service.annotate_version(
        document_uuid, version_uuid, annotation_data.annotation, current_user.uuid
    )
    return version_response(version)


@router.post("/versions/{version_uuid}/restore", response_model=DocumentResponse)
async def restore_version(
    document_uuid: uuid.UUID,
    version_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Восстановление документа из версии"""
    version_service = DocumentVersionService(db)
    document = await version_service.restore_version(document_uuid, version_uuid, current_user.uuid)
    return document_response(document)


@router.get("/versions/{version_uuid}/compare", response_model=VersionCompareResponse)
async def compare_versions(
    document_uuid: uuid.UUID,
    version_uuid: uuid.UUID,
    against: Optional[uuid.UUID] = Query(None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Пословное сравнение версии с другой версией или с черновиком"""
    version_service = DocumentVersionService(db)
    segments, summary = await version_service.compare_versions(
        document_uuid, version_uuid, current_user.uuid, against=against
    )

    return VersionCompareResponse(
        document_id=document_uuid,
        version_id=version_uuid,
        against=against,
        segments=[DiffSegmentResponse(type=s.type, text=s.text) for s in segments],
        summary=summary
    )
