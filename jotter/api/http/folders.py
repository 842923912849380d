from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List
import uuid

from jotter.core.auth import get_current_user
from jotter.core.db import get_db
from jotter.domains.identity.entities import User
from jotter.domains.organization.entities import Folder
from jotter.domains.organization.schemas import FolderCreate, FolderUpdate, FolderResponse
from jotter.domains.organization.services import FolderService

router = APIRouter(prefix="/folders", tags=["folders"])


def folder_response(folder: Folder) -> FolderResponse:
    return FolderResponse(
        uuid=folder.uuid,
        user_id=folder.user_id,
        name=folder.name,
        parent_id=folder.parent_id,
        created_at=folder.created_at,
        updated_at=folder.updated_at
    )


@router.get("", response_model=List[FolderResponse])
async def list_folders(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение списка папок"""
    folder_service = FolderService(db)
    folders = await folder_service.list_folders(current_user.uuid)
    return [folder_response(f) for f in folders]


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    folder_data: FolderCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание папки"""
    folder_service = FolderService(db)
    folder = await folder_service.create_folder(folder_data, current_user.uuid)
    return folder_response(folder)


@router.get("/{folder_uuid}", response_model=FolderResponse)
async def get_folder(
    folder_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение папки по UUID"""
    folder_service = FolderService(db)
    folder = await folder_service.get_folder(folder_uuid, current_user.uuid)
    return folder_response(folder)


@router.patch("/{folder_uuid}", response_model=FolderResponse)
async def update_folder(
    folder_uuid: uuid.UUID,
    update_data: FolderUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Обновление папки"""
    folder_service = FolderService(db)
    folder = await folder_service.update_folder(folder_uuid, update_data, current_user.uuid)
    return folder_response(folder)


@router.delete("/{folder_uuid}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_folder(
    folder_uuid: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление папки"""
    folder_service = FolderService(db)
    await folder_service.delete_folder(folder_uuid, current_user.uuid)
