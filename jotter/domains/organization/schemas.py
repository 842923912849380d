from pydantic import BaseModel, Field, field_validator, ConfigDict
from typing import Optional
import uuid
from datetime import datetime

TAG_COLOR_PATTERN = r"^#[0-9A-Fa-f]{6}$"


def _clean_name(v):
    if v is not None and not v.strip():
        raise ValueError('Name cannot be empty')
    return v.strip() if v else v


class FolderCreate(BaseModel):
    """Схема для создания папки"""
    name: str = Field(..., min_length=1, max_length=255)
    parent_id: Optional[uuid.UUID] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)


class FolderUpdate(BaseModel):
    """Схема для обновления папки.

    parent_id=null поднимает папку в корень; отсутствующее поле не меняет его.
    """
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    parent_id: Optional[uuid.UUID] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @property
    def parent_provided(self) -> bool:
        return "parent_id" in self.model_fields_set


class FolderResponse(BaseModel):
    """Схема для ответа с данными папки"""
    uuid: uuid.UUID
    user_id: uuid.UUID
    name: str
    parent_id: Optional[uuid.UUID] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TagCreate(BaseModel):
    """Схема для создания метки"""
    name: str = Field(..., min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=TAG_COLOR_PATTERN)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)


class TagUpdate(BaseModel):
    """Схема для обновления метки"""
    name: Optional[str] = Field(None, min_length=1, max_length=50)
    color: Optional[str] = Field(None, pattern=TAG_COLOR_PATTERN)

    @field_validator('name')
    @classmethod
    def validate_name(cls, v):
        return _clean_name(v)

    @property
    def color_provided(self) -> bool:
        return "color" in self.model_fields_set


class TagResponse(BaseModel):
    """Схема для ответа с данными метки"""
    uuid: uuid.UUID
    user_id: uuid.UUID
    name: str
    color: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
