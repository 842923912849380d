import uuid
from datetime import datetime
from typing import Optional

from jotter.core.errors import ValidationError
from jotter.db.base import utcnow


class Folder:
    """Сущность папки пользователя"""

    def __init__(
        self,
        uuid: uuid.UUID,
        user_id: uuid.UUID,
        name: str,
        parent_id: Optional[uuid.UUID] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.user_id = user_id
        self.name = name
        self.parent_id = parent_id
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def rename(self, name: str) -> None:
        self.name = name
        self.updated_at = utcnow()

    def move_to(self, parent_id: Optional[uuid.UUID]) -> None:
        """Перенос в другую папку; None поднимает папку в корень"""
        if parent_id == self.uuid:
            raise ValidationError("Folder cannot be its own parent", field="parent_id")
        self.parent_id = parent_id
        self.updated_at = utcnow()

    @classmethod
    def create_folder(cls, name: str, user_id: uuid.UUID, parent_id: Optional[uuid.UUID] = None) -> "Folder":
        """Создание новой папки"""
        return cls(
            uuid=uuid.uuid4(),
            user_id=user_id,
            name=name,
            parent_id=parent_id
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Folder):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Folder(uuid={self.uuid}, name={self.name})"


class Tag:
    """Сущность метки пользователя"""

    def __init__(
        self,
        uuid: uuid.UUID,
        user_id: uuid.UUID,
        name: str,
        color: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.user_id = user_id
        self.name = name
        self.color = color
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def update(self, name: Optional[str] = None, color: Optional[str] = None, replace_color: bool = False) -> None:
        if name is not None:
            self.name = name
        if replace_color:
            self.color = color
        self.updated_at = utcnow()

    @classmethod
    def create_tag(cls, name: str, user_id: uuid.UUID, color: Optional[str] = None) -> "Tag":
        """Создание новой метки"""
        return cls(
            uuid=uuid.uuid4(),
            user_id=user_id,
            name=name,
            color=color
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tag):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Tag(uuid={self.uuid}, name={self.name})"
