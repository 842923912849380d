import uuid
from datetime import datetime
from typing import Optional

from jotter.db.base import utcnow


class User:
    """Сущность пользователя домена Identity"""

    def __init__(
        self,
        uuid: uuid.UUID,
        external_id: str,
        email: str = "",
        name: str = "",
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.external_id = external_id
        self.email = email
        self.name = name
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or utcnow()

    def update_profile(self, email: Optional[str] = None, name: Optional[str] = None) -> bool:
        """Обновление профиля из claims токена; возвращает True, если что-то изменилось"""
        changed = False
        if email and email != self.email:
            self.email = email
            changed = True
        if name and name != self.name:
            self.name = name
            changed = True
        if changed:
            self.updated_at = utcnow()
        return changed

    @classmethod
    def create_user(cls, external_id: str, email: str = "", name: str = "") -> "User":
        """Создание нового пользователя"""
        return cls(
            uuid=uuid.uuid4(),
            external_id=external_id,
            email=email,
            name=name
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, User):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"User(uuid={self.uuid}, external_id={self.external_id}, email={self.email})"
