from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from jotter.db.base import as_utc
from jotter.db.models.user import User as UserModel
from jotter.domains.identity.entities import User


class UserRepository:
    """Репозиторий для работы с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, user: User) -> User:
        """Создание нового пользователя"""
        db_user = UserModel(
            uuid=user.uuid,
            external_id=user.external_id,
            email=user.email,
            name=user.name,
            created_at=user.created_at,
            updated_at=user.updated_at
        )

        self.session.add(db_user)
        await self.session.flush()
        return self._to_domain(db_user)

    async def get_by_external_id(self, external_id: str) -> Optional[User]:
        """Получение пользователя по subject токена"""
        result = await self.session.execute(
            select(UserModel).where(UserModel.external_id == external_id)
        )
        db_user = result.scalar_one_or_none()
        return self._to_domain(db_user) if db_user else None

    async def update(self, user: User) -> User:
        """Обновление пользователя"""
        stmt = (
            update(UserModel)
            .where(UserModel.uuid == user.uuid)
            .values(
                email=user.email,
                name=user.name,
                updated_at=user.updated_at
            )
        )

        await self.session.execute(stmt)
        return user

    def _to_domain(self, db_user: UserModel) -> User:
        """Преобразование модели БД в доменную сущность"""
        return User(
            uuid=db_user.uuid,
            external_id=db_user.external_id,
            email=db_user.email,
            name=db_user.name,
            created_at=as_utc(db_user.created_at),
            updated_at=as_utc(db_user.updated_at)
        )
