from typing import Optional
from pydantic import ValidationError as ClaimsValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.core.logging import get_logger
from jotter.core.security import verify_token
from jotter.db.repositories.user_repository import UserRepository
from jotter.domains.identity.entities import User
from jotter.domains.identity.schemas import TokenClaims

logger = get_logger(__name__)


class IdentityService:
    """Сервис для сопоставления токенов с пользователями"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repository = UserRepository(session)

    async def get_current_user_from_token(self, token: str) -> Optional[User]:
        """Получение пользователя по JWT токену"""
        payload = verify_token(token)
        if not payload or not isinstance(payload.get("sub"), str) or not payload["sub"]:
            return None

        try:
            claims = TokenClaims.model_validate(payload)
        except ClaimsValidationError:
            logger.warning("Token for subject %s carries malformed profile claims", payload["sub"])
            return None

        return await self.resolve_user(claims)

    async def resolve_user(self, claims: TokenClaims) -> User:
        """Пользователь с данным subject; создается при первом обращении"""
        user = await self.user_repository.get_by_external_id(claims.sub)

        if user is None:
            user = User.create_user(
                external_id=claims.sub,
                email=claims.email or "",
                name=claims.name or ""
            )
            try:
                user = await self.user_repository.create(user)
                await self.session.commit()
            except IntegrityError:
                # Параллельный запрос с тем же токеном успел создать пользователя
                await self.session.rollback()
                existing = await self.user_repository.get_by_external_id(claims.sub)
                if existing is None:
                    raise
                return existing
            logger.info("Provisioned user %s for subject %s", user.uuid, claims.sub)
            return user

        if user.update_profile(email=claims.email, name=claims.name):
            await self.user_repository.update(user)
            await self.session.commit()

        return user
