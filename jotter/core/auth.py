from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession
from typing import Optional

from jotter.core.db import get_db
from jotter.core.errors import AuthenticationError
from jotter.core.logging import get_logger
from jotter.domains.identity.entities import User
from jotter.domains.identity.services import IdentityService

logger = get_logger(__name__)

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_db)
) -> User:
    """Зависимость для получения текущего пользователя"""
    if credentials is None:
        raise AuthenticationError("Not authenticated")

    identity_service = IdentityService(db)
    user = await identity_service.get_current_user_from_token(credentials.credentials)

    if not user:
        logger.warning("Rejected bearer token")
        raise AuthenticationError()

    return user
