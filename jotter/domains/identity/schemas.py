from pydantic import BaseModel, ConfigDict
from typing import Optional


class TokenClaims(BaseModel):
    """Данные пользователя из проверенного JWT"""
    sub: str
    email: Optional[str] = None
    name: Optional[str] = None

    model_config = ConfigDict(extra="ignore")
