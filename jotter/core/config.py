from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str = "sqlite+aiosqlite:///./jotter.db"
    sql_echo: bool = False

    jwt_secret: str
    jwt_algorithm: str = "HS256"

    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    # Базовый адрес фронтенда для ссылок на расшаренные документы
    web_url: str = "http://localhost:5173"
    share_token_bytes: int = 24

    model_config = {"env_file": ".env", "extra": "ignore"}


settings = Settings()
