from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from jotter.core.config import settings

# Базовый класс для моделей
Base = declarative_base()


def create_engine(database_url: str, **kwargs) -> AsyncEngine:
    """Асинхронный движок; для SQLite включаем внешние ключи и BEGIN IMMEDIATE"""
    engine = create_async_engine(database_url, future=True, **kwargs)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    return engine


def _configure_sqlite(engine: AsyncEngine) -> None:
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        # BEGIN выдаёт SQLAlchemy (см. _on_begin), а не драйвер
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        # SQLite не поддерживает SELECT ... FOR UPDATE: пишущие транзакции
        # сериализуются блокировкой всей базы с самого начала транзакции
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def create_sessionmaker(bind: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(bind=bind, class_=AsyncSession, expire_on_commit=False)


engine = create_engine(settings.database_url, echo=settings.sql_echo)

SessionLocal = create_sessionmaker(engine)


# Функция для dependency injection в FastAPI
async def get_db():
    async with SessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
