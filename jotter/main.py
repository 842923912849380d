from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jotter.api.http import (
    health_router, documents_router, versions_router, folders_router, tags_router,
    shares_router, comments_router
)
from jotter.core.config import settings
from jotter.core.db import engine
from jotter.core.errors import register_exception_handlers
from jotter.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    logger.info("Jotter API starting")
    yield
    await engine.dispose()
    logger.info("Jotter API stopped")


app = FastAPI(
    title="Jotter",
    description="Документы с историей версий, публикацией и ссылками для комментариев",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# Подключаем роутеры
app.include_router(health_router)
app.include_router(documents_router)
app.include_router(versions_router)
app.include_router(folders_router)
app.include_router(tags_router)
app.include_router(shares_router)
app.include_router(comments_router)


@app.get("/")
async def root():
    """Корневой эндпоинт"""
    return {
        "message": "Jotter API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/health"
    }
