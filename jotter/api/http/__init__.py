from jotter.api.http.health import router as health_router
from jotter.api.http.documents import router as documents_router
from jotter.api.http.versions import router as versions_router
from jotter.api.http.folders import router as folders_router
from jotter.api.http.tags import router as tags_router
from jotter.api.http.shares import router as shares_router
from jotter.api.http.comments import router as comments_router

__all__ = [
    "health_router",
    "documents_router",
    "versions_router",
    "folders_router",
    "tags_router",
    "shares_router",
    "comments_router"
]
