from jotter.db.repositories.user_repository import UserRepository
from jotter.db.repositories.document_repository import DocumentRepository, DocumentVersionRepository
from jotter.db.repositories.organization_repository import FolderRepository, TagRepository
from jotter.db.repositories.sharing_repository import ShareRepository, CommentRepository

__all__ = [
    "UserRepository",
    "DocumentRepository",
    "DocumentVersionRepository",
    "FolderRepository",
    "TagRepository",
    "ShareRepository",
    "CommentRepository"
]
