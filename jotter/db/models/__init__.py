from jotter.db.models.user import User
from jotter.db.models.organization import Folder, Tag, document_tags
from jotter.db.models.document import Document, DocumentVersion, DOCUMENT_STATUSES
from jotter.db.models.sharing import Share, Comment

__all__ = [
    "User",
    "Folder",
    "Tag",
    "document_tags",
    "Document",
    "DocumentVersion",
    "DOCUMENT_STATUSES",
    "Share",
    "Comment"
]
