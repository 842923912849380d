from jotter.domains.documents.entities import Document, DocumentVersion, DocumentStatus

__all__ = ["Document", "DocumentVersion", "DocumentStatus"]
