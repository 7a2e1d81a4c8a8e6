from app.domains.documents.entities import Document, DocumentContent

__all__ = ["Document", "DocumentContent"]
