from .app_document import AppDocumentModel

__all__ = [
    "AppDocumentModel",
]
