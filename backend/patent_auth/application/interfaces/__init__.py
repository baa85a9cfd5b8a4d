from .app_data_repository import AppDataRepository
from .password_hasher import PasswordHasher
from .token_codec import TokenCodec
from .document_exporter import DocumentExporter

__all__ = [
    "AppDataRepository",
    "PasswordHasher",
    "TokenCodec",
    "DocumentExporter",
]
