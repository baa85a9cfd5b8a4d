from .app_data_repository import SQLAlchemyAppDataRepository

__all__ = [
    "SQLAlchemyAppDataRepository",
]
