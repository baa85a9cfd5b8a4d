"""SQLAlchemy ORM model for the key-value document slot."""

from datetime import datetime, timezone

from sqlalchemy import DateTime, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from patent_auth.infrastructure.database.base import Base


class AppDocumentModel(Base):
    """ORM model — maps to the 'app_documents' table.

    Each row is one JSON document stored under a fixed key. The service
    uses a single key for the whole AppData aggregate.
    """

    __tablename__ = "app_documents"

    key: Mapped[str] = mapped_column(String(100), primary_key=True)
    payload: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<AppDocumentModel(key='{self.key}', size={len(self.payload or '')})>"
