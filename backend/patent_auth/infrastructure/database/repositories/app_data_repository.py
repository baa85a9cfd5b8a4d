"""Concrete AppData repository backed by a SQLAlchemy key-value table."""

import logging
from collections.abc import Callable
from datetime import datetime, timezone

from sqlalchemy import delete
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from patent_auth.application.interfaces import AppDataRepository
from patent_auth.domain.entities import AppData
from patent_auth.domain.exceptions import StoreCorruptedError
from patent_auth.domain.seed import build_seed_data
from patent_auth.infrastructure.database.document_codec import (
    DocumentDecodeError,
    decode_app_data,
    encode_app_data,
)
from patent_auth.infrastructure.database.models import AppDocumentModel

logger = logging.getLogger(__name__)


class SQLAlchemyAppDataRepository(AppDataRepository):
    """Implements the AppDataRepository port as one row in ``app_documents``.

    Every operation runs in its own session and transaction, so a save is
    durable as soon as it returns.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        key: str,
        hash_credential: Callable[[str], str],
    ):
        self._session_factory = session_factory
        self._key = key
        self._hash_credential = hash_credential
        self._seed: AppData | None = None

    def _seed_data(self) -> AppData:
        """Seed aggregate, built and hashed once per repository."""
        if self._seed is None:
            self._seed = build_seed_data(self._hash_credential)
        return self._seed

    async def load(self) -> AppData:
        async with self._session_factory() as session:
            model = await session.get(AppDocumentModel, self._key)
            payload = model.payload if model is not None else None

        if payload is None:
            logger.debug("No document stored under '%s'; using seed data", self._key)
            return self._seed_data()

        try:
            return decode_app_data(payload)
        except DocumentDecodeError as exc:
            logger.critical("Stored document '%s' cannot be decoded", self._key)
            raise StoreCorruptedError(self._key, str(exc)) from exc

    async def save(self, data: AppData) -> None:
        payload = encode_app_data(data)
        async with self._session_factory() as session, session.begin():
            model = await session.get(AppDocumentModel, self._key)
            if model is None:
                session.add(AppDocumentModel(key=self._key, payload=payload))
            else:
                model.payload = payload
                model.updated_at = datetime.now(timezone.utc)
        logger.debug("Saved document '%s' (%d bytes)", self._key, len(payload))

    async def reset(self) -> None:
        async with self._session_factory() as session, session.begin():
            await session.execute(
                delete(AppDocumentModel).where(AppDocumentModel.key == self._key)
            )
        logger.info("Erased document '%s'", self._key)
