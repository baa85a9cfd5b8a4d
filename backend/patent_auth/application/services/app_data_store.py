"""Single-writer access to the AppData aggregate.

Every mutation runs as load → check → build new aggregate → save while
holding one lock per store. The API serves concurrent requests, so two
downloads of the same certificate must not both observe it as unpaid.
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from patent_auth.application.interfaces import AppDataRepository
from patent_auth.domain.entities import AppData

logger = logging.getLogger(__name__)


class AppDataTransaction:
    """Handle yielded by ``AppDataStore.transaction()``.

    ``data`` is the aggregate as loaded. Call ``commit`` with the new
    aggregate; nothing is saved unless commit was called and the block
    exits without an exception.
    """

    def __init__(self, data: AppData):
        self.data = data
        self._pending: AppData | None = None

    def commit(self, data: AppData) -> None:
        self._pending = data

    @property
    def pending(self) -> AppData | None:
        return self._pending


class AppDataStore:
    """Serializes reads and writes of the aggregate through one repository."""

    def __init__(self, repository: AppDataRepository):
        self._repository = repository
        self._lock = asyncio.Lock()

    async def read(self) -> AppData:
        """Load a consistent snapshot of the aggregate."""
        async with self._lock:
            return await self._repository.load()

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AppDataTransaction]:
        """Exclusive read-modify-write section over the aggregate."""
        async with self._lock:
            tx = AppDataTransaction(await self._repository.load())
            yield tx
            if tx.pending is not None:
                await self._repository.save(tx.pending)
                logger.debug("Aggregate committed")

    async def reset(self) -> None:
        """Erase the stored document; the next read returns the seed."""
        async with self._lock:
            await self._repository.reset()
        logger.info("Aggregate reset to seed data")
