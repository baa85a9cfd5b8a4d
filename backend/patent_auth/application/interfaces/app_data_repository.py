"""Abstract repository interface (port) for the AppData document."""

from abc import ABC, abstractmethod

from patent_auth.domain.entities import AppData


class AppDataRepository(ABC):
    """Port for the single-document store — implemented in the infrastructure layer.

    The whole aggregate is stored as one document under one key. There is
    no partial update: ``save`` always replaces the stored document.
    """

    @abstractmethod
    async def load(self) -> AppData:
        """Return the stored aggregate, or a fresh seed if nothing is stored.

        Raises:
            StoreCorruptedError: if the stored document cannot be decoded.
        """
        ...

    @abstractmethod
    async def save(self, data: AppData) -> None:
        """Durably overwrite the stored document."""
        ...

    @abstractmethod
    async def reset(self) -> None:
        """Erase the stored document so the next load returns the seed."""
        ...
