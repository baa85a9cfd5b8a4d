"""Shared fakes and fixtures."""

import pytest

from patent_auth.application.interfaces import AppDataRepository, PasswordHasher
from patent_auth.application.services import AdminService, AppDataStore, LedgerService
from patent_auth.domain.entities import AppData
from patent_auth.domain.seed import build_seed_data


class FakePasswordHasher(PasswordHasher):
    """Reversible stand-in for passlib — fast and predictable."""

    PREFIX = "fake$"

    def hash(self, password: str) -> str:
        return f"{self.PREFIX}{password}"

    def verify(self, password: str, stored: str) -> bool:
        return stored == f"{self.PREFIX}{password}"

    def is_hash(self, stored: str) -> bool:
        return stored.startswith(self.PREFIX)


class FakeAppDataRepository(AppDataRepository):
    """In-memory fake repository for unit testing."""

    def __init__(self, hasher: PasswordHasher, initial: AppData | None = None):
        self._hasher = hasher
        self._data = initial
        self.save_count = 0
        self.reset_count = 0

    async def load(self) -> AppData:
        if self._data is None:
            return build_seed_data(self._hasher.hash)
        return self._data

    async def save(self, data: AppData) -> None:
        self._data = data
        self.save_count += 1

    async def reset(self) -> None:
        self._data = None
        self.reset_count += 1

    @property
    def stored(self) -> AppData | None:
        return self._data


@pytest.fixture
def hasher() -> FakePasswordHasher:
    return FakePasswordHasher()


@pytest.fixture
def repository(hasher: FakePasswordHasher) -> FakeAppDataRepository:
    return FakeAppDataRepository(hasher)


@pytest.fixture
def store(repository: FakeAppDataRepository) -> AppDataStore:
    return AppDataStore(repository)


@pytest.fixture
def ledger(store: AppDataStore) -> LedgerService:
    return LedgerService(store)


@pytest.fixture
def admin(store: AppDataStore, hasher: FakePasswordHasher) -> AdminService:
    return AdminService(store, hasher)
