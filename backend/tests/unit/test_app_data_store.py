"""Unit tests for the single-writer AppDataStore."""

import asyncio

import pytest

from patent_auth.application.services import AppDataStore, LedgerService
from patent_auth.domain.entities import PaymentStatus

from conftest import FakeAppDataRepository


class SlowAppDataRepository(FakeAppDataRepository):
    """Yields to the event loop between load and save to expose races."""

    async def load(self):
        data = await super().load()
        await asyncio.sleep(0.01)
        return data


@pytest.mark.asyncio
async def test_transaction_without_commit_does_not_save(
    store: AppDataStore, repository: FakeAppDataRepository
):
    async with store.transaction() as tx:
        assert len(tx.data.users) == 2
    assert repository.save_count == 0


@pytest.mark.asyncio
async def test_transaction_discarded_on_exception(
    store: AppDataStore, repository: FakeAppDataRepository
):
    with pytest.raises(RuntimeError):
        async with store.transaction() as tx:
            tx.commit(tx.data.with_projects(()))
            raise RuntimeError("boom")

    assert repository.save_count == 0
    assert len((await store.read()).projects) == 3


@pytest.mark.asyncio
async def test_committed_transaction_is_persisted(
    store: AppDataStore, repository: FakeAppDataRepository
):
    async with store.transaction() as tx:
        tx.commit(tx.data.with_projects(tx.data.projects[:1]))

    assert repository.save_count == 1
    assert [p.id for p in repository.stored.projects] == ["p1"]


@pytest.mark.asyncio
async def test_reset_returns_to_seed(store: AppDataStore, repository: FakeAppDataRepository):
    async with store.transaction() as tx:
        tx.commit(tx.data.with_projects(()))
    await store.reset()

    assert repository.reset_count == 1
    assert len((await store.read()).projects) == 3


@pytest.mark.asyncio
async def test_concurrent_downloads_debit_once(hasher):
    repository = SlowAppDataRepository(hasher)
    store = AppDataStore(repository)
    ledger = LedgerService(store)
    certificate = await ledger.apply("user1", "p2")

    outcomes = await asyncio.gather(*(ledger.pay_on_download(certificate.id) for _ in range(5)))

    statuses = sorted(o.status.value for o in outcomes)
    assert statuses.count(PaymentStatus.PAID_NOW.value) == 1
    assert statuses.count(PaymentStatus.ALREADY_PAID.value) == 4
    assert (await store.read()).find_user("user1").credits == 800
