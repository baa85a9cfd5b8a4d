"""Unit tests for the AdminService."""

import pytest

from patent_auth.application.schemas import (
    PatentConfigUpdate,
    ProjectCreate,
    ProjectUpdate,
    UserCreate,
    UserUpdate,
)
from patent_auth.application.services import AdminService, LedgerService, admin_service
from patent_auth.domain.entities import UserRole
from patent_auth.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from patent_auth.domain.seed import SEED_PATENT_NO


@pytest.mark.asyncio
async def test_update_config_partial(admin: AdminService):
    config = await admin.update_config(PatentConfigUpdate(patent_name="新型储能装置"))
    assert config.patent_name == "新型储能装置"
    assert config.patent_no == SEED_PATENT_NO
    assert (await admin.get_config()).patent_name == "新型储能装置"


@pytest.mark.asyncio
async def test_config_change_does_not_touch_issued_certificates(
    admin: AdminService, ledger: LedgerService
):
    certificate = await ledger.apply("user1", "p3")
    await admin.update_config(PatentConfigUpdate(patent_no="CN-0000"))

    listed = await ledger.list_certificates("user1")
    assert listed[0].id == certificate.id
    assert listed[0].patent_no == SEED_PATENT_NO


@pytest.mark.asyncio
async def test_add_project_defaults(admin: AdminService):
    project = await admin.add_project(ProjectCreate())
    assert project.name == "新项目"
    assert project.cost == 100
    assert len(await admin.list_projects()) == 4


@pytest.mark.asyncio
async def test_update_and_delete_project(admin: AdminService):
    updated = await admin.update_project("p3", ProjectUpdate(cost=75))
    assert updated.cost == 75
    assert updated.name == "教育展示用途"

    await admin.delete_project("p3")
    assert [p.id for p in await admin.list_projects()] == ["p1", "p2"]


@pytest.mark.asyncio
async def test_update_missing_project(admin: AdminService):
    with pytest.raises(EntityNotFoundError):
        await admin.update_project("missing", ProjectUpdate(cost=1))
    with pytest.raises(EntityNotFoundError):
        await admin.delete_project("missing")


@pytest.mark.asyncio
async def test_add_user_defaults(admin: AdminService, hasher):
    user = await admin.add_user(UserCreate())
    assert user.username.startswith("user_")
    assert user.company_name == "新注册企业"
    assert user.credits == 0
    assert user.role is UserRole.USER
    assert hasher.verify("password", user.password)


@pytest.mark.asyncio
async def test_add_user_duplicate_username(admin: AdminService):
    with pytest.raises(DuplicateEntityError):
        await admin.add_user(UserCreate(username="tech_corp"))


@pytest.mark.asyncio
async def test_update_user(admin: AdminService, hasher):
    user = await admin.update_user("user1", UserUpdate(credits=42, password="newpass"))
    assert user.credits == 42
    assert hasher.verify("newpass", user.password)

    with pytest.raises(DuplicateEntityError):
        await admin.update_user("user1", UserUpdate(username="admin"))


@pytest.mark.asyncio
async def test_delete_user_keeps_admin(admin: AdminService):
    with pytest.raises(ValidationError):
        await admin.delete_user("admin")

    await admin.delete_user("user1")
    assert [u.id for u in await admin.list_users()] == ["admin"]


@pytest.mark.asyncio
async def test_reset_data_restores_seed(admin: AdminService, ledger: LedgerService):
    await ledger.apply("user1", "p3")
    await admin.delete_project("p1")

    data = await admin.reset_data()

    assert data.certificates == ()
    assert [p.id for p in data.projects] == ["p1", "p2", "p3"]
    assert data.find_user("user1").credits == 1000


@pytest.mark.asyncio
async def test_generated_username_gives_up_when_names_exhausted(admin: AdminService, monkeypatch):
    await admin.add_user(UserCreate(username="user_7"))
    monkeypatch.setattr(admin_service.random, "randrange", lambda n: 7)

    with pytest.raises(DuplicateEntityError):
        await admin.add_user(UserCreate())
    assert len(await admin.list_users()) == 3
