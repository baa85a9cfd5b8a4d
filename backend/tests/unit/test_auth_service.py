"""Unit tests for the AuthService session/role gate."""

import json
from dataclasses import replace

import pytest

from patent_auth.application.interfaces import TokenCodec
from patent_auth.application.services import AdminService, AppDataStore, AuthService
from patent_auth.domain.entities import UserRole
from patent_auth.domain.exceptions import (
    AuthenticationError,
    InvalidCredentialsError,
    RoleMismatchError,
    ValidationError,
)
from patent_auth.infrastructure.database.document_codec import decode_app_data, encode_app_data

from conftest import FakeAppDataRepository, FakePasswordHasher

LEGACY_DOCUMENT_WITH_CURRENT_USER = """
{
  "currentUser": {"id": "user1", "username": "tech_corp", "password": "123",
                  "companyName": "未来科技股份有限公司", "credits": 1000, "role": "USER"},
  "users": [
    {"id": "user1", "username": "tech_corp", "password": "123",
     "companyName": "未来科技股份有限公司", "credits": 1000, "role": "USER"}
  ],
  "projects": [],
  "certificates": [],
  "config": {"patentName": "高效太阳能光伏转换装置", "patentNo": "CN-2024-98765432"}
}
"""


class FakeTokenCodec(TokenCodec):
    """Keeps claims in a dict instead of signing them."""

    def __init__(self):
        self._issued: dict[str, dict] = {}

    def encode(self, claims: dict) -> str:
        token = f"token-{len(self._issued)}"
        self._issued[token] = dict(claims)
        return token

    def decode(self, token: str) -> dict:
        if token not in self._issued:
            raise AuthenticationError("Invalid or expired token")
        return self._issued[token]


@pytest.fixture
def auth(store: AppDataStore, hasher: FakePasswordHasher) -> AuthService:
    return AuthService(store, hasher, FakeTokenCodec())


@pytest.mark.asyncio
async def test_user_login(auth: AuthService):
    user = await auth.authenticate("tech_corp", "123", UserRole.USER)
    assert user.id == "user1"
    assert user.credits == 1000


@pytest.mark.asyncio
async def test_admin_login(auth: AuthService):
    user = await auth.authenticate("admin", "admin", UserRole.ADMIN)
    assert user.is_admin


@pytest.mark.asyncio
async def test_user_cannot_use_admin_entry_point(auth: AuthService):
    with pytest.raises(RoleMismatchError):
        await auth.authenticate("tech_corp", "123", UserRole.ADMIN)


@pytest.mark.asyncio
async def test_admin_cannot_use_user_entry_point(auth: AuthService):
    with pytest.raises(RoleMismatchError):
        await auth.authenticate("admin", "admin", UserRole.USER)


@pytest.mark.asyncio
async def test_wrong_password(auth: AuthService):
    with pytest.raises(InvalidCredentialsError):
        await auth.authenticate("tech_corp", "wrong", UserRole.USER)


@pytest.mark.asyncio
async def test_unknown_user(auth: AuthService):
    with pytest.raises(InvalidCredentialsError):
        await auth.authenticate("nobody", "123", UserRole.USER)


@pytest.mark.asyncio
async def test_plaintext_credential_upgraded_on_login(
    auth: AuthService, repository: FakeAppDataRepository
):
    data = await repository.load()
    legacy = replace(data.find_user("user1"), password="123")
    await repository.save(data.replace_user(legacy))

    await auth.authenticate("tech_corp", "123", UserRole.USER)

    assert repository.stored.find_user("user1").password == "fake$123"
    await auth.authenticate("tech_corp", "123", UserRole.USER)


@pytest.mark.asyncio
async def test_resolve_token_returns_live_user(auth: AuthService, repository):
    user = await auth.authenticate("tech_corp", "123", UserRole.USER)
    token = auth.issue_token(user)

    data = await repository.load()
    await repository.save(data.replace_user(replace(data.find_user("user1"), credits=5)))

    resolved = await auth.resolve_token(token, UserRole.USER)
    assert resolved.credits == 5


@pytest.mark.asyncio
async def test_resolve_token_requires_role(auth: AuthService):
    user = await auth.authenticate("tech_corp", "123", UserRole.USER)
    with pytest.raises(RoleMismatchError):
        await auth.resolve_token(auth.issue_token(user), UserRole.ADMIN)


@pytest.mark.asyncio
async def test_resolve_token_for_deleted_user(auth: AuthService, admin: AdminService):
    user = await auth.authenticate("tech_corp", "123", UserRole.USER)
    token = auth.issue_token(user)
    await admin.delete_user("user1")

    with pytest.raises(AuthenticationError):
        await auth.resolve_token(token)


@pytest.mark.asyncio
async def test_resolve_unknown_token(auth: AuthService):
    with pytest.raises(AuthenticationError):
        await auth.resolve_token("forged")


@pytest.mark.asyncio
async def test_change_password(auth: AuthService):
    await auth.change_password("user1", "s3cret", "s3cret")

    with pytest.raises(InvalidCredentialsError):
        await auth.authenticate("tech_corp", "123", UserRole.USER)
    assert (await auth.authenticate("tech_corp", "s3cret", UserRole.USER)).id == "user1"


@pytest.mark.asyncio
async def test_change_password_mismatch(auth: AuthService):
    with pytest.raises(ValidationError):
        await auth.change_password("user1", "one", "two")
    with pytest.raises(ValidationError):
        await auth.change_password("user1", "", "")


@pytest.mark.asyncio
async def test_plaintext_upgrade_also_rewrites_current_user(hasher: FakePasswordHasher):
    legacy = decode_app_data(LEGACY_DOCUMENT_WITH_CURRENT_USER)
    repository = FakeAppDataRepository(hasher, initial=legacy)
    auth = AuthService(AppDataStore(repository), hasher, FakeTokenCodec())

    await auth.authenticate("tech_corp", "123", UserRole.USER)

    document = json.loads(encode_app_data(repository.stored))
    stored = [document["currentUser"]["password"]] + [u["password"] for u in document["users"]]
    assert stored == ["fake$123", "fake$123"]
    assert repository.stored.current_user.password == "fake$123"


def test_stale_current_user_credential_is_not_encoded():
    legacy = decode_app_data(LEGACY_DOCUMENT_WITH_CURRENT_USER)
    user = replace(legacy.find_user("user1"), password="fake$123")
    data = legacy.with_users([user])

    document = json.loads(encode_app_data(data))

    assert document["currentUser"]["password"] == "fake$123"
