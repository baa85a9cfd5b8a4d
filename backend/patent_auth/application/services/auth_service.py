"""Session/role gate — admits actors before any mutating operation."""

import hmac
import logging
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from patent_auth.application.interfaces import PasswordHasher, TokenCodec
from patent_auth.application.services.app_data_store import AppDataStore
from patent_auth.domain.entities import User, UserRole
from patent_auth.domain.exceptions import (
    AuthenticationError,
    EntityNotFoundError,
    InvalidCredentialsError,
    RoleMismatchError,
    ValidationError,
)
from patent_auth.infrastructure.logging.colored_logger import LedgerLogger, LedgerStage

logger = logging.getLogger(__name__)
llog = LedgerLogger("AuthService")


class AuthService:
    """Validates credentials and roles, and issues/resolves session tokens.

    Each role has its own entry point: an enterprise account cannot log in
    through the admin entry point and vice versa.
    """

    def __init__(
        self,
        store: AppDataStore,
        hasher: PasswordHasher,
        token_codec: TokenCodec,
        token_ttl: timedelta = timedelta(hours=24),
    ):
        self._store = store
        self._hasher = hasher
        self._tokens = token_codec
        self._token_ttl = token_ttl

    def _credential_matches(self, credential: str, stored: str) -> bool:
        if self._hasher.is_hash(stored):
            return self._hasher.verify(credential, stored)
        # Legacy plaintext value from a document written before hashing.
        return hmac.compare_digest(credential.encode("utf-8"), stored.encode("utf-8"))

    async def authenticate(self, username: str, credential: str, requested_role: UserRole) -> User:
        """Admit ``username`` through the ``requested_role`` entry point.

        Raises:
            InvalidCredentialsError: unknown account or wrong credential.
            RoleMismatchError: the account's role differs from ``requested_role``.
        """
        async with self._store.transaction() as tx:
            user = tx.data.find_user_by_username(username)
            if user is None or not self._credential_matches(credential, user.password):
                llog.step_rejected(LedgerStage.AUTH, "Invalid credentials", username=username)
                raise InvalidCredentialsError()
            if user.role is not requested_role:
                llog.step_rejected(LedgerStage.AUTH, "Role mismatch", username=username,
                                   requested=requested_role.value, actual=user.role.value)
                raise RoleMismatchError(requested_role.value, user.role.value)

            if not self._hasher.is_hash(user.password):
                user = replace(user, password=self._hasher.hash(credential))
                tx.commit(tx.data.replace_user(user))
                logger.info("Upgraded plaintext credential for %s", username)

        llog.step_complete(LedgerStage.AUTH, f"{username} logged in", role=user.role.value)
        return user

    def issue_token(self, user: User) -> str:
        expires = datetime.now(timezone.utc) + self._token_ttl
        return self._tokens.encode({"sub": user.id, "role": user.role.value, "exp": expires})

    async def resolve_token(self, token: str, required_role: UserRole | None = None) -> User:
        """Return the live account behind ``token``.

        The account is re-read from the aggregate so edits made after
        login (credits, role, deletion) take effect immediately.
        """
        claims = self._tokens.decode(token)
        data = await self._store.read()
        user = data.find_user(str(claims.get("sub", "")))
        if user is None:
            raise AuthenticationError("Account no longer exists")
        if claims.get("role") != user.role.value:
            raise AuthenticationError("Account role changed; log in again")
        if required_role is not None and user.role is not required_role:
            raise RoleMismatchError(required_role.value, user.role.value)
        return user

    async def change_password(self, user_id: str, new_password: str, confirm_password: str) -> User:
        """Self-service credential change for the logged-in account."""
        if not new_password or not confirm_password:
            raise ValidationError("New password is required")
        if new_password != confirm_password:
            raise ValidationError("Passwords do not match")

        async with self._store.transaction() as tx:
            user = tx.data.find_user(user_id)
            if user is None:
                raise EntityNotFoundError("User", user_id)
            user = replace(user, password=self._hasher.hash(new_password))
            tx.commit(tx.data.replace_user(user))

        llog.step_complete(LedgerStage.AUTH, f"Password changed for {user.username}")
        return user
