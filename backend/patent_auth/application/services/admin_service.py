"""Application service for administrator edits of config, projects and accounts."""

import logging
import random
from dataclasses import replace
from uuid import uuid4

from patent_auth.application.interfaces import PasswordHasher
from patent_auth.application.schemas import (
    PatentConfigUpdate,
    ProjectCreate,
    ProjectUpdate,
    UserCreate,
    UserUpdate,
)
from patent_auth.application.services.app_data_store import AppDataStore
from patent_auth.domain.entities import AppData, PatentConfig, Project, User, UserRole
from patent_auth.domain.exceptions import (
    DuplicateEntityError,
    EntityNotFoundError,
    ValidationError,
)
from patent_auth.infrastructure.logging.colored_logger import LedgerLogger, LedgerStage

logger = logging.getLogger(__name__)
llog = LedgerLogger("AdminService")

DEFAULT_USER_PASSWORD = "password"
DEFAULT_COMPANY_NAME = "新注册企业"


class AdminService:
    """Orchestrates admin edits. Each edit is one transaction on the aggregate.

    Certificates are never touched here: they keep the snapshot taken at
    issuance even when the project or account they reference changes.
    """

    def __init__(self, store: AppDataStore, hasher: PasswordHasher):
        self._store = store
        self._hasher = hasher

    # ── Patent config ────────────────────────────────────────────────

    async def get_config(self) -> PatentConfig:
        return (await self._store.read()).config

    async def update_config(self, data: PatentConfigUpdate) -> PatentConfig:
        async with self._store.transaction() as tx:
            config = tx.data.config
            if data.patent_name is not None:
                config = replace(config, patent_name=data.patent_name)
            if data.patent_no is not None:
                config = replace(config, patent_no=data.patent_no)
            if data.background_url is not None:
                config = replace(config, background_url=data.background_url)
            tx.commit(tx.data.with_config(config))
        llog.step_complete(LedgerStage.ADMIN, "Patent config updated", patent_no=config.patent_no)
        return config

    # ── Projects ─────────────────────────────────────────────────────

    async def list_projects(self) -> list[Project]:
        return list((await self._store.read()).projects)

    async def add_project(self, data: ProjectCreate) -> Project:
        project = Project(id=str(uuid4()), name=data.name, cost=data.cost)
        async with self._store.transaction() as tx:
            tx.commit(tx.data.with_projects((*tx.data.projects, project)))
        llog.step_complete(LedgerStage.ADMIN, f"Project added: {project.name}", cost=project.cost)
        return project

    async def update_project(self, project_id: str, data: ProjectUpdate) -> Project:
        async with self._store.transaction() as tx:
            project = tx.data.find_project(project_id)
            if project is None:
                raise EntityNotFoundError("Project", project_id)
            if data.name is not None:
                project = replace(project, name=data.name)
            if data.cost is not None:
                if data.cost < 0:
                    raise ValidationError("Project cost cannot be negative")
                project = replace(project, cost=data.cost)
            tx.commit(tx.data.replace_project(project))
        llog.step_complete(LedgerStage.ADMIN, f"Project updated: {project.name}", cost=project.cost)
        return project

    async def delete_project(self, project_id: str) -> None:
        async with self._store.transaction() as tx:
            if tx.data.find_project(project_id) is None:
                raise EntityNotFoundError("Project", project_id)
            tx.commit(tx.data.with_projects(p for p in tx.data.projects if p.id != project_id))
        llog.step_complete(LedgerStage.ADMIN, f"Project deleted: {project_id}")

    # ── Users ────────────────────────────────────────────────────────

    async def list_users(self) -> list[User]:
        return list((await self._store.read()).users)

    @staticmethod
    def _ensure_username_free(data: AppData, username: str, user_id: str | None = None) -> None:
        existing = data.find_user_by_username(username)
        if existing is not None and existing.id != user_id:
            raise DuplicateEntityError("User", "username", username)

    @staticmethod
    def _generate_username(data: AppData, attempts: int = 50) -> str:
        candidate = ""
        for _ in range(attempts):
            candidate = f"user_{random.randrange(1000)}"
            if data.find_user_by_username(candidate) is None:
                return candidate
        raise DuplicateEntityError("User", "username", candidate)

    async def add_user(self, data: UserCreate) -> User:
        """Create an enterprise (USER) account; admins only come from seed data."""
        async with self._store.transaction() as tx:
            username = data.username or self._generate_username(tx.data)
            self._ensure_username_free(tx.data, username)
            user = User(
                id=str(uuid4()),
                username=username,
                password=self._hasher.hash(data.password or DEFAULT_USER_PASSWORD),
                company_name=data.company_name or DEFAULT_COMPANY_NAME,
                credits=data.credits,
                role=UserRole.USER,
            )
            tx.commit(tx.data.with_users((*tx.data.users, user)))
        llog.step_complete(LedgerStage.ADMIN, f"User added: {user.username}", credits=user.credits)
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        async with self._store.transaction() as tx:
            user = tx.data.find_user(user_id)
            if user is None:
                raise EntityNotFoundError("User", user_id)
            if data.username is not None:
                self._ensure_username_free(tx.data, data.username, user_id)
                user = replace(user, username=data.username)
            if data.password is not None:
                user = replace(user, password=self._hasher.hash(data.password))
            if data.company_name is not None:
                user = replace(user, company_name=data.company_name)
            if data.credits is not None:
                if data.credits < 0:
                    raise ValidationError("Credits cannot be negative")
                user = replace(user, credits=data.credits)
            tx.commit(tx.data.replace_user(user))
        llog.step_complete(LedgerStage.ADMIN, f"User updated: {user.username}", credits=user.credits)
        return user

    async def delete_user(self, user_id: str) -> None:
        """Delete an enterprise account. Their certificates stay on record."""
        async with self._store.transaction() as tx:
            user = tx.data.find_user(user_id)
            if user is None:
                raise EntityNotFoundError("User", user_id)
            if user.is_admin:
                raise ValidationError("Administrator accounts cannot be deleted")
            tx.commit(tx.data.with_users(u for u in tx.data.users if u.id != user_id))
        llog.step_complete(LedgerStage.ADMIN, f"User deleted: {user.username}")

    # ── Demo data ────────────────────────────────────────────────────

    async def reset_data(self) -> AppData:
        """Erase all stored state and return the freshly seeded aggregate."""
        await self._store.reset()
        data = await self._store.read()
        llog.step_complete(LedgerStage.ADMIN, "Data reset to seed",
                           users=len(data.users), projects=len(data.projects))
        return data
