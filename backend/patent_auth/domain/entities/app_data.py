"""The AppData aggregate — the single document holding all persisted state."""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, replace
from typing import TypeVar

from .certificate import Certificate
from .patent_config import PatentConfig
from .project import Project
from .user import User

_T = TypeVar("_T")


def _replace_first(items: Iterable[_T], match: Callable[[_T], bool], new: _T) -> tuple[_T, ...]:
    """Swap the first item satisfying ``match`` for ``new``."""
    result = list(items)
    for index, item in enumerate(result):
        if match(item):
            result[index] = new
            break
    return tuple(result)


@dataclass(frozen=True)
class AppData:
    """Aggregate root for users, projects, certificates and the patent config.

    Instances are immutable; every change builds a new aggregate. Entities
    reference each other by identifier only.

    ``current_user`` is kept so documents round-trip unchanged, but it is
    never used for authorization.
    """

    users: tuple[User, ...]
    projects: tuple[Project, ...]
    certificates: tuple[Certificate, ...]
    config: PatentConfig
    current_user: User | None = None

    # ── Lookups ──────────────────────────────────────────────────────

    def find_user(self, user_id: str) -> User | None:
        return next((u for u in self.users if u.id == user_id), None)

    def find_user_by_username(self, username: str) -> User | None:
        return next((u for u in self.users if u.username == username), None)

    def find_project(self, project_id: str) -> Project | None:
        return next((p for p in self.projects if p.id == project_id), None)

    def find_certificates(self, certificate_id: str) -> list[Certificate]:
        """All certificates carrying ``certificate_id`` (normally zero or one)."""
        return [c for c in self.certificates if c.id == certificate_id]

    def has_certificate_id(self, certificate_id: str) -> bool:
        return any(c.id == certificate_id for c in self.certificates)

    def certificates_for(self, user_id: str) -> list[Certificate]:
        return [c for c in self.certificates if c.user_id == user_id]

    # ── Copy-on-write helpers ────────────────────────────────────────

    def with_config(self, config: PatentConfig) -> "AppData":
        return replace(self, config=config)

    def with_users(self, users: Iterable[User]) -> "AppData":
        return replace(self, users=tuple(users))

    def with_projects(self, projects: Iterable[Project]) -> "AppData":
        return replace(self, projects=tuple(projects))

    def with_certificates(self, certificates: Iterable[Certificate]) -> "AppData":
        return replace(self, certificates=tuple(certificates))

    def replace_user(self, user: User) -> "AppData":
        updated = self.with_users(_replace_first(self.users, lambda u: u.id == user.id, user))
        if self.current_user is not None and self.current_user.id == user.id:
            updated = replace(updated, current_user=user)
        return updated

    def replace_project(self, project: Project) -> "AppData":
        return self.with_projects(
            _replace_first(self.projects, lambda p: p.id == project.id, project)
        )

    def replace_certificate(self, certificate: Certificate) -> "AppData":
        """Replace the first certificate with the same id."""
        return self.with_certificates(
            _replace_first(self.certificates, lambda c: c.id == certificate.id, certificate)
        )

    def add_certificate(self, certificate: Certificate) -> "AppData":
        return self.with_certificates((*self.certificates, certificate))
