"""Domain entity for enterprise and administrator accounts."""

from dataclasses import dataclass, replace
from enum import Enum


class UserRole(str, Enum):
    """Account roles — each role has its own login entry point."""

    ADMIN = "ADMIN"
    USER = "USER"


@dataclass(frozen=True)
class User:
    """An account holding a prepaid credit balance.

    ``password`` holds the credential hash. Documents written by older
    deployments may still carry a plaintext value here; the auth service
    upgrades those on the next successful login.
    """

    id: str
    username: str
    password: str
    company_name: str
    credits: int = 0
    role: UserRole = UserRole.USER

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN

    def can_afford(self, cost: int) -> bool:
        return self.credits >= cost

    def debit(self, amount: int) -> "User":
        """Return a copy of the account with ``amount`` credits removed."""
        return replace(self, credits=self.credits - amount)
