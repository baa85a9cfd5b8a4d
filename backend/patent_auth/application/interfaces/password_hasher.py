"""Abstract interface (port) for credential hashing."""

from abc import ABC, abstractmethod


class PasswordHasher(ABC):
    """Port for one-way salted credential hashing."""

    @abstractmethod
    def hash(self, password: str) -> str:
        """Return a salted hash for ``password``."""
        ...

    @abstractmethod
    def verify(self, password: str, stored: str) -> bool:
        """Check ``password`` against a stored hash."""
        ...

    @abstractmethod
    def is_hash(self, stored: str) -> bool:
        """True if ``stored`` is a hash this hasher recognises (not plaintext)."""
        ...
