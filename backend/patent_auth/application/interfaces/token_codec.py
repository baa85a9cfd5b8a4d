"""Abstract interface (port) for session tokens."""

from abc import ABC, abstractmethod
from typing import Any


class TokenCodec(ABC):
    """Port for issuing and validating bearer tokens."""

    @abstractmethod
    def encode(self, claims: dict[str, Any]) -> str:
        """Sign ``claims`` and return a token string."""
        ...

    @abstractmethod
    def decode(self, token: str) -> dict[str, Any]:
        """Validate ``token`` and return its claims.

        Raises:
            AuthenticationError: if the token is malformed, forged or expired.
        """
        ...
