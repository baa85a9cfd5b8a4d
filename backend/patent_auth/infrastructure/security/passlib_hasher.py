"""Credential hashing with passlib."""

from passlib.context import CryptContext

from patent_auth.application.interfaces import PasswordHasher


class PasslibPasswordHasher(PasswordHasher):
    """Salted PBKDF2-SHA256 hashes via a passlib CryptContext."""

    def __init__(self, rounds: int | None = None):
        options = {"pbkdf2_sha256__default_rounds": rounds} if rounds else {}
        self._context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto", **options)

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, stored: str) -> bool:
        try:
            return self._context.verify(password, stored)
        except ValueError:
            return False

    def is_hash(self, stored: str) -> bool:
        return self._context.identify(stored) is not None
