"""Session tokens as signed JWTs (python-jose)."""

from typing import Any

from jose import JWTError, jwt

from patent_auth.application.interfaces import TokenCodec
from patent_auth.domain.exceptions import AuthenticationError


class JoseTokenCodec(TokenCodec):
    """HS256 JWTs carrying the account id (``sub``), role and expiry."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    def encode(self, claims: dict[str, Any]) -> str:
        return jwt.encode(dict(claims), self._secret, algorithm=self._algorithm)

    def decode(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except JWTError as exc:
            raise AuthenticationError("Invalid or expired token") from exc
