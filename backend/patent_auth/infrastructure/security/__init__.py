from .passlib_hasher import PasslibPasswordHasher
from .jwt_token_codec import JoseTokenCodec

__all__ = [
    "PasslibPasswordHasher",
    "JoseTokenCodec",
]
