"""FastAPI dependency injection — wires infrastructure to application layer."""

from datetime import timedelta
from functools import lru_cache

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from patent_auth.application.interfaces import DocumentExporter, PasswordHasher, TokenCodec
from patent_auth.application.services import (
    AdminService,
    AppDataStore,
    AuthService,
    CertificateDeliveryService,
    CertificateRenderer,
    LedgerService,
)
from patent_auth.config import get_settings
from patent_auth.domain.entities import User, UserRole
from patent_auth.domain.exceptions import AuthenticationError, RoleMismatchError
from patent_auth.infrastructure.database.repositories import SQLAlchemyAppDataRepository
from patent_auth.infrastructure.database.session import async_session_factory
from patent_auth.infrastructure.export import ReportLabPdfExporter
from patent_auth.infrastructure.security import JoseTokenCodec, PasslibPasswordHasher

_bearer = HTTPBearer(auto_error=False)


@lru_cache
def get_password_hasher() -> PasswordHasher:
    return PasslibPasswordHasher()


@lru_cache
def get_token_codec() -> TokenCodec:
    settings = get_settings()
    return JoseTokenCodec(secret=settings.jwt_secret, algorithm=settings.jwt_algorithm)


@lru_cache
def get_document_exporter() -> DocumentExporter:
    return ReportLabPdfExporter(font_name=get_settings().pdf_font_name)


@lru_cache
def get_app_data_store() -> AppDataStore:
    """Process-wide store — one lock serializes every aggregate mutation."""
    settings = get_settings()
    repository = SQLAlchemyAppDataRepository(
        session_factory=async_session_factory,
        key=settings.store_key,
        hash_credential=get_password_hasher().hash,
    )
    return AppDataStore(repository)


def get_ledger_service(store: AppDataStore = Depends(get_app_data_store)) -> LedgerService:
    """Provides a LedgerService bound to the shared store."""
    return LedgerService(store, max_id_attempts=get_settings().certificate_id_max_attempts)


def get_auth_service(
    store: AppDataStore = Depends(get_app_data_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
    token_codec: TokenCodec = Depends(get_token_codec),
) -> AuthService:
    """Provides the session/role gate."""
    return AuthService(
        store,
        hasher,
        token_codec,
        token_ttl=timedelta(minutes=get_settings().jwt_expiration_minutes),
    )


def get_admin_service(
    store: AppDataStore = Depends(get_app_data_store),
    hasher: PasswordHasher = Depends(get_password_hasher),
) -> AdminService:
    return AdminService(store, hasher)


def get_delivery_service(
    store: AppDataStore = Depends(get_app_data_store),
    ledger: LedgerService = Depends(get_ledger_service),
    exporter: DocumentExporter = Depends(get_document_exporter),
) -> CertificateDeliveryService:
    """Provides certificate export wired to the ledger for pay-on-download."""
    return CertificateDeliveryService(
        ledger=ledger,
        store=store,
        renderer=CertificateRenderer(),
        exporter=exporter,
    )


# ── Actor resolution ────────────────────────────────────────────────


async def _resolve_actor(
    credentials: HTTPAuthorizationCredentials | None,
    auth: AuthService,
    required_role: UserRole | None,
) -> User:
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return await auth.resolve_token(credentials.credentials, required_role)
    except RoleMismatchError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except AuthenticationError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Any logged-in account, re-read from the live aggregate."""
    return await _resolve_actor(credentials, auth, None)


async def require_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Logged-in enterprise account."""
    return await _resolve_actor(credentials, auth, UserRole.USER)


async def require_admin(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: AuthService = Depends(get_auth_service),
) -> User:
    """Logged-in administrator."""
    return await _resolve_actor(credentials, auth, UserRole.ADMIN)
