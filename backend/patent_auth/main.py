"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.engine import make_url

from patent_auth.config import get_settings
from patent_auth.domain.exceptions import StoreCorruptedError
from patent_auth.infrastructure.database import Base, engine
from patent_auth.infrastructure.dependencies import get_app_data_store
from patent_auth.infrastructure.logging.log_config import setup_logging
from patent_auth.presentation.api.router import router as api_router

logger = logging.getLogger(__name__)


def _ensure_sqlite_directory(database_url: str) -> None:
    """SQLite does not create missing parent directories for its file."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite" or not url.database or url.database == ":memory:":
        return
    Path(url.database).parent.mkdir(parents=True, exist_ok=True)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Application lifespan — create tables and verify the stored document."""
    settings = get_settings()
    setup_logging()

    # 1. Create the document table
    _ensure_sqlite_directory(settings.database_url)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    # 2. A corrupted document is fatal: refuse to start instead of overwriting it
    store = get_app_data_store()
    try:
        data = await store.read()
    except StoreCorruptedError:
        logger.critical("Refusing to start: stored document is corrupted")
        raise
    logger.info(
        "Store ready: %d users, %d projects, %d certificates",
        len(data.users),
        len(data.projects),
        len(data.certificates),
    )

    yield

    # Shutdown
    await engine.dispose()


async def _store_corrupted_handler(request: Request, exc: StoreCorruptedError) -> JSONResponse:
    logger.critical("Store corrupted while serving %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Stored data is corrupted; manual recovery required"},
    )


def create_app() -> FastAPI:
    """Factory function that builds and configures the FastAPI application."""
    settings = get_settings()

    app = FastAPI(
        title=settings.app_title,
        version=settings.app_version,
        lifespan=lifespan,
    )

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(StoreCorruptedError, _store_corrupted_handler)

    # Mount API routes
    app.include_router(api_router)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "patent_auth.main:app",
        host="0.0.0.0",
        port=8020,
        reload=True,
    )
