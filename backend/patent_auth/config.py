import logging
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings

_config_logger = logging.getLogger(__name__)

_BACKEND_DIR = Path(__file__).resolve().parents[1]
_ENV_FILES = (
    _BACKEND_DIR / ".env",
    ".env",
)
_INSECURE_JWT_SECRET = "change-me-in-production"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    app_title: str = "Patent Authorization API"
    app_version: str = "0.1.0"
    app_env: str = "development"
    database_url: str = "sqlite:///./data/patent_auth.db"
    cors_origins: list[str] = ["http://localhost:5173"]

    # Document store: the whole aggregate lives under one key
    store_key: str = "patent_auth_app_v1_cn"

    # Session tokens
    jwt_secret: str = _INSECURE_JWT_SECRET
    jwt_algorithm: str = "HS256"
    jwt_expiration_minutes: int = 60 * 24

    # Ledger
    certificate_id_max_attempts: int = 5

    # Certificate export
    pdf_font_name: str = "STSong-Light"

    # Logging: per-category log levels (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    log_level: str = "INFO"                  # Root / app-wide
    log_level_sql: str = "WARNING"           # sqlalchemy.engine: SQL queries
    log_level_uvicorn: str = "INFO"          # uvicorn.access / uvicorn.error
    log_level_ledger: str = "INFO"           # apply / pay-on-download / admin edits
    log_level_export: str = "WARNING"        # reportlab / Pillow

    model_config = {
        "env_file": _ENV_FILES,
        "env_file_encoding": "utf-8",
    }

    def model_post_init(self, __context: object) -> None:
        if self.jwt_secret == _INSECURE_JWT_SECRET and self.app_env == "production":
            _config_logger.warning("JWT_SECRET is not configured; tokens are forgeable")


@lru_cache
def get_settings() -> Settings:
    """Cached settings instance — reads .env once."""
    return Settings()
