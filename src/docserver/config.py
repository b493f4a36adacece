import secrets
from datetime import timedelta

from pydantic import Field
from pydantic_settings import BaseSettings


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str = "mongodb://localhost:27017/docserver"
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    cors_origins: list[str] = []
    admin_token: str  # Shared secret required to register new users
    # HMAC key for session tokens; a random key means sessions do not survive a restart
    jwt_secret: str = Field(default_factory=lambda: secrets.token_urlsafe(32))
    upload_dir: str = "uploads"  # Directory path for storing uploaded files
    bcrypt_rounds: int = 12
    session_lifetime_hours: int = 24
    cache_sweep_interval_seconds: float = 60.0
    document_cache_ttl_seconds: int = 600
    document_list_cache_ttl_seconds: int = 300
    document_list_limit: int = 10  # Default page size for document lists

    model_config = {
        "env_file": [".env"],
        "env_prefix": "DOCSERVER_",
        "extra": "ignore",
    }

    @property
    def session_lifetime(self) -> timedelta:
        return timedelta(hours=self.session_lifetime_hours)

    @property
    def document_cache_ttl(self) -> timedelta:
        return timedelta(seconds=self.document_cache_ttl_seconds)

    @property
    def document_list_cache_ttl(self) -> timedelta:
        return timedelta(seconds=self.document_list_cache_ttl_seconds)
