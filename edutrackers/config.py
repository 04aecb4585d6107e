"""Application settings.

All values are read from ``EDUTRACKERS_*`` environment variables or a local ``.env``.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Core settings.

    - ``database_url``: local SQLite by default.
    - ``secret_key``: signs bearer tokens; override in every deployment.
    - ``storage_dir``: root directory for uploaded assignment/submission files.
    """

    database_url: str = Field(
        default="sqlite:///./storage/edutrackers.db", description="SQLAlchemy database URL"
    )
    secret_key: str = Field(
        default="change-me-in-production", description="HMAC key for bearer tokens"
    )
    token_expire_hours: int = Field(default=24, description="Bearer token lifetime")
    storage_dir: Path = Field(
        default=Path("./storage/objects"), description="Object storage root"
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    default_full_name: str = Field(
        default="User", description="Placeholder name for profiles without signup metadata"
    )

    model_config = {
        "env_prefix": "EDUTRACKERS_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
    }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached global settings instance."""

    return Settings()
