from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator
from pathlib import Path
from typing import Literal
from functools import lru_cache


class Settings(BaseSettings):
    """
    Gateway settings loaded from the environment (and an optional `.env` file).
    """

    # Environment
    ENV: Literal["development", "testing", "staging", "production"] = "development"

    # Database configuration.
    # DB_URI wins when set; otherwise the URL is composed from the POSTGRES_* parts.
    DB_URI: str | None = None
    POSTGRES_DRIVER: str = "psycopg"
    POSTGRES_USERNAME: str = "postgres"
    POSTGRES_PASSWORD: str = "postgres"
    POSTGRES_HOST: str = "localhost"
    POSTGRES_PORT: int = 5432
    POSTGRES_DB: str = "postgres"

    # SQLAlchemy
    SQLALCHEMY_ECHO: bool = False

    # HTTP
    API_PREFIX: str = "/api/v1"
    FRONT_END_URL: str = ""
    PORT: int = 3000

    # Logging
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_TO_STDOUT: bool = True
    LOG_DIR: Path = Path("/var/log/crud-gateway")
    LOG_MAX_BYTES: int = 10_000_000  # 10 MB
    LOG_BACKUP_COUNT: int = 5
    ENABLE_SQL_LOGGING: bool = False

    # --- Derived settings ---
    @property
    def DATABASE_URL(self) -> str:
        """
        Return the SQLAlchemy URL of the gateway database.

        A plain `postgres://` / `postgresql://` DB_URI is rewritten to carry the
        configured async driver, so the same connection string used by other tools
        can be dropped in unchanged.
        """
        if self.DB_URI:
            scheme, sep, rest = self.DB_URI.partition("://")
            if sep and scheme in ("postgres", "postgresql"):
                return f"postgresql+{self.POSTGRES_DRIVER}://{rest}"
            return self.DB_URI

        return (
            f"postgresql+{self.POSTGRES_DRIVER}://"
            f"{self.POSTGRES_USERNAME}:{self.POSTGRES_PASSWORD}@"
            f"{self.POSTGRES_HOST}:{self.POSTGRES_PORT}/"
            f"{self.POSTGRES_DB}"
        )

    # --- Validators ---
    @field_validator("LOG_LEVEL", mode="before")
    def normalize_log_level(cls, v: str | None) -> str | None:
        """Accept `info`, `Info`, ... as well as `INFO`."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("LOG_FORMAT", mode="before")
    def normalize_log_format(cls, v: str | None) -> str | None:
        return v.lower() if isinstance(v, str) else v

    @field_validator("API_PREFIX")
    def normalize_api_prefix(cls, v: str) -> str:
        # "/api/v1/" and "api/v1" both mount under "/api/v1"
        return "/" + v.strip("/") if v.strip("/") else ""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


# Settings never change for the lifetime of the process.
@lru_cache()
def get_settings() -> Settings:
    return Settings()
