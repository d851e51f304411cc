"""
PostgreSQL Database Configuration
Reads from environment variables (and .env) with DATABASE_URL taking priority
"""
import os
from pydantic_settings import BaseSettings, SettingsConfigDict


class PostgresSettings(BaseSettings):
    """PostgreSQL configuration - reads environment variables."""

    # Direct DATABASE_URL support (for deployment)
    database_url_direct: str = ""

    # Database Configuration
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: str = ""
    postgres_db: str = "messages_db"

    # SSL/TLS Configuration
    postgres_sslmode: str = "disable"

    # Connection Pool Configuration
    pool_size: int = 10
    max_overflow: int = 5
    pool_pre_ping: bool = True
    pool_recycle: int = 1800
    use_null_pool: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    @property
    def database_url(self) -> str:
        """Construct the async database URL."""

        # Check for direct DATABASE_URL (for deployment)
        direct_url = os.environ.get("DATABASE_URL", self.database_url_direct)
        if direct_url:
            return normalize_database_url(direct_url)

        ssl_param = f"?ssl={self.postgres_sslmode}" if self.postgres_sslmode != "disable" else ""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
            f"{ssl_param}"
        )


def normalize_database_url(url: str) -> str:
    """Point a plain postgres URL at the asyncpg driver."""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql+asyncpg://", 1)
    elif url.startswith("postgresql://") and "+asyncpg" not in url:
        url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
    url = url.replace("sslmode=require", "ssl=require")
    url = url.replace("sslmode=disable", "ssl=disable")
    return url


postgres_settings = PostgresSettings()
