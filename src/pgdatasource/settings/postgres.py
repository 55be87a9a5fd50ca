"""PostgreSQL connection settings.

This module contains the configuration needed to reach the PostgreSQL
server and to size the connection pools. One pool is created per target
database; every pool shares these settings.
"""

from typing import Dict, Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class PostgresSettings(BaseSettings):
    """Configuration settings for the PostgreSQL server.

    Values are read from ``PG_``-prefixed environment variables
    (e.g. ``PG_HOST``, ``PG_PASSWORD``) or from the aggregated settings
    using the nested delimiter (``POSTGRES__HOST``).
    """

    model_config = SettingsConfigDict(
        env_prefix="PG_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field(default="localhost", description="PostgreSQL server host")
    port: int = Field(default=5432, ge=1, le=65535, description="PostgreSQL server port")
    username: str = Field(default="postgres", description="Role used to connect")
    password: Optional[SecretStr] = Field(default=None, description="Password of the role")
    database: str = Field(
        default="postgres",
        description="Database used when a data source does not name one"
    )
    scheme: str = Field(
        default="postgresql+psycopg2",
        description="SQLAlchemy driver name used to build connection URLs"
    )
    sslmode: Optional[str] = Field(
        default=None,
        description="libpq sslmode (disable, require, verify-ca, verify-full, ...)"
    )
    connect_timeout: int = Field(
        default=180,
        ge=-1,
        description="Maximum wait for connection, in seconds. Zero or -1 waits indefinitely."
    )
    application_name: str = Field(default="pgdatasource")

    pool_size: int = Field(default=5, ge=1, le=100)
    max_overflow: int = Field(default=5, ge=0)
    pool_timeout: int = Field(default=30, ge=1)

    def connect_args(self) -> Dict[str, object]:
        """Driver-level connection arguments passed to ``create_engine``."""
        args: Dict[str, object] = {"application_name": self.application_name}
        if self.connect_timeout > 0:
            args["connect_timeout"] = self.connect_timeout
        if self.sslmode:
            args["sslmode"] = self.sslmode
        return args

    def url_for(self, database: Optional[str] = None) -> URL:
        """Build the connection URL for a database.

        Args:
            database: Target database name. Falls back to the configured
                default database when empty.

        Returns:
            SQLAlchemy URL with the password embedded (never logged).
        """
        return URL.create(
            drivername=self.scheme,
            username=self.username,
            password=self.password.get_secret_value() if self.password else None,
            host=self.host,
            port=self.port,
            database=database or self.database,
        )
