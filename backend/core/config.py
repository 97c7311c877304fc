"""
Application configuration.
All secrets and connection strings are loaded exclusively from environment
variables (via etc/app.conf).  Nothing sensitive is hard-coded here.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings

# Project root is two levels up from this file  (backend/core/config.py → root)
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


class Settings(BaseSettings):
    # Database – any SQLAlchemy URL, e.g. postgresql+psycopg2://u:p@host/users
    database_url: str = "sqlite:///./users.db"

    # JWT signing secret – must be a long, random string.  There is no
    # fallback: the service refuses to start without one.
    jwt_secret: str

    # Token lifetime (1 day = 24 hours * 60 minutes)
    access_token_expire_minutes: int = 1440

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 4004

    # Run Base.metadata.create_all() on startup.  Disable when the schema is
    # managed with alembic.
    auto_create_schema: bool = True

    # SDL of the GraphQL schema is written here on startup ("" disables).
    schema_file: str = "schema.graphql"
    graphiql: bool = True

    # Used only by bin/seed_admin.py to bootstrap the first admin account.
    first_admin_username: str = ""
    first_admin_email: str = ""
    first_admin_password: str = ""

    model_config = {"env_file": str(_PROJECT_ROOT / "etc" / "app.conf")}

    @field_validator("jwt_secret")
    @classmethod
    def _secret_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("JWT_SECRET must not be empty")
        return value


@lru_cache
def get_settings() -> Settings:
    """Load settings once per process.  Tests build ``Settings`` directly."""
    return Settings()
