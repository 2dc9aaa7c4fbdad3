"""Application configuration."""

from typing import List
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Folio configuration settings.

    Values are read from the environment (or a local ``.env`` file) once at
    startup and handed explicitly to the services that need them.
    """

    jwt_secret: str = Field(
        "change-me-in-production-please-32b",
        description="Secret used to sign bearer tokens"
    )
    token_expiry_seconds: int = Field(360000, description="Token lifetime in seconds")
    auth_header: str = Field("x-auth-token", description="Request header carrying the token")

    database_url: str = Field("", description="MongoDB connection string; empty uses the in-memory store")
    database_name: str = Field("folio", description="MongoDB database name")

    bcrypt_rounds: int = Field(10, ge=4, le=31, description="bcrypt cost factor")
    log_level: str = Field("INFO", description="Root log level")
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )
