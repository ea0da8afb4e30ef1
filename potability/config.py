"""
Application Configuration — Pydantic Settings

Centralized configuration management using environment variables.
Loads from .env file automatically with sensible defaults.
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Priority: Environment variables > .env file > defaults
    """

    # === API Configuration ===
    PROJECT_NAME: str = "Water Potability Engine"

    # === CORS Configuration ===
    CORS_ORIGINS: list[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://localhost:8080",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:8080",
    ]

    # === Scoring Configuration ===
    DEFAULT_VARIANT: str = "uci"
    STRICT_VALIDATION: bool = True     # Reject non-numeric values instead of scoring NaN
    RULES_DIR: Optional[str] = None    # None = packaged rule tables

    # === Environment ===
    ENVIRONMENT: str = "local"  # local, development, staging, production
    LOG_LEVEL: str = "INFO"

    # === Settings Configuration ===
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="POTABILITY_",
        case_sensitive=True,
        extra="ignore",
    )


# Singleton instance
settings = Settings()
