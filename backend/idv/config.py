"""
Application Configuration — Environment & Settings
Centralizes all config from .env with Pydantic Settings for validation.
"""
from pathlib import Path
from functools import lru_cache
from pydantic_settings import BaseSettings

# Resolve paths relative to backend/ directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # --- Core ---
    APP_NAME: str = "IDV Client Registration API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # --- Database ---
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'data' / 'idv_demo.db'}"
    SEED_ON_STARTUP: bool = True

    # --- Security ---
    SECRET_KEY: str = "idv-demo-secret-key-change-in-production"
    JWT_ALGORITHM: str = "HS256"
    JWT_ISSUER: str = "idv-demo-api"
    JWT_AUDIENCE: str = "idv-demo-ui"
    TOKEN_EXPIRY_MINUTES: int = 60
    CORS_ORIGINS: list[str] = ["http://localhost:3000", "http://localhost:5173"]

    # --- Verification ---
    SIMULATE_LATENCY: bool = True   # Demo network delay per source lookup
    TEST_ID_LIMIT: int = 8

    # --- Logging ---
    LOG_DIR: str = str(BASE_DIR / "logs")
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = str(BASE_DIR / ".env")
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()
