"""
Configuration module for Pastebin Lite.
Loads environment variables and provides config objects.
"""
import os
from functools import lru_cache
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value in (None, ""):
        return default
    return int(value)


class Settings:
    """Application settings loaded from environment variables."""

    def __init__(
        self,
        HOST: str = "0.0.0.0",
        PORT: int = 4000,
        APP_BASE_URL: str = "http://localhost:4000",
        MAX_BODY_BYTES: int = 1024 * 1024,
        LOG_LEVEL: str = "INFO",
        CORS_ORIGINS: str = "*",
        DEBUG: bool = False,
    ):
        self.HOST = HOST
        self.PORT = PORT
        self.APP_BASE_URL = APP_BASE_URL
        self.MAX_BODY_BYTES = MAX_BODY_BYTES
        self.LOG_LEVEL = LOG_LEVEL.upper()
        self.CORS_ORIGINS = CORS_ORIGINS
        self.DEBUG = DEBUG

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            HOST=os.getenv("HOST", "0.0.0.0"),
            PORT=_env_int("PORT", 4000),
            APP_BASE_URL=os.getenv("APP_BASE_URL", "http://localhost:4000"),
            MAX_BODY_BYTES=_env_int("MAX_BODY_BYTES", 1024 * 1024),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO"),
            CORS_ORIGINS=os.getenv("CORS_ORIGINS", "*"),
            DEBUG=_env_bool("DEBUG", "False"),
        )

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    def share_url(self, paste_id: str) -> str:
        """Shareable link for a paste."""
        base_url = self.APP_BASE_URL.rstrip("/")
        return f"{base_url}/p/{paste_id}"


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
