# core/config.py
"""
Application settings, read from the environment (or a local ``.env`` file)
with ``pydantic-settings``.

Everything that talks to the outside world reads from here: the target
origin, fetch timeouts, CORS origins and rate-limit windows.
"""

from functools import lru_cache
from pathlib import Path
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    PROJECT_NAME: str = "Krishi Jagran News Scraper"

    # ------------------------------------------------------------------
    # Target site
    # ------------------------------------------------------------------
    BASE_ORIGIN: str = "https://odia.krishijagran.com"
    HOMEPAGE_URL: str = "https://odia.krishijagran.com"
    SECTIONS_CONFIG_PATH: Path = PROJECT_ROOT / "configs" / "sections.yaml"

    # ------------------------------------------------------------------
    # Outbound fetch
    # ------------------------------------------------------------------
    FETCH_TIMEOUT: float = Field(default=30.0, gt=0)
    FETCH_RETRIES: int = Field(default=3, ge=1)
    DEFAULT_USER_AGENT: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
    )

    # ------------------------------------------------------------------
    # HTTP surface
    # ------------------------------------------------------------------
    ALLOWED_ORIGINS: List[str] = [
        "https://agromitra.vercel.app",
        "http://localhost:3000",
    ]
    FRONTEND_URL: Optional[str] = None
    RATE_LIMIT_REQUESTS: int = Field(default=100, ge=1)
    RATE_LIMIT_WINDOW_SECONDS: int = Field(default=15 * 60, ge=1)

    # ------------------------------------------------------------------
    # Process
    # ------------------------------------------------------------------
    PORT: int = 5000
    DEBUG: bool = False
    WORKERS: int = 1
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins(self) -> List[str]:
        """Allow-list plus the optional deployed frontend."""
        origins = list(self.ALLOWED_ORIGINS)
        if self.FRONTEND_URL and self.FRONTEND_URL not in origins:
            origins.append(self.FRONTEND_URL)
        return origins


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
