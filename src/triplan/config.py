"""Configuration settings for TriPlan."""

from datetime import date
from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


# __file__ = src/triplan/config.py
PACKAGE_ROOT = Path(__file__).parent  # src/triplan/
PROJECT_ROOT = PACKAGE_ROOT.parent.parent  # repository root


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TRIPLAN_",
        env_file=str(PROJECT_ROOT / ".env"),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # API settings
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    # Data file
    data_dir: Path = PROJECT_ROOT / "data"
    data_file: Path | None = None

    # Plan
    plan_start_date: date = date(2026, 1, 26)

    # intervals.icu
    intervals_icu_athlete_id: str = ""
    intervals_icu_api_key: str = ""
    intervals_icu_base_url: str = "https://intervals.icu/api/v1"

    # Auto-sync defaults (persisted sync config overrides these once saved)
    auto_sync_enabled: bool = True
    auto_sync_interval_hours: int = 6
    sync_days_back: int = 30

    def model_post_init(self, __context) -> None:
        """Set default data file path after initialization."""
        if self.data_file is None:
            self.data_file = self.data_dir / "training-data.json"

    @property
    def intervals_icu_configured(self) -> bool:
        return bool(self.intervals_icu_athlete_id and self.intervals_icu_api_key)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
