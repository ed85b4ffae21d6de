"""Application configuration loaded from environment variables."""
import os
from datetime import tzinfo
from functools import lru_cache
from typing import Optional
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    # Database paths
    data_path: str = os.getenv("DATA_PATH", os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__)))))
    db_filename: str = "decisions.db"

    @property
    def db_path(self) -> str:
        return os.path.join(self.data_path, self.db_filename)

    # Calendar: IANA zone name, empty for the system zone
    timezone: str = ""
    minimum_tracked_days: int = 4
    default_week_start: str = "MONDAY"

    @property
    def tz(self) -> Optional[tzinfo]:
        return ZoneInfo(self.timezone) if self.timezone else None

    # Reminders
    reminder_check_interval_hours: int = 24
    daily_reminder_hour: int = 21
    start_reminder_scheduler: bool = False

    # API configuration
    api_host: str = "127.0.0.1"
    api_port: int = 8082

    # CORS
    cors_origins: list[str] = ["http://localhost:3000", "http://127.0.0.1:3000"]

    class Config:
        env_prefix = "DMOOD_"


@lru_cache
def get_settings() -> Settings:
    return Settings()
