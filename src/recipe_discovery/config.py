"""Application configuration."""

import os
from datetime import timedelta

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    admin_token: str
    environment: str = _ENVIRONMENT
    scheduler_enabled: bool = True
    subscription_match_interval_minutes: int = 60
    recommendation_refresh_interval_hours: int = 24
    reminder_sweep_interval_hours: int = 24
    recommendation_max_age_hours: int = 24
    search_max_page_size: int = 100

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def subscription_match_interval(self) -> timedelta:
        return timedelta(minutes=self.subscription_match_interval_minutes)

    @property
    def recommendation_refresh_interval(self) -> timedelta:
        return timedelta(hours=self.recommendation_refresh_interval_hours)

    @property
    def reminder_sweep_interval(self) -> timedelta:
        return timedelta(hours=self.reminder_sweep_interval_hours)

    @property
    def recommendation_max_age(self) -> timedelta:
        return timedelta(hours=self.recommendation_max_age_hours)
