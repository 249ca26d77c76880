"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    app_token: str | None = None
    craft_token: str = ""
    craft_space_id: str = ""
    craft_collection_id: str = ""
    craft_base_url: str = "https://connect.craft.do/links/{space_id}/api/v1"
    gemini_api_key: str = ""
    gemini_model: str = "gemini-2.5-flash-lite"
    gemini_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    daily_calorie_goal: int = 2000
    request_timeout_seconds: float = 30.0
    resource_timeout_seconds: float = 60.0
    connectivity_poll_seconds: float = 1.0
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    timezone: str = "UTC"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def gemini_endpoint(self) -> str:
        """Return the generateContent URL for the configured model."""
        return f"{self.gemini_base_url}/models/{self.gemini_model}:generateContent"
