from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI (optional - AI search returns 500 when missing)
    openai_api_key: str | None = None
    openai_model: str = "gpt-4.1-nano"

    # TheMealDB (keyless public API)
    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    mealdb_timeout: float = 10.0

    # IP geolocation (primary + fallback)
    geo_primary_url: str = "http://ip-api.com/json"
    geo_fallback_url: str = "https://ipapi.co"
    geo_timeout: float = 3.0

    # Sentry error monitoring
    sentry_dsn: str | None = None

    # Environment
    environment: str = "development"

    # API Settings
    api_title: str = "Recipe Finder API"
    api_version: str = "1.0.0"
    cors_origins: str = "*"  # comma-separated

    @property
    def ai_configured(self) -> bool:
        """Check if the OpenAI key is set."""
        return bool(self.openai_api_key)

    @property
    def cors_origin_list(self) -> list[str]:
        """CORS origins as a list."""
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()] or ["*"]

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
