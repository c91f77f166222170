"""Configuration settings using Pydantic"""
from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # Application Settings
    env: str = Field(default="development", alias="ENV")
    log_level: str = Field(default="info", alias="LOG_LEVEL")

    # Storage backend: "memory" (per-process) or "supabase"
    storage_backend: str = Field(default="memory", alias="STORAGE_BACKEND")
    seed_demo_data: bool = Field(default=True, alias="SEED_DEMO_DATA")

    # Supabase Configuration (required when STORAGE_BACKEND=supabase)
    supabase_url: Optional[str] = Field(default=None, alias="SUPABASE_URL")
    supabase_key: Optional[str] = Field(default=None, alias="SUPABASE_KEY")

    # Assistant backend: "rules" (keyword templates) or "gemini" (hosted model)
    assistant_backend: str = Field(default="rules", alias="ASSISTANT_BACKEND")
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    model_name: str = Field(default="gemini-2.5-flash-lite", alias="MODEL_NAME")
    model_temperature: float = Field(default=0.2, alias="MODEL_TEMPERATURE")

    # Session Configuration
    session_cookie_name: str = Field(default="travelsage_session", alias="SESSION_COOKIE_NAME")
    session_ttl_minutes: int = Field(default=1440, alias="SESSION_TTL_MINUTES")  # 24 hours

    # Rate limits (per client, per minute)
    assistant_requests_per_minute: int = Field(default=20, alias="ASSISTANT_REQUESTS_PER_MINUTE")
    login_attempts_per_minute: int = Field(default=10, alias="LOGIN_ATTEMPTS_PER_MINUTE")

    # Validation limits
    max_assistant_input_length: int = Field(default=1000, alias="MAX_ASSISTANT_INPUT_LENGTH")
    max_itinerary_days: int = Field(default=30, alias="MAX_ITINERARY_DAYS")
    min_password_length: int = 8

    # Requests running longer than this are answered with 504
    request_timeout_seconds: int = Field(default=60, alias="REQUEST_TIMEOUT_SECONDS")

    # Catalog caps
    featured_limit: int = Field(default=6, alias="FEATURED_LIMIT")
    recommended_limit: int = Field(default=4, alias="RECOMMENDED_LIMIT")

    # CORS Settings
    allowed_origins: str = Field(
        default="http://localhost:5173,http://localhost:3000",
        alias="ALLOWED_ORIGINS",
        description="Comma-separated list of allowed origins for CORS"
    )

    class Config:
        env_file = ".env"
        case_sensitive = False
        populate_by_name = True

    @property
    def is_production(self) -> bool:
        return self.env == "production"


# Global settings instance
settings = Settings()
