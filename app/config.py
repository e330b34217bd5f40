"""Application configuration with comprehensive validation."""
from typing import Optional, Literal, List
from functools import lru_cache
from pydantic import Field, model_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with production-grade validation."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "ISO 27001 Risk Assessment"
    APP_VERSION: str = "1.0.0"
    APP_ENV: Literal["development", "staging", "production"] = "development"
    DEBUG: bool = False
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "console"] = "json"

    # API
    API_V1_PREFIX: str = "/api/v1"
    CORS_ALLOW_ORIGINS: List[str] = Field(default=["*"])
    CORS_MAX_AGE: int = Field(default=600, ge=0, le=86400)

    # Redis (key-value store for submissions)
    REDIS_URL: str = "redis://localhost:6379/0"
    REDIS_KEY_PREFIX: str = ""
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0, gt=0, le=60)

    # Supabase Auth
    SUPABASE_URL: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[SecretStr] = None

    # Rating thresholds (percent)
    GOOD_THRESHOLD: int = Field(default=75, ge=0, le=100)
    MODERATE_THRESHOLD: int = Field(default=50, ge=0, le=100)

    @model_validator(mode="after")
    def validate_thresholds(self):
        """Moderate band must sit below the good band."""
        if self.MODERATE_THRESHOLD >= self.GOOD_THRESHOLD:
            raise ValueError(
                f"MODERATE_THRESHOLD ({self.MODERATE_THRESHOLD}) must be below "
                f"GOOD_THRESHOLD ({self.GOOD_THRESHOLD})"
            )
        return self

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Ensure production has required security settings."""
        if self.APP_ENV == "production":
            if self.DEBUG:
                raise ValueError("DEBUG must be False in production")
            if not self.SUPABASE_URL or not self.SUPABASE_SERVICE_ROLE_KEY:
                raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY are required in production")
        return self

    @property
    def supabase_configured(self) -> bool:
        return bool(self.SUPABASE_URL and self.SUPABASE_SERVICE_ROLE_KEY)


@lru_cache
def get_settings() -> Settings:
    return Settings()

settings = get_settings()
