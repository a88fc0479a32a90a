from __future__ import annotations

from datetime import timedelta
from typing import Optional

from pydantic import AnyUrl, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    SUPABASE_URL: AnyUrl
    SUPABASE_SERVICE_ROLE_KEY: str
    APP_ENV: str = "local"
    LOG_LEVEL: str = "INFO"
    ADMIN_USERNAME: Optional[str] = None
    ADMIN_PASSWORD: Optional[str] = None
    # unset keeps sessions alive until logout or restart
    ADMIN_SESSION_TTL_SECONDS: Optional[int] = Field(default=None, ge=1)
    ADMIN_COOKIE_MAX_AGE_SECONDS: int = 30 * 24 * 60 * 60
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:3000",
            "http://localhost:5173",
            "https://thewaitfamily.com",
            "https://www.thewaitfamily.com",
        ],
    )

    @property
    def is_production(self) -> bool:
        return self.APP_ENV.lower() == "production"

    @property
    def session_ttl(self) -> Optional[timedelta]:
        if self.ADMIN_SESSION_TTL_SECONDS is None:
            return None
        return timedelta(seconds=self.ADMIN_SESSION_TTL_SECONDS)


settings = Settings()
