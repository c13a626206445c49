from __future__ import annotations

from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = Field(..., alias="DATABASE_URL")
    backend_session_secret: str = Field(..., alias="BACKEND_SESSION_SECRET")

    dashboard_timezone: str = Field("UTC", alias="DASHBOARD_TIMEZONE")
    allowed_emails_raw: str = Field("", alias="ALLOWED_EMAILS")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    def redacted(self) -> dict:
        values = self.model_dump()
        values["backend_session_secret"] = "***"
        return values

    @property
    def allowed_emails(self) -> List[str]:
        return [email.strip().lower() for email in self.allowed_emails_raw.split(",") if email.strip()]


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    global _settings
    _settings = None

