from fastapi import Request

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


def accepts_json(request: Request) -> bool:
    """True when the client asked for JSON instead of a rendered page."""
    return "application/json" in (request.headers.get("accept") or "").lower()


class CoreSettings(BaseSettings):
    APP_NAME: str = "member-profile"
    ENV: str = Field(default="development", validation_alias="APP_ENV")
    LOG_LEVEL: str = "INFO"

    SESSION_SECRET_KEY: str = "change-this-session-secret"
    SESSION_COOKIE_DOMAIN: str = ""
    SIGN_IN_PATH: str = "/login"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def is_production(self) -> bool:
        return (self.ENV or "").strip().lower() in {"production", "prod"}


settings = CoreSettings()
