"""Runtime settings, read from the environment or a ``.env`` file."""

from __future__ import annotations

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Content API
    API_URL: str = "http://localhost:8000/api"
    API_TOKEN: str = ""
    REQUEST_TIMEOUT: float = 30.0

    # Optional MSAL client-credentials flow for the API token
    MSAL_AUTHORITY: str = ""
    MSAL_CLIENT_ID: str = ""
    MSAL_CLIENT_SECRET: str = ""
    MSAL_SCOPE: str = ""

    # Portal login
    AUTH_MODE: str = "static"  # static | token
    PORTAL_USERNAME: str = "parent"
    PORTAL_PASSWORD: str = "pacifico2024"
    PORTAL_TOKENS: str = ""  # comma separated, used when AUTH_MODE=token

    FALLBACK_POLICY: str = "sample"  # sample | last_good | empty

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    model_config = SettingsConfigDict(
        env_prefix="PACIFICO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    @property
    def portal_tokens(self) -> List[str]:
        return [t.strip() for t in self.PORTAL_TOKENS.split(",") if t.strip()]

    @property
    def msal_configured(self) -> bool:
        return bool(self.MSAL_AUTHORITY and self.MSAL_CLIENT_ID and self.MSAL_CLIENT_SECRET)


def get_settings() -> Settings:
    return Settings()
