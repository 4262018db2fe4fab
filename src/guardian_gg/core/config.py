from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="GUARDIAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # guardian.gg
    api_base_url: str = "https://api.guardian.gg/"
    timeout_s: float = 30.0
    connect_timeout_s: float = 10.0
    user_agent: str = "guardian-gg-python"

    log_level: str = "WARNING"


settings = Settings()
