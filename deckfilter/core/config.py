"""Application configuration."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    # Application
    PROJECT_NAME: str = "deckfilter"
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    LOG_LEVEL: str = "INFO"

    # Column refresh（宿主按此调度刷新）
    REFRESH_DELAY_MS: int = 60000
    REFRESH_MULTIPLIER_MS: int = 30000

    # Filtering diagnostics
    LOG_FILTER_DECISIONS: bool = False  # 开启后逐条记录排除原因


settings = Settings()
