"""Application configuration using Pydantic Settings."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # App
    APP_NAME: str = "Australian Lotto Analyzer"
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_FILE: str = "logs/app.log"

    # Draw schedule (all published draw times are Australian Eastern time)
    TIMEZONE: str = "Australia/Sydney"

    # Scraper
    USER_AGENT: str = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    FETCH_DELAY_SECONDS: float = 1.0
    DEFAULT_HISTORY_YEARS: int = 2
    HISTORY_MAX_YEARS: int = 10

    # Statistics
    PAIR_WORKERS: int = 4


settings = Settings()
