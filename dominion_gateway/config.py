"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    insights_api_base: str = "https://api.anthropic.com"
    insights_api_key: str = ""
    insights_api_version: str = "2023-06-01"
    insights_model: str = "claude-haiku-4-5-20251001"
    insights_max_tokens: int = 1000

    # Service
    service_name: str = "dominion-gateway"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 10.0
    summary_timeout_seconds: float = 8.0  # Upper bound before falling back to local summary

    # Analytics
    default_lookback_months: int = 6
    max_lookback_months: int = 24
    budget_warning_percent: float = 80.0


settings = Settings()
