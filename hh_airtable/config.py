"""
Configuration management for the HH → Airtable bridge.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings from environment variables."""

    # HeadHunter OAuth application
    hh_client_id: str = ""
    hh_client_secret: str = ""
    hh_redirect_uri: str = "http://localhost:3000/callback"
    hh_oauth_url: str = "https://hh.ru/oauth"
    hh_api_url: str = "https://api.hh.ru"
    hh_user_agent: str = "HH-Airtable-App/1.0"

    # Airtable
    airtable_api_key: str = ""
    airtable_base_id: str = ""
    airtable_table: str = "People"
    airtable_api_url: str = "https://api.airtable.com/v0"

    # Sessions
    session_secret: str = "your-secret-key-here-change-in-production"
    session_ttl: int = 24 * 60 * 60
    tokens_file: str = "stored_tokens.json"

    # Sync settings
    request_timeout: float = 30.0
    dedup_timeout: float = 5.0
    batch_delay: float = 1.0

    # Server
    cors_origins: str = "http://localhost:3000"
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"  # Ignore extra env vars


settings = Settings()
