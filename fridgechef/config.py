"""FridgeChef configuration — loaded from environment / .env file."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="FRIDGECHEF_", extra="ignore")

    env: str = "development"
    database_url: str = "sqlite+aiosqlite:///./fridgechef.db"
    frontend_url: str = "http://localhost:5173"

    # Master secret for API key encryption. Required; never persisted.
    encryption_secret: str = ""

    # Provider calls
    provider_timeout_seconds: float = 15.0
    gemini_base_url: str = "https://generativelanguage.googleapis.com"
    groq_base_url: str = "https://api.groq.com"

    # Credential lifecycle
    accept_unverified_keys: bool = True  # store keys when the provider is unreachable
    migrate_legacy_on_startup: bool = False


settings = Settings()
