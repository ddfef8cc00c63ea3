"""
Application Configuration

Centralized settings management using Pydantic BaseSettings.
All values are loaded from environment variables or .env file.
"""

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable binding.

    Optional env vars:
        NOTES_DB_PATH (notes.db), CASE_SENSITIVE_SEARCH (True),
        SEARCH_DEBOUNCE_SECONDS (0.0), SQL_ECHO (False), LOG_LEVEL (INFO)
    """

    PROJECT_NAME: str = "Quick Notes"

    # Storage
    NOTES_DB_PATH: str = "notes.db"
    CASE_SENSITIVE_SEARCH: bool = True
    SQL_ECHO: bool = False

    # Screen
    SEARCH_DEBOUNCE_SECONDS: float = 0.0

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",  # Silently ignore unknown env vars
    )

    @property
    def DATABASE_URL(self) -> str:
        """Async SQLite connection string using the aiosqlite driver."""
        return database_url_for(self.NOTES_DB_PATH)


def database_url_for(db_path: str | Path) -> str:
    """Build an ``sqlite+aiosqlite`` URL for a database file path."""
    return f"sqlite+aiosqlite:///{Path(db_path).expanduser()}"


settings = Settings()
