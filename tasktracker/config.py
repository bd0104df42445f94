"""Settings for the task tracker.

Values come from ``TODO_*`` environment variables or a ``.env`` file in the
working directory.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Task tracker settings."""

    model_config = SettingsConfigDict(
        env_prefix="TODO_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    data_file: Path = Field(
        default=Path.home() / ".tasktracker" / "todos.json",
        description="JSON file holding the task collection",
    )
    export_dir: Path = Field(default=Path("."), description="Where exports are written")
    log_level: str = Field(default="WARNING", description="Console log level")


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
