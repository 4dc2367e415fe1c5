"""Environment-driven settings for the item store and logging."""

import logging
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """Settings read from the environment or a local .env file."""

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, env_file=".env", env_file_encoding="utf-8"
    )

    item_store_url: str | None = Field(default=None, validation_alias="ITEM_STORE_URL")
    item_store_api_key: str | None = Field(
        default=None, validation_alias="ITEM_STORE_API_KEY"
    )
    item_store_timeout_seconds: float = Field(
        default=15.0, gt=0.0, le=300.0, validation_alias="ITEM_STORE_TIMEOUT_SECONDS"
    )
    config_path: Path | None = Field(default=None, validation_alias="CURATION_CONFIG_PATH")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(default=True, validation_alias="LOG_JSON")

    @property
    def log_level_number(self) -> int:
        """Numeric logging level, falling back to INFO for unknown names."""
        level = logging.getLevelName(self.log_level.upper())
        return level if isinstance(level, int) else logging.INFO

    @property
    def has_remote_store(self) -> bool:
        """Whether a remote item store is configured."""
        return bool(self.item_store_url)


def get_settings() -> AppSettings:
    """Read settings from the current environment."""
    return AppSettings()
