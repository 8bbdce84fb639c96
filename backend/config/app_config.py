"""
Application Configuration

Loads the process-wide settings once at startup from environment variables,
optionally seeded from a settings file. The loaded object is frozen and
handed to the rest of the application as a read-only value.

Environment variables use the MOVIES_ prefix (e.g. MOVIES_DATABASE_URL).
The settings file path defaults to ".env" and can be overridden with
MOVIES_SETTINGS_FILE.
"""
import logging
import os
from functools import lru_cache

from pydantic import Field, ValidationError as PydanticValidationError, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from constants import Pagination, ServerConfig
from exceptions import ConfigurationError

logger = logging.getLogger(__name__)

SETTINGS_FILE_ENV = "MOVIES_SETTINGS_FILE"
DEFAULT_SETTINGS_FILE = ".env"


class AppConfig(BaseSettings):
    """Immutable application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MOVIES_",
        env_file=DEFAULT_SETTINGS_FILE,
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    database_url: str = Field(
        default="sqlite:///./movies.db",
        description="SQLAlchemy URL of the backing store, or memory:// for the in-process store",
    )
    default_page_size: int = Field(default=Pagination.DEFAULT_PAGE_SIZE, ge=1)
    max_page_size: int = Field(default=Pagination.MAX_PAGE_SIZE, ge=1)

    log_level: str = Field(default="INFO")
    log_file: str | None = Field(default=None)

    host: str = Field(default=ServerConfig.HOST)
    port: int = Field(default=ServerConfig.PORT, ge=1, le=65535)

    @model_validator(mode="after")
    def check_page_sizes(self) -> "AppConfig":
        """Default page size may not exceed the maximum."""
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) exceeds "
                f"max_page_size ({self.max_page_size})"
            )
        return self


def load_config(settings_file: str | None = None) -> AppConfig:
    """
    Build an AppConfig from the environment and the settings file.

    Args:
        settings_file: Path of a KEY=VALUE settings file. Falls back to
            $MOVIES_SETTINGS_FILE, then ".env". A missing file is ignored.

    Returns:
        AppConfig instance

    Raises:
        ConfigurationError: If any value fails validation
    """
    env_file = settings_file or os.environ.get(SETTINGS_FILE_ENV, DEFAULT_SETTINGS_FILE)
    try:
        config = AppConfig(_env_file=env_file)
    except PydanticValidationError as e:
        invalid = [".".join(str(part) for part in err["loc"]) or "config" for err in e.errors()]
        raise ConfigurationError(f"Invalid configuration: {e}", missing_keys=invalid) from e

    logger.info(
        f"Configuration loaded (backend={config.database_url.split(':', 1)[0]}, "
        f"default_page_size={config.default_page_size})"
    )
    return config


@lru_cache
def get_config() -> AppConfig:
    """Return the process-wide configuration, loading it on first use."""
    return load_config()
