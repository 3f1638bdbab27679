"""Configuration management."""

from functools import cache
from pathlib import Path

from pydantic import Field, ValidationError, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .consts import DEFAULT_BASE_URL
from .exceptions import ConfigError

# Alternative level names accepted in MCP_LOG_LEVEL
LOG_LEVEL_ALIASES = {"TRACE": "DEBUG", "WARN": "WARNING", "FATAL": "CRITICAL"}


class Config(BaseSettings):
    """Immutable process configuration loaded from the environment."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", frozen=True, populate_by_name=True
    )

    api_key: str = Field(
        ...,
        min_length=1,
        repr=False,
        validation_alias="MENTION_API_KEY",
        description="Mention API bearer token",
    )
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        validation_alias="MENTION_API_BASE_URL",
        description="Base URL for the Mention REST API",
    )
    log_level: str = Field(
        default="INFO",
        pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        validation_alias="MCP_LOG_LEVEL",
        description="Logging level",
    )
    console_logging: bool = Field(
        default=False,
        validation_alias="MCP_CONSOLE_LOGGING",
        description="Mirror log records to stderr",
    )
    log_dir: Path | None = Field(
        default=None,
        validation_alias="MCP_LOG_DIR",
        description="Directory for the log file (platform default when unset)",
    )
    request_timeout_ms: int = Field(
        default=30000,
        gt=0,
        le=300000,
        validation_alias="MCP_REQUEST_TIMEOUT",
        description="HTTP request timeout in milliseconds",
    )
    max_retries: int = Field(
        default=3,
        ge=0,
        le=10,
        validation_alias="MCP_MAX_RETRIES",
        description="Declared retry budget; requests are currently attempted once",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
            return LOG_LEVEL_ALIASES.get(value, value)
        return value

    @field_validator("base_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @computed_field
    @property
    def timeout_seconds(self) -> float:
        """Request timeout in seconds."""
        return self.request_timeout_ms / 1000


def load_config(**overrides) -> Config:
    """Build a Config, converting validation failures into ConfigError.

    Raises:
        ConfigError: If a required setting is missing or a value is invalid.
    """
    try:
        return Config(**overrides)
    except ValidationError as e:
        missing_key = any(
            err["type"] == "missing" and "MENTION_API_KEY" in err["loc"]
            for err in e.errors()
        )
        message = (
            "MENTION_API_KEY environment variable is required"
            if missing_key
            else "Invalid configuration"
        )
        raise ConfigError(
            message,
            errors=[
                f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ],
            suggestions=["Check the MENTION_* and MCP_* environment variables"],
        ) from e


@cache
def get_config() -> Config:
    """Get a cached Config instance."""
    return load_config()
