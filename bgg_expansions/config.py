"""
Configuration settings for the BGG expansion tracker.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .error_handling import InvalidArgument

# Project paths
PACKAGE_ROOT = Path(__file__).parent
TEMPLATES_DIR = PACKAGE_ROOT / "templates"

# BGG API
BGG_API_BASE_URL = "https://boardgamegeek.com/xmlapi2"
BGG_SITE_URL = "https://boardgamegeek.com"
THING_BATCH_SIZE = 20  # practical per-request id limit of the thing endpoint
REQUEST_TIMEOUT = 30

# Retry policy while BGG reports "accepted, processing"
DEFAULT_RETRY_WAIT_SECONDS = 5.0
DEFAULT_RETRY_MAX_ATTEMPTS = 5

# Email
EMAIL_SUBJECT = "New Board Game Expansion(s) Available"
EMAIL_TEMPLATE = "expansions.html"
DEFAULT_SMTP_PORT = 465

# Log file rolling
DEFAULT_LOG_FILE_MAX_SIZE_VALUE = 10
DEFAULT_LOG_FILE_MAX_SIZE_UNITS = "M"
LOG_SIZE_MULTIPLIERS = {"K": 1024, "M": 1024 ** 2, "G": 1024 ** 3}

# log4j-style names accepted on top of the standard logging ones
LOG_LEVEL_ALIASES = {
    "OFF": logging.CRITICAL + 10,
    "FATAL": logging.CRITICAL,
    "WARN": logging.WARNING,
    "TRACE": logging.DEBUG,
    "ALL": logging.NOTSET,
}


def parse_log_level(value: str) -> int:
    """Translate a level name (e.g. 'INFO', 'WARN', 'TRACE') into a logging level."""
    name = value.strip().upper()
    if name in LOG_LEVEL_ALIASES:
        return LOG_LEVEL_ALIASES[name]
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise InvalidArgument(f"Unknown log level: {value!r}")
    return level


class Settings(BaseSettings):
    """
    Runtime settings for the expansion tracker.

    Settings are loaded from .env files and environment variables; each field
    reads the upper-cased variable of the same name (e.g. BGG_USERNAME).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        extra="ignore",
    )

    # BGG
    bgg_username: str = Field(min_length=1, description="BGG user whose collection is checked")
    bgg_access_token: Optional[str] = Field(default=None, description="Bearer token sent with every request")
    bgg_api_base_url: str = BGG_API_BASE_URL
    retry_wait_seconds: float = Field(default=DEFAULT_RETRY_WAIT_SECONDS, ge=0)
    retry_max_attempts: int = Field(default=DEFAULT_RETRY_MAX_ATTEMPTS, ge=1)
    request_timeout_seconds: float = Field(default=REQUEST_TIMEOUT, gt=0)

    # Ignore lists
    game_ignore_file_path: Optional[str] = None
    expansion_ignore_file_path: Optional[str] = None

    # Logging
    log_level: int = Field(default=logging.INFO, description="Python level or log4j-style name")
    log_file_name: Optional[str] = None
    log_file_max_size_value: int = Field(default=DEFAULT_LOG_FILE_MAX_SIZE_VALUE, ge=1)
    log_file_max_size_units: str = DEFAULT_LOG_FILE_MAX_SIZE_UNITS
    log_file_backups: int = Field(default=0, ge=0)

    # Email
    smtp_host: Optional[str] = None
    smtp_port: int = Field(default=DEFAULT_SMTP_PORT, ge=1)
    smtp_secure: bool = Field(default=True, description="Implicit TLS; set false for STARTTLS on 587")
    smtp_username: Optional[str] = None
    smtp_password: Optional[str] = None
    smtp_tls_ciphers: Optional[str] = None
    email_to: Optional[str] = Field(default=None, description="Defaults to SMTP_USERNAME")

    @field_validator("bgg_username", mode="before")
    @classmethod
    def strip_username(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("bgg_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return parse_log_level(v)
        return v

    @field_validator("log_file_max_size_units", mode="before")
    @classmethod
    def validate_size_units(cls, v: Any) -> Any:
        units = str(v).strip().upper()
        if units not in LOG_SIZE_MULTIPLIERS:
            raise ValueError(f"must be one of {sorted(LOG_SIZE_MULTIPLIERS)}, got {v!r}")
        return units

    @property
    def log_file_max_bytes(self) -> int:
        return self.log_file_max_size_value * LOG_SIZE_MULTIPLIERS[self.log_file_max_size_units]

    @property
    def email_enabled(self) -> bool:
        return bool(self.smtp_host)

    @property
    def email_recipient(self) -> Optional[str]:
        return self.email_to or self.smtp_username

    @classmethod
    def from_env(cls, **overrides: Any) -> "Settings":
        """
        Load settings from the environment and .env file.

        Args:
            **overrides: Field values that take precedence over the environment

        Returns:
            Validated Settings

        Raises:
            InvalidArgument: If a variable is missing or has a bad value
        """
        try:
            return cls(**overrides)
        except ValidationError as e:
            problems = "; ".join(
                f"{'.'.join(str(part) for part in error['loc']).upper()}: {error['msg']}"
                for error in e.errors()
            )
            raise InvalidArgument(f"Invalid configuration: {problems}") from None
