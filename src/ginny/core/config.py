#!/usr/bin/env python3
"""
Configuration Management for Ginny

Handles environment-based configuration with secure defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .dates import ensure_aware

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class EmailConfig:
    """Mailbox settings for fetching bank notification emails."""

    imap_server: str = "imap.gmail.com"
    imap_port: int = 993
    username: str | None = None
    password: str | None = None
    credentials_expire_at: datetime | None = None
    folder: str = "INBOX"


@dataclass
class SyncConfig:
    """Email sync settings."""

    max_results: int = 100
    default_user: str = "demo@ginny.app"


@dataclass
class StorageConfig:
    """Transaction store settings."""

    store_dir: Path


@dataclass
class Config:
    """
    Main configuration class for Ginny.

    Loads configuration from environment variables with secure defaults
    and validation for each environment type.
    """

    environment: Environment
    data_dir: Path

    email: EmailConfig
    sync: SyncConfig
    storage: StorageConfig

    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("GINNY_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_ginny"
            data_dir = Path(os.getenv("GINNY_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("GINNY_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        expires_raw = os.getenv("EMAIL_CREDENTIALS_EXPIRE_AT")
        email = EmailConfig(
            imap_server=os.getenv("EMAIL_IMAP_SERVER", "imap.gmail.com"),
            imap_port=int(os.getenv("EMAIL_IMAP_PORT", "993")),
            username=os.getenv("EMAIL_USERNAME"),
            password=os.getenv("EMAIL_PASSWORD"),
            credentials_expire_at=ensure_aware(datetime.fromisoformat(expires_raw)) if expires_raw else None,
            folder=os.getenv("EMAIL_FOLDER", "INBOX"),
        )

        sync = SyncConfig(
            max_results=int(os.getenv("SYNC_MAX_RESULTS", "100")),
            default_user=os.getenv("EMAIL_USERNAME") or "demo@ginny.app",
        )

        storage = StorageConfig(store_dir=data_dir / "transactions")

        return cls(
            environment=env,
            data_dir=data_dir,
            email=email,
            sync=sync,
            storage=storage,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.email.username and not self.email.password:
            errors.append("EMAIL_PASSWORD is required when EMAIL_USERNAME is provided")

        if self.email.imap_port <= 0 or self.email.imap_port > 65535:
            errors.append("Email IMAP port must be 1-65535")

        if self.sync.max_results <= 0:
            errors.append("SYNC_MAX_RESULTS must be positive")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")

        if self.environment == Environment.PRODUCTION:
            logging.getLogger("imaplib").setLevel(logging.WARNING)

    def get_sensitive_fields(self) -> list:
        """Get list of field names that contain sensitive data."""
        return [
            "email.password",
            "email.username",
        ]

    def to_dict(self, include_sensitive: bool = False) -> dict[str, Any]:
        """Convert configuration to dictionary, optionally excluding sensitive data."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                nested_dict: dict[str, Any] = {}
                for nested_name, nested_value in field_value.__dict__.items():
                    full_field_name = f"{field_name}.{nested_name}"

                    if not include_sensitive and full_field_name in self.get_sensitive_fields():
                        nested_dict[nested_name] = "***REDACTED***"
                    elif isinstance(nested_value, Path):
                        nested_dict[nested_name] = str(nested_value)
                    elif isinstance(nested_value, datetime):
                        nested_dict[nested_name] = nested_value.isoformat()
                    else:
                        nested_dict[nested_name] = nested_value

                result[field_name] = nested_dict
            elif isinstance(field_value, Path):
                result[field_name] = str(field_value)
            elif isinstance(field_value, Enum):
                result[field_name] = field_value.value
            else:
                result[field_name] = field_value

        return result


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
