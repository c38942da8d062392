"""
ringside.settings
=================

Configuration settings for the Ringside status engine.

This module provides centralized configuration options that can be used
across the package.  It includes default values that can be overridden
via environment variables (prefix ``RINGSIDE_``) or a ``.env`` file.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# ---------------------------------------------------------------------------
# Base directories
# ---------------------------------------------------------------------------
# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent

# Database settings
# ---------------------------------------------------------------------------
DB_FILE = os.environ.get("RINGSIDE_DB_FILE", BASE_DIR / "ringside.db")
DB_URL = os.environ.get("RINGSIDE_DATABASE_URL", f"sqlite:///{DB_FILE}")
DB_ECHO = os.environ.get("RINGSIDE_DB_ECHO", "False").lower() == "true"

# Logging settings
# ---------------------------------------------------------------------------
LOG_LEVEL = os.environ.get("RINGSIDE_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


# ---------------------------------------------------------------------------
# Pydantic settings model
# ---------------------------------------------------------------------------
class Settings(BaseSettings):
    """Pydantic model for application settings, loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RINGSIDE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    database_url: str = Field(default=DB_URL, description="SQLAlchemy URL of the period store")
    db_echo: bool = Field(default=DB_ECHO, description="Echo SQL statements")
    log_level: str = Field(default=LOG_LEVEL, description="Root log level for the CLI")
    log_format: str = Field(default=LOG_FORMAT, description="logging.basicConfig format string")
    strict_registry: bool = Field(
        default=True,
        description="Validate the owner‑type → track registry at import time",
    )


# Initialize settings
settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Apply ``logging.basicConfig`` using the configured level and format."""
    logging.basicConfig(
        level=(level or settings.log_level).upper(),
        format=settings.log_format,
    )
