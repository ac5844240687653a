"""
Bias checker configuration

Settings loaded from environment variables (and a local .env file).
"""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class Settings:
    """Immutable application settings."""

    APP_VERSION: str = "0.1.0"

    # --- Logging ---
    LOG_LEVEL: str = os.getenv("BIAS_CHECKER_LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("BIAS_CHECKER_LOG_FORMAT", "json")  # "json" or "text"

    # --- Server ---
    HOST: str = os.getenv("BIAS_CHECKER_HOST", "0.0.0.0")
    PORT: int = int(os.getenv("BIAS_CHECKER_PORT", "8000"))
    MAX_TEXT_LENGTH: int = int(os.getenv("BIAS_CHECKER_MAX_TEXT_LENGTH", "20000"))

    # --- Moderation ---
    BLOCK_TOXIC: bool = _flag("BIAS_CHECKER_BLOCK_TOXIC", "true")


settings = Settings()
