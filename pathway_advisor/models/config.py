"""
Configuration Models

Pydantic models for runtime configuration validation.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator


# Environment keys checked for the Gemini credential, in priority order
API_KEY_ENV_VARS = ("GEMINI_API_KEY", "GOOGLE_API_KEY", "REACT_APP_GEMINI_API_KEY")

DEFAULT_MODEL = "gemini-2.5-flash"


class Settings(BaseModel):
    """Runtime settings injected into the client factory and agents.

    The API key is optional here on purpose: a missing key is reported when
    the first client is constructed, not when settings are loaded.
    """

    gemini_api_key: Optional[str] = Field(default=None, repr=False)
    model: str = Field(default=DEFAULT_MODEL, min_length=1)
    file_read_timeout: float = Field(
        default=30.0,
        gt=0,
        description="Seconds allowed for reading an uploaded file into memory",
    )
    log_level: str = Field(default="INFO")
    log_file: str = Field(default="logs/pathway-advisor.log")

    @field_validator("gemini_api_key")
    @classmethod
    def blank_key_is_missing(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty or whitespace key as absent."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {', '.join(valid_levels)}")
        return v.upper()

    @classmethod
    def from_env(cls, env_file: Path | str | None = Path(".env")) -> "Settings":
        """Build settings from the process environment.

        Args:
            env_file: Optional .env file loaded first (existing variables win)

        Returns:
            Settings: Validated configuration

        Raises:
            ValueError: If a value fails validation (e.g. bad LOG_LEVEL)
        """
        if env_file is not None and Path(env_file).exists():
            load_dotenv(env_file)

        api_key = next(
            (os.environ[key] for key in API_KEY_ENV_VARS if os.environ.get(key)),
            None,
        )

        values: dict[str, object] = {"gemini_api_key": api_key}
        if os.getenv("GEMINI_MODEL"):
            values["model"] = os.environ["GEMINI_MODEL"]
        if os.getenv("FILE_READ_TIMEOUT"):
            values["file_read_timeout"] = os.environ["FILE_READ_TIMEOUT"]
        if os.getenv("LOG_LEVEL"):
            values["log_level"] = os.environ["LOG_LEVEL"]
        if os.getenv("LOG_FILE"):
            values["log_file"] = os.environ["LOG_FILE"]

        return cls(**values)
