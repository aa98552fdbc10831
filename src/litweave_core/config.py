"""
Configuration Management for litweave.

Provides centralized, type-safe configuration loading using Pydantic Settings.
Supports environment variables (``LITWEAVE_`` prefix), .env files, and
defaults that need no configuration at all.

License: MIT
"""

from typing import Any, Dict

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class LitweaveSettings(BaseSettings):
    """
    Centralized configuration for litweave.

    Configuration is loaded with the following priority (highest to lowest):
    1. System environment variables (``LITWEAVE_LOG_LEVEL`` etc.)
    2. .env file in the working directory
    3. Hardcoded default values

    Example:
        ```python
        from litweave_core.config import LitweaveSettings

        settings = LitweaveSettings(watch_interval=0.5)
        print(settings.root_name)  # '*'
        ```
    """

    # ========================================
    # GENERATION
    # ========================================

    root_name: str = Field(
        default="*", min_length=1, description="Name of the macro expanded into the code file"
    )

    encoding: str = Field(default="utf-8", description="Encoding of documents and outputs")

    fallback_comment_token: str = Field(
        default="//",
        min_length=1,
        description="Comment token for annotation lines when the extension is unknown",
    )

    # ========================================
    # RENDERING
    # ========================================

    anchor_filler: str = Field(
        default="_",
        min_length=1,
        max_length=1,
        description="Character replacing spaces when macro names become HTML anchors",
    )

    pygments_style: str = Field(
        default="default", description="Pygments style used for embedded highlighting CSS"
    )

    # ========================================
    # WATCH LOOP
    # ========================================

    watch_interval: float = Field(
        default=1.0, gt=0.0, le=60.0, description="Seconds between polls of watched files"
    )

    watch_recency_window: float = Field(
        default=2.0,
        gt=0.0,
        le=600.0,
        description="A file modified within this many seconds is regenerated",
    )

    watch_max_retries: int = Field(
        default=3, ge=0, le=10, description="Read retries while a file is being written"
    )

    watch_retry_delay: float = Field(
        default=0.1, ge=0.0, le=5.0, description="Fixed delay between read retries in seconds"
    )

    # ========================================
    # LOGGING CONFIGURATION
    # ========================================

    log_level: str = Field(
        default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_format: str = Field(default="console", description="Log format (json, console)")

    # ========================================
    # VALIDATORS
    # ========================================

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """
        Validate log level is one of allowed values.

        Raises:
            ValueError: If log level not in allowed values
        """
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"log_level must be one of {allowed}, got '{v}'")
        return v_upper

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = ["json", "console"]
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got '{v}'")
        return v_lower

    @field_validator("root_name")
    @classmethod
    def validate_root_name(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("root_name cannot be blank")
        return v.strip()

    @field_validator("anchor_filler")
    @classmethod
    def validate_anchor_filler(cls, v: str) -> str:
        if v.isspace():
            raise ValueError("anchor_filler cannot be whitespace")
        return v

    model_config = {
        "env_prefix": "LITWEAVE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "validate_assignment": True,
        "extra": "ignore",
    }


def get_config_summary(settings: LitweaveSettings) -> Dict[str, Any]:
    """
    Get configuration summary for logging/debugging, grouped by category.

    Args:
        settings: LitweaveSettings instance

    Returns:
        Configuration summary grouped by category
    """
    return {
        "generation": {
            "root_name": settings.root_name,
            "encoding": settings.encoding,
            "fallback_comment_token": settings.fallback_comment_token,
        },
        "rendering": {
            "anchor_filler": settings.anchor_filler,
            "pygments_style": settings.pygments_style,
        },
        "watch": {
            "interval": settings.watch_interval,
            "recency_window": settings.watch_recency_window,
            "max_retries": settings.watch_max_retries,
            "retry_delay": settings.watch_retry_delay,
        },
        "logging": {
            "level": settings.log_level,
            "format": settings.log_format,
        },
    }
