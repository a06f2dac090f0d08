"""Configuration management for actionbridge.

Loads configuration from environment variables (prefix ``ACTIONBRIDGE_``)
and an optional ``.env`` file, with defaults that preserve the adapter's
standard behavior.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """actionbridge configuration settings.

    All settings can be overridden via environment variables,
    e.g. ``ACTIONBRIDGE_LOG_LEVEL=DEBUG``.
    """

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_handler: bool = Field(
        default=False,
        description="Attach a JSON handler to the actionbridge logger",
    )
    log_to_stderr: bool = Field(
        default=False,
        description="Log to stderr instead of stdout",
    )

    # Schema export
    strip_schema_keys: List[str] = Field(
        default_factory=lambda: ["$schema"],
        description="Keys removed from exported parameter schemas",
    )

    # Call parsing
    require_arguments: bool = Field(
        default=False,
        description=(
            "Reject calls to input-taking actions that carry no arguments "
            "instead of treating them as an empty object"
        ),
    )
    strict_validation: bool = Field(
        default=False,
        description="Validate arguments in strict mode (no type coercion)",
    )

    model_config = {
        "env_prefix": "ACTIONBRIDGE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance.

    Creates the instance on first call, then returns cached version.
    """
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings from the environment.

    Useful for testing or after environment changes.
    """
    global _settings
    _settings = None
    return get_settings()
