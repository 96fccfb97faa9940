"""
Runtime settings for the Anger Journal service and CLI.

Settings are read from ``ANGER_JOURNAL_*`` environment variables.
"""

import os

from pydantic import BaseModel, Field

ENV_PREFIX = "ANGER_JOURNAL_"


class Settings(BaseModel):
    """Application settings."""

    host: str = Field("0.0.0.0", description="Interface the server binds to")
    port: int = Field(8000, ge=1, le=65535)
    log_level: str = Field("info", description="Log level for the server process")
    page_size: int = Field(50, ge=0, description="Default page size for listings")
    url: str = Field("http://localhost:8000", description="Base URL used by the CLI")


def load_settings(environ: dict[str, str] | None = None) -> Settings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read instead of ``os.environ``

    Returns:
        Settings with any ``ANGER_JOURNAL_<FIELD>`` overrides applied
    """
    if environ is None:
        environ = dict(os.environ)

    overrides = {}
    for name in Settings.model_fields:
        value = environ.get(ENV_PREFIX + name.upper())
        if value is not None:
            overrides[name] = value
    return Settings.model_validate(overrides)
