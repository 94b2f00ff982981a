"""
Runtime configuration for the privacy assistant.

Uses ``pydantic_settings.BaseSettings`` for environment variable
binding, type coercion, and validation.  Only operational knobs
live here; scoring weights, thresholds and catalogs are versioned
constants, not settings.
"""

from __future__ import annotations

import functools

import pydantic
import pydantic_settings


class AssistantSettings(pydantic_settings.BaseSettings):
    """Operational settings loaded from the environment.

    Attributes:
        action_timeout_seconds: Upper bound for a single
            improve-privacy action handler.
        json_indent: Indentation used when printing reports.
        write_to_file: Mirror logs and reports to disk.
    """

    action_timeout_seconds: float = pydantic.Field(
        default=10.0, gt=0, validation_alias="ACTION_TIMEOUT_SECONDS"
    )
    json_indent: int = pydantic.Field(
        default=2, ge=0, validation_alias="REPORT_JSON_INDENT"
    )
    write_to_file: bool = pydantic.Field(
        default=False, validation_alias="WRITE_TO_FILE"
    )


@functools.lru_cache(maxsize=1)
def get_settings() -> AssistantSettings:
    """Return the process-wide settings instance."""
    return AssistantSettings()
