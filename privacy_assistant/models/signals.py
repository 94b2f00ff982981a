"""Pydantic models for the normalized analysis input.

The normalized record is the sole input contract of the engines.
Counts are typed ``float`` so malformed upstream values (NaN,
infinities, negatives) survive validation; every consumer coerces
them through :func:`privacy_assistant.utils.numbers.safe_number`.
"""

from __future__ import annotations

from typing import Literal

import pydantic

from privacy_assistant.utils.serialization import snake_to_camel

NORMALIZED_SCHEMA_VERSION = "1.0.0"

ConfidenceLevel = Literal["low", "medium", "high"]


class _CamelModel(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )


class SourceFlags(_CamelModel):
    """Which upstream collectors succeeded."""

    content_reachable: bool = True
    content_signals_available: bool = True
    cookie_signals_available: bool = True
    network_signals_available: bool = True


class ScriptSignals(_CamelModel):
    """Script inventory counts."""

    third_party_script_domain_count: float = 0
    external_script_count: float = 0


class CookieSignals(_CamelModel):
    """Cookie jar counts."""

    third_party_cookie_estimate_count: float = 0
    total_cookie_count: float = 0


class StorageArea(_CamelModel):
    """Approximate footprint of one web storage area."""

    approx_bytes: float = 0
    key_count: float = 0


class StorageSignals(_CamelModel):
    """localStorage and sessionStorage footprints."""

    local_storage: StorageArea = pydantic.Field(default_factory=StorageArea)
    session_storage: StorageArea = pydantic.Field(default_factory=StorageArea)


class TrackingHeuristics(_CamelModel):
    """Independent tracker-pattern match counts."""

    tracker_domain_hit_count: float = 0
    endpoint_pattern_hit_count: float = 0
    tracking_query_param_count: float = 0


class NetworkSignals(_CamelModel):
    """Observed network activity for the tab.

    When ``available`` is false every numeric field is treated as
    zero regardless of its literal value.
    """

    available: bool = True
    unavailable_reason: str | None = None
    third_party_request_count: float = 0
    suspicious_endpoint_hit_count: float = 0
    known_tracker_domain_hit_count: float = 0
    short_window_burst_count: float = 0


class PageContext(_CamelModel):
    """Descriptive metadata about the analysed tab."""

    tab_id: int | None = None
    url: str = ""
    hostname: str = ""
    title: str = ""


class NormalizedAnalysisInput(_CamelModel):
    """Flat, fully populated record consumed by all four engines."""

    request_id: str = ""
    schema_version: str = NORMALIZED_SCHEMA_VERSION
    page: PageContext = pydantic.Field(default_factory=PageContext)
    source_flags: SourceFlags = pydantic.Field(default_factory=SourceFlags)
    script_signals: ScriptSignals = pydantic.Field(default_factory=ScriptSignals)
    cookie_signals: CookieSignals = pydantic.Field(default_factory=CookieSignals)
    storage_signals: StorageSignals = pydantic.Field(default_factory=StorageSignals)
    tracking_heuristics: TrackingHeuristics = pydantic.Field(
        default_factory=TrackingHeuristics
    )
    network_signals: NetworkSignals = pydantic.Field(default_factory=NetworkSignals)
    # Legacy pass-through; the confidence engine derives its own score.
    confidence: ConfidenceLevel = "high"
