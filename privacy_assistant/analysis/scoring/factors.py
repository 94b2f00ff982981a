"""Canonical penalty factor table.

Each factor reads one raw value from the normalized input, caps
it, and converts the capped ratio into at most ``weight`` penalty
points.  Weights sum to 100 so a fully saturated page scores 0.

Declaration order is part of the model: it breaks ties when the
strongest negative reasons are ranked.  Bump
:data:`SCORE_MODEL_VERSION` whenever a weight or cap changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from privacy_assistant.models import scoring, signals
from privacy_assistant.utils.numbers import safe_number

SCORE_MODEL_VERSION = "1.0.0"


@dataclass(frozen=True)
class ScoreBounds:
    """Inclusive range of the final privacy score."""

    min: float
    max: float


PRIVACY_SCORE_BOUNDS = ScoreBounds(min=0, max=100)
BASE_SCORE = 100.0


@dataclass(frozen=True)
class ScoreFactorDefinition:
    """One scoring dimension.

    Attributes:
        id: Stable factor identifier.
        label: Display label used in reason texts.
        source_path: Where the raw value is read from.
        unit: Unit of the raw value.
        weight: Maximum penalty points this factor can subtract.
        hard_cap: Raw-value ceiling applied before normalization.
        rationale: Why the signal matters for privacy.
        read_raw: Extracts the sanitized raw value.
    """

    id: scoring.ScoreFactorId
    label: str
    source_path: str
    unit: scoring.ScoreUnit
    weight: float
    hard_cap: float
    rationale: str
    read_raw: Callable[[signals.NormalizedAnalysisInput], float]


# ── Raw value readers ───────────────────────────────────────


def _third_party_script_domains(data: signals.NormalizedAnalysisInput) -> float:
    return safe_number(data.script_signals.third_party_script_domain_count)


def _third_party_cookies(data: signals.NormalizedAnalysisInput) -> float:
    return safe_number(data.cookie_signals.third_party_cookie_estimate_count)


def total_storage_bytes(data: signals.NormalizedAnalysisInput) -> float:
    """Combined localStorage and sessionStorage byte estimate."""
    storage = data.storage_signals
    return safe_number(storage.local_storage.approx_bytes) + safe_number(storage.session_storage.approx_bytes)


def total_tracking_indicators(data: signals.NormalizedAnalysisInput) -> float:
    """Sum of tracker-domain, endpoint-pattern and query-param hits."""
    heuristics = data.tracking_heuristics
    return (
        safe_number(heuristics.tracker_domain_hit_count)
        + safe_number(heuristics.endpoint_pattern_hit_count)
        + safe_number(heuristics.tracking_query_param_count)
    )


def network_value(data: signals.NormalizedAnalysisInput, value: float) -> float:
    """Sanitize a network count, forcing zero when network data is unavailable."""
    if not data.network_signals.available:
        return 0.0
    return safe_number(value)


def _network_suspiciousness(data: signals.NormalizedAnalysisInput) -> float:
    network = data.network_signals
    return (
        network_value(data, network.third_party_request_count)
        + network_value(data, network.suspicious_endpoint_hit_count)
        + network_value(data, network.known_tracker_domain_hit_count)
        + network_value(data, network.short_window_burst_count)
    )


# ── Factor table ────────────────────────────────────────────

SCORE_FACTOR_DEFINITIONS: tuple[ScoreFactorDefinition, ...] = (
    ScoreFactorDefinition(
        id="third_party_scripts",
        label="Third-party script domains",
        source_path="scriptSignals.thirdPartyScriptDomainCount",
        unit="domain_count",
        weight=20,
        hard_cap=20,
        rationale="Many external third-party script domains increase data-sharing and fingerprinting risk.",
        read_raw=_third_party_script_domains,
    ),
    ScoreFactorDefinition(
        id="third_party_cookies",
        label="Third-party cookies",
        source_path="cookieSignals.thirdPartyCookieEstimateCount",
        unit="count",
        weight=20,
        hard_cap=40,
        rationale="Third-party cookies are a strong indicator of cross-site tracking.",
        read_raw=_third_party_cookies,
    ),
    ScoreFactorDefinition(
        id="storage_usage",
        label="Client storage footprint",
        source_path="storageSignals.(localStorage+sessionStorage)",
        unit="bytes",
        weight=15,
        hard_cap=4_000_000,
        rationale="Large persistent browser storage can support durable tracking identifiers.",
        read_raw=total_storage_bytes,
    ),
    ScoreFactorDefinition(
        id="tracking_indicators",
        label="Tracking heuristics",
        source_path="trackingHeuristics.(tracker+endpoint+query_hits)",
        unit="composite_signals",
        weight=25,
        hard_cap=30,
        rationale="Tracker-domain hits and tracking patterns strongly correlate with surveillance behavior.",
        read_raw=total_tracking_indicators,
    ),
    ScoreFactorDefinition(
        id="network_suspiciousness",
        label="Suspicious network activity",
        source_path="networkSignals.(third_party+suspicious+known_tracker+burst)",
        unit="composite_signals",
        weight=20,
        hard_cap=80,
        rationale="Frequent third-party and suspicious endpoints indicate active telemetry and profiling.",
        read_raw=_network_suspiciousness,
    ),
)

SCORE_FACTOR_IDS_IN_ORDER: tuple[scoring.ScoreFactorId, ...] = tuple(f.id for f in SCORE_FACTOR_DEFINITIONS)
