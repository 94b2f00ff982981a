"""
Collector results to normalized analysis input.

The extension's collectors (content reachability, in-page signals,
cookie jar, network observer) each report success or failure with an
optional payload.  This module folds those reports into the single
:class:`NormalizedAnalysisInput` the engines consume, coercing every
count through ``safe_number`` and deriving source flags from which
collectors actually delivered data.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal
from urllib import parse

import pydantic

from privacy_assistant.models import signals
from privacy_assistant.utils import logger
from privacy_assistant.utils.errors import NormalizationError
from privacy_assistant.utils.numbers import safe_number

log = logger.create_logger("Normalizer")

# ============================================================================
# Collector names
# ============================================================================

CONTENT_REACHABILITY = "contentReachability"
CONTENT_PAGE_SIGNALS = "contentPageSignals"
COOKIE_SIGNALS = "cookieSignals"
NETWORK_REQUEST_SIGNALS = "networkRequestSignals"

DEFAULT_NETWORK_UNAVAILABLE_REASON = "NETWORK_SIGNALS_UNAVAILABLE"
SUPPORTED_SCHEMA_VERSIONS = frozenset({signals.NORMALIZED_SCHEMA_VERSION})


class CollectorResult(pydantic.BaseModel):
    """Outcome of one upstream signal collector."""

    name: str
    status: Literal["success", "failed"]
    data: dict[str, Any] | None = None
    error: str | None = None


# ============================================================================
# Helpers
# ============================================================================


def _find(collectors: Sequence[CollectorResult], name: str) -> CollectorResult | None:
    return next((c for c in collectors if c.name == name), None)


def _collector_data(collectors: Sequence[CollectorResult], name: str) -> dict[str, Any] | None:
    """Return a collector's payload only if it succeeded with a mapping."""
    collector = _find(collectors, name)
    if collector is None or collector.status != "success":
        return None
    return collector.data if isinstance(collector.data, Mapping) else None


def _nested(payload: Mapping[str, Any] | None, name: str) -> Mapping[str, Any]:
    """Return the data of a successful nested in-page collector.

    The content collector reports its own sub-collectors as
    ``{"collectors": [{"name", "status", "data"}, ...]}``.  Missing,
    failed or malformed entries yield an empty mapping.
    """
    if not payload or not isinstance(payload.get("collectors"), list):
        return {}
    for entry in payload["collectors"]:
        if not isinstance(entry, Mapping) or entry.get("name") != name:
            continue
        data = entry.get("data")
        if entry.get("status") != "success" or not isinstance(data, Mapping):
            return {}
        return data
    return {}


def legacy_confidence(collectors: Sequence[CollectorResult]) -> signals.ConfidenceLevel:
    """Rough confidence from the number of failed collectors."""
    failed = sum(1 for c in collectors if c.status == "failed")
    if failed == 0:
        return "high"
    if failed <= 2:
        return "medium"
    return "low"


def _network_unavailable_reason(collectors: Sequence[CollectorResult]) -> str:
    collector = _find(collectors, NETWORK_REQUEST_SIGNALS)
    if collector is not None and collector.error:
        return collector.error
    return DEFAULT_NETWORK_UNAVAILABLE_REASON


# ============================================================================
# Public API
# ============================================================================


def build_normalized_analysis(
    request_id: str,
    page: signals.PageContext,
    collectors: Sequence[CollectorResult],
) -> signals.NormalizedAnalysisInput:
    """Fold collector results into a normalized analysis record.

    Args:
        request_id: Identifier of the analysis request.
        page: Tab context (id, URL, hostname) of the analysed page.
        collectors: Results reported by each upstream collector.

    Returns:
        A fully populated :class:`NormalizedAnalysisInput`.
    """
    reachability = _collector_data(collectors, CONTENT_REACHABILITY)
    content = _collector_data(collectors, CONTENT_PAGE_SIGNALS)
    cookies = _collector_data(collectors, COOKIE_SIGNALS)
    network = _collector_data(collectors, NETWORK_REQUEST_SIGNALS)

    scripts = _nested(content, "scriptSignals")
    storage = _nested(content, "storageSignals")
    heuristics = _nested(content, "trackingHeuristics")
    page_context = _nested(content, "pageContext")
    local_storage = storage.get("localStorage") if isinstance(storage.get("localStorage"), Mapping) else {}
    session_storage = storage.get("sessionStorage") if isinstance(storage.get("sessionStorage"), Mapping) else {}
    cookie_data = cookies or {}
    network_data = network or {}
    network_available = network is not None

    title = page_context.get("title")
    normalized = signals.NormalizedAnalysisInput(
        request_id=request_id,
        page=page.model_copy(update={"title": title if isinstance(title, str) else ""}),
        source_flags=signals.SourceFlags(
            content_reachable=bool(reachability and reachability.get("reachable")),
            content_signals_available=content is not None,
            cookie_signals_available=cookies is not None,
            network_signals_available=network_available,
        ),
        script_signals=signals.ScriptSignals(
            third_party_script_domain_count=safe_number(scripts.get("thirdPartyScriptDomainCount")),
            external_script_count=safe_number(scripts.get("externalScriptCount")),
        ),
        cookie_signals=signals.CookieSignals(
            third_party_cookie_estimate_count=safe_number(cookie_data.get("thirdPartyCookieEstimateCount")),
            total_cookie_count=safe_number(cookie_data.get("totalCookieCount")),
        ),
        storage_signals=signals.StorageSignals(
            local_storage=signals.StorageArea(
                approx_bytes=safe_number(local_storage.get("approxBytes")),
                key_count=safe_number(local_storage.get("keyCount")),
            ),
            session_storage=signals.StorageArea(
                approx_bytes=safe_number(session_storage.get("approxBytes")),
                key_count=safe_number(session_storage.get("keyCount")),
            ),
        ),
        tracking_heuristics=signals.TrackingHeuristics(
            tracker_domain_hit_count=safe_number(heuristics.get("trackerDomainHitCount")),
            endpoint_pattern_hit_count=safe_number(heuristics.get("endpointPatternHitCount")),
            tracking_query_param_count=safe_number(heuristics.get("trackingQueryParamCount")),
        ),
        network_signals=signals.NetworkSignals(
            available=network_available,
            unavailable_reason=None if network_available else _network_unavailable_reason(collectors),
            third_party_request_count=safe_number(network_data.get("thirdPartyRequestCount")),
            suspicious_endpoint_hit_count=safe_number(network_data.get("suspiciousEndpointHitCount")),
            known_tracker_domain_hit_count=safe_number(network_data.get("knownTrackerDomainHitCount")),
            short_window_burst_count=safe_number(network_data.get("shortWindowBurstCount")),
        ),
        confidence=legacy_confidence(collectors),
    )

    log.info(
        "Normalized collector results",
        {
            "requestId": request_id,
            "collectors": len(collectors),
            "failed": sum(1 for c in collectors if c.status == "failed"),
            "networkAvailable": network_available,
        },
    )
    return normalized


def validate_normalized_analysis(normalized: signals.NormalizedAnalysisInput) -> None:
    """Check structural invariants the engines do not enforce themselves.

    Raises:
        NormalizationError: If the schema version is unsupported or
            the page URL is set but is not an http(s) URL.
    """
    if normalized.schema_version not in SUPPORTED_SCHEMA_VERSIONS:
        raise NormalizationError(f"Unsupported normalized schema version: {normalized.schema_version}")

    url = normalized.page.url
    if url and parse.urlsplit(url).scheme not in ("http", "https"):
        raise NormalizationError(f"Normalized analysis page URL is not http(s): {url}")
