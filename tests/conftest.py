"""Shared fixtures for the test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterator

import pytest

from privacy_assistant import config
from privacy_assistant.models import signals


def build_input(**overrides: object) -> signals.NormalizedAnalysisInput:
    """Build a normalized record from camelCase overrides on an all-zero base."""
    base: dict[str, object] = {
        "requestId": "req-test",
        "page": {"tabId": 7, "url": "https://example.com/", "hostname": "example.com", "title": "Example"},
        "sourceFlags": {
            "contentReachable": True,
            "contentSignalsAvailable": True,
            "cookieSignalsAvailable": True,
            "networkSignalsAvailable": True,
        },
        "scriptSignals": {"thirdPartyScriptDomainCount": 0, "externalScriptCount": 0},
        "cookieSignals": {"thirdPartyCookieEstimateCount": 0, "totalCookieCount": 0},
        "storageSignals": {
            "localStorage": {"approxBytes": 0, "keyCount": 0},
            "sessionStorage": {"approxBytes": 0, "keyCount": 0},
        },
        "trackingHeuristics": {"trackerDomainHitCount": 0, "endpointPatternHitCount": 0, "trackingQueryParamCount": 0},
        "networkSignals": {
            "available": True,
            "unavailableReason": None,
            "thirdPartyRequestCount": 0,
            "suspiciousEndpointHitCount": 0,
            "knownTrackerDomainHitCount": 0,
            "shortWindowBurstCount": 0,
        },
        "confidence": "high",
    }
    base.update(overrides)
    return signals.NormalizedAnalysisInput.model_validate(base)


# ── Settings ────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    """Drop cached settings so env patches in one test do not leak."""
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


# ── Normalized Input Fixtures ───────────────────────────────────


@pytest.fixture()
def make_input() -> Callable[..., signals.NormalizedAnalysisInput]:
    """Factory for records built from camelCase overrides."""
    return build_input


@pytest.fixture()
def empty_input() -> signals.NormalizedAnalysisInput:
    """All counts zero, every source available."""
    return build_input()


@pytest.fixture()
def low_risk_input() -> signals.NormalizedAnalysisInput:
    """A lightly tracked page."""
    return build_input(
        scriptSignals={"thirdPartyScriptDomainCount": 2, "externalScriptCount": 8},
        cookieSignals={"thirdPartyCookieEstimateCount": 4, "totalCookieCount": 12},
        storageSignals={
            "localStorage": {"approxBytes": 120000, "keyCount": 8},
            "sessionStorage": {"approxBytes": 80000, "keyCount": 5},
        },
        trackingHeuristics={"trackerDomainHitCount": 1, "endpointPatternHitCount": 1, "trackingQueryParamCount": 1},
        networkSignals={
            "available": True,
            "thirdPartyRequestCount": 3,
            "suspiciousEndpointHitCount": 1,
            "knownTrackerDomainHitCount": 0,
            "shortWindowBurstCount": 0,
        },
    )


@pytest.fixture()
def medium_risk_input() -> signals.NormalizedAnalysisInput:
    """A page with notable but not saturating tracking."""
    return build_input(
        scriptSignals={"thirdPartyScriptDomainCount": 10, "externalScriptCount": 25},
        cookieSignals={"thirdPartyCookieEstimateCount": 20, "totalCookieCount": 35},
        storageSignals={
            "localStorage": {"approxBytes": 1100000, "keyCount": 24},
            "sessionStorage": {"approxBytes": 400000, "keyCount": 16},
        },
        trackingHeuristics={"trackerDomainHitCount": 4, "endpointPatternHitCount": 4, "trackingQueryParamCount": 4},
        networkSignals={
            "available": True,
            "thirdPartyRequestCount": 30,
            "suspiciousEndpointHitCount": 5,
            "knownTrackerDomainHitCount": 2,
            "shortWindowBurstCount": 3,
        },
    )


@pytest.fixture()
def high_risk_input() -> signals.NormalizedAnalysisInput:
    """Every factor saturated past its hard cap."""
    return build_input(
        scriptSignals={"thirdPartyScriptDomainCount": 30, "externalScriptCount": 80},
        cookieSignals={"thirdPartyCookieEstimateCount": 80, "totalCookieCount": 120},
        storageSignals={
            "localStorage": {"approxBytes": 5000000, "keyCount": 80},
            "sessionStorage": {"approxBytes": 2500000, "keyCount": 45},
        },
        trackingHeuristics={"trackerDomainHitCount": 16, "endpointPatternHitCount": 14, "trackingQueryParamCount": 12},
        networkSignals={
            "available": True,
            "thirdPartyRequestCount": 80,
            "suspiciousEndpointHitCount": 25,
            "knownTrackerDomainHitCount": 12,
            "shortWindowBurstCount": 30,
        },
    )


@pytest.fixture()
def partial_data_input(medium_risk_input: signals.NormalizedAnalysisInput) -> signals.NormalizedAnalysisInput:
    """Medium-risk signals with content and network collectors missing."""
    return medium_risk_input.model_copy(
        update={
            "source_flags": signals.SourceFlags(
                content_reachable=False,
                content_signals_available=False,
                cookie_signals_available=True,
                network_signals_available=False,
            ),
            "network_signals": signals.NetworkSignals(
                available=False,
                unavailable_reason="WEBREQUEST_LISTENER_UNAVAILABLE",
            ),
            "confidence": "low",
        }
    )
