"""Rule-based privacy risk detection.

Maps the final privacy score onto an overall risk band and
evaluates a fixed, ordered list of independent threshold rules
against the normalized signals.  Every rule sees the same input;
there is no short-circuiting.  Network-sourced rules are skipped
entirely when network signals are unavailable and a single
synthetic low-severity item is appended in their place.

Bump :data:`RISK_RULESET_VERSION` whenever a band, threshold or
rule changes.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from privacy_assistant.analysis.scoring import factors
from privacy_assistant.models import risks, signals
from privacy_assistant.utils import logger
from privacy_assistant.utils.numbers import clamp, safe_number

log = logger.create_logger("RiskDetector")

RISK_RULESET_VERSION = "1.0.0"
NETWORK_UNAVAILABLE_RISK_ID = "network_signals_unavailable"


@dataclass(frozen=True)
class ScoreBand:
    """A closed score interval mapped to an overall risk level."""

    level: risks.OverallRiskLevel
    min_inclusive: float
    max_inclusive: float
    explanation: str


@dataclass(frozen=True)
class RiskRule:
    """An independent threshold rule producing at most one risk item."""

    id: str
    title: str
    severity: risks.RiskSeverity
    mitigation_priority: risks.MitigationPriority
    source: risks.RiskRuleSource
    metric: str
    operator: risks.RiskMetricOperator
    threshold: float
    explanation: str
    actual_value: Callable[[risks.RiskDetectionInput], float]


# ── Overall score bands ─────────────────────────────────────

OVERALL_RISK_FALLBACK = ScoreBand(
    level="medium",
    min_inclusive=0,
    max_inclusive=100,
    explanation=(
        "Overall privacy risk could not be determined reliably due to a risk mapping configuration issue."
    ),
)

OVERALL_SCORE_BANDS: tuple[ScoreBand, ...] = (
    ScoreBand(
        level="high",
        min_inclusive=0,
        max_inclusive=39.99,
        explanation="High privacy risk due to strong tracking and third-party activity signals.",
    ),
    ScoreBand(
        level="medium",
        min_inclusive=40,
        max_inclusive=69.99,
        explanation="Medium privacy risk with notable tracking-related behaviors detected.",
    ),
    ScoreBand(
        level="low",
        min_inclusive=70,
        max_inclusive=100,
        explanation="Lower privacy risk compared to common web tracking patterns.",
    ),
)


# ── Rule table ──────────────────────────────────────────────


def _network(read: Callable[[signals.NetworkSignals], float]) -> Callable[[risks.RiskDetectionInput], float]:
    """Wrap a network field reader so unavailable networks read as zero."""
    return lambda data: factors.network_value(data.normalized, read(data.normalized.network_signals))


RISK_RULES: tuple[RiskRule, ...] = (
    RiskRule(
        id="overall_score_high",
        title="Overall privacy score is low",
        severity="high",
        mitigation_priority="p1",
        source="overall_score",
        metric="score",
        operator="<",
        threshold=40,
        explanation="The total score indicates multiple significant privacy risk factors.",
        actual_value=lambda data: data.score,
    ),
    RiskRule(
        id="third_party_cookie_volume",
        title="High third-party cookie volume",
        severity="high",
        mitigation_priority="p1",
        source="cookies",
        metric="cookieSignals.thirdPartyCookieEstimateCount",
        operator=">=",
        threshold=25,
        explanation="A large number of third-party cookies can enable cross-site tracking.",
        actual_value=lambda data: safe_number(data.normalized.cookie_signals.third_party_cookie_estimate_count),
    ),
    RiskRule(
        id="third_party_script_domains",
        title="Many third-party script domains",
        severity="medium",
        mitigation_priority="p2",
        source="scripts",
        metric="scriptSignals.thirdPartyScriptDomainCount",
        operator=">=",
        threshold=10,
        explanation="Numerous external script domains increase exposure to data-sharing and tracking.",
        actual_value=lambda data: safe_number(data.normalized.script_signals.third_party_script_domain_count),
    ),
    RiskRule(
        id="persistent_storage_footprint",
        title="Large persistent storage footprint",
        severity="medium",
        mitigation_priority="p2",
        source="storage",
        metric="storageSignals.totalApproxBytes",
        operator=">=",
        threshold=2_000_000,
        explanation="Large local/session storage may indicate persistent identifiers for tracking.",
        actual_value=lambda data: factors.total_storage_bytes(data.normalized),
    ),
    RiskRule(
        id="tracking_indicator_density",
        title="Dense tracking indicators",
        severity="high",
        mitigation_priority="p1",
        source="tracking",
        metric="trackingHeuristics.totalIndicators",
        operator=">=",
        threshold=12,
        explanation="Multiple tracker and endpoint patterns suggest active telemetry collection.",
        actual_value=lambda data: factors.total_tracking_indicators(data.normalized),
    ),
    RiskRule(
        id="network_heavy_third_party_requests",
        title="Heavy third-party request volume",
        severity="medium",
        mitigation_priority="p2",
        source="network",
        metric="networkSignals.thirdPartyRequestCount",
        operator=">=",
        threshold=40,
        explanation="Frequent third-party network requests increase passive data leakage risk.",
        actual_value=_network(lambda network: network.third_party_request_count),
    ),
    RiskRule(
        id="network_suspicious_endpoint_repetition",
        title="Repeated suspicious tracking endpoints",
        severity="high",
        mitigation_priority="p1",
        source="network",
        metric="networkSignals.suspiciousEndpointHitCount",
        operator=">=",
        threshold=15,
        explanation="Repeated calls to tracking-like endpoints suggest active behavior analytics.",
        actual_value=_network(lambda network: network.suspicious_endpoint_hit_count),
    ),
    RiskRule(
        id="network_tracker_domain_concentration",
        title="Concentrated known tracker-domain activity",
        severity="high",
        mitigation_priority="p1",
        source="network",
        metric="networkSignals.knownTrackerDomainHitCount",
        operator=">=",
        threshold=8,
        explanation="High known-tracker domain frequency indicates sustained profiling behavior.",
        actual_value=_network(lambda network: network.known_tracker_domain_hit_count),
    ),
    RiskRule(
        id="network_short_window_burst",
        title="Suspicious short-window traffic burst",
        severity="medium",
        mitigation_priority="p2",
        source="network",
        metric="networkSignals.shortWindowBurstCount",
        operator=">=",
        threshold=25,
        explanation="Burst-like request behavior may indicate beaconing or batch telemetry uploads.",
        actual_value=_network(lambda network: network.short_window_burst_count),
    ),
)


# ── Evaluation ──────────────────────────────────────────────


def compare_threshold(actual_value: float, operator: risks.RiskMetricOperator, threshold: float) -> bool:
    """Return whether ``actual_value <operator> threshold`` holds."""
    if operator == ">=":
        return actual_value >= threshold
    if operator == ">":
        return actual_value > threshold
    if operator == "<=":
        return actual_value <= threshold
    return actual_value < threshold


def resolve_overall_risk(
    score: float,
    bands: tuple[ScoreBand, ...] = OVERALL_SCORE_BANDS,
) -> tuple[ScoreBand, bool]:
    """Find the band containing *score*.

    Args:
        score: Final privacy score; clamped into [0, 100] first.
        bands: Band table to search.

    Returns:
        The matched band and ``False``, or the medium fallback band
        and ``True`` when no band contains the score.
    """
    safe_score = clamp(score, 0, 100)
    for band in bands:
        if band.min_inclusive <= safe_score <= band.max_inclusive:
            return band, False
    log.warn("Score fell outside every risk band", {"score": safe_score})
    return OVERALL_RISK_FALLBACK, True


def _network_unavailable_risk(network: signals.NetworkSignals) -> risks.RiskItem:
    if network.unavailable_reason:
        explanation = f"Network-based risk checks were skipped: {network.unavailable_reason}."
    else:
        explanation = "Network-based risk checks were skipped because network signals are unavailable."
    return risks.RiskItem(
        id=NETWORK_UNAVAILABLE_RISK_ID,
        title="Network signal analysis unavailable",
        explanation=explanation,
        severity="low",
        mitigation_priority="p3",
        source="network",
        metric="networkSignals.available",
        operator="<",
        threshold=1,
        actual_value=0,
    )


def detect_risks(score: float, normalized: signals.NormalizedAnalysisInput) -> risks.RiskDetectionOutput:
    """Classify the overall risk band and evaluate every risk rule.

    Args:
        score: The privacy score (``PrivacyScoreComputation.score``).
            Non-finite values are treated as 0.
        normalized: The same normalized record the score came from.

    Returns:
        A :class:`RiskDetectionOutput` with risk items in rule order.
    """
    data = risks.RiskDetectionInput(score=clamp(score, 0, 100), normalized=normalized)
    band, fallback_used = resolve_overall_risk(data.score)
    network = normalized.network_signals

    risk_items: list[risks.RiskItem] = []
    for rule in RISK_RULES:
        if rule.source == "network" and not network.available:
            continue
        actual_value = rule.actual_value(data)
        if not compare_threshold(actual_value, rule.operator, rule.threshold):
            continue
        risk_items.append(
            risks.RiskItem(
                id=rule.id,
                title=rule.title,
                explanation=rule.explanation,
                severity=rule.severity,
                mitigation_priority=rule.mitigation_priority,
                source=rule.source,
                metric=rule.metric,
                operator=rule.operator,
                threshold=rule.threshold,
                actual_value=actual_value,
            )
        )

    if not network.available:
        risk_items.append(_network_unavailable_risk(network))

    log.debug(
        "Risks detected",
        {
            "overallRisk": band.level,
            "riskItems": [item.id for item in risk_items],
            "networkFallback": not network.available,
        },
    )

    return risks.RiskDetectionOutput(
        ruleset_version=RISK_RULESET_VERSION,
        overall_risk=band.level,
        overall_explanation=band.explanation,
        mapping_fallback_used=fallback_used,
        network_fallback_used=not network.available,
        network_unavailable_reason=None if network.available else network.unavailable_reason,
        risk_items=risk_items,
    )
