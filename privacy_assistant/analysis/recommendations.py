"""Risk-to-recommendation mapping.

A static many-to-many table maps risk rule ids onto a catalog of
six actions.  Risks are folded into one accumulator per action in
detection order; severity and priority merge towards the more
severe / more urgent value using explicit rank tables, and the
final list is sorted severity, then priority, then action id.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from privacy_assistant.models import recommendations, risks
from privacy_assistant.utils import logger

log = logger.create_logger("Recommendations")

RECOMMENDATION_RULESET_VERSION = "1.0.0"


@dataclass(frozen=True)
class RecommendationCatalogItem:
    """Static description of one recommended action."""

    action_id: recommendations.RecommendationActionId
    title: str
    rationale: str
    default_priority: risks.MitigationPriority


RECOMMENDATION_CATALOG: dict[str, RecommendationCatalogItem] = {
    item.action_id: item
    for item in (
        RecommendationCatalogItem(
            action_id="reduce_third_party_cookies",
            title="Reduce third-party cookies",
            rationale="Reducing third-party cookies lowers cross-site tracking across browsing sessions.",
            default_priority="p1",
        ),
        RecommendationCatalogItem(
            action_id="limit_third_party_scripts",
            title="Limit third-party scripts",
            rationale="Limiting third-party script execution lowers data-sharing and fingerprinting exposure.",
            default_priority="p2",
        ),
        RecommendationCatalogItem(
            action_id="clear_site_storage_data",
            title="Clear site storage data",
            rationale="Removing persistent storage can invalidate long-lived tracking identifiers.",
            default_priority="p2",
        ),
        RecommendationCatalogItem(
            action_id="block_known_trackers",
            title="Block known tracker domains",
            rationale="Blocking known trackers reduces profiling and telemetry collection.",
            default_priority="p1",
        ),
        RecommendationCatalogItem(
            action_id="review_tracking_permissions",
            title="Review tracking-related permissions",
            rationale="Restricting site permissions can reduce silent data access and background tracking.",
            default_priority="p2",
        ),
        RecommendationCatalogItem(
            action_id="harden_network_privacy",
            title="Harden network privacy settings",
            rationale="Network privacy controls can reduce beaconing, endpoint telemetry, and request leakage.",
            default_priority="p1",
        ),
    )
}

RISK_TO_RECOMMENDATION_MAP: dict[str, tuple[recommendations.RecommendationActionId, ...]] = {
    "overall_score_high": ("block_known_trackers", "reduce_third_party_cookies", "harden_network_privacy"),
    "third_party_cookie_volume": ("reduce_third_party_cookies",),
    "third_party_script_domains": ("limit_third_party_scripts", "review_tracking_permissions"),
    "persistent_storage_footprint": ("clear_site_storage_data",),
    "tracking_indicator_density": ("block_known_trackers", "harden_network_privacy"),
    "network_heavy_third_party_requests": ("harden_network_privacy", "block_known_trackers"),
    "network_suspicious_endpoint_repetition": ("harden_network_privacy", "block_known_trackers"),
    "network_tracker_domain_concentration": ("block_known_trackers", "harden_network_privacy"),
    "network_short_window_burst": ("harden_network_privacy",),
}

# Smaller rank wins: more severe / more urgent.
RISK_SEVERITY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}
PRIORITY_RANK: dict[str, int] = {"p1": 0, "p2": 1, "p3": 2}


def choose_higher_severity(a: risks.RiskSeverity, b: risks.RiskSeverity) -> risks.RiskSeverity:
    """Return the more severe of two severities."""
    return a if RISK_SEVERITY_RANK[a] <= RISK_SEVERITY_RANK[b] else b


def choose_higher_priority(a: risks.MitigationPriority, b: risks.MitigationPriority) -> risks.MitigationPriority:
    """Return the more urgent of two priorities."""
    return a if PRIORITY_RANK[a] <= PRIORITY_RANK[b] else b


@dataclass
class _Accumulator:
    action_id: recommendations.RecommendationActionId
    severity: risks.RiskSeverity
    priority: risks.MitigationPriority
    triggered_by: set[str] = field(default_factory=set)


def _apply_risk(accumulators: dict[str, _Accumulator], risk: risks.RiskItem) -> None:
    """Fold one risk item into the per-action accumulators."""
    for action_id in RISK_TO_RECOMMENDATION_MAP.get(risk.id, ()):
        existing = accumulators.get(action_id)
        if existing is None:
            accumulators[action_id] = _Accumulator(
                action_id=action_id,
                severity=risk.severity,
                priority=risk.mitigation_priority,
                triggered_by={risk.id},
            )
            continue
        existing.severity = choose_higher_severity(existing.severity, risk.severity)
        existing.priority = choose_higher_priority(existing.priority, risk.mitigation_priority)
        existing.triggered_by.add(risk.id)


def _sort_key(item: recommendations.Recommendation) -> tuple[int, int, str]:
    return (RISK_SEVERITY_RANK[item.severity], PRIORITY_RANK[item.priority], item.action_id)


def generate_recommendations(risk_output: risks.RiskDetectionOutput) -> recommendations.RecommendationOutput:
    """Map detected risks to a deduplicated, sorted action list.

    Args:
        risk_output: Output of the risk detector.  Risk ids without
            a mapping (such as the synthetic network-unavailable
            item) contribute nothing.

    Returns:
        A :class:`RecommendationOutput` with one entry per action.
    """
    accumulators: dict[str, _Accumulator] = {}
    for risk in risk_output.risk_items:
        _apply_risk(accumulators, risk)

    items: list[recommendations.Recommendation] = []
    for acc in accumulators.values():
        catalog = RECOMMENDATION_CATALOG[acc.action_id]
        items.append(
            recommendations.Recommendation(
                action_id=acc.action_id,
                title=catalog.title,
                rationale=catalog.rationale,
                severity=acc.severity,
                priority=choose_higher_priority(catalog.default_priority, acc.priority),
                triggered_by_risk_ids=sorted(acc.triggered_by),
            )
        )
    items.sort(key=_sort_key)

    log.debug("Recommendations generated", {"actions": [item.action_id for item in items]})

    return recommendations.RecommendationOutput(
        ruleset_version=RECOMMENDATION_RULESET_VERSION,
        recommendations=items,
    )
