"""Confidence derivation from source availability.

Confidence says how complete signal collection was, independently
of how risky the page is.  It starts at 100 and each unmet source
flag subtracts one flat penalty; all rules are evaluated and
several can apply at once.  Reasons keep rule order.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from privacy_assistant.models import confidence, scoring, signals
from privacy_assistant.utils import logger
from privacy_assistant.utils.numbers import clamp

log = logger.create_logger("Confidence")

CONFIDENCE_RULESET_VERSION = "1.0.0"

MAX_CONFIDENCE_SCORE = 100
MIN_CONFIDENCE_SCORE = 0


@dataclass(frozen=True)
class ConfidencePenaltyRule:
    """A flat confidence deduction for one missing signal source."""

    code: confidence.ConfidenceReasonCode
    penalty: float
    applies: Callable[[signals.NormalizedAnalysisInput], bool]
    message: Callable[[signals.NormalizedAnalysisInput], str]


def _network_message(data: signals.NormalizedAnalysisInput) -> str:
    reason = data.network_signals.unavailable_reason
    if reason:
        return f"Network signal collector unavailable: {reason}."
    return "Network signal collector is unavailable, reducing confidence in traffic-related results."


CONFIDENCE_PENALTY_RULES: tuple[ConfidencePenaltyRule, ...] = (
    ConfidencePenaltyRule(
        code="CONTENT_UNREACHABLE",
        penalty=20,
        applies=lambda data: not data.source_flags.content_reachable,
        message=lambda _: "Content context was unreachable; page-level signals may be incomplete.",
    ),
    ConfidencePenaltyRule(
        code="CONTENT_SIGNALS_UNAVAILABLE",
        penalty=35,
        applies=lambda data: not data.source_flags.content_signals_available,
        message=lambda _: "Content signal collectors were unavailable for this analysis.",
    ),
    ConfidencePenaltyRule(
        code="COOKIE_SIGNALS_UNAVAILABLE",
        penalty=20,
        applies=lambda data: not data.source_flags.cookie_signals_available,
        message=lambda _: "Cookie signal collector data is unavailable, reducing confidence.",
    ),
    ConfidencePenaltyRule(
        code="NETWORK_SIGNALS_UNAVAILABLE",
        penalty=25,
        applies=lambda data: not data.source_flags.network_signals_available,
        message=_network_message,
    ),
)


def map_confidence_level(score: float) -> signals.ConfidenceLevel:
    """Map a 0-100 confidence score to low/medium/high."""
    if score >= 80:
        return "high"
    if score >= 50:
        return "medium"
    return "low"


def derive_confidence(normalized: signals.NormalizedAnalysisInput) -> confidence.ConfidenceAssessment:
    """Derive the confidence assessment for one analysis.

    Args:
        normalized: The normalized analysis record.

    Returns:
        A :class:`ConfidenceAssessment` with score, level and the
        applied reasons in rule order.
    """
    score: float = MAX_CONFIDENCE_SCORE
    reasons: list[confidence.ConfidenceReason] = []

    for rule in CONFIDENCE_PENALTY_RULES:
        if not rule.applies(normalized):
            continue
        score -= rule.penalty
        reasons.append(confidence.ConfidenceReason(code=rule.code, message=rule.message(normalized)))

    bounded = clamp(score, MIN_CONFIDENCE_SCORE, MAX_CONFIDENCE_SCORE)
    level = map_confidence_level(bounded)

    if reasons:
        log.debug("Confidence reduced", {"score": bounded, "level": level, "reasons": [r.code for r in reasons]})

    return confidence.ConfidenceAssessment(
        ruleset_version=CONFIDENCE_RULESET_VERSION,
        score=bounded,
        level=level,
        reasons=reasons,
    )


def create_privacy_scored_output(
    score: scoring.PrivacyScoreComputation,
    normalized: signals.NormalizedAnalysisInput,
) -> confidence.PrivacyScoredOutput:
    """Pair a computed privacy score with its confidence assessment."""
    return confidence.PrivacyScoredOutput(score=score, confidence=derive_confidence(normalized))
