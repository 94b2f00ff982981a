"""Privacy score calculator.

Applies every factor in :data:`SCORE_FACTOR_DEFINITIONS` to the
normalized input and subtracts the summed penalty from a base of
100.  Each intermediate value is rounded half-up to two decimals
where it is emitted, and the total is the rounded sum of the
already-rounded penalties, so results stay cent-exact with the
extension's own engine.
"""

from __future__ import annotations

from privacy_assistant.analysis.scoring.factors import (
    BASE_SCORE,
    PRIVACY_SCORE_BOUNDS,
    SCORE_FACTOR_DEFINITIONS,
    SCORE_MODEL_VERSION,
    ScoreFactorDefinition,
)
from privacy_assistant.models import scoring, signals
from privacy_assistant.utils import logger
from privacy_assistant.utils.numbers import clamp, round_half_up

log = logger.create_logger("PrivacyScore")

ROUNDING_STRATEGY = "half_up_2dp"
MAX_NEGATIVE_REASONS = 3


def clamp_privacy_score(value: float) -> float:
    """Clamp *value* into the privacy score bounds; non-finite maps to 0."""
    return clamp(value, PRIVACY_SCORE_BOUNDS.min, PRIVACY_SCORE_BOUNDS.max)


def _score_factor(
    factor: ScoreFactorDefinition,
    raw_value: float,
) -> scoring.ScoreFactorContribution:
    """Compute one factor's capped value and penalty."""
    capped_value = min(raw_value, factor.hard_cap)
    ratio = capped_value / factor.hard_cap if factor.hard_cap > 0 else 0.0
    return scoring.ScoreFactorContribution(
        factor_id=factor.id,
        label=factor.label,
        unit=factor.unit,
        weight=factor.weight,
        hard_cap=factor.hard_cap,
        raw_value=round_half_up(raw_value),
        capped_value=round_half_up(capped_value),
        penalty=round_half_up(factor.weight * ratio),
    )


def _describe(contribution: scoring.ScoreFactorContribution, raw_value: float) -> str:
    """Build the reason text for a penalized factor."""
    amount = int(round_half_up(raw_value, 0))
    if contribution.factor_id == "storage_usage":
        return f"{contribution.label} consumed {amount} bytes"
    return f"{contribution.label} triggered {amount} signals"


def _strongest_negative_reasons(
    contributions: list[scoring.ScoreFactorContribution],
    raw_values: dict[str, float],
) -> list[scoring.ScoreReason]:
    """Rank penalized factors by penalty, ties by canonical factor order.

    ``contributions`` is already in canonical order and ``sorted``
    is stable, so sorting on the penalty alone keeps that tie-break.
    """
    penalized = [c for c in contributions if c.penalty > 0]
    ranked = sorted(penalized, key=lambda c: c.penalty, reverse=True)
    return [
        scoring.ScoreReason(
            factor_id=c.factor_id,
            penalty=c.penalty,
            reason=_describe(c, raw_values[c.factor_id]),
        )
        for c in ranked[:MAX_NEGATIVE_REASONS]
    ]


def compute_privacy_score(
    normalized: signals.NormalizedAnalysisInput,
) -> scoring.PrivacyScoreComputation:
    """Calculate the privacy score and per-factor breakdown.

    Total over its input: malformed numeric fields are read as zero
    and never raise.

    Args:
        normalized: The normalized analysis record for one tab.

    Returns:
        A :class:`PrivacyScoreComputation` with the 0-100 score,
        contributions in canonical factor order, and up to three
        strongest negative reasons.
    """
    raw_values = {factor.id: factor.read_raw(normalized) for factor in SCORE_FACTOR_DEFINITIONS}
    contributions = [_score_factor(factor, raw_values[factor.id]) for factor in SCORE_FACTOR_DEFINITIONS]
    total_penalty = round_half_up(sum(c.penalty for c in contributions))
    score = round_half_up(clamp_privacy_score(BASE_SCORE - total_penalty))

    log.debug(
        "Privacy score calculated",
        {
            "score": score,
            "totalPenalty": total_penalty,
            **{c.factor_id: c.penalty for c in contributions},
        },
    )

    return scoring.PrivacyScoreComputation(
        ruleset_version=SCORE_MODEL_VERSION,
        base_score=BASE_SCORE,
        total_penalty=total_penalty,
        score=score,
        rounding_strategy=ROUNDING_STRATEGY,
        contributions=contributions,
        strongest_negative_reasons=_strongest_negative_reasons(contributions, raw_values),
    )
