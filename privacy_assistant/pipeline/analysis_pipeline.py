"""
Analysis pipeline composition.

Runs the four engines in their fixed order for one tab:
score -> risks -> recommendations, with confidence derived
independently from the same normalized record.  Everything here is
synchronous and pure apart from logging.
"""

from __future__ import annotations

from collections.abc import Sequence

from privacy_assistant.analysis import confidence, recommendations, risks
from privacy_assistant.analysis.scoring import compute_privacy_score
from privacy_assistant.models import report, signals
from privacy_assistant.pipeline import normalizer
from privacy_assistant.utils import logger

log = logger.create_logger("Pipeline")


def run_analysis(normalized: signals.NormalizedAnalysisInput) -> report.PrivacyAnalysisReport:
    """Run the full scoring pipeline on a normalized record.

    Args:
        normalized: The normalized analysis input for one tab.

    Returns:
        A :class:`PrivacyAnalysisReport` bundling the score,
        confidence, risks and recommendations.
    """
    log.start_timer("analysis")

    score = compute_privacy_score(normalized)
    scored = confidence.create_privacy_scored_output(score, normalized)
    risk_output = risks.detect_risks(score.score, normalized)
    recommendation_output = recommendations.generate_recommendations(risk_output)

    log.end_timer("analysis", "Privacy analysis complete")
    log.success(
        "Analysis summary",
        {
            "host": normalized.page.hostname,
            "score": score.score,
            "overallRisk": risk_output.overall_risk,
            "confidence": scored.confidence.level,
            "risks": len(risk_output.risk_items),
            "recommendations": len(recommendation_output.recommendations),
        },
    )

    return report.PrivacyAnalysisReport(
        request_id=normalized.request_id,
        page=normalized.page,
        score=scored.score,
        confidence=scored.confidence,
        risks=risk_output,
        recommendations=recommendation_output,
    )


def analyze_collectors(
    request_id: str,
    page: signals.PageContext,
    collectors: Sequence[normalizer.CollectorResult],
) -> report.PrivacyAnalysisReport:
    """Normalize collector results, validate them and run the pipeline.

    Raises:
        NormalizationError: If the normalized record is invalid.
    """
    normalized = normalizer.build_normalized_analysis(request_id, page, collectors)
    normalizer.validate_normalized_analysis(normalized)
    return run_analysis(normalized)
