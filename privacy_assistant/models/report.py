"""Pydantic model for the complete per-tab analysis report."""

from __future__ import annotations

import pydantic

from privacy_assistant.models import confidence as confidence_models
from privacy_assistant.models import recommendations as recommendation_models
from privacy_assistant.models import risks as risk_models
from privacy_assistant.models import scoring, signals
from privacy_assistant.utils.serialization import snake_to_camel


class PrivacyAnalysisReport(pydantic.BaseModel):
    """Everything the rendering layer needs for one analysed tab."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    request_id: str = ""
    page: signals.PageContext = pydantic.Field(default_factory=signals.PageContext)
    score: scoring.PrivacyScoreComputation
    confidence: confidence_models.ConfidenceAssessment
    risks: risk_models.RiskDetectionOutput
    recommendations: recommendation_models.RecommendationOutput
