"""Pydantic models for recommendation output."""

from __future__ import annotations

from typing import Literal

import pydantic

from privacy_assistant.models import risks
from privacy_assistant.utils.serialization import snake_to_camel

RecommendationActionId = Literal[
    "reduce_third_party_cookies",
    "limit_third_party_scripts",
    "clear_site_storage_data",
    "block_known_trackers",
    "review_tracking_permissions",
    "harden_network_privacy",
]


class Recommendation(pydantic.BaseModel):
    """A deduplicated action with merged severity and priority."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    action_id: RecommendationActionId
    title: str
    rationale: str
    severity: risks.RiskSeverity
    priority: risks.MitigationPriority
    triggered_by_risk_ids: list[str] = pydantic.Field(default_factory=list)


class RecommendationOutput(pydantic.BaseModel):
    """Sorted recommendation list."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    ruleset_version: str
    recommendations: list[Recommendation] = pydantic.Field(default_factory=list)
