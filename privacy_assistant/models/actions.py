"""Pydantic models for improve-privacy action execution."""

from __future__ import annotations

from typing import Literal

import pydantic

from privacy_assistant.models import recommendations, report
from privacy_assistant.utils.serialization import snake_to_camel

ActionStatus = Literal["success", "failed", "skipped"]


class ActionExecutionContext(pydantic.BaseModel):
    """The tab an action should be applied to."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    tab_id: int | None = None
    page_url: str | None = None
    domain: str | None = None


class ActionHandlerResult(pydantic.BaseModel):
    """What a single handler reports back."""

    status: ActionStatus
    message: str


class ActionResult(pydantic.BaseModel):
    """Outcome of one queued action."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    action_id: recommendations.RecommendationActionId
    status: ActionStatus
    message: str


class ActionRefreshResult(pydantic.BaseModel):
    """Action outcomes plus the analysis re-run afterwards."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    request_id: str
    results: list[ActionResult] = pydantic.Field(default_factory=list)
    refreshed_analysis: report.PrivacyAnalysisReport
