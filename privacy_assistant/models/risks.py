"""Pydantic models for risk detection results."""

from __future__ import annotations

from typing import Literal

import pydantic

from privacy_assistant.models import signals
from privacy_assistant.utils.serialization import JsonNumber, snake_to_camel

OverallRiskLevel = Literal["low", "medium", "high"]
RiskSeverity = Literal["low", "medium", "high"]
MitigationPriority = Literal["p1", "p2", "p3"]
RiskMetricOperator = Literal[">=", ">", "<=", "<"]
RiskRuleSource = Literal["overall_score", "cookies", "scripts", "storage", "tracking", "network"]


class RiskDetectionInput(pydantic.BaseModel):
    """The final privacy score together with the signals it came from."""

    score: float
    normalized: signals.NormalizedAnalysisInput


class RiskItem(pydantic.BaseModel):
    """A fired threshold rule describing one concrete privacy concern."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    id: str
    title: str
    explanation: str
    severity: RiskSeverity
    mitigation_priority: MitigationPriority
    source: RiskRuleSource
    metric: str
    operator: RiskMetricOperator
    threshold: JsonNumber
    actual_value: JsonNumber


class RiskDetectionOutput(pydantic.BaseModel):
    """Overall risk band plus the ordered list of fired rules."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    ruleset_version: str
    overall_risk: OverallRiskLevel
    overall_explanation: str
    mapping_fallback_used: bool = False
    network_fallback_used: bool = False
    network_unavailable_reason: str | None = None
    risk_items: list[RiskItem] = pydantic.Field(default_factory=list)
