"""Pydantic models for privacy score computation results."""

from __future__ import annotations

from typing import Literal

import pydantic

from privacy_assistant.utils.serialization import JsonNumber, snake_to_camel

ScoreFactorId = Literal[
    "third_party_scripts",
    "third_party_cookies",
    "storage_usage",
    "tracking_indicators",
    "network_suspiciousness",
]

ScoreUnit = Literal["count", "domain_count", "requests", "bytes", "composite_signals"]


class ScoreFactorContribution(pydantic.BaseModel):
    """How one penalty factor contributed to the score."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    factor_id: ScoreFactorId
    label: str
    unit: ScoreUnit
    weight: JsonNumber
    hard_cap: JsonNumber
    raw_value: JsonNumber
    capped_value: JsonNumber
    penalty: JsonNumber


class ScoreReason(pydantic.BaseModel):
    """A human-readable explanation for a score deduction."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    factor_id: ScoreFactorId
    penalty: JsonNumber
    reason: str


class PrivacyScoreComputation(pydantic.BaseModel):
    """Full output of the score engine."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    ruleset_version: str
    base_score: JsonNumber = 100
    total_penalty: JsonNumber = 0
    score: JsonNumber = 100
    rounding_strategy: str = "half_up_2dp"
    contributions: list[ScoreFactorContribution] = pydantic.Field(default_factory=list)
    strongest_negative_reasons: list[ScoreReason] = pydantic.Field(default_factory=list)
