"""Pydantic models for confidence assessment results."""

from __future__ import annotations

from typing import Literal

import pydantic

from privacy_assistant.models import scoring, signals
from privacy_assistant.utils.serialization import JsonNumber, snake_to_camel

ConfidenceReasonCode = Literal[
    "CONTENT_UNREACHABLE",
    "CONTENT_SIGNALS_UNAVAILABLE",
    "COOKIE_SIGNALS_UNAVAILABLE",
    "NETWORK_SIGNALS_UNAVAILABLE",
]


class ConfidenceReason(pydantic.BaseModel):
    """One applied confidence penalty."""

    code: ConfidenceReasonCode
    message: str


class ConfidenceAssessment(pydantic.BaseModel):
    """How complete the signal collection was."""

    model_config = pydantic.ConfigDict(
        alias_generator=snake_to_camel, populate_by_name=True
    )

    ruleset_version: str
    score: JsonNumber
    level: signals.ConfidenceLevel
    reasons: list[ConfidenceReason] = pydantic.Field(default_factory=list)


class PrivacyScoredOutput(pydantic.BaseModel):
    """A privacy score reported alongside its confidence."""

    score: scoring.PrivacyScoreComputation
    confidence: ConfidenceAssessment
