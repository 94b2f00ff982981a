"""camelCase conversion shared by every model config.

Engine outputs are handed to rendering layers as JSON with the
field names the extension popup reads (``totalPenalty``,
``riskItems`` ...), so all models alias through this helper.
Score-shaped numbers use :data:`JsonNumber` so whole values are
written as ``100`` rather than ``100.0``, matching the extension.
"""

from __future__ import annotations

import math
from typing import Annotated, Any

import pydantic


def snake_to_camel(name: str) -> str:
    """Convert a snake_case string to camelCase.

    Args:
        name: A snake_case identifier such as
            ``"triggered_by_risk_ids"``.

    Returns:
        The camelCase equivalent, e.g. ``"triggeredByRiskIds"``.
    """
    parts = name.split("_")
    return parts[0] + "".join(w.capitalize() for w in parts[1:])


def compact_number(value: float) -> int | float:
    """Return integral finite values as ``int``, others unchanged."""
    if math.isfinite(value) and float(value).is_integer():
        return int(value)
    return value


JsonNumber = Annotated[
    float,
    pydantic.PlainSerializer(compact_number, return_type=int | float, when_used="json"),
]


def to_json_dict(model: pydantic.BaseModel) -> dict[str, Any]:
    """Dump a model to a JSON-compatible dict with camelCase keys."""
    return model.model_dump(mode="json", by_alias=True)
