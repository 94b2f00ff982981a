"""Privacy scoring package.

Splits the score engine into the canonical factor table and the
calculator that applies it.  The public API is
:func:`compute_privacy_score`.
"""

from __future__ import annotations

from privacy_assistant.analysis.scoring.calculator import clamp_privacy_score, compute_privacy_score
from privacy_assistant.analysis.scoring.factors import (
    PRIVACY_SCORE_BOUNDS,
    SCORE_FACTOR_DEFINITIONS,
    SCORE_FACTOR_IDS_IN_ORDER,
    SCORE_MODEL_VERSION,
)

__all__ = [
    "PRIVACY_SCORE_BOUNDS",
    "SCORE_FACTOR_DEFINITIONS",
    "SCORE_FACTOR_IDS_IN_ORDER",
    "SCORE_MODEL_VERSION",
    "clamp_privacy_score",
    "compute_privacy_score",
]
