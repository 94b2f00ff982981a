"""Tests for privacy_assistant.utils.serialization."""

from __future__ import annotations

import math

import pytest

from privacy_assistant.analysis.confidence import derive_confidence
from privacy_assistant.analysis.scoring import compute_privacy_score
from privacy_assistant.models import signals
from privacy_assistant.utils.serialization import compact_number, snake_to_camel, to_json_dict


class TestSnakeToCamel:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("score", "score"),
            ("total_penalty", "totalPenalty"),
            ("triggered_by_risk_ids", "triggeredByRiskIds"),
            ("third_party_cookie_estimate_count", "thirdPartyCookieEstimateCount"),
        ],
    )
    def test_conversion(self, name: str, expected: str) -> None:
        assert snake_to_camel(name) == expected


class TestToJsonDict:
    def test_camel_case_keys(self) -> None:
        payload = to_json_dict(signals.NetworkSignals(available=False, unavailable_reason="DOWN"))
        assert payload["available"] is False
        assert payload["unavailableReason"] == "DOWN"
        assert payload["thirdPartyRequestCount"] == 0

    def test_accepts_snake_and_camel_input(self) -> None:
        by_alias = signals.PageContext.model_validate({"tabId": 1, "hostname": "a.example"})
        by_name = signals.PageContext(tab_id=1, hostname="a.example")
        assert by_alias == by_name


class TestCompactNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(100.0, 100), (0.0, 0), (54.37, 54.37), (5.63, 5.63)],
    )
    def test_compact_number(self, value: float, expected: float) -> None:
        result = compact_number(value)
        assert result == expected
        assert isinstance(result, int) is float(expected).is_integer()

    def test_non_finite_unchanged(self) -> None:
        assert math.isnan(compact_number(math.nan))

    def test_whole_scores_serialize_without_fraction(
        self, empty_input: signals.NormalizedAnalysisInput, partial_data_input: signals.NormalizedAnalysisInput
    ) -> None:
        score_json = compute_privacy_score(empty_input).model_dump_json(by_alias=True)
        assert '"score":100,' in score_json
        assert '"baseScore":100,' in score_json
        assert '"totalPenalty":0,' in score_json

        confidence_json = derive_confidence(partial_data_input).model_dump_json(by_alias=True)
        assert '"score":20,' in confidence_json

        payload = to_json_dict(compute_privacy_score(partial_data_input))
        assert payload["score"] == 64.37
        assert isinstance(payload["baseScore"], int)
        assert payload["contributions"][0]["weight"] == 20
        assert isinstance(payload["contributions"][0]["weight"], int)

    def test_python_dump_keeps_floats(self, empty_input: signals.NormalizedAnalysisInput) -> None:
        assert isinstance(compute_privacy_score(empty_input).model_dump()["score"], float)
