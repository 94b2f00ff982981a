"""End-to-end tests for the analysis pipeline."""

from __future__ import annotations

import json

import pytest

from privacy_assistant.models import signals
from privacy_assistant.pipeline import analysis_pipeline
from privacy_assistant.pipeline.normalizer import CollectorResult
from privacy_assistant.utils import logger
from privacy_assistant.utils.errors import NormalizationError
from privacy_assistant.utils.serialization import to_json_dict


class TestRunAnalysis:
    """Composition of score, confidence, risks and recommendations."""

    def test_partial_data_scenario(self, partial_data_input: signals.NormalizedAnalysisInput) -> None:
        result = analysis_pipeline.run_analysis(partial_data_input)
        assert result.request_id == "req-test"
        assert result.page.hostname == "example.com"
        assert result.score.score == 64.37
        assert result.confidence.level == "low"
        assert result.risks.overall_risk == "medium"
        assert result.risks.network_fallback_used is True
        assert [r.action_id for r in result.recommendations.recommendations] == [
            "block_known_trackers",
            "harden_network_privacy",
            "limit_third_party_scripts",
            "review_tracking_permissions",
        ]

    def test_risk_band_uses_final_score(self, high_risk_input: signals.NormalizedAnalysisInput) -> None:
        result = analysis_pipeline.run_analysis(high_risk_input)
        assert result.score.score == 0.0
        assert result.risks.overall_risk == "high"
        assert result.confidence.level == "high"

    def test_camel_case_json(self, medium_risk_input: signals.NormalizedAnalysisInput) -> None:
        payload = to_json_dict(analysis_pipeline.run_analysis(medium_risk_input))
        assert set(payload) == {"requestId", "page", "score", "confidence", "risks", "recommendations"}
        assert payload["score"]["totalPenalty"] == 45.63
        assert payload["score"]["strongestNegativeReasons"][0]["factorId"] == "third_party_scripts"
        assert payload["risks"]["riskItems"][0]["mitigationPriority"] == "p2"
        assert payload["recommendations"]["recommendations"][0]["triggeredByRiskIds"] == [
            "tracking_indicator_density"
        ]
        json.dumps(payload)

    def test_logs_summary(self, low_risk_input: signals.NormalizedAnalysisInput) -> None:
        logger.clear_log_buffer()
        analysis_pipeline.run_analysis(low_risk_input)
        lines = logger.get_log_buffer()
        assert any("Analysis summary" in line for line in lines)
        assert any("Privacy analysis complete" in line for line in lines)


class TestAnalyzeCollectors:
    def test_from_collectors(self) -> None:
        page = signals.PageContext(tab_id=1, url="https://shop.example.com/", hostname="shop.example.com")
        collectors = [
            CollectorResult(name="contentReachability", status="success", data={"reachable": True}),
            CollectorResult(name="contentPageSignals", status="success", data={"collectors": []}),
            CollectorResult(name="cookieSignals", status="success", data={"thirdPartyCookieEstimateCount": 30}),
            CollectorResult(name="networkRequestSignals", status="failed", error="LISTENER_DOWN"),
        ]
        result = analysis_pipeline.analyze_collectors("req-9", page, collectors)
        assert result.request_id == "req-9"
        assert result.score.score == 85.0
        assert result.confidence.score == 75
        assert [item.id for item in result.risks.risk_items] == [
            "third_party_cookie_volume",
            "network_signals_unavailable",
        ]
        assert [r.action_id for r in result.recommendations.recommendations] == ["reduce_third_party_cookies"]

    def test_rejects_non_http_page(self) -> None:
        page = signals.PageContext(url="chrome://newtab", hostname="newtab")
        with pytest.raises(NormalizationError):
            analysis_pipeline.analyze_collectors("req-10", page, [])
