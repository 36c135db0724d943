"""
Unit tests for src/job_analysis/fusion.py and TierOutcome settling.
"""

import pytest

from src.job_analysis.fusion import (
    FALLBACK_ATS_KEYWORDS,
    FALLBACK_HIDDEN_INSIGHTS,
    FALLBACK_INDUSTRY_CONTEXT,
    FALLBACK_JOB_DETAILS,
    FALLBACK_POSTING_QUALITY,
    FALLBACK_STRATEGIC_ADVICE,
    fuse,
)
from src.job_analysis.normalizer import normalize
from src.job_analysis.types import TierOutcome


# ===== TESTS: TierOutcome =====

class TestTierOutcome:

    def test_dict_payload_succeeds(self):
        outcome = TierOutcome.from_settled({"jobDetails": {}})
        assert outcome.succeeded
        assert outcome.error is None

    def test_exception_is_failure(self):
        outcome = TierOutcome.from_settled(RuntimeError("boom"))
        assert not outcome.succeeded
        assert outcome.error == "RuntimeError: boom"

    def test_none_payload_is_failure(self):
        """The insight tier returns None when it cannot parse its response."""
        outcome = TierOutcome.from_settled(None)
        assert not outcome.succeeded
        assert outcome.error == "Tier returned no parseable data"


# ===== TESTS: fuse =====

class TestFuse:

    def test_both_tiers_succeed(self, structured_payload, insight_payload):
        fused = fuse(TierOutcome.ok(structured_payload), TierOutcome.ok(insight_payload))

        assert fused.job_details == structured_payload["jobDetails"]
        assert fused.ats_keywords == structured_payload["atsKeywords"]
        assert fused.posting_quality == structured_payload["postingQuality"]
        assert fused.hidden_insights == insight_payload["hiddenInsights"]
        assert fused.strategic_advice == insight_payload["strategicAdvice"]
        assert fused.industry_context == insight_payload["industryContext"]
        assert fused.company_intelligence == insight_payload["companyIntelligence"]
        assert fused.analysis_quality.to_dict() == {
            "dataExtraction": "high",
            "insightAnalysis": "high",
            "confidence": "high",
        }

    def test_structured_failure_uses_fallbacks(self, insight_payload):
        fused = fuse(TierOutcome.failed("ExtractionError: timed out"), TierOutcome.ok(insight_payload))

        assert fused.job_details == FALLBACK_JOB_DETAILS
        assert fused.posting_quality == FALLBACK_POSTING_QUALITY
        assert fused.hidden_insights == insight_payload["hiddenInsights"]
        assert fused.analysis_quality.to_dict() == {
            "dataExtraction": "fallback",
            "insightAnalysis": "high",
            "confidence": "medium",
        }

    def test_insight_failure_uses_fallbacks(self, structured_payload):
        fused = fuse(TierOutcome.ok(structured_payload), TierOutcome.ok(None))

        assert fused.job_details == structured_payload["jobDetails"]
        assert fused.hidden_insights == FALLBACK_HIDDEN_INSIGHTS
        assert fused.strategic_advice == FALLBACK_STRATEGIC_ADVICE
        assert fused.industry_context == FALLBACK_INDUSTRY_CONTEXT
        assert fused.company_intelligence == {}
        assert fused.analysis_quality.insight_analysis == "fallback"
        assert fused.analysis_quality.confidence == "medium"

    def test_both_tiers_fail(self):
        fused = fuse(TierOutcome.failed("a"), TierOutcome.failed("b"))

        assert fused.strategic_advice["reasoning"] == "Analysis incomplete - manual review recommended"
        assert fused.analysis_quality.to_dict() == {
            "dataExtraction": "fallback",
            "insightAnalysis": "fallback",
            "confidence": "medium",
        }

    @pytest.mark.parametrize("section", [None, "not an object", ["list"]])
    def test_missing_or_malformed_section_replaced(self, structured_payload, section):
        structured_payload["jobDetails"] = section
        fused = fuse(TierOutcome.ok(structured_payload), TierOutcome.failed("x"))

        assert fused.job_details == FALLBACK_JOB_DETAILS
        assert fused.analysis_quality.data_extraction == "high"

    def test_empty_section_kept(self, structured_payload):
        structured_payload["jobDetails"] = {}
        fused = fuse(TierOutcome.ok(structured_payload), TierOutcome.failed("x"))

        assert fused.job_details == {}
        assert fused.analysis_quality.data_extraction == "high"
        assert normalize(fused, None, 30).job_details["title"] == "Position Title"

    def test_missing_section_key_replaced(self, structured_payload):
        del structured_payload["atsKeywords"]
        fused = fuse(TierOutcome.ok(structured_payload), TierOutcome.failed("x"))
        assert fused.ats_keywords == FALLBACK_ATS_KEYWORDS

    def test_fallbacks_are_copies(self):
        fused = fuse(TierOutcome.failed("a"), TierOutcome.failed("b"))
        fused.job_details["requirements"].append("mutated")
        fused.strategic_advice["shouldApply"] = False

        assert FALLBACK_JOB_DETAILS["requirements"] == []
        assert FALLBACK_STRATEGIC_ADVICE["shouldApply"] is True
