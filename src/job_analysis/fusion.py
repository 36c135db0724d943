"""
Result Fusion

Merges the structured and insight tiers into one FusedAnalysis. Pure: no I/O
and no failure mode. Any section a tier did not deliver is replaced by a
fresh copy of its fallback constant, and the outcome of each tier is recorded
in AnalysisQuality so the UI can flag degraded analyses.
"""

import copy
import logging
from typing import Any, Dict

from src.job_analysis.types import AnalysisQuality, FusedAnalysis, TierOutcome

logger = logging.getLogger(__name__)


# ===== FALLBACKS: structured tier =====

FALLBACK_JOB_DETAILS: Dict[str, Any] = {
    "title": "Job Position",
    "company": "Company Name",
    "location": "Location not specified",
    "requirements": [],
    "responsibilities": [],
}

FALLBACK_ATS_KEYWORDS: Dict[str, Any] = {
    "hardSkills": [],
    "softSkills": [],
    "technologies": [],
    "certifications": [],
    "experienceRequirements": {"yearsRequired": "Not specified", "level": "unclear"},
    "educationRequirements": [],
    "actionWords": [],
}

FALLBACK_POSTING_QUALITY: Dict[str, Any] = {
    "hasSalary": False,
    "hasRemoteInfo": False,
    "hasBenefits": False,
    "hasCompanyDescription": False,
    "hasClearRequirements": False,
}

# ===== FALLBACKS: insight tier =====

FALLBACK_HIDDEN_INSIGHTS: Dict[str, Any] = {
    "redFlags": [],
    "positiveSignals": [],
    "compensationClues": [],
    "cultureInsights": [],
}

FALLBACK_STRATEGIC_ADVICE: Dict[str, Any] = {
    "shouldApply": True,
    "reasoning": "Analysis incomplete - manual review recommended",
    "riskAssessment": "medium",
    "negotiationLeverage": [],
    "interviewQuestions": [],
    "resumeStrategy": [],
}

FALLBACK_INDUSTRY_CONTEXT: Dict[str, Any] = {
    "sector": "General",
    "currentTrends": [],
    "salaryBenchmark": "Research required",
    "competitionLevel": "medium",
    "hiringUrgency": "unclear",
}

FALLBACK_COMPANY_INTELLIGENCE: Dict[str, Any] = {}


def _section(outcome: TierOutcome, key: str, fallback: Dict[str, Any]) -> Dict[str, Any]:
    """Return the tier's section when it is a dict (even an empty one), else a copy of fallback."""
    if outcome.succeeded:
        value = outcome.data.get(key)
        if isinstance(value, dict):
            return value
    return copy.deepcopy(fallback)


def fuse(structured: TierOutcome, insight: TierOutcome) -> FusedAnalysis:
    """
    Merge both AI tiers into a complete analysis.

    Args:
        structured: Outcome of the structured extraction tier
        insight: Outcome of the insight extraction tier

    Returns:
        FusedAnalysis with every section present
    """
    quality = AnalysisQuality.from_outcomes(structured, insight)
    logger.info(
        f"Merging results - structured: {quality.data_extraction}, "
        f"insight: {quality.insight_analysis}"
    )
    if not structured.succeeded:
        logger.warning(f"Structured tier degraded to fallback: {structured.error}")
    if not insight.succeeded:
        logger.warning(f"Insight tier degraded to fallback: {insight.error}")

    return FusedAnalysis(
        job_details=_section(structured, "jobDetails", FALLBACK_JOB_DETAILS),
        ats_keywords=_section(structured, "atsKeywords", FALLBACK_ATS_KEYWORDS),
        posting_quality=_section(structured, "postingQuality", FALLBACK_POSTING_QUALITY),
        hidden_insights=_section(insight, "hiddenInsights", FALLBACK_HIDDEN_INSIGHTS),
        strategic_advice=_section(insight, "strategicAdvice", FALLBACK_STRATEGIC_ADVICE),
        industry_context=_section(insight, "industryContext", FALLBACK_INDUSTRY_CONTEXT),
        company_intelligence=_section(insight, "companyIntelligence", FALLBACK_COMPANY_INTELLIGENCE),
        analysis_quality=quality,
    )
