"""
Data model for the job posting analysis engine.

Input validation uses pydantic (the caller hands us user-supplied content);
everything the engine produces is a plain dataclass whose nested sections are
JSON-ready dicts in the camelCase shape the web app consumes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


QualityTier = Literal["high", "fallback"]
Confidence = Literal["high", "medium"]


# ===== EXCEPTIONS =====

class JobAnalysisError(Exception):
    """Base exception for job analysis errors."""
    pass


class AcquisitionError(JobAnalysisError):
    """Raised when no usable posting text could be acquired."""
    pass


class ExtractionError(JobAnalysisError):
    """Raised when the structured extraction tier fails or returns unusable output."""
    pass


# ===== INPUT =====

def is_http_url(value: str) -> bool:
    """True if value parses as an absolute http(s) URL with a host."""
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


class JobAnalysisInput(BaseModel):
    """A single analysis request: pasted posting text or a posting URL."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    content: str = Field(..., description="Posting text, or the posting URL when is_url is set")
    is_url: bool = Field(default=False, alias="isUrl")
    user_id: str = Field(default="anonymous", alias="userId")

    @field_validator("content")
    @classmethod
    def validate_content(cls, v: str) -> str:
        """Strip surrounding whitespace and reject empty content."""
        v = v.strip()
        if not v:
            raise ValueError("content must not be empty")
        return v

    @model_validator(mode="after")
    def validate_url(self) -> "JobAnalysisInput":
        if self.is_url and not is_http_url(self.content):
            raise ValueError("Invalid URL format")
        return self


# ===== ACQUISITION =====

@dataclass
class ScrapedPosting:
    """Plain-text posting body produced by content acquisition."""
    description: str
    application_email: Optional[str] = None
    source: str = "text"  # "text", "static_html" or "browser"


# ===== AI TIER OUTCOMES =====

@dataclass(frozen=True)
class TierOutcome:
    """
    Settled outcome of one AI extraction tier.

    A tier succeeded only when it produced a dict; a None payload (e.g. the
    insight parser giving up) counts as a failure.
    """
    data: Optional[Dict[str, Any]] = None
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return isinstance(self.data, dict)

    @classmethod
    def ok(cls, data: Optional[Dict[str, Any]]) -> "TierOutcome":
        if isinstance(data, dict):
            return cls(data=data)
        return cls(error="Tier returned no parseable data")

    @classmethod
    def failed(cls, error: str) -> "TierOutcome":
        return cls(error=error)

    @classmethod
    def from_settled(cls, value: Any) -> "TierOutcome":
        """Build from an ``asyncio.gather(..., return_exceptions=True)`` slot."""
        if isinstance(value, BaseException):
            return cls.failed(f"{type(value).__name__}: {value}")
        return cls.ok(value)


# ===== FUSION =====

@dataclass(frozen=True)
class AnalysisQuality:
    """Which AI tiers contributed real data to an analysis."""
    data_extraction: QualityTier
    insight_analysis: QualityTier
    confidence: Confidence

    @classmethod
    def from_outcomes(cls, structured: TierOutcome, insight: TierOutcome) -> "AnalysisQuality":
        return cls(
            data_extraction="high" if structured.succeeded else "fallback",
            insight_analysis="high" if insight.succeeded else "fallback",
            confidence="high" if structured.succeeded and insight.succeeded else "medium",
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "dataExtraction": self.data_extraction,
            "insightAnalysis": self.insight_analysis,
            "confidence": self.confidence,
        }


@dataclass
class FusedAnalysis:
    """Merged output of both AI tiers, with fallbacks already substituted."""
    job_details: Dict[str, Any]
    ats_keywords: Dict[str, Any]
    posting_quality: Dict[str, Any]
    hidden_insights: Dict[str, Any]
    strategic_advice: Dict[str, Any]
    industry_context: Dict[str, Any]
    company_intelligence: Dict[str, Any]
    analysis_quality: AnalysisQuality


# ===== SCORING =====

@dataclass(frozen=True)
class ScoreBreakdown:
    """Trace of the deterministic posting score, one entry per rubric category."""
    clarity: int
    specificity: int
    keyword_richness: int
    content_quality: int
    word_count: int
    sentence_count: int
    sections_found: int
    unique_tools: int
    action_verbs: int
    raw_total: int
    score: int

    def to_dict(self) -> Dict[str, int]:
        return {
            "clarity": self.clarity,
            "specificity": self.specificity,
            "keywordRichness": self.keyword_richness,
            "contentQuality": self.content_quality,
            "wordCount": self.word_count,
            "sentenceCount": self.sentence_count,
            "sectionsFound": self.sections_found,
            "uniqueTools": self.unique_tools,
            "actionVerbs": self.action_verbs,
            "rawTotal": self.raw_total,
            "score": self.score,
        }


# ===== FINAL RESULT =====

@dataclass(frozen=True)
class JobAnalysisResult:
    """Final output of one analyze_job call."""
    success: bool
    job_details: Dict[str, Any] = field(default_factory=dict)
    ats_keywords: Dict[str, Any] = field(default_factory=dict)
    hidden_insights: Dict[str, Any] = field(default_factory=dict)
    industry_intelligence: Dict[str, Any] = field(default_factory=dict)
    company_intelligence: Dict[str, Any] = field(default_factory=dict)
    strategic_advice: Dict[str, Any] = field(default_factory=dict)
    posting_quality: Dict[str, Any] = field(default_factory=dict)
    analysis_quality: Dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> "JobAnalysisResult":
        """Failed analysis: every section present but empty, so callers can destructure."""
        return cls(success=False, error=message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire shape."""
        data = {
            "success": self.success,
            "jobDetails": self.job_details,
            "atsKeywords": self.ats_keywords,
            "hiddenInsights": self.hidden_insights,
            "industryIntelligence": self.industry_intelligence,
            "companyIntelligence": self.company_intelligence,
            "strategicAdvice": self.strategic_advice,
            "postingQuality": self.posting_quality,
            "analysisQuality": self.analysis_quality,
        }
        if self.error is not None:
            data["error"] = self.error
        return data
