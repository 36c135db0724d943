"""
Job Posting Analysis Engine

Analyzes a job posting (pasted text or URL) with two independent AI passes
and a deterministic scorer:

1. Content Acquisition: pasted text, or static HTML scrape escalating to a
   headless browser
2. Structured Extraction (OpenAI): job details and ATS keyword inventory
3. Insight Extraction (Claude): red flags, culture, compensation, advice
4. Fusion: merges both passes, substituting fallbacks for failed tiers
5. Scoring: 25-100 posting score computed from the raw text only
6. Normalization: the camelCase result shape the web app consumes
"""

from src.job_analysis.engine import JobAnalysisEngine, analyze_job
from src.job_analysis.scoring import compute_score_breakdown, score_posting
from src.job_analysis.types import (
    AcquisitionError,
    AnalysisQuality,
    ExtractionError,
    FusedAnalysis,
    JobAnalysisError,
    JobAnalysisInput,
    JobAnalysisResult,
    ScoreBreakdown,
    ScrapedPosting,
    TierOutcome,
)

__all__ = [
    "JobAnalysisEngine",
    "analyze_job",
    "score_posting",
    "compute_score_breakdown",
    "AcquisitionError",
    "AnalysisQuality",
    "ExtractionError",
    "FusedAnalysis",
    "JobAnalysisError",
    "JobAnalysisInput",
    "JobAnalysisResult",
    "ScoreBreakdown",
    "ScrapedPosting",
    "TierOutcome",
]
