"""
Job Analysis Engine

Public entry point of the job posting analysis pipeline:

    acquire text -> (structured || insight extraction) -> fuse -> score -> normalize

The two AI tiers run concurrently and are settled, not raced: one failing
never cancels the other, and a failed tier only degrades its own sections.
Only acquisition failures and unexpected errors produce success=False, and
no exception escapes analyze_job.
"""

import asyncio
import logging
import uuid
from typing import Any, Callable, Optional, Tuple

from src.common.logger import AnalysisLogger
from src.job_analysis.acquisition import ContentAcquirer
from src.job_analysis.fusion import fuse
from src.job_analysis.insight_extractor import InsightExtractor
from src.job_analysis.normalizer import normalize
from src.job_analysis.scoring import compute_score_breakdown
from src.job_analysis.structured_extractor import StructuredExtractor
from src.job_analysis.types import (
    AcquisitionError,
    JobAnalysisInput,
    JobAnalysisResult,
    TierOutcome,
)


class JobAnalysisEngine:
    """
    Runs one job posting analysis per analyze_job call.

    Holds only immutable collaborators, so one instance can serve concurrent
    requests. Extractors are built per call from factories so a missing API
    key surfaces as a failed result instead of a constructor crash.
    """

    def __init__(
        self,
        acquirer: Optional[ContentAcquirer] = None,
        structured_extractor_factory: Callable[[], Any] = StructuredExtractor,
        insight_extractor_factory: Callable[[], Any] = InsightExtractor,
        logger: Optional[logging.Logger] = None,
    ):
        """
        Initialize the engine.

        Args:
            acquirer: Content acquirer (defaults to static + browser scraping)
            structured_extractor_factory: Zero-arg callable returning an object
                with ``async extract(text) -> dict``
            insight_extractor_factory: Zero-arg callable returning an object
                with ``async extract(text) -> Optional[dict]``
            logger: Logger to write to (module logger by default); each
                analysis tags its lines with its own id
        """
        self.acquirer = acquirer or ContentAcquirer()
        self.structured_extractor_factory = structured_extractor_factory
        self.insight_extractor_factory = insight_extractor_factory
        self.logger = logger or logging.getLogger(__name__)

    async def _run_extractions(self, job_content: str) -> Tuple[TierOutcome, TierOutcome]:
        """Run both AI tiers concurrently and settle their outcomes."""
        structured_extractor = self.structured_extractor_factory()
        insight_extractor = self.insight_extractor_factory()

        structured_result, insight_result = await asyncio.gather(
            structured_extractor.extract(job_content),
            insight_extractor.extract(job_content),
            return_exceptions=True,
        )
        return TierOutcome.from_settled(structured_result), TierOutcome.from_settled(insight_result)

    async def analyze_job(self, job_input: JobAnalysisInput) -> JobAnalysisResult:
        """
        Analyze one job posting.

        Args:
            job_input: Pasted posting text or posting URL

        Returns:
            JobAnalysisResult; success=False with an error message when the
            posting could not be acquired or something unexpected failed
        """
        logger = AnalysisLogger(self.logger, analysis_id=uuid.uuid4().hex, stage="job_analysis")

        try:
            logger.info(f"Starting dual AI analysis for user: {job_input.user_id}")

            posting = await self.acquirer.acquire(job_input)
            logger.info(f"Extracted job content: {len(posting.description)} characters ({posting.source})")

            structured, insight = await self._run_extractions(posting.description)
            fused = fuse(structured, insight)

            breakdown = compute_score_breakdown(posting.description)
            logger.info(
                f"ATS score: {breakdown.score}/100 "
                f"(words={breakdown.word_count}, sections={breakdown.sections_found}, "
                f"tools={breakdown.unique_tools}, actions={breakdown.action_verbs})"
            )

            result = normalize(fused, posting.application_email, breakdown.score)
            logger.info(f"Analysis complete (confidence: {fused.analysis_quality.confidence})")
            return result

        except AcquisitionError as e:
            logger.error(f"Content acquisition failed: {e}")
            return JobAnalysisResult.failure(str(e))
        except Exception as e:
            logger.exception(f"Job analysis failed: {e}")
            return JobAnalysisResult.failure(str(e) or "Analysis failed")


async def analyze_job(job_input: JobAnalysisInput) -> JobAnalysisResult:
    """Analyze one job posting with a default-configured engine."""
    return await JobAnalysisEngine().analyze_job(job_input)
