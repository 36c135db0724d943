"""
Job Analysis Routes

HTTP surface for the job posting analysis engine.

Endpoints:
    POST /api/job-analysis  - Analyze pasted posting text or a posting URL
"""

import logging
from functools import lru_cache
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException
from pydantic import BaseModel, ConfigDict, Field

from src.job_analysis.engine import JobAnalysisEngine
from src.common.config import Config
from src.job_analysis.records import summarize_record, to_analysis_record
from src.job_analysis.types import JobAnalysisInput, is_http_url
from version import __version__

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/job-analysis", tags=["job-analysis"])


# =============================================================================
# Pydantic Models
# =============================================================================

class AnalyzeJobRequest(BaseModel):
    """Request body. content is optional here so a missing field maps to 400."""
    model_config = ConfigDict(populate_by_name=True)

    content: Optional[str] = Field(default=None, description="Posting text or posting URL")
    is_url: bool = Field(default=False, alias="isUrl")
    user_id: Optional[str] = Field(default=None, alias="userId")


class AnalysisSummary(BaseModel):
    """Card summary of the saved analysis."""
    red_flag_count: int = Field(alias="redFlagCount")
    concern_level: str = Field(alias="concernLevel")
    key_insights: List[str] = Field(alias="keyInsights")


class AnalyzeJobResponse(BaseModel):
    """Response model for a successful analysis. analysis.id and jobId are the record id."""
    model_config = ConfigDict(populate_by_name=True)

    success: bool
    job_id: str = Field(alias="jobId")
    analysis: Dict[str, Any]
    record: Dict[str, Any]
    summary: AnalysisSummary


# =============================================================================
# Dependencies
# =============================================================================

@lru_cache(maxsize=1)
def get_engine() -> JobAnalysisEngine:
    """Shared engine instance; it holds no per-request state."""
    return JobAnalysisEngine()


# =============================================================================
# Endpoints
# =============================================================================

@router.post("", response_model=AnalyzeJobResponse)
async def analyze_job_posting(
    request: AnalyzeJobRequest,
    engine: JobAnalysisEngine = Depends(get_engine),
):
    """
    Analyze a job posting.

    **Example request:**
    ```json
    {
        "content": "https://example.com/jobs/123",
        "isUrl": true,
        "userId": "user-42"
    }
    ```
    """
    content = (request.content or "").strip()
    if not content:
        raise HTTPException(status_code=400, detail="Missing required field: content")

    if request.is_url and not is_http_url(content):
        raise HTTPException(status_code=400, detail="Invalid URL format")

    job_input = JobAnalysisInput(
        content=content,
        is_url=request.is_url,
        user_id=request.user_id or "anonymous",
    )

    result = await engine.analyze_job(job_input)
    if not result.success:
        logger.warning(f"Job analysis failed for user {job_input.user_id}: {result.error}")
        raise HTTPException(status_code=500, detail=result.error or "Analysis failed")

    record = to_analysis_record(result, job_input)
    return AnalyzeJobResponse(
        success=True,
        job_id=record["id"],
        analysis={**result.to_dict(), "id": record["id"]},
        record=record,
        summary=AnalysisSummary(**summarize_record(record)),
    )


def create_app() -> FastAPI:
    """
    Build a standalone app serving the job analysis routes.

    Raises:
        ConfigurationError: If API keys are missing or thresholds are inconsistent
    """
    Config.validate()
    logger.info(Config.summary())

    app = FastAPI(title="Career Studio Job Analysis", version=__version__)
    app.include_router(router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app
