"""
Saved job analysis records.

The engine has no persistence of its own; the route layer stores each
successful analysis as one flat record. This module builds that record and
summarizes it the way the saved-analyses list shows it (red flag count,
concern level, key insights).
"""

import random
import string
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional

from src.job_analysis.types import JobAnalysisInput, JobAnalysisResult

ConcernLevel = Literal["low", "medium", "high"]

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_analysis_id(now_ms: Optional[int] = None) -> str:
    """Generate a record id of the form ``job-<epoch ms>-<9 base36 chars>``."""
    timestamp = now_ms if now_ms is not None else int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=9))
    return f"job-{timestamp}-{suffix}"


def to_analysis_record(
    result: JobAnalysisResult,
    job_input: JobAnalysisInput,
    analysis_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Dict[str, Any]:
    """
    Build the record persisted for a successful analysis.

    Args:
        result: Successful analysis result
        job_input: The request that produced it
        analysis_id: Record id (generated when omitted)
        now: Creation time (UTC now when omitted)

    Returns:
        Flat, JSON-ready record dict

    Raises:
        ValueError: If the result is a failure
    """
    if not result.success:
        raise ValueError(f"Cannot build a record from a failed analysis: {result.error}")

    timestamp = (now or datetime.now(timezone.utc)).isoformat()
    details = result.job_details

    return {
        "id": analysis_id or generate_analysis_id(),
        "user_id": job_input.user_id,
        "source_content": job_input.content,
        "source_type": "url" if job_input.is_url else "text",
        "job_title": details.get("title") or "Unknown Position",
        "company_name": details.get("company") or "Unknown Company",
        "location": details.get("location") or None,
        "job_description": details.get("description") or None,
        "requirements": details.get("requirements") or [],
        "responsibilities": details.get("responsibilities") or [],
        "application_email": details.get("applicationEmail") or None,
        "ats_keywords": result.ats_keywords or {},
        "hidden_insights": result.hidden_insights or {},
        "industry_intelligence": result.industry_intelligence or {},
        "company_intelligence": result.company_intelligence or {},
        "is_saved": False,
        "has_applied": False,
        "notes": None,
        "applied_at": None,
        "created_at": timestamp,
        "updated_at": timestamp,
    }


def get_red_flag_count(record: Dict[str, Any]) -> int:
    translations = (record.get("hidden_insights") or {}).get("phraseTranslations")
    return len(translations) if isinstance(translations, list) else 0


def get_concern_level(red_flag_count: int) -> ConcernLevel:
    if red_flag_count <= 1:
        return "low"
    if red_flag_count <= 3:
        return "medium"
    return "high"


COMPANY_STAGE_LABELS = {
    "early_stage_startup": "Early Stage Startup",
    "growth_stage_company": "Growth Stage",
    "established_company": "Established",
    "enterprise": "Enterprise",
    "unknown": "Unknown Stage",
}


def format_company_stage(stage: str) -> str:
    return COMPANY_STAGE_LABELS.get(str(stage).lower(), stage)


def get_key_insights_summary(record: Dict[str, Any]) -> List[str]:
    """Up to three short insight labels for a saved analysis card."""
    insights = []

    red_flags = get_red_flag_count(record)
    if red_flags > 0:
        insights.append(f"{red_flags} red flag phrase{'s' if red_flags != 1 else ''}")

    if record.get("application_email"):
        insights.append("Direct email application")

    company = record.get("company_intelligence")
    if isinstance(company, dict) and company.get("companyStage"):
        insights.append(format_company_stage(company["companyStage"]))

    sector = (record.get("industry_intelligence") or {}).get("sector")
    if sector:
        insights.append(str(sector))

    return insights[:3]


def summarize_record(record: Dict[str, Any]) -> Dict[str, Any]:
    """Card summary returned next to a freshly saved record."""
    red_flags = get_red_flag_count(record)
    return {
        "redFlagCount": red_flags,
        "concernLevel": get_concern_level(red_flags),
        "keyInsights": get_key_insights_summary(record),
    }
