"""
Output Normalizer

Reshapes a FusedAnalysis plus the deterministic score into the exact field
set the web app reads. Model output follows the prompt schema only loosely,
so every access here tolerates missing keys, wrong types and bare strings
where objects were asked for.
"""

from typing import Any, Dict, List, Literal, Optional

from src.job_analysis.types import FusedAnalysis, JobAnalysisResult

Importance = Literal["high", "medium", "low"]

_HIGH_MARKERS = ("required", "high", "must", "critical")
_MEDIUM_MARKERS = ("preferred", "medium", "should")


def normalize_importance(value: Any) -> Importance:
    """
    Map free-text importance/proficiency wording onto high/medium/low.

    >>> normalize_importance("Required")
    'high'
    >>> normalize_importance("nice-to-have")
    'low'
    """
    text = value.lower() if isinstance(value, str) else ""
    if any(marker in text for marker in _HIGH_MARKERS):
        return "high"
    if any(marker in text for marker in _MEDIUM_MARKERS):
        return "medium"
    return "low"


def format_education_requirement(item: Any) -> str:
    """Flatten an education requirement object into a display string."""
    if isinstance(item, str):
        return item
    if not isinstance(item, dict):
        return str(item)

    level = item.get("level") or "Education"
    field_of_study = f" in {item['field']}" if item.get("field") else ""
    requirement = item.get("requirement") or "preferred"
    return f"{level}{field_of_study} ({requirement})"


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_object(item: Any, name_key: str) -> Dict[str, Any]:
    """Coerce a bare string list item into {name_key: item}."""
    if isinstance(item, dict):
        return item
    return {name_key: str(item)}


def _normalize_job_details(job_details: Dict[str, Any], application_email: Optional[str]) -> Dict[str, Any]:
    return {
        "title": job_details.get("title") or "Position Title",
        "company": job_details.get("company") or "Company Name",
        "location": job_details.get("location") or "Location not specified",
        "salary": job_details.get("salary") or None,
        "jobType": job_details.get("jobType") or None,
        "schedule": job_details.get("schedule") or None,
        "description": "",
        "requirements": _as_list(job_details.get("requirements")),
        "responsibilities": _as_list(job_details.get("responsibilities")),
        "benefits": _as_list(job_details.get("benefits")),
        "applicationEmail": application_email,
    }


def _normalize_ats_keywords(ats_keywords: Dict[str, Any], ats_score: int) -> Dict[str, Any]:
    hard_skills = []
    for item in _as_list(ats_keywords.get("hardSkills")):
        skill = _as_object(item, "skill")
        hard_skills.append({
            "skill": skill.get("skill"),
            "frequency": skill.get("frequency") or 1,
            "importance": normalize_importance(skill.get("importance")),
            "category": skill.get("category") or "general",
            "context": skill.get("context") or "",
        })

    soft_skills = []
    for item in _as_list(ats_keywords.get("softSkills")):
        skill = _as_object(item, "skill")
        soft_skills.append({
            "skill": skill.get("skill"),
            "frequency": skill.get("frequency") or 1,
            "importance": normalize_importance(skill.get("importance")),
            "context": skill.get("context") or "",
        })

    technologies = []
    for item in _as_list(ats_keywords.get("technologies")):
        tech = _as_object(item, "technology")
        proficiency = tech.get("proficiencyLevel") or "required"
        technologies.append({
            "technology": tech.get("technology"),
            "frequency": tech.get("frequency") or 1,
            "category": tech.get("category") or "software",
            "proficiencyLevel": proficiency,
            "importance": normalize_importance(proficiency),
        })

    experience = _as_dict(ats_keywords.get("experienceRequirements"))

    return {
        "hardSkills": hard_skills,
        "softSkills": soft_skills,
        "technologies": technologies,
        "certifications": _as_list(ats_keywords.get("certifications")),
        "educationRequirements": [
            format_education_requirement(edu)
            for edu in _as_list(ats_keywords.get("educationRequirements"))
        ],
        "experienceKeywords": [
            {
                "keyword": experience.get("yearsRequired") or "Experience requirements unclear",
                "level": experience.get("level") or "unclear",
                "specificExperience": _as_list(experience.get("specificExperience")),
                "context": "Experience requirement",
                "importance": "high",
            }
        ],
        "industryKeywords": _as_list(ats_keywords.get("industryTerms")),
        "actionWords": _as_list(ats_keywords.get("actionWords")),
        "keyPhrases": _as_list(ats_keywords.get("keyPhrases")),
        "atsScore": ats_score,
    }


def _format_culture_clue(insight: Dict[str, Any]) -> str:
    clue = f"{insight.get('indicator', '')}: {insight.get('meaning', '')}"
    if insight.get("workLifeBalance"):
        clue += f" (Work-life: {insight['workLifeBalance']})"
    return clue


def _format_compensation_signal(clue: Any) -> str:
    if isinstance(clue, str):
        return clue
    clue = _as_dict(clue)
    signal = str(clue.get("interpretation") or clue.get("clue") or "")
    if clue.get("confidence"):
        signal += f" ({clue['confidence']} confidence)"
    return signal


def _normalize_hidden_insights(
    hidden_insights: Dict[str, Any], industry_context: Dict[str, Any]
) -> Dict[str, Any]:
    red_flags = [_as_dict(flag) for flag in _as_list(hidden_insights.get("redFlags"))]
    urgency = industry_context.get("hiringUrgency")

    return {
        "phraseTranslations": [
            {
                "original": flag.get("phrase"),
                "meaning": flag.get("meaning"),
                "severity": flag.get("severity") or "medium",
                "context": flag.get("advice") or "",
            }
            for flag in red_flags
        ],
        "positiveSignals": [
            {"signal": signal.get("signal"), "interpretation": signal.get("interpretation")}
            for signal in map(_as_dict, _as_list(hidden_insights.get("positiveSignals")))
        ],
        "urgencyIndicators": [f"Hiring urgency: {urgency}"] if urgency else [],
        "cultureClues": [
            _format_culture_clue(insight)
            for insight in map(_as_dict, _as_list(hidden_insights.get("cultureInsights")))
        ],
        "compensationSignals": [
            _format_compensation_signal(clue)
            for clue in _as_list(hidden_insights.get("compensationClues"))
        ],
    }


def _normalize_industry_intelligence(
    industry_context: Dict[str, Any],
    hidden_insights: Dict[str, Any],
    strategic_advice: Dict[str, Any],
) -> Dict[str, Any]:
    red_flags = [_as_dict(flag) for flag in _as_list(hidden_insights.get("redFlags"))]
    return {
        "sector": industry_context.get("sector") or "General",
        "hiringPatterns": _as_list(industry_context.get("currentTrends")),
        "salaryBenchmark": industry_context.get("salaryBenchmark") or None,
        "competitionLevel": industry_context.get("competitionLevel") or "medium",
        "buzzwordMeanings": [f"{flag.get('phrase')}: {flag.get('meaning')}" for flag in red_flags],
        "applicationTips": _as_list(strategic_advice.get("resumeStrategy")),
        "interviewQuestions": _as_list(strategic_advice.get("interviewQuestions")),
        "negotiationLeverage": _as_list(strategic_advice.get("negotiationLeverage")),
    }


def normalize(
    fused: FusedAnalysis,
    application_email: Optional[str],
    ats_score: int,
) -> JobAnalysisResult:
    """
    Build the final JobAnalysisResult.

    Args:
        fused: Merged analysis with fallbacks applied
        application_email: Email found during acquisition, if any
        ats_score: Deterministic posting score

    Returns:
        Successful JobAnalysisResult
    """
    strategic_advice = _as_dict(fused.strategic_advice)
    should_apply = strategic_advice.get("shouldApply")

    return JobAnalysisResult(
        success=True,
        job_details=_normalize_job_details(_as_dict(fused.job_details), application_email),
        ats_keywords=_normalize_ats_keywords(_as_dict(fused.ats_keywords), ats_score),
        hidden_insights=_normalize_hidden_insights(
            _as_dict(fused.hidden_insights), _as_dict(fused.industry_context)
        ),
        industry_intelligence=_normalize_industry_intelligence(
            _as_dict(fused.industry_context), _as_dict(fused.hidden_insights), strategic_advice
        ),
        company_intelligence=_as_dict(fused.company_intelligence),
        strategic_advice={
            "shouldApply": should_apply if should_apply is not None else True,
            "reasoning": strategic_advice.get("reasoning") or "",
            "riskAssessment": strategic_advice.get("riskAssessment") or "medium",
        },
        posting_quality=_as_dict(fused.posting_quality),
        analysis_quality=fused.analysis_quality.to_dict(),
    )
