"""
Global fixtures for all unit tests.

This conftest provides autouse fixtures that prevent real external service calls:
- Mock API keys on Config (prevents credential leakage and real LLM calls)
- Environment variable isolation

These fixtures apply automatically to ALL tests in tests/unit/.
"""

import pytest
from unittest.mock import AsyncMock, MagicMock

from langchain_core.messages import AIMessage

from src.common.config import Config


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch):
    """
    Isolate test environment from real credentials and configurations.

    Config reads the environment once at import, so the class attributes are
    patched directly.
    """
    monkeypatch.delenv("OPENAI_BASE_URL", raising=False)
    monkeypatch.setattr(Config, "OPENAI_API_KEY", "sk-test-mock-key")
    monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", "sk-ant-test-mock-key")
    monkeypatch.setattr(Config, "MIN_TEXT_CONTENT_LENGTH", 50)
    monkeypatch.setattr(Config, "STATIC_SCRAPE_ACCEPT_LENGTH", 300)


@pytest.fixture
def make_chat_model():
    """Factory for mock chat models whose ainvoke returns an AIMessage."""
    def _make(content=None, side_effect=None):
        llm = MagicMock()
        if side_effect is not None:
            llm.ainvoke = AsyncMock(side_effect=side_effect)
        else:
            llm.ainvoke = AsyncMock(return_value=AIMessage(content=content))
        return llm

    return _make


@pytest.fixture
def scenario_posting():
    """Short plain-text posting with a known deterministic score of 30."""
    return (
        "Senior Backend Engineer at Acme. 5+ years Python required. "
        "Remote, $140k-$160k. Apply: careers@acme.com"
    )


@pytest.fixture
def sample_posting():
    """Realistic posting text, comfortably above every length threshold."""
    return """
About us: We are a logistics software company helping freight forwarders move faster.

Requirements:
- 5+ years experience with Python, SQL and AWS
- Bachelor degree in Computer Science or equivalent
- Strong knowledge of distributed systems

Responsibilities:
- Develop and maintain backend services
- Collaborate with product and design teams
- Review code and mentor junior engineers

Full-time, remote within the EU. Salary $120,000 - $150,000.
Benefits include health insurance, 401k and flexible hours.
Apply by sending your resume to jobs@freightco.io.
""".strip()


@pytest.fixture
def structured_payload():
    """Parsed structured-extraction response."""
    return {
        "jobDetails": {
            "title": "Senior Backend Engineer",
            "company": "FreightCo",
            "location": "Remote (EU)",
            "salary": "$120,000 - $150,000",
            "jobType": "Full-time",
            "requirements": ["5+ years Python", "Bachelor degree"],
            "responsibilities": ["Develop backend services"],
            "benefits": ["Health insurance", "401k"],
        },
        "atsKeywords": {
            "hardSkills": [
                {"skill": "Python", "frequency": 2, "importance": "required", "category": "programming", "context": "5+ years"},
                {"skill": "SQL", "frequency": 1, "importance": "preferred", "category": "data", "context": ""},
            ],
            "softSkills": [{"skill": "Mentoring", "frequency": 1, "importance": "nice-to-have", "context": ""}],
            "technologies": [{"technology": "AWS", "frequency": 1, "category": "cloud", "proficiencyLevel": "required"}],
            "certifications": [],
            "experienceRequirements": {"yearsRequired": "5+ years", "level": "senior", "specificExperience": ["distributed systems"]},
            "educationRequirements": [{"level": "Bachelor", "field": "Computer Science", "requirement": "required"}],
            "actionWords": ["develop", "maintain", "review"],
            "industryTerms": ["freight forwarding"],
            "keyPhrases": ["distributed systems"],
        },
        "postingQuality": {
            "hasSalary": True,
            "hasRemoteInfo": True,
            "hasBenefits": True,
            "hasCompanyDescription": True,
            "hasClearRequirements": True,
        },
    }


@pytest.fixture
def insight_payload():
    """Parsed insight-extraction response."""
    return {
        "hiddenInsights": {
            "redFlags": [
                {"phrase": "fast-paced", "meaning": "Likely understaffed", "severity": "medium", "advice": "Ask about team size"},
            ],
            "positiveSignals": [{"signal": "Salary listed", "interpretation": "Transparent employer"}],
            "compensationClues": [{"clue": "401k", "interpretation": "Standard US benefits", "confidence": "high"}],
            "cultureInsights": [{"indicator": "mentor junior engineers", "meaning": "Invests in growth", "workLifeBalance": "good"}],
        },
        "strategicAdvice": {
            "shouldApply": True,
            "reasoning": "Strong match for backend engineers",
            "riskAssessment": "low",
            "negotiationLeverage": ["Logistics domain experience"],
            "interviewQuestions": ["How big is the team?"],
            "resumeStrategy": ["Lead with distributed systems work"],
        },
        "industryContext": {
            "sector": "Logistics Technology",
            "currentTrends": ["Freight digitization"],
            "salaryBenchmark": "$130k median",
            "competitionLevel": "high",
            "hiringUrgency": "high",
        },
        "companyIntelligence": {"companyStage": "growth_stage_company", "teamSize": "20-50"},
    }
