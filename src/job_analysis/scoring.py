"""
Deterministic posting-quality ("ATS compatibility") score.

Computed from the raw posting text only, never from AI output, so the score
is reproducible and auditable even when both AI tiers fail.

Additive rubric, each category capped independently:

    Clarity & Structure   25
    Specificity           30
    Keyword Richness      25
    Content Quality       20

The sum is clamped to [25, 100]. The keyword lists and point values below
define the score; changing any of them changes every stored score.
"""

import re
from typing import List

from src.job_analysis.types import ScoreBreakdown

SCORE_FLOOR = 25
SCORE_CEILING = 100

CLARITY_CAP = 25
SPECIFICITY_CAP = 30
KEYWORD_RICHNESS_CAP = 25
CONTENT_QUALITY_CAP = 20

SECTION_KEYWORDS = [
    "requirement",
    "qualification",
    "responsibilit",
    "skill",
    "experience",
    "education",
    "benefit",
    "about",
    "duties",
    "summary",
]

DEGREE_KEYWORDS = [
    "bachelor",
    "master",
    "phd",
    "degree",
    "diploma",
    "certificate",
    "associate",
    "college",
]

SKILL_INDICATORS = [
    "experience",
    "knowledge",
    "proficient",
    "skilled",
    "ability",
    "capable",
    "familiar",
    "understanding",
    "expertise",
    "competent",
    "background",
]

ACTION_VERBS = [
    "manage",
    "lead",
    "develop",
    "create",
    "implement",
    "coordinate",
    "analyze",
    "design",
    "build",
    "maintain",
    "support",
    "ensure",
    "prepare",
    "review",
    "collaborate",
]

TOOL_NAMES = [
    "excel", "word", "outlook", "salesforce", "sap", "oracle", "jira", "slack",
    "zoom", "teams", "sharepoint", "quickbooks", "tableau", "python", "java",
    "sql", "aws", "azure", "google", "microsoft", "adobe", "autocad", "cargowise",
]

# Digits are ASCII only, whitespace is the ECMAScript set (not Python's \s)
# and \b uses ASCII word boundaries.
WHITESPACE = r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]"

BULLET_PATTERN = re.compile(r"[•\-\*]" + WHITESPACE)
NUMBERED_LIST_PATTERN = re.compile(r"^" + WHITESPACE + r"*[0-9]+\.", re.MULTILINE)
YEARS_PATTERN = re.compile(r"([0-9]+)\+?" + WHITESPACE + r"*years?", re.IGNORECASE)
WORD_SEPARATOR_PATTERN = re.compile(WHITESPACE + "+")
SALARY_PATTERN = re.compile(
    r"\$[\d,]+|\d+k\b|\d+K\b|salary|compensation|\d{2,3},\d{3}",
    re.IGNORECASE | re.ASCII,
)
LOCATION_PATTERN = re.compile(
    r"remote|hybrid|on-site|onsite|\b[A-Z]{2}" + WHITESPACE + r"+\d{5}\b|city|state",
    re.IGNORECASE | re.ASCII,
)
JOB_TYPE_PATTERN = re.compile(r"full-time|part-time|contract|temporary|permanent", re.IGNORECASE)
TOOL_PATTERN = re.compile(r"\b(" + "|".join(TOOL_NAMES) + r")\b", re.IGNORECASE | re.ASCII)
COMPANY_INFO_PATTERN = re.compile(
    r"about us|about the company|who we are|our company|our team|our mission|we are",
    re.IGNORECASE,
)
BENEFITS_PATTERN = re.compile(
    r"benefit|401k|insurance|pto|vacation|health|dental|vision|remote|flexible|bonus",
    re.IGNORECASE,
)
APPLICATION_PATTERN = re.compile(
    r"apply|submit|send|resume|cv|application|email|click|portal",
    re.IGNORECASE,
)


def _count_present(text_lower: str, keywords: List[str]) -> int:
    return sum(1 for k in keywords if k in text_lower)


def _count_words(text: str) -> int:
    # Leading/trailing whitespace yields empty pieces; they are counted, as is ""
    return len(WORD_SEPARATOR_PATTERN.split(text))


def _count_sentences(text: str) -> int:
    return len([s for s in re.split(r"[.!?]+", text) if s.strip()])


def compute_score_breakdown(text: str) -> ScoreBreakdown:
    """
    Score posting text and return the per-category trace.

    Args:
        text: Raw posting text (may be empty)

    Returns:
        ScoreBreakdown with category points, counters and the clamped score
    """
    text = text or ""
    text_lower = text.lower()

    # ===== Clarity & Structure (25) =====
    words = _count_words(text)
    sentences = _count_sentences(text)
    avg_sentence_length = words / sentences if sentences > 0 else 0

    clarity = 0
    if 10 <= avg_sentence_length <= 30:
        clarity += 10
    elif 5 < avg_sentence_length < 40:
        clarity += 5

    sections_found = _count_present(text_lower, SECTION_KEYWORDS)
    clarity += min(sections_found * 2, 10)

    if BULLET_PATTERN.search(text) or NUMBERED_LIST_PATTERN.search(text):
        clarity += 5

    # ===== Specificity (30) =====
    specificity = 0
    if YEARS_PATTERN.search(text):
        specificity += 8
    if any(k in text_lower for k in DEGREE_KEYWORDS):
        specificity += 5
    if SALARY_PATTERN.search(text):
        specificity += 7
    if LOCATION_PATTERN.search(text):
        specificity += 5
    if JOB_TYPE_PATTERN.search(text):
        specificity += 5

    # ===== Keyword Richness (25) =====
    skill_mentions = _count_present(text_lower, SKILL_INDICATORS)
    unique_tools = len({match.lower() for match in TOOL_PATTERN.findall(text)})
    action_count = _count_present(text_lower, ACTION_VERBS)

    keyword_richness = (
        min(skill_mentions * 2, 10)
        + min(unique_tools * 2, 10)
        + min(action_count, 5)
    )

    # ===== Content Quality (20) =====
    content_quality = 0
    if 200 <= words <= 2000:
        content_quality += 8
    elif 100 <= words <= 3000:
        content_quality += 4
    if COMPANY_INFO_PATTERN.search(text):
        content_quality += 4
    if BENEFITS_PATTERN.search(text):
        content_quality += 4
    if APPLICATION_PATTERN.search(text):
        content_quality += 4

    raw_total = clarity + specificity + keyword_richness + content_quality
    score = min(max(round(raw_total), SCORE_FLOOR), SCORE_CEILING)

    return ScoreBreakdown(
        clarity=clarity,
        specificity=specificity,
        keyword_richness=keyword_richness,
        content_quality=content_quality,
        word_count=words,
        sentence_count=sentences,
        sections_found=sections_found,
        unique_tools=unique_tools,
        action_verbs=action_count,
        raw_total=raw_total,
        score=score,
    )


def score_posting(text: str) -> int:
    """
    Compute the deterministic posting score.

    Same text in, same integer out: no randomness and no dependency on AI
    output. Never raises for a str input; empty text scores the floor (25).

    Args:
        text: Raw posting text

    Returns:
        Integer score in [25, 100]
    """
    return compute_score_breakdown(text).score
