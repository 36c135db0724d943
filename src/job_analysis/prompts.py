"""
Job Analysis Prompts

Two independent prompts over the same posting text:
- Structured extraction (OpenAI): exhaustive, schema-shaped, low temperature
- Insight extraction (Anthropic): short qualitative read of the posting,
  with hard caps on value length and list size to bound tokens and latency
"""

STRUCTURED_EXTRACTION_SYSTEM_PROMPT = (
    "You are an expert at extracting comprehensive information from job postings. "
    "Extract every skill, requirement, technology, and qualification mentioned. "
    "Be thorough and detailed."
)

# JSON schema for structured output
STRUCTURED_OUTPUT_SCHEMA = """{
  "jobDetails": {
    "title": "exact job title",
    "company": "company name",
    "location": "location with remote/hybrid status if mentioned",
    "salary": "salary range if mentioned or null",
    "jobType": "full-time/part-time/contract if mentioned",
    "schedule": "work schedule if mentioned",
    "requirements": ["every requirement listed - be comprehensive"],
    "responsibilities": ["every responsibility listed - be comprehensive"],
    "benefits": ["any benefits mentioned"]
  },
  "atsKeywords": {
    "hardSkills": [
      {
        "skill": "technical skill name",
        "frequency": 1,
        "importance": "required|preferred|nice-to-have",
        "category": "technical|software|industry-specific|analytical",
        "context": "brief context of how it's mentioned"
      }
    ],
    "softSkills": [
      {
        "skill": "soft skill",
        "frequency": 1,
        "importance": "required|preferred",
        "context": "how it's mentioned"
      }
    ],
    "technologies": [
      {
        "technology": "software/tool/platform name",
        "frequency": 1,
        "category": "software|platform|tool|programming",
        "proficiencyLevel": "required|preferred|familiar"
      }
    ],
    "certifications": ["any certifications or licenses mentioned"],
    "experienceRequirements": {
      "yearsRequired": "X years",
      "yearsPreferred": "Y years if different",
      "level": "entry|mid|senior",
      "specificExperience": ["specific experience types required"]
    },
    "educationRequirements": [
      {
        "level": "degree level",
        "field": "field of study if specified",
        "requirement": "required|preferred"
      }
    ],
    "actionWords": ["every action verb from responsibilities section"],
    "industryTerms": ["industry-specific terminology used"],
    "keyPhrases": ["important phrases that should appear in a matching resume"]
  },
  "postingQuality": {
    "hasSalary": true/false,
    "hasRemoteInfo": true/false,
    "hasBenefits": true/false,
    "hasCompanyDescription": true/false,
    "hasClearRequirements": true/false,
    "totalRequirements": number,
    "totalResponsibilities": number
  }
}"""

STRUCTURED_EXTRACTION_USER_TEMPLATE = """You are an expert job analysis system. Extract ALL relevant information from this job posting thoroughly.

JOB POSTING:
{job_content}

CRITICAL INSTRUCTIONS:
1. Extract EVERY skill, requirement, and qualification mentioned
2. Be thorough - don't miss any technologies, tools, or certifications
3. Categorize skills accurately (technical vs soft skills)
4. Extract ALL action verbs used in responsibilities
5. Return ONLY valid JSON

{schema}

Be THOROUGH - extract everything mentioned in the posting!"""


INSIGHT_OUTPUT_SCHEMA = """{
  "hiddenInsights": {
    "redFlags": [
      {"phrase": "exact phrase", "meaning": "brief interpretation", "severity": "high|medium|low", "advice": "short advice"}
    ],
    "positiveSignals": [
      {"signal": "positive indicator", "interpretation": "brief explanation"}
    ],
    "compensationClues": [
      {"clue": "compensation hint", "interpretation": "salary estimate", "confidence": "high|medium|low"}
    ],
    "cultureInsights": [
      {"indicator": "culture signal", "meaning": "brief meaning", "workLifeBalance": "good|concerning|unclear"}
    ]
  },
  "strategicAdvice": {
    "shouldApply": true,
    "reasoning": "one sentence recommendation",
    "riskAssessment": "low|medium|high",
    "negotiationLeverage": ["point 1", "point 2"],
    "interviewQuestions": ["question 1", "question 2"],
    "resumeStrategy": ["tip 1", "tip 2"]
  },
  "industryContext": {
    "sector": "industry name",
    "currentTrends": ["trend 1", "trend 2"],
    "salaryBenchmark": "$X - $Y",
    "competitionLevel": "high|medium|low",
    "hiringUrgency": "high|medium|low"
  },
  "companyIntelligence": {
    "companySignals": ["signal 1", "signal 2"],
    "likelyStack": ["tool 1", "tool 2"],
    "orgMaturity": "startup|growth|enterprise|unknown",
    "resumeAngle": ["angle 1", "angle 2"]
  }
}"""

INSIGHT_USER_TEMPLATE = """Analyze this job posting for hidden insights. Be CONCISE - short phrases only.

JOB POSTING:
{job_content}

Return ONLY this JSON (keep all text values under 100 characters):
{schema}

CRITICAL: Keep responses SHORT. Max 3-5 items per array. No lengthy explanations."""


def build_structured_prompt(job_content: str) -> str:
    """Render the structured extraction user prompt."""
    return STRUCTURED_EXTRACTION_USER_TEMPLATE.format(
        job_content=job_content,
        schema=STRUCTURED_OUTPUT_SCHEMA,
    )


def build_insight_prompt(job_content: str) -> str:
    """Render the insight extraction user prompt."""
    return INSIGHT_USER_TEMPLATE.format(
        job_content=job_content,
        schema=INSIGHT_OUTPUT_SCHEMA,
    )
