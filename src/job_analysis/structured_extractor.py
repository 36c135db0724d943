"""
Structured Extraction Client

Sends the posting text to OpenAI with an exhaustive extraction prompt and
returns the parsed JSON: job metadata plus the categorized ATS keyword
inventory (hard/soft skills, technologies, certifications, experience and
education requirements, action verbs, industry terms, key phrases).

Extraction, not creativity: low temperature, large output budget, strict
parsing. Any failure raises ExtractionError; the engine settles it into a
fallback tier, so it never aborts the analysis.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage, SystemMessage

from src.common.config import Config
from src.common.json_utils import parse_llm_json
from src.common.llm_factory import create_extraction_llm, message_text
from src.job_analysis.prompts import STRUCTURED_EXTRACTION_SYSTEM_PROMPT, build_structured_prompt
from src.job_analysis.types import ExtractionError

logger = logging.getLogger(__name__)


class StructuredExtractor:
    """Extracts job details and ATS keywords from a posting via OpenAI."""

    def __init__(self, llm: Optional[Any] = None, timeout: Optional[float] = None):
        """
        Initialize the extractor.

        Args:
            llm: Chat model with an async ``ainvoke`` (defaults to the extraction LLM)
            timeout: Deadline for one call in seconds (defaults to Config.AI_CALL_TIMEOUT)
        """
        self.llm = llm if llm is not None else create_extraction_llm()
        self.timeout = timeout or Config.AI_CALL_TIMEOUT

    async def _call_llm(self, job_content: str) -> str:
        messages = [
            SystemMessage(content=STRUCTURED_EXTRACTION_SYSTEM_PROMPT),
            HumanMessage(content=build_structured_prompt(job_content)),
        ]
        response = await asyncio.wait_for(self.llm.ainvoke(messages), timeout=self.timeout)
        return message_text(response)

    def _parse_response(self, llm_response: str) -> Dict[str, Any]:
        """Parse the response strictly; malformed JSON is an extraction failure."""
        try:
            return parse_llm_json(llm_response)
        except ValueError as e:
            raise ExtractionError(f"Failed to parse structured extraction JSON: {e}") from e

    async def extract(self, job_content: str) -> Dict[str, Any]:
        """
        Extract structured data from posting text.

        Args:
            job_content: Plain-text job posting

        Returns:
            Parsed extraction dict (``jobDetails``, ``atsKeywords``, ``postingQuality``)

        Raises:
            ExtractionError: On transport errors, timeouts or unparseable output
        """
        try:
            llm_response = await self._call_llm(job_content)
        except asyncio.TimeoutError as e:
            raise ExtractionError(f"Structured extraction timed out after {self.timeout}s") from e
        except Exception as e:
            raise ExtractionError(f"Structured extraction request failed: {e}") from e

        data = self._parse_response(llm_response)
        job_details = data.get("jobDetails")
        title = job_details.get("title") if isinstance(job_details, dict) else None
        logger.info(f"Structured extraction parsed: {title or 'untitled posting'}")
        return data
