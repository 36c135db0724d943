"""
Insight Extraction Client

Sends the posting text to Claude for a qualitative read: red flags, positive
signals, compensation and culture clues, strategic advice, industry context
and company intelligence.

The prompt caps value length and list size to keep the call cheap. Creative
output is more prone to malformed JSON, so parsing repairs trailing commas and
returns None instead of raising; transport failures still raise and are
settled by the engine.
"""

import asyncio
import logging
from typing import Any, Dict, Optional

from langchain_core.messages import HumanMessage

from src.common.config import Config
from src.common.json_utils import try_parse_llm_json
from src.common.llm_factory import create_insight_llm, message_text
from src.job_analysis.prompts import build_insight_prompt

logger = logging.getLogger(__name__)


class InsightExtractor:
    """Extracts hidden insights and strategic advice from a posting via Claude."""

    def __init__(self, llm: Optional[Any] = None, timeout: Optional[float] = None):
        self.llm = llm if llm is not None else create_insight_llm()
        self.timeout = timeout or Config.AI_CALL_TIMEOUT

    async def extract(self, job_content: str) -> Optional[Dict[str, Any]]:
        """
        Extract insights from posting text.

        Returns:
            Parsed insight dict, or None if the response could not be parsed

        Raises:
            Exception: Transport errors and asyncio.TimeoutError propagate
        """
        messages = [HumanMessage(content=build_insight_prompt(job_content))]
        response = await asyncio.wait_for(self.llm.ainvoke(messages), timeout=self.timeout)
        content = message_text(response)

        parsed = try_parse_llm_json(content, repair=True)
        if parsed is None:
            logger.error(f"Insight JSON parse failed. Raw content preview: {content[:500]}")
            return None

        logger.info("Insight extraction parsed successfully")
        return parsed
