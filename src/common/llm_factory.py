"""
LLM Factory Module.

Provides factory functions for the two chat models the job analysis engine
talks to. Extractors should use these factories instead of direct
ChatOpenAI/ChatAnthropic instantiation so model, timeout and retry policy
stay in one place.

Usage:
    from src.common.llm_factory import create_extraction_llm, create_insight_llm

    # Structured extraction (OpenAI, near-deterministic)
    llm = create_extraction_llm()

    # Qualitative insight (Anthropic)
    llm = create_insight_llm()

    response = await llm.ainvoke([HumanMessage(content="...")])
    text = message_text(response)
"""

import logging
from typing import Any, List, Optional

from langchain_anthropic import ChatAnthropic
from langchain_core.callbacks import BaseCallbackHandler
from langchain_openai import ChatOpenAI

from src.common.config import Config

logger = logging.getLogger(__name__)


def create_extraction_llm(
    model: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    callbacks: Optional[List[BaseCallbackHandler]] = None,
    **kwargs: Any,
) -> ChatOpenAI:
    """
    Create the ChatOpenAI instance used for structured extraction.

    Failed calls are not retried: the engine degrades the structured
    sections to fallbacks instead.

    Args:
        model: Model name (defaults to Config.EXTRACTION_MODEL)
        temperature: Temperature (defaults to Config.EXTRACTION_TEMPERATURE)
        max_tokens: Output token budget (defaults to Config.EXTRACTION_MAX_TOKENS)
        callbacks: Optional LangChain callbacks
        **kwargs: Additional ChatOpenAI parameters

    Returns:
        ChatOpenAI instance

    Raises:
        ConfigurationError: If OPENAI_API_KEY is not configured
    """
    effective_model = model or Config.EXTRACTION_MODEL
    effective_temperature = temperature if temperature is not None else Config.EXTRACTION_TEMPERATURE

    llm = ChatOpenAI(
        model=effective_model,
        temperature=effective_temperature,
        max_tokens=max_tokens or Config.EXTRACTION_MAX_TOKENS,
        api_key=Config.require_api_key("openai"),
        base_url=Config.get_openai_base_url(),
        timeout=Config.AI_CALL_TIMEOUT,
        max_retries=0,
        callbacks=callbacks,
        **kwargs,
    )

    logger.debug(f"Created extraction LLM: model={effective_model}, temperature={effective_temperature}")
    return llm


def create_insight_llm(
    model: Optional[str] = None,
    max_tokens: Optional[int] = None,
    callbacks: Optional[List[BaseCallbackHandler]] = None,
    **kwargs: Any,
) -> ChatAnthropic:
    """
    Create the ChatAnthropic instance used for insight extraction.

    Args:
        model: Model name (defaults to Config.INSIGHT_MODEL)
        max_tokens: Output token budget (defaults to Config.INSIGHT_MAX_TOKENS)
        callbacks: Optional LangChain callbacks
        **kwargs: Additional ChatAnthropic parameters

    Returns:
        ChatAnthropic instance

    Raises:
        ConfigurationError: If ANTHROPIC_API_KEY is not configured
    """
    effective_model = model or Config.INSIGHT_MODEL

    llm = ChatAnthropic(
        model=effective_model,
        max_tokens=max_tokens or Config.INSIGHT_MAX_TOKENS,
        api_key=Config.require_api_key("anthropic"),
        timeout=Config.AI_CALL_TIMEOUT,
        max_retries=0,
        callbacks=callbacks,
        **kwargs,
    )

    logger.debug(f"Created insight LLM: model={effective_model}")
    return llm


def message_text(message: Any) -> str:
    """
    Get the text of a chat model response.

    Anthropic responses may carry a list of content blocks instead of a
    plain string; text blocks are concatenated in order.
    """
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content or "")
