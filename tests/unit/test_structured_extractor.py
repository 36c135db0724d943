"""
Unit tests for src/job_analysis/structured_extractor.py

The chat model is mocked; no OpenAI calls are made.
"""

import asyncio
import json
import pytest

from langchain_core.messages import HumanMessage, SystemMessage

from src.common.config import Config, ConfigurationError
from src.job_analysis.prompts import STRUCTURED_EXTRACTION_SYSTEM_PROMPT
from src.job_analysis.structured_extractor import StructuredExtractor
from src.job_analysis.types import ExtractionError


class TestStructuredExtractor:

    @pytest.mark.asyncio
    async def test_parses_fenced_response(self, make_chat_model, structured_payload, sample_posting):
        llm = make_chat_model(f"```json\n{json.dumps(structured_payload)}\n```")
        extractor = StructuredExtractor(llm=llm)

        result = await extractor.extract(sample_posting)

        assert result == structured_payload

    @pytest.mark.asyncio
    async def test_sends_system_and_user_messages(self, make_chat_model, structured_payload, sample_posting):
        llm = make_chat_model(json.dumps(structured_payload))
        await StructuredExtractor(llm=llm).extract(sample_posting)

        messages = llm.ainvoke.call_args[0][0]
        assert isinstance(messages[0], SystemMessage)
        assert messages[0].content == STRUCTURED_EXTRACTION_SYSTEM_PROMPT
        assert isinstance(messages[1], HumanMessage)
        assert sample_posting in messages[1].content

    @pytest.mark.asyncio
    async def test_malformed_json_raises(self, make_chat_model, sample_posting):
        llm = make_chat_model('{"jobDetails": {"title": "Engineer",}')
        with pytest.raises(ExtractionError, match="Failed to parse"):
            await StructuredExtractor(llm=llm).extract(sample_posting)

    @pytest.mark.asyncio
    async def test_transport_error_wrapped(self, make_chat_model, sample_posting):
        llm = make_chat_model(side_effect=ConnectionError("connection reset"))
        with pytest.raises(ExtractionError, match="connection reset"):
            await StructuredExtractor(llm=llm).extract(sample_posting)

    @pytest.mark.asyncio
    async def test_deadline_enforced(self, make_chat_model, sample_posting):
        async def slow_call(messages):
            await asyncio.sleep(1)

        llm = make_chat_model(side_effect=slow_call)
        with pytest.raises(ExtractionError, match="timed out"):
            await StructuredExtractor(llm=llm, timeout=0.01).extract(sample_posting)

    def test_missing_api_key_raises(self, monkeypatch):
        monkeypatch.setattr(Config, "OPENAI_API_KEY", "")
        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY"):
            StructuredExtractor()
