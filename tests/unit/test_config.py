"""
Unit tests for src/common/config.py and src/common/llm_factory.py
"""

import pytest
from unittest.mock import MagicMock, patch

from langchain_core.messages import AIMessage

from src.common.config import Config, ConfigurationError
from src.common.llm_factory import create_extraction_llm, create_insight_llm, message_text


class TestConfigValidation:

    def test_valid_configuration(self):
        Config.validate()

    def test_missing_keys_reported(self, monkeypatch):
        monkeypatch.setattr(Config, "OPENAI_API_KEY", "")
        monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", "")

        with pytest.raises(ConfigurationError, match="OPENAI_API_KEY, ANTHROPIC_API_KEY"):
            Config.validate()

    def test_accept_length_below_minimum_rejected(self, monkeypatch):
        monkeypatch.setattr(Config, "STATIC_SCRAPE_ACCEPT_LENGTH", 10)
        with pytest.raises(ConfigurationError, match="STATIC_SCRAPE_ACCEPT_LENGTH"):
            Config.validate()

    def test_thresholds_checked_without_api_keys(self, monkeypatch):
        monkeypatch.setattr(Config, "OPENAI_API_KEY", "")
        Config.validate_thresholds()

        monkeypatch.setattr(Config, "MIN_TEXT_CONTENT_LENGTH", 0)
        with pytest.raises(ConfigurationError, match="MIN_TEXT_CONTENT_LENGTH"):
            Config.validate_thresholds()

    def test_configuration_error_is_value_error(self):
        assert issubclass(ConfigurationError, ValueError)


class TestRequireApiKey:

    def test_returns_configured_key(self):
        assert Config.require_api_key("openai") == "sk-test-mock-key"
        assert Config.require_api_key("anthropic") == "sk-ant-test-mock-key"

    def test_unknown_provider(self):
        with pytest.raises(ConfigurationError, match="Unknown LLM provider"):
            Config.require_api_key("gemini")

    def test_openai_base_url_override(self, monkeypatch):
        assert Config.get_openai_base_url() is None
        monkeypatch.setenv("OPENAI_BASE_URL", "https://gateway.internal/v1")
        assert Config.get_openai_base_url() == "https://gateway.internal/v1"

    def test_summary_hides_keys(self):
        summary = Config.summary()
        assert "sk-test-mock-key" not in summary
        assert Config.EXTRACTION_MODEL in summary


class TestLLMFactory:

    @patch("src.common.llm_factory.ChatOpenAI")
    def test_extraction_llm_never_retries(self, mock_chat):
        create_extraction_llm()

        kwargs = mock_chat.call_args.kwargs
        assert kwargs["model"] == Config.EXTRACTION_MODEL
        assert kwargs["temperature"] == Config.EXTRACTION_TEMPERATURE
        assert kwargs["api_key"] == "sk-test-mock-key"
        assert kwargs["timeout"] == Config.AI_CALL_TIMEOUT
        assert kwargs["max_retries"] == 0

    @patch("src.common.llm_factory.ChatOpenAI")
    def test_extraction_llm_zero_temperature_kept(self, mock_chat):
        create_extraction_llm(temperature=0.0)
        assert mock_chat.call_args.kwargs["temperature"] == 0.0

    @patch("src.common.llm_factory.ChatAnthropic")
    def test_insight_llm(self, mock_chat):
        create_insight_llm(model="claude-haiku-4-5")

        kwargs = mock_chat.call_args.kwargs
        assert kwargs["model"] == "claude-haiku-4-5"
        assert kwargs["max_tokens"] == Config.INSIGHT_MAX_TOKENS
        assert kwargs["max_retries"] == 0

    @patch("src.common.llm_factory.ChatAnthropic")
    def test_insight_llm_requires_key(self, mock_chat, monkeypatch):
        monkeypatch.setattr(Config, "ANTHROPIC_API_KEY", "")
        with pytest.raises(ConfigurationError):
            create_insight_llm()
        mock_chat.assert_not_called()

    def test_message_text(self):
        assert message_text(AIMessage(content="plain")) == "plain"
        blocks = MagicMock(content=[{"type": "text", "text": "a"}, {"type": "tool_use", "id": "t"}, "b"])
        assert message_text(blocks) == "ab"
        assert message_text("raw string") == "raw string"
