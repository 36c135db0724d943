"""
Configuration loader for the job analysis engine.

Loads all settings from environment variables (.env file).
Validates required settings and provides type-safe access.
"""

import os
from typing import Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class ConfigurationError(ValueError):
    """Raised when required configuration (API keys, thresholds) is missing or invalid."""
    pass


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    return int(value) if value else default


def _env_bool(name: str, default: bool) -> bool:
    return os.getenv(name, str(default)).lower() == "true"


class Config:
    """
    Centralized configuration for the job analysis engine.

    All values loaded from environment variables - NO SECRETS IN CODE.
    """

    # ===== LLM APIs =====
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    # CLAUDE_API_KEY is the older name used by the web app deployment
    ANTHROPIC_API_KEY: str = os.getenv("ANTHROPIC_API_KEY", "") or os.getenv("CLAUDE_API_KEY", "")

    # ===== Structured extraction (OpenAI) =====
    EXTRACTION_MODEL: str = os.getenv("EXTRACTION_MODEL", "gpt-4o-mini")
    EXTRACTION_TEMPERATURE: float = _env_float("EXTRACTION_TEMPERATURE", 0.1)
    EXTRACTION_MAX_TOKENS: int = _env_int("EXTRACTION_MAX_TOKENS", 4000)

    # ===== Insight extraction (Anthropic) =====
    INSIGHT_MODEL: str = os.getenv("INSIGHT_MODEL", "claude-sonnet-4-5-20250929")
    INSIGHT_MAX_TOKENS: int = _env_int("INSIGHT_MAX_TOKENS", 4096)

    # Per-call deadline for both AI tiers (seconds)
    AI_CALL_TIMEOUT: float = _env_float("AI_CALL_TIMEOUT", 60.0)

    # ===== Web Scraping =====
    SCRAPE_REQUEST_TIMEOUT: float = _env_float("SCRAPE_REQUEST_TIMEOUT", 15.0)
    BROWSER_NAVIGATION_TIMEOUT_MS: int = _env_int("BROWSER_NAVIGATION_TIMEOUT_MS", 30000)
    BROWSER_SETTLE_DELAY_MS: int = _env_int("BROWSER_SETTLE_DELAY_MS", 3000)
    BROWSER_TOTAL_TIMEOUT: float = _env_float("BROWSER_TOTAL_TIMEOUT", 60.0)
    PLAYWRIGHT_HEADLESS: bool = _env_bool("PLAYWRIGHT_HEADLESS", True)

    # ===== Content thresholds =====
    # Minimum characters for any posting body (pasted or scraped)
    MIN_TEXT_CONTENT_LENGTH: int = _env_int("MIN_TEXT_CONTENT_LENGTH", 50)
    # Static scrape results shorter than this escalate to the browser tier
    STATIC_SCRAPE_ACCEPT_LENGTH: int = _env_int("STATIC_SCRAPE_ACCEPT_LENGTH", 300)

    # ===== Logging =====
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = os.getenv("LOG_FORMAT", "simple")

    @classmethod
    def validate(cls) -> None:
        """
        Validate that all required configuration is present.
        Raises ConfigurationError if critical settings are missing.
        """
        required_settings = {
            "OPENAI_API_KEY": cls.OPENAI_API_KEY,
            "ANTHROPIC_API_KEY": cls.ANTHROPIC_API_KEY,
        }

        missing = [name for name, value in required_settings.items() if not value]

        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}. "
                f"Please check your .env file."
            )

        cls.validate_thresholds()

    @classmethod
    def validate_thresholds(cls) -> None:
        """Check the content length thresholds; needs no API keys."""
        if cls.MIN_TEXT_CONTENT_LENGTH < 1:
            raise ConfigurationError("MIN_TEXT_CONTENT_LENGTH must be positive")
        if cls.STATIC_SCRAPE_ACCEPT_LENGTH < cls.MIN_TEXT_CONTENT_LENGTH:
            raise ConfigurationError(
                "STATIC_SCRAPE_ACCEPT_LENGTH must not be lower than MIN_TEXT_CONTENT_LENGTH"
            )

    @classmethod
    def require_api_key(cls, provider: str) -> str:
        """
        Get the API key for a provider, failing fast when it is not configured.

        Args:
            provider: "openai" or "anthropic"

        Returns:
            The configured API key

        Raises:
            ConfigurationError: If the key is empty or the provider is unknown
        """
        keys = {
            "openai": ("OPENAI_API_KEY", cls.OPENAI_API_KEY),
            "anthropic": ("ANTHROPIC_API_KEY", cls.ANTHROPIC_API_KEY),
        }
        if provider not in keys:
            raise ConfigurationError(f"Unknown LLM provider: {provider}")

        name, value = keys[provider]
        if not value:
            raise ConfigurationError(f"{name} is not configured")
        return value

    @classmethod
    def get_openai_base_url(cls) -> Optional[str]:
        """OpenAI base URL override (None to use OpenAI directly)."""
        return os.getenv("OPENAI_BASE_URL") or None

    @classmethod
    def summary(cls) -> str:
        """Return a summary of the current configuration (safe for logging)."""
        return f"""
Configuration Summary:
  Extraction LLM: {cls.EXTRACTION_MODEL} {'✓' if cls.OPENAI_API_KEY else '✗ Missing key'}
  Insight LLM: {cls.INSIGHT_MODEL} {'✓' if cls.ANTHROPIC_API_KEY else '✗ Missing key'}
  AI call timeout: {cls.AI_CALL_TIMEOUT}s
  Scrape timeout: {cls.SCRAPE_REQUEST_TIMEOUT}s (browser: {cls.BROWSER_NAVIGATION_TIMEOUT_MS}ms)
  Headless browser: {'Yes' if cls.PLAYWRIGHT_HEADLESS else 'No'}
        """.strip()
