"""Configuration management for the Cooking Assistant.

Loads environment variables from system environment and .env file.
Priority order: system environment > .env file > hardcoded defaults
"""

import os

from dotenv import load_dotenv


# Load .env file (if exists, silently continues if missing)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes")


class Config:
    """Application configuration loaded from environment variables."""

    def __init__(self) -> None:
        """Initialize configuration from environment variables."""
        self.GEMINI_API_KEY: str = os.getenv("GEMINI_API_KEY", "")
        # Model used by the cooking and merge agents
        self.GEMINI_MODEL: str = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
        # Nutrition agent only produces a short estimate, a lighter model is enough
        self.NUTRITION_MODEL: str = os.getenv("NUTRITION_MODEL", "gemini-2.5-flash-lite")
        # LLM Model Parameters
        # Temperature: 0.0 = deterministic, 1.0 = max randomness
        self.TEMPERATURE: float = float(os.getenv("TEMPERATURE", "0.3"))
        # Max Output Tokens: a full recipe with steps and tips fits in 4096
        self.MAX_OUTPUT_TOKENS: int = int(os.getenv("MAX_OUTPUT_TOKENS", "4096"))
        # Number of leading lines of the cooking agent reply searched for the JSON header line
        self.ANALYZER_SCAN_LINES: int = int(os.getenv("ANALYZER_SCAN_LINES", "5"))
        # Wall-clock limit for one full pipeline run (all three steps)
        self.REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))
        # Prompt injection guardrail on the cooking agent input
        self.ENABLE_GUARDRAILS: bool = _env_bool("ENABLE_GUARDRAILS", "true")

    def validate(self) -> None:
        """Validate required configuration.

        Raises:
            ValueError: If required API keys are missing or invalid values provided.
        """
        if not self.GEMINI_API_KEY:
            raise ValueError("GEMINI_API_KEY environment variable is required")
        if not (0.0 <= self.TEMPERATURE <= 1.0):
            raise ValueError(
                f"TEMPERATURE must be between 0.0 and 1.0, got: {self.TEMPERATURE}"
            )
        if self.MAX_OUTPUT_TOKENS < 512:
            raise ValueError(
                f"MAX_OUTPUT_TOKENS must be at least 512, got: {self.MAX_OUTPUT_TOKENS}"
            )
        if self.ANALYZER_SCAN_LINES < 1:
            raise ValueError(
                f"ANALYZER_SCAN_LINES must be at least 1, got: {self.ANALYZER_SCAN_LINES}"
            )
        if self.REQUEST_TIMEOUT_SECONDS <= 0:
            raise ValueError(
                f"REQUEST_TIMEOUT_SECONDS must be positive, got: {self.REQUEST_TIMEOUT_SECONDS}"
            )


# Module-level config instance; validated by the agent factory before live agents are built
config = Config()
