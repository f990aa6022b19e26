"""
Market News Triage - Configuration
"""
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field

from constants.regions import NEWS_REGIONS as DEFAULT_REGIONS, NEWS_TIME_FILTER as DEFAULT_TIME_FILTER


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Paths
    BASE_DIR: Path = Path(__file__).parent
    LOG_DIR: Path = Field(default_factory=lambda: Path(__file__).parent / "logs")

    # API Keys
    SERPER_API_KEY: str = Field(default="", description="Serper.dev search API key")
    OPENAI_API_KEY: str = Field(default="", description="OpenAI API key")

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_TO_FILE: bool = Field(default=False)

    # Search
    NEWS_REGIONS: list[str] = Field(default_factory=lambda: [r["code"] for r in DEFAULT_REGIONS.values()])
    NEWS_TIME_FILTER: str = Field(default=DEFAULT_TIME_FILTER, description="Serper recency filter")
    SEARCH_RESULTS_PER_REGION: int = Field(default=10)
    SEARCH_TIMEOUT_SECONDS: float = Field(default=10.0)

    # LLM
    LLM_PROVIDER: str = Field(default="openai")
    LLM_MODEL: str = Field(default="gpt-4.1-mini")
    LLM_VERIFY_SSL: bool = Field(default=True, description="Disable only for local proxies")

    # Triage
    SCORER_TIMEOUT_SECONDS: float = Field(default=10.0)
    TRIAGE_TIMEOUT_SECONDS: float = Field(default=25.0)
    SCORER_MAX_ITEMS: int = Field(default=8)
    MAX_RESULTS: int = Field(default=5)
    MIN_RESULTS: int = Field(default=3, description="Below this the query is broadened")
    SIMILARITY_THRESHOLD: float = Field(default=0.7)
    ACCEPTANCE_THRESHOLD: float = Field(default=3.0)
    FALLBACK_BASE_SCORE: float = Field(default=5.0)
    INSIGHTS_TIMEOUT_SECONDS: float = Field(default=20.0)
    REGIONAL_FOCUS_TERMS: list[str] = Field(default=[
        "southeast asia", "asean", "malaysia", "singapore", "indonesia",
        "vietnam", "philippines", "myanmar", "cambodia", "laos", "brunei",
        "ringgit", "rupiah",
    ])
    PRIORITY_COUNTRY_TERMS: list[str] = Field(default=[
        "thailand", "thai", "bangkok", "baht", "bank of thailand",
    ])

    # API
    API_HOST: str = Field(default="0.0.0.0")
    API_PORT: int = Field(default=8000)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()


def ensure_directories():
    """Ensure all required directories exist."""
    if settings.LOG_TO_FILE:
        settings.LOG_DIR.mkdir(parents=True, exist_ok=True)
