from dataclasses import dataclass
import os
from dotenv import load_dotenv
import logging

logger = logging.getLogger(__name__)

load_dotenv()

PLACEHOLDER_KEYS = {"", "your_openrouter_api_key_here", "your_google_api_key_here"}


@dataclass(frozen=True)
class Settings:
    """
    Application configuration loaded from environment variables.
    """

    llm_provider: str = os.getenv("LLM_PROVIDER", "google")
    google_api_key: str | None = os.getenv("GOOGLE_API_KEY")
    openrouter_api_key: str | None = os.getenv("OPENROUTER_API_KEY")
    openrouter_base_url: str = os.getenv("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
    llm_model: str | None = os.getenv("LLM_MODEL")
    llm_temperature: float = float(os.getenv("LLM_TEMPERATURE", "0.7"))
    llm_max_tokens: int = int(os.getenv("LLM_MAX_TOKENS", "4000"))
    plan_db_path: str = os.getenv("PLAN_DB_PATH", "plans.db")

    @property
    def api_key(self) -> str | None:
        if self.llm_provider == "openrouter":
            return self.openrouter_api_key
        return self.google_api_key

    @property
    def model_name(self) -> str:
        if self.llm_model:
            return self.llm_model
        if self.llm_provider == "openrouter":
            return "tngtech/deepseek-r1t2-chimera:free"
        return "gemini-1.5-flash"

    def has_api_key(self) -> bool:
        return (self.api_key or "").strip() not in PLACEHOLDER_KEYS


settings = Settings()

logger.info(
    "Loaded settings: provider=%s model=%s db=%s api_key_configured=%s",
    settings.llm_provider,
    settings.model_name,
    settings.plan_db_path,
    settings.has_api_key(),
)
