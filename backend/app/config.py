from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Document parsing (LlamaCloud / LlamaParse)
    llama_cloud_api_key: str = ""
    llama_cloud_base_url: str = "https://api.cloud.llamaindex.ai"
    parse_result_type: str = "markdown"  # "markdown" | "text"
    parse_check_interval: float = 1.0
    parse_max_timeout: float = 2000.0

    # LLM (OpenAI-compatible API - defaults to Groq)
    llm_api_base: str = "https://api.groq.com/openai/v1"
    llm_api_key: str = Field(
        default="",
        validation_alias=AliasChoices("llm_api_key", "groq_api_key"),
    )
    llm_model: str = "llama-3.3-70b-versatile"
    summary_profile: str = "structured"  # "structured" | "classic"

    # Transient storage for uploads awaiting parsing
    uploads_dir: Path = Field(default_factory=lambda: Path.cwd() / "uploads")

    # CORS
    cors_origin_regex: str = r"http://localhost:\d+"

    # Observability
    langsmith_api_key: str = ""
    langsmith_endpoint: str = "https://api.smith.langchain.com"
    langsmith_project: str = "lecture-resume"

    class Config:
        env_file = ".env"


class ConfigurationError(Exception):
    """Raised at startup when required settings are missing."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(
            "Missing required environment variables: " + ", ".join(missing)
        )


REQUIRED_KEYS: dict[str, str] = {
    "llama_cloud_api_key": "LLAMA_CLOUD_API_KEY",
    "llm_api_key": "LLM_API_KEY (or GROQ_API_KEY)",
}


def validate_settings(settings: Settings) -> ConfigurationError | None:
    """Return a ConfigurationError naming every missing required key, or None."""
    missing = [
        env_name
        for field_name, env_name in REQUIRED_KEYS.items()
        if not getattr(settings, field_name).strip()
    ]
    if missing:
        return ConfigurationError(missing)
    return None


@lru_cache
def get_settings() -> Settings:
    return Settings()
