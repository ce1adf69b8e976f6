from dataclasses import dataclass

from resume_analyzer.core.config import Settings


@dataclass(frozen=True)
class AIConfig:
    model: str
    base_url: str
    api_key: str | None
    temperature: float
    max_tokens: int
    timeout_s: float


def load_ai_config(settings: Settings) -> AIConfig:
    return AIConfig(
        model=settings.llm_model,
        base_url=settings.llm_base_url,
        api_key=(settings.groq_api_key or "").strip() or None,
        temperature=settings.llm_temperature,
        max_tokens=settings.llm_max_tokens,
        timeout_s=settings.llm_timeout_s,
    )
