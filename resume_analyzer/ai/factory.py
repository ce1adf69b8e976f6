from resume_analyzer.ai.config import load_ai_config
from resume_analyzer.ai.providers.openai_provider import OpenAIProvider
from resume_analyzer.ai.types import AIClient
from resume_analyzer.core.config import Settings


def build_ai_client(settings: Settings) -> AIClient:
    return OpenAIProvider(load_ai_config(settings))
