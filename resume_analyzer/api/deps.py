from fastapi import Request

from resume_analyzer.ai.types import AIClient
from resume_analyzer.core.config import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_ai_client(request: Request) -> AIClient:
    return request.app.state.ai_client
