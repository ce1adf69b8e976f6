from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_ALLOWED_ORIGINS = [
    "https://resume-analyzer-frontend-gamma.vercel.app",
    "http://localhost:3000",
]


def _get_env(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name)
    if value is None or value == "":
        return default
    return value


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _get_env_float(name: str, default: float) -> float:
    raw = _get_env(name, None)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _get_env_list(name: str, default: list[str]) -> tuple[str, ...]:
    raw = _get_env(name, None)
    if raw is None:
        return tuple(default)
    values = [item.strip() for item in raw.split(",")]
    clean = [item for item in values if item]
    return tuple(clean) if clean else tuple(default)


@dataclass(frozen=True)
class Settings:
    groq_api_key: str | None = None
    llm_base_url: str = "https://api.groq.com/openai/v1"
    llm_model: str = "llama-3.3-70b-versatile"
    llm_temperature: float = 0.2
    llm_max_tokens: int = 800
    llm_timeout_s: float = 60.0
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"
    log_message_max_chars: int = 800
    sentry_dsn: str | None = None
    cors_allowed_origins: tuple[str, ...] = tuple(DEFAULT_ALLOWED_ORIGINS)
    max_upload_bytes: int = 5 * 1024 * 1024  # 5 MiB
    min_resume_chars: int = 50


def load_settings() -> Settings:
    """Read the process environment (and .env) once into an immutable Settings."""
    load_dotenv()
    return Settings(
        groq_api_key=_get_env("GROQ_API_KEY"),
        llm_base_url=_get_env("LLM_BASE_URL", "https://api.groq.com/openai/v1") or "https://api.groq.com/openai/v1",
        llm_model=(_get_env("LLM_MODEL", "llama-3.3-70b-versatile") or "llama-3.3-70b-versatile").strip(),
        llm_temperature=_get_env_float("LLM_TEMPERATURE", 0.2),
        llm_max_tokens=_get_env_int("LLM_MAX_TOKENS", 800),
        llm_timeout_s=_get_env_float("LLM_TIMEOUT_S", 60.0),
        host=_get_env("HOST", "0.0.0.0") or "0.0.0.0",
        port=_get_env_int("PORT", 8000),
        log_level=(_get_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        log_message_max_chars=_get_env_int("LOG_MESSAGE_MAX_CHARS", 800),
        sentry_dsn=_get_env("SENTRY_DSN"),
        cors_allowed_origins=_get_env_list("CORS_ALLOWED_ORIGINS", DEFAULT_ALLOWED_ORIGINS),
        max_upload_bytes=_get_env_int("MAX_UPLOAD_BYTES", 5 * 1024 * 1024),
        min_resume_chars=_get_env_int("MIN_RESUME_CHARS", 50),
    )
