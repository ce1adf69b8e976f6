from __future__ import annotations

from resume_analyzer.core.config import Settings


def cors_allowed_origins(settings: Settings) -> list[str]:
    return list(settings.cors_allowed_origins)
