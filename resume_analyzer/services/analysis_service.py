from __future__ import annotations

import hashlib
import json
import logging
import time

from resume_analyzer.ai.types import AIClient
from resume_analyzer.core.config import Settings
from resume_analyzer.core.errors import RemoteServiceError, ValidationError
from resume_analyzer.normalize.model_reply import Err, normalize_model_reply
from resume_analyzer.schemas.analysis import AnalysisResult
from resume_analyzer.services.prompts import build_analysis_messages

logger = logging.getLogger(__name__)


def _short_hash(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8", errors="ignore")).hexdigest()[:12]


def ensure_resume_text(text: str | None, *, min_chars: int, message: str) -> str:
    if not text or len(text.strip()) < min_chars:
        raise ValidationError(message)
    return text


async def analyze_resume(resume_text: str, client: AIClient, settings: Settings, *, source: str = "text") -> AnalysisResult:
    """Send resume text to the model and return the normalized result.

    Raises RemoteServiceError when the completion call fails and
    MalformedModelOutput when the reply cannot be normalized.
    """
    started_at = time.perf_counter()
    messages = build_analysis_messages(resume_text)
    try:
        raw_reply = await client.complete(messages)
    except RemoteServiceError as exc:
        logger.error(
            json.dumps(
                {
                    "event": "analysis_remote_error",
                    "source": source,
                    "error": str(exc),
                    "duration_ms": int((time.perf_counter() - started_at) * 1000),
                }
            )
        )
        raise

    outcome = normalize_model_reply(raw_reply, max_log_chars=settings.log_message_max_chars)
    if isinstance(outcome, Err):
        raise outcome.error

    result = outcome.value
    logger.info(
        json.dumps(
            {
                "event": "analysis_complete",
                "source": source,
                "resume_len": len(resume_text),
                "resume_hash": _short_hash(resume_text),
                "ats_score": result.ats_score,
                "duration_ms": int((time.perf_counter() - started_at) * 1000),
            }
        )
    )
    return result
