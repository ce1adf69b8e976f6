from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from resume_analyzer.core.errors import MalformedModelOutput
from resume_analyzer.schemas.analysis import AnalysisResult

logger = logging.getLogger(__name__)

_FENCE_MARKERS = ("```json", "```")


@dataclass(frozen=True)
class Ok:
    value: AnalysisResult


@dataclass(frozen=True)
class Err:
    error: MalformedModelOutput


NormalizeResult = Ok | Err


def strip_code_fences(raw: str) -> str:
    cleaned = raw or ""
    for marker in _FENCE_MARKERS:
        cleaned = cleaned.replace(marker, "")
    return cleaned.strip()


def _coerce_score(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("ats_score must be a number, not a boolean")
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError as exc:
            raise ValueError("ats_score is too large") from exc
    elif isinstance(value, str):
        number = float(value.strip())
    else:
        raise ValueError(f"ats_score has unsupported type {type(value).__name__}")
    if not math.isfinite(number):
        raise ValueError("ats_score must be finite")
    return number


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def normalize_score(value: Any) -> int:
    """Map a model score onto an integer percentage in [0, 100].

    Scores at or below 1 are read as fractions, so 1 itself means 100.
    """
    number = _coerce_score(value)
    if number <= 1:
        number = number * 100
    return min(100, max(0, _round_half_up(number)))


def _failure(message: str, raw: str, max_log_chars: int) -> Err:
    logger.warning(
        json.dumps(
            {
                "event": "model_reply_malformed",
                "error": message,
                "raw_len": len(raw or ""),
                "raw": (raw or "")[:max_log_chars],
            },
            ensure_ascii=False,
        )
    )
    return Err(MalformedModelOutput(message, raw_reply=raw or ""))


def normalize_model_reply(raw: str, *, max_log_chars: int = 800) -> NormalizeResult:
    cleaned = strip_code_fences(raw)
    try:
        payload = json.loads(cleaned)
    except (ValueError, TypeError) as exc:
        return _failure(f"AI returned invalid JSON: {exc}", raw, max_log_chars)

    if not isinstance(payload, dict):
        return _failure("AI reply is not a JSON object", raw, max_log_chars)
    if "ats_score" not in payload:
        return _failure("AI reply has no ats_score", raw, max_log_chars)

    try:
        score = normalize_score(payload["ats_score"])
    except ValueError as exc:
        return _failure(f"AI reply has an invalid ats_score: {exc}", raw, max_log_chars)

    try:
        result = AnalysisResult.model_validate({**payload, "ats_score": score})
    except PydanticValidationError as exc:
        return _failure(
            f"AI reply does not match the analysis schema: {exc.error_count()} error(s)",
            raw,
            max_log_chars,
        )
    return Ok(result)
