from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

LIST_FIELDS = ("strengths", "weaknesses", "missing_skills", "improvement_suggestions")


def coerce_string_list(value: Any) -> list[str]:
    """Accept a list of scalars and return trimmed, non-empty strings.

    ``None`` becomes an empty list. Anything else that is not a list, or a list
    holding nested objects or lists, is rejected.
    """
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("expected a list of strings")
    items: list[str] = []
    for element in value:
        if isinstance(element, (dict, list, tuple)):
            raise ValueError("list items must be plain strings")
        if element is None:
            continue
        text = str(element).strip()
        if text:
            items.append(text)
    return items


class AnalysisRequest(BaseModel):
    resumeText: str | None = None


class AnalysisResult(BaseModel):
    ats_score: int = Field(ge=0, le=100)
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    improvement_suggestions: list[str] = Field(default_factory=list)

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def _validate_lists(cls, value: Any) -> list[str]:
        return coerce_string_list(value)


class ReportRequest(BaseModel):
    ats_score: float | None = None
    strengths: list[str] = Field(default_factory=list)
    weaknesses: list[str] = Field(default_factory=list)
    missing_skills: list[str] = Field(default_factory=list)
    improvement_suggestions: list[str] = Field(default_factory=list)

    @field_validator(*LIST_FIELDS, mode="before")
    @classmethod
    def _validate_lists(cls, value: Any) -> list[str]:
        return coerce_string_list(value)

    def score_label(self) -> str:
        if self.ats_score is None:
            return ""
        if float(self.ats_score).is_integer():
            return str(int(self.ats_score))
        return f"{self.ats_score:g}"
