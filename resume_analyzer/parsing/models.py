from __future__ import annotations

from pydantic import BaseModel, Field


class ParsedBlock(BaseModel):
    page: int | None = None
    text: str


class ParsedDoc(BaseModel):
    doc_id: str
    source_type: str = "pdf"
    text: str
    page_count: int = 0
    blocks: list[ParsedBlock] = Field(default_factory=list)
    parsing_warnings: list[str] = Field(default_factory=list)
