from __future__ import annotations

import hashlib
from io import BytesIO

from pypdf import PdfReader

from resume_analyzer.core.errors import ExtractionError

from .models import ParsedBlock, ParsedDoc

PDF_MAGIC = b"%PDF-"


def is_pdf_payload(content: bytes) -> bool:
    # Some generators emit a few junk bytes before the header.
    return PDF_MAGIC in content[:1024]


def _compute_doc_id(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()[:16]


def parse_pdf_bytes(content: bytes) -> ParsedDoc:
    """Extract plain text from an in-memory PDF, one block per non-empty page."""
    warnings: list[str] = []
    blocks: list[ParsedBlock] = []

    try:
        reader = PdfReader(BytesIO(content))
        text_parts: list[str] = []
        for index, page in enumerate(reader.pages, start=1):
            page_text = (page.extract_text() or "").strip()
            if page_text:
                text_parts.append(page_text)
                blocks.append(ParsedBlock(page=index, text=page_text))
        page_count = len(reader.pages)
    except Exception as exc:  # noqa: BLE001 - pypdf raises many types on malformed files
        raise ExtractionError(f"PDF parsing failed: {exc}") from exc

    if not text_parts:
        warnings.append("No extractable text found in PDF.")
    return ParsedDoc(
        doc_id=_compute_doc_id(content),
        text="\n".join(text_parts),
        page_count=page_count,
        blocks=blocks,
        parsing_warnings=warnings,
    )
