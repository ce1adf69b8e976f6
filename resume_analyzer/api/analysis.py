import asyncio
import logging

from fastapi import APIRouter, Depends, File, UploadFile
from fastapi.responses import StreamingResponse

from resume_analyzer.ai.types import AIClient
from resume_analyzer.api.deps import get_ai_client, get_settings
from resume_analyzer.core.config import Settings
from resume_analyzer.core.errors import (
    AnalyzerError,
    MalformedModelOutput,
    RemoteServiceError,
    UploadTooLargeError,
    ValidationError,
)
from resume_analyzer.parsing.parse import is_pdf_payload, parse_pdf_bytes
from resume_analyzer.reports.pdf_report import REPORT_FILENAME, iter_pdf_chunks, render_analysis_report
from resume_analyzer.schemas.analysis import AnalysisRequest, AnalysisResult, ReportRequest
from resume_analyzer.services.analysis_service import analyze_resume, ensure_resume_text

router = APIRouter()
logger = logging.getLogger(__name__)

_READ_CHUNK_BYTES = 1024 * 64


async def _read_upload(file: UploadFile, max_bytes: int) -> bytes:
    chunks: list[bytes] = []
    total = 0
    while True:
        chunk = await file.read(_READ_CHUNK_BYTES)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise UploadTooLargeError(
                f"File too large. Maximum allowed size is {max_bytes // (1024 * 1024)} MB."
            )
        chunks.append(chunk)
    return b"".join(chunks)


@router.post("/analyze", response_model=AnalysisResult)
async def analyze_text(
    payload: AnalysisRequest,
    settings: Settings = Depends(get_settings),
    client: AIClient = Depends(get_ai_client),
):
    resume_text = ensure_resume_text(
        payload.resumeText,
        min_chars=settings.min_resume_chars,
        message="Resume text is too short",
    )
    return await analyze_resume(resume_text, client, settings, source="text")


@router.post("/analyze-pdf", response_model=AnalysisResult)
async def analyze_pdf(
    resume: UploadFile | None = File(default=None),
    settings: Settings = Depends(get_settings),
    client: AIClient = Depends(get_ai_client),
):
    if resume is None:
        raise ValidationError("PDF file is required")

    content = await _read_upload(resume, settings.max_upload_bytes)
    if not content:
        raise ValidationError("PDF file is required")
    if not is_pdf_payload(content):
        raise ValidationError("Uploaded file is not a PDF")

    parsed = await asyncio.to_thread(parse_pdf_bytes, content)
    resume_text = ensure_resume_text(
        parsed.text,
        min_chars=settings.min_resume_chars,
        message="Could not extract enough text",
    )
    try:
        return await analyze_resume(resume_text, client, settings, source="pdf")
    except (RemoteServiceError, MalformedModelOutput) as exc:
        raise AnalyzerError(str(exc), public_message="PDF analysis failed") from exc


@router.post("/download-report")
def download_report(payload: ReportRequest):
    if payload.ats_score is None:
        raise ValidationError("Invalid report data")

    content = render_analysis_report(payload)
    return StreamingResponse(
        iter_pdf_chunks(content),
        media_type="application/pdf",
        headers={"Content-Disposition": f"attachment; filename={REPORT_FILENAME}"},
    )
