"""PDF rendering of an analysis result.

Layout: centered title, score line, then one underlined section per list
field with a bullet line per item. Sections without items keep their heading.
"""
from __future__ import annotations

import io
from typing import Iterator
from xml.sax.saxutils import escape

from reportlab.lib.enums import TA_CENTER, TA_LEFT
from reportlab.lib.pagesizes import letter
from reportlab.lib.styles import ParagraphStyle
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer

from resume_analyzer.schemas.analysis import ReportRequest

REPORT_TITLE = "AI Resume Analysis Report"
REPORT_FILENAME = "resume-analysis-report.pdf"

SECTIONS = (
    ("Strengths", "strengths"),
    ("Weaknesses", "weaknesses"),
    ("Missing Skills", "missing_skills"),
    ("Improvement Suggestions", "improvement_suggestions"),
)

# 50pt margins, 12pt line spacing.
_MARGIN = 50
_LINE = 12

_STYLES = {
    "Title": ParagraphStyle(
        name="Title",
        fontName="Helvetica",
        fontSize=22,
        leading=26,
        alignment=TA_CENTER,
    ),
    "Score": ParagraphStyle(
        name="Score",
        fontName="Helvetica",
        fontSize=16,
        leading=20,
        alignment=TA_LEFT,
    ),
    "SectionTitle": ParagraphStyle(
        name="SectionTitle",
        fontName="Helvetica",
        fontSize=14,
        leading=17,
        alignment=TA_LEFT,
    ),
    "Bullet": ParagraphStyle(
        name="Bullet",
        fontName="Helvetica",
        fontSize=12,
        leading=15,
        alignment=TA_LEFT,
    ),
}


def _build_flowables(report: ReportRequest) -> list:
    flowables = [
        Paragraph(escape(REPORT_TITLE), _STYLES["Title"]),
        Spacer(1, _LINE),
        Paragraph(f"ATS Score: {escape(report.score_label())} / 100", _STYLES["Score"]),
        Spacer(1, _LINE),
    ]
    for title, field_name in SECTIONS:
        flowables.append(Paragraph(f"<u>{escape(title)}</u>", _STYLES["SectionTitle"]))
        flowables.append(Spacer(1, _LINE / 2))
        for item in getattr(report, field_name):
            flowables.append(Paragraph(f"• {escape(item)}", _STYLES["Bullet"]))
        flowables.append(Spacer(1, _LINE))
    return flowables


def render_analysis_report(report: ReportRequest) -> bytes:
    buffer = io.BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=letter,
        leftMargin=_MARGIN,
        rightMargin=_MARGIN,
        topMargin=_MARGIN,
        bottomMargin=_MARGIN,
        title=REPORT_TITLE,
    )
    doc.build(_build_flowables(report))
    return buffer.getvalue()


def iter_pdf_chunks(content: bytes, chunk_size: int = 64 * 1024) -> Iterator[bytes]:
    for start in range(0, len(content), chunk_size):
        yield content[start : start + chunk_size]
