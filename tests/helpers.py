from __future__ import annotations

import io
from typing import Sequence

from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from resume_analyzer.ai.types import ChatMessage

RESUME_TEXT = (
    "Jane Doe\n"
    "Senior Backend Engineer\n"
    "- Built Python microservices for payments used by 1.2M users.\n"
    "- Reduced API latency by 38% with PostgreSQL query tuning.\n"
    "Skills: Python, FastAPI, Docker, AWS\n"
)

GOOD_REPLY = (
    '{"ats_score": 85, "strengths": ["Quantified impact"], "weaknesses": [], '
    '"missing_skills": ["Kubernetes"], "improvement_suggestions": ["Add a summary"]}'
)


class FakeAIClient:
    def __init__(self, reply: str = GOOD_REPLY, error: Exception | None = None):
        self.reply = reply
        self.error = error
        self.calls: list[list[ChatMessage]] = []

    async def complete(self, messages: Sequence[ChatMessage]) -> str:
        self.calls.append(list(messages))
        if self.error is not None:
            raise self.error
        return self.reply


def make_pdf(lines: list[str]) -> bytes:
    buffer = io.BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=letter)
    y = 720
    for line in lines:
        pdf.drawString(72, y, line)
        y -= 16
    pdf.showPage()
    pdf.save()
    return buffer.getvalue()
