import sys
import unittest
from pathlib import Path
from unittest.mock import patch

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from fastapi.testclient import TestClient  # noqa: E402

from resume_analyzer.api.deps import get_ai_client  # noqa: E402
from resume_analyzer.core.config import Settings  # noqa: E402
from resume_analyzer.core.errors import ExtractionError, RemoteServiceError  # noqa: E402
from resume_analyzer.main import create_app  # noqa: E402
from tests.helpers import GOOD_REPLY, RESUME_TEXT, FakeAIClient, make_pdf  # noqa: E402


class AnalysisApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app(Settings(groq_api_key="test-key"))
        self.fake = FakeAIClient()
        self.app.dependency_overrides[get_ai_client] = lambda: self.fake
        self.client = TestClient(self.app)

    def test_banner_and_health(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn("AI Resume Analyzer Backend Running", response.text)
        self.assertEqual(self.client.get("/health").json(), {"status": "healthy"})

    def test_analyze_returns_normalized_result(self):
        self.fake.reply = f"```json\n{GOOD_REPLY}\n```"
        response = self.client.post("/analyze", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["ats_score"], 85)
        self.assertEqual(body["strengths"], ["Quantified impact"])
        self.assertEqual(body["weaknesses"], [])
        self.assertEqual(body["missing_skills"], ["Kubernetes"])

    def test_analyze_sends_resume_verbatim(self):
        self.client.post("/analyze", json={"resumeText": RESUME_TEXT})
        self.assertEqual(len(self.fake.calls), 1)
        system, user = self.fake.calls[0]
        self.assertEqual(system.role, "system")
        self.assertIn('"ats_score"', system.content)
        self.assertEqual(user.role, "user")
        self.assertTrue(user.content.endswith(RESUME_TEXT))

    def test_short_text_is_rejected_without_remote_call(self):
        padded = "   " + "x" * 49 + "   "
        response = self.client.post("/analyze", json={"resumeText": padded})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Resume text is too short"})
        self.assertEqual(self.fake.calls, [])

    def test_missing_text_is_rejected(self):
        response = self.client.post("/analyze", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.fake.calls, [])

    def test_invalid_body_is_rejected(self):
        response = self.client.post(
            "/analyze", content=b"not json", headers={"Content-Type": "application/json"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid request body"})

    def test_remote_failure_is_generic_500(self):
        self.fake.error = RemoteServiceError("upstream said: 401 invalid api key sk-secret")
        response = self.client.post("/analyze", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "AI analysis failed"})
        self.assertNotIn("sk-secret", response.text)

    def test_oversized_score_is_generic_500(self):
        self.fake.reply = '{"ats_score": 1' + "0" * 400 + "}"
        response = self.client.post("/analyze", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "AI analysis failed"})

    def test_malformed_reply_is_generic_500(self):
        self.fake.reply = "I cannot evaluate this resume."
        response = self.client.post("/analyze", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "AI analysis failed"})

    def test_missing_api_key_fails_at_call_time(self):
        app = create_app(Settings(groq_api_key=None))
        client = TestClient(app)
        short = client.post("/analyze", json={"resumeText": "too short"})
        self.assertEqual(short.status_code, 400)
        response = client.post("/analyze", json={"resumeText": RESUME_TEXT})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "AI analysis failed"})

    def test_cors_allows_listed_origin_only(self):
        allowed = self.client.options(
            "/analyze",
            headers={"Origin": "http://localhost:3000", "Access-Control-Request-Method": "POST"},
        )
        self.assertEqual(allowed.headers.get("access-control-allow-origin"), "http://localhost:3000")
        blocked = self.client.options(
            "/analyze",
            headers={"Origin": "https://evil.example", "Access-Control-Request-Method": "POST"},
        )
        self.assertIsNone(blocked.headers.get("access-control-allow-origin"))


class AnalyzePdfApiTests(unittest.TestCase):
    def setUp(self):
        self.app = create_app(Settings(groq_api_key="test-key", max_upload_bytes=64 * 1024))
        self.fake = FakeAIClient()
        self.app.dependency_overrides[get_ai_client] = lambda: self.fake
        self.client = TestClient(self.app)

    def _upload(self, content: bytes, filename: str = "resume.pdf"):
        return self.client.post(
            "/analyze-pdf",
            files={"resume": (filename, content, "application/pdf")},
        )

    def test_pdf_upload_is_analyzed(self):
        pdf = make_pdf(RESUME_TEXT.splitlines())
        response = self._upload(pdf)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["ats_score"], 85)
        self.assertIn("Senior Backend Engineer", self.fake.calls[0][1].content)

    def test_missing_file_skips_extraction(self):
        with patch("resume_analyzer.api.analysis.parse_pdf_bytes") as parse_mock:
            response = self.client.post("/analyze-pdf")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "PDF file is required"})
        parse_mock.assert_not_called()

    def test_non_pdf_payload_is_rejected(self):
        response = self._upload(b"plain text pretending to be a pdf", filename="resume.pdf")
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Uploaded file is not a PDF"})

    def test_oversized_upload_is_rejected(self):
        response = self._upload(b"%PDF-1.4\n" + b"0" * (70 * 1024))
        self.assertEqual(response.status_code, 413)
        self.assertEqual(self.fake.calls, [])

    def test_too_little_text_is_rejected(self):
        response = self._upload(make_pdf(["Jane Doe"]))
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Could not extract enough text"})
        self.assertEqual(self.fake.calls, [])

    def test_reader_crash_is_reported_as_pdf_failure(self):
        with patch("resume_analyzer.parsing.parse.PdfReader", side_effect=KeyError("/Root")):
            response = self._upload(make_pdf(RESUME_TEXT.splitlines()))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "PDF analysis failed"})
        self.assertEqual(self.fake.calls, [])

    def test_oversized_score_is_reported_as_pdf_failure(self):
        self.fake.reply = '{"ats_score": 1' + "0" * 400 + "}"
        response = self._upload(make_pdf(RESUME_TEXT.splitlines()))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "PDF analysis failed"})

    def test_extraction_failure_is_500(self):
        with patch(
            "resume_analyzer.api.analysis.parse_pdf_bytes",
            side_effect=ExtractionError("PDF parsing failed: EOF marker not found"),
        ):
            response = self._upload(b"%PDF-1.4\nthis is not really a pdf body")
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "PDF analysis failed"})

    def test_ai_failure_reports_pdf_analysis_failed(self):
        self.fake.error = RemoteServiceError("timeout")
        response = self._upload(make_pdf(RESUME_TEXT.splitlines()))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"error": "PDF analysis failed"})


class DownloadReportApiTests(unittest.TestCase):
    def setUp(self):
        self.client = TestClient(create_app(Settings(groq_api_key="test-key")))

    def test_report_is_streamed_as_pdf(self):
        response = self.client.post(
            "/download-report",
            json={"ats_score": 72, "strengths": ["Clear layout"]},
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], "application/pdf")
        self.assertEqual(
            response.headers["content-disposition"],
            "attachment; filename=resume-analysis-report.pdf",
        )
        self.assertTrue(response.content.startswith(b"%PDF-"))

    def test_zero_score_is_a_valid_report(self):
        response = self.client.post("/download-report", json={"ats_score": 0})
        self.assertEqual(response.status_code, 200)

    def test_missing_score_is_rejected(self):
        response = self.client.post("/download-report", json={"strengths": ["x"]})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid report data"})


if __name__ == "__main__":
    unittest.main()
