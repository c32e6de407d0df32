import base64
import json
import unittest
from unittest.mock import patch

from pdfminer.pdfparser import PDFSyntaxError

from providers.exceptions import ProviderError
from service.db import InMemoryDbClient, MissionRecord
from service.tests.support import make_client

SAMPLE_TEXT = (
    "The Preamble of the Indian Constitution declares India a sovereign "
    "socialist secular democratic republic and secures justice liberty "
    "equality and fraternity for all of its citizens."
)


def _pdf_payload(**extra):
    payload = {
        "fileData": base64.b64encode(b"%PDF-1.4 fake").decode("ascii"),
        "fileName": "polity.pdf",
    }
    payload.update(extra)
    return payload


def _one_page_pdf(text: str) -> bytes:
    """A minimal single-page PDF drawing `text` in Helvetica."""
    stream = b"BT /F1 12 Tf 72 720 Td (" + text.encode("ascii") + b") Tj ET"
    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Contents 4 0 R /Resources << /Font << /F1 5 0 R >> >> >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    pdf = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(pdf))
        pdf += b"%d 0 obj\n" % number + body + b"\nendobj\n"
    xref_offset = len(pdf)
    pdf += b"xref\n0 %d\n0000000000 65535 f \n" % (len(objects) + 1)
    for offset in offsets:
        pdf += b"%010d 00000 n \n" % offset
    pdf += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        len(objects) + 1,
        xref_offset,
    )
    return bytes(pdf)


class OcrRouteTests(unittest.TestCase):
    def setUp(self):
        self.client = make_client(InMemoryDbClient(), google_vision_api_key="vision-key")

    @patch("content_pipeline.ocr.detect_text", return_value=SAMPLE_TEXT)
    def test_extracts_text_with_default_analysis(self, mock_detect):
        response = self.client.post(
            "/functions/v1/process-image-ocr",
            json={"imageData": "data:image/png;base64,aGVsbG8=", "imageType": "image/png"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["extractedText"], SAMPLE_TEXT)
        self.assertEqual(body["wordCount"], len(SAMPLE_TEXT.split()))
        self.assertEqual(body["contentAnalysis"]["subject"], "General Studies")
        self.assertEqual(len(body["processingSteps"]), 4)
        mock_detect.assert_called_once_with("aGVsbG8=", "vision-key")

    @patch("content_pipeline.ocr.detect_text", return_value=None)
    def test_no_text_detected(self, _mock_detect):
        response = self.client.post(
            "/functions/v1/process-image-ocr", json={"imageData": "aGVsbG8="}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "No text detected in image")

    @patch(
        "content_pipeline.ocr.detect_text",
        side_effect=ProviderError("Vision API error: Forbidden"),
    )
    def test_vision_failure(self, _mock_detect):
        response = self.client.post(
            "/functions/v1/process-image-ocr", json={"imageData": "aGVsbG8="}
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Vision API error: Forbidden"},
        )

    def test_missing_vision_key(self):
        client = make_client(InMemoryDbClient())
        response = client.post(
            "/functions/v1/process-image-ocr", json={"imageData": "aGVsbG8="}
        )
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "Google Vision API key not configured")

    @patch("content_pipeline.enrichment.call_claude")
    @patch("content_pipeline.ocr.detect_text", return_value=SAMPLE_TEXT)
    def test_claude_passes_are_used_when_configured(self, _mock_detect, mock_claude):
        mock_claude.side_effect = [
            "Cleaned: " + SAMPLE_TEXT,
            'Sure! {"contentType": "notes", "subject": "Polity"}',
        ]
        client = make_client(
            InMemoryDbClient(), google_vision_api_key="vision-key", claude_api_key="c-key"
        )
        body = client.post(
            "/functions/v1/process-image-ocr", json={"imageData": "aGVsbG8="}
        ).json()

        self.assertTrue(body["extractedText"].startswith("Cleaned: "))
        self.assertEqual(body["contentAnalysis"]["subject"], "Polity")
        self.assertEqual(body["contentAnalysis"]["contentType"], "notes")
        self.assertEqual(body["contentAnalysis"]["confidence"], 0.7)


class PdfRouteTests(unittest.TestCase):
    def setUp(self):
        self.client = make_client(InMemoryDbClient())

    @patch("content_pipeline.pdf.extract_text", return_value="  word\n" * 300)
    def test_local_extraction(self, mock_extract):
        response = self.client.post(
            "/functions/v1/process-pdf", json=_pdf_payload(maxPages=3)
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertEqual(body["fileName"], "polity.pdf")
        self.assertEqual(body["statistics"]["wordCount"], 300)
        self.assertEqual(body["statistics"]["estimatedPages"], 2)
        self.assertEqual(body["statistics"]["estimatedReadingTime"], "2 min")
        self.assertEqual(len(body["processingSteps"]), 5)
        self.assertEqual(list(mock_extract.call_args.kwargs["page_numbers"]), [0, 1, 2])

    @patch("content_pipeline.pdf.extract_text", return_value="too short")
    def test_too_little_text(self, _mock_extract):
        response = self.client.post("/functions/v1/process-pdf", json=_pdf_payload())
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json()["error"], "Unable to extract meaningful text from PDF"
        )

    @patch("content_pipeline.pdf.extract_text", side_effect=PDFSyntaxError("No /Root object!"))
    def test_unparseable_pdf(self, _mock_extract):
        response = self.client.post("/functions/v1/process-pdf", json=_pdf_payload())
        self.assertEqual(response.status_code, 400)

    def test_real_pdf_is_extracted(self):
        sentence = "Article 21 protects the right to life and personal liberty of every person"
        response = self.client.post(
            "/functions/v1/process-pdf",
            json={
                "fileData": base64.b64encode(_one_page_pdf(sentence)).decode("ascii"),
                "fileName": "article21.pdf",
            },
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["success"])
        self.assertIn("personal liberty", body["extractedText"])
        self.assertEqual(
            body["statistics"]["wordCount"], len(body["extractedText"].split())
        )
        self.assertEqual(body["statistics"]["wordCount"], len(sentence.split()))

    def test_truncated_pdf(self):
        truncated = b"%PDF-1.4\n1 0 obj\n<< /Type /Catalog"
        response = self.client.post(
            "/functions/v1/process-pdf",
            json={"fileData": base64.b64encode(truncated).decode("ascii")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"success": False, "error": "Unable to extract meaningful text from PDF"},
        )

    def test_missing_file_data(self):
        response = self.client.post("/functions/v1/process-pdf", json={"fileName": "x.pdf"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "PDF file data is required")

    def test_invalid_base64(self):
        response = self.client.post(
            "/functions/v1/process-pdf", json={"fileData": "not base64!!"}
        )
        self.assertEqual(response.status_code, 400)

    def test_non_positive_max_pages(self):
        response = self.client.post("/functions/v1/process-pdf", json=_pdf_payload(maxPages=0))
        self.assertEqual(response.status_code, 400)

    @patch("content_pipeline.pdf.extract_text")
    @patch("content_pipeline.pdf.convert_to_text", return_value=SAMPLE_TEXT)
    def test_pdf_co_is_preferred_when_configured(self, mock_convert, mock_extract):
        client = make_client(InMemoryDbClient(), pdf_co_api_key="pdf-key")
        body = client.post("/functions/v1/process-pdf", json=_pdf_payload()).json()

        self.assertEqual(body["extractedText"], SAMPLE_TEXT)
        mock_extract.assert_not_called()
        self.assertEqual(mock_convert.call_args.args[1:], (10, "pdf-key"))

    @patch("content_pipeline.pdf.extract_text", return_value=SAMPLE_TEXT)
    @patch("content_pipeline.pdf.convert_to_text", side_effect=ProviderError("PDF.co down"))
    def test_pdf_co_failure_falls_back_to_local(self, _mock_convert, _mock_extract):
        client = make_client(InMemoryDbClient(), pdf_co_api_key="pdf-key")
        response = client.post("/functions/v1/process-pdf", json=_pdf_payload())
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["extractedText"], SAMPLE_TEXT)


METADATA = {
    "title": "Indian Polity in 10 minutes",
    "description": "Fundamental rights explained",
    "duration": "PT10M5S",
    "channelTitle": "Study Channel",
    "publishedAt": "2024-05-01T00:00:00Z",
    "viewCount": 1200,
    "thumbnail": "",
    "tags": ["polity", "upsc", "constitution", "rights", "india", "exam"],
}


class YoutubeRouteTests(unittest.TestCase):
    @patch("content_pipeline.youtube.fetch_transcript", return_value=(SAMPLE_TEXT, "api"))
    @patch("content_pipeline.youtube.fetch_video_metadata", return_value=dict(METADATA))
    def test_process_youtube(self, _mock_meta, mock_transcript):
        client = make_client(InMemoryDbClient(), youtube_api_key="yt-key")
        response = client.post(
            "/functions/v1/process-youtube",
            json={"url": "https://youtu.be/dQw4w9WgXcQ"},
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["transcriptMethod"], "api")
        self.assertEqual(body["videoMetadata"]["videoId"], "dQw4w9WgXcQ")
        self.assertEqual(body["videoMetadata"]["duration"], "10:05")
        self.assertNotIn("tags", body["videoMetadata"])
        self.assertEqual(body["statistics"]["videoDuration"], "10:05")
        mock_transcript.assert_called_once_with("dQw4w9WgXcQ", "en")

    @patch("content_pipeline.youtube.fetch_transcript", return_value=("", "none"))
    def test_no_transcript_and_no_description(self, _mock_transcript):
        client = make_client(InMemoryDbClient())
        response = client.post(
            "/functions/v1/process-youtube",
            json={"url": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertIn("Unable to extract content", response.json()["error"])

    @patch("content_pipeline.youtube.call_claude", return_value=SAMPLE_TEXT)
    @patch("content_pipeline.youtube.fetch_transcript", return_value=("", "none"))
    @patch("content_pipeline.youtube.fetch_video_metadata", return_value=dict(METADATA))
    def test_description_fallback(self, _mock_meta, _mock_transcript, _mock_claude):
        client = make_client(
            InMemoryDbClient(), youtube_api_key="yt-key", claude_api_key="c-key"
        )
        with patch("content_pipeline.enrichment.call_claude", side_effect=ProviderError("busy")):
            body = client.post(
                "/functions/v1/process-youtube",
                json={"url": "https://youtu.be/dQw4w9WgXcQ"},
            ).json()
        self.assertEqual(body["transcriptMethod"], "ai-generated")
        self.assertEqual(body["extractedText"], SAMPLE_TEXT)

    def test_invalid_url(self):
        client = make_client(InMemoryDbClient())
        response = client.post(
            "/functions/v1/process-youtube", json={"url": "https://vimeo.com/1"}
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Invalid YouTube URL format")

    @patch("content_pipeline.youtube.fetch_transcript", return_value=("", "none"))
    @patch("content_pipeline.youtube.fetch_video_metadata", return_value=dict(METADATA))
    def test_extract_youtube(self, _mock_meta, _mock_transcript):
        client = make_client(InMemoryDbClient(), youtube_api_key="yt-key")
        response = client.post(
            "/functions/v1/extract-youtube", json={"videoId": "dQw4w9WgXcQ"}
        )
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["duration"], "10:05")
        self.assertEqual(body["topics"], METADATA["tags"][:5])
        self.assertEqual(
            body["thumbnail"], "https://img.youtube.com/vi/dQw4w9WgXcQ/hqdefault.jpg"
        )

    @patch("content_pipeline.youtube.fetch_video_metadata", return_value=None)
    def test_extract_youtube_unknown_video(self, _mock_meta):
        client = make_client(InMemoryDbClient(), youtube_api_key="yt-key")
        response = client.post(
            "/functions/v1/extract-youtube", json={"url": "https://youtu.be/missing1234"}
        )
        self.assertEqual(response.status_code, 404)

    def test_extract_youtube_requires_input(self):
        client = make_client(InMemoryDbClient(), youtube_api_key="yt-key")
        response = client.post("/functions/v1/extract-youtube", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Video ID or URL is required")


class MissionRouteTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.client = make_client(self.db, openai_api_key="o-key")

    def _create_mission(self):
        response = self.client.post(
            "/functions/v1/missions",
            json={
                "title": "Fundamental Rights",
                "contentText": SAMPLE_TEXT,
                "subjectName": "Polity",
            },
            headers={"X-User-Id": "user-1"},
        )
        self.assertEqual(response.status_code, 201)
        return response.json()

    def test_create_and_fetch_mission(self):
        mission = self._create_mission()
        self.assertEqual(mission["status"], "pending")
        self.assertEqual(mission["user_id"], "user-1")

        fetched = self.client.get(f"/functions/v1/missions/{mission['id']}")
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(fetched.json()["title"], "Fundamental Rights")

    def test_create_requires_title_and_text(self):
        response = self.client.post("/functions/v1/missions", json={"title": "Only title"})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Title and content text are required"})

    def test_unknown_mission(self):
        response = self.client.get("/functions/v1/missions/nope")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"error": "Mission not found"})

    @patch("content_pipeline.missions.call_chat")
    def test_analyze_content_completes_mission(self, mock_chat):
        mock_chat.return_value = json.dumps(
            {
                "overview": "Rights every citizen holds.",
                "keyConcepts": ["Article 14"],
                "quiz": {"questions": [{"question": "Q?"}]},
            }
        )
        mission = self._create_mission()

        response = self.client.post(
            "/functions/v1/analyze-content", json={"contentId": mission["id"]}
        )
        self.assertEqual(response.status_code, 200)
        content = response.json()
        self.assertEqual(content["overview"], "Rights every citizen holds.")
        self.assertEqual(content["keyConcepts"], ["Article 14"])
        self.assertEqual(content["estimatedTime"], 1)
        self.assertEqual(content["difficulty"], "medium")

        stored = self.db.get_mission(mission["id"])
        self.assertEqual(stored.status, "completed")
        self.assertEqual(stored.ai_generated_content, content)

    @patch("content_pipeline.missions.call_chat", side_effect=ProviderError("OpenAI API error: 429"))
    def test_analyze_content_failure_leaves_mission_pending(self, _mock_chat):
        mission = self._create_mission()

        response = self.client.post(
            "/functions/v1/analyze-content", json={"contentId": mission["id"]}
        )
        self.assertEqual(response.status_code, 500)
        self.assertFalse(response.json()["success"])

        stored = self.db.get_mission(mission["id"])
        self.assertEqual(stored.status, "pending")
        self.assertIsNone(stored.ai_generated_content)

    @patch("content_pipeline.missions.call_chat")
    def test_analyze_content_unusable_reply_leaves_mission_pending(self, mock_chat):
        mission = self._create_mission()

        for reply in ("Sorry, I cannot do that.", json.dumps(["overview"])):
            mock_chat.return_value = reply
            response = self.client.post(
                "/functions/v1/analyze-content", json={"contentId": mission["id"]}
            )
            self.assertEqual(response.status_code, 500)
            self.assertFalse(response.json()["success"])

            stored = self.db.get_mission(mission["id"])
            self.assertEqual(stored.status, "pending")
            self.assertIsNone(stored.ai_generated_content)

    def test_analyze_content_unknown_mission(self):
        response = self.client.post(
            "/functions/v1/analyze-content", json={"contentId": "missing"}
        )
        self.assertEqual(response.status_code, 404)

    def test_analyze_content_requires_openai_key(self):
        db = InMemoryDbClient()
        mission = db.create_mission(MissionRecord(user_id="u", title="t", content_text="c"))
        client = make_client(db)
        response = client.post("/functions/v1/analyze-content", json={"contentId": mission.id})
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["error"], "OpenAI API key not configured")


if __name__ == "__main__":
    unittest.main()
