import unittest
from unittest.mock import MagicMock, patch

import requests

from providers import google_vision, pdf_co, youtube_data
from providers.exceptions import ProviderError, ProviderInvalidResponseError


def _response(ok=True, status_code=200, payload=None, reason="OK"):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.reason = reason
    response.json.return_value = payload if payload is not None else {}
    return response


class GoogleVisionTest(unittest.TestCase):

    @patch("providers.google_vision.requests.post")
    def test_returns_first_annotation(self, mock_post):
        mock_post.return_value = _response(
            payload={"responses": [{"textAnnotations": [{"description": "Article 21"}]}]}
        )
        self.assertEqual(google_vision.detect_text("aGVsbG8=", "key"), "Article 21")
        self.assertEqual(mock_post.call_args.kwargs["params"], {"key": "key"})

    @patch("providers.google_vision.requests.post")
    def test_no_text(self, mock_post):
        mock_post.return_value = _response(payload={"responses": [{}]})
        self.assertIsNone(google_vision.detect_text("aGVsbG8=", "key"))

    @patch("providers.google_vision.requests.post")
    def test_error_status(self, mock_post):
        mock_post.return_value = _response(ok=False, status_code=403, reason="Forbidden")
        with self.assertRaisesRegex(ProviderError, "Vision API error: Forbidden"):
            google_vision.detect_text("aGVsbG8=", "key")

    @patch("providers.google_vision.requests.post")
    def test_transport_error(self, mock_post):
        mock_post.side_effect = requests.ConnectionError("refused")
        with self.assertRaises(ProviderError):
            google_vision.detect_text("aGVsbG8=", "key")

    @patch("providers.google_vision.requests.post")
    def test_unexpected_payload_shapes(self, mock_post):
        mock_post.return_value = _response(payload=["not", "an", "object"])
        with self.assertRaises(ProviderInvalidResponseError):
            google_vision.detect_text("aGVsbG8=", "key")

        mock_post.return_value = _response(payload={"responses": {"textAnnotations": []}})
        self.assertIsNone(google_vision.detect_text("aGVsbG8=", "key"))


class PdfCoTest(unittest.TestCase):

    @patch("providers.pdf_co.requests.post")
    def test_requests_page_range(self, mock_post):
        mock_post.return_value = _response(payload={"body": "Chapter 1"})
        self.assertEqual(pdf_co.convert_to_text("JVBERi0=", 3, "key"), "Chapter 1")
        self.assertEqual(mock_post.call_args.kwargs["json"]["pages"], "1-3")

    @patch("providers.pdf_co.requests.post")
    def test_empty_body(self, mock_post):
        mock_post.return_value = _response(payload={"body": ""})
        with self.assertRaises(ProviderInvalidResponseError):
            pdf_co.convert_to_text("JVBERi0=", 3, "key")

    @patch("providers.pdf_co.requests.post")
    def test_array_payload(self, mock_post):
        mock_post.return_value = _response(payload=[{"body": "Chapter 1"}])
        with self.assertRaises(ProviderInvalidResponseError):
            pdf_co.convert_to_text("JVBERi0=", 3, "key")


class YoutubeDataTest(unittest.TestCase):

    @patch("providers.youtube_data.requests.get")
    def test_metadata_is_flattened(self, mock_get):
        mock_get.return_value = _response(
            payload={
                "items": [
                    {
                        "snippet": {
                            "title": "Polity",
                            "description": "Rights",
                            "channelTitle": "Study",
                            "publishedAt": "2024-05-01T00:00:00Z",
                            "thumbnails": {"high": {"url": "https://img/high.jpg"}},
                            "tags": ["upsc"],
                        },
                        "contentDetails": {"duration": "PT4M13S"},
                        "statistics": {"viewCount": "42"},
                    }
                ]
            }
        )
        metadata = youtube_data.fetch_video_metadata("abc", "key")
        self.assertEqual(metadata["viewCount"], 42)
        self.assertEqual(metadata["thumbnail"], "https://img/high.jpg")
        self.assertEqual(metadata["duration"], "PT4M13S")
        self.assertEqual(metadata["tags"], ["upsc"])

    @patch("providers.youtube_data.requests.get")
    def test_unknown_video(self, mock_get):
        mock_get.return_value = _response(payload={"items": []})
        self.assertIsNone(youtube_data.fetch_video_metadata("abc", "key"))

    @patch("providers.youtube_data.requests.get")
    def test_transcript_falls_through_to_alternative(self, mock_get):
        mock_get.side_effect = [
            requests.Timeout("slow"),
            _response(payload={"text": " lecture text "}),
        ]
        self.assertEqual(
            youtube_data.fetch_transcript("abc"), ("lecture text", "alternative")
        )

    @patch("providers.youtube_data.requests.get")
    def test_transcript_array_payload_falls_through(self, mock_get):
        mock_get.side_effect = [
            _response(payload=[{"text": "caption"}]),
            _response(payload={"text": "lecture text"}),
        ]
        self.assertEqual(
            youtube_data.fetch_transcript("abc"), ("lecture text", "alternative")
        )

    @patch("providers.youtube_data.requests.get")
    def test_transcript_segments_are_joined(self, mock_get):
        mock_get.return_value = _response(
            payload={"transcript": [{"text": "Part one"}, {"start": 3}, {"text": "part two"}]}
        )
        self.assertEqual(
            youtube_data.fetch_transcript("abc"), ("Part one part two", "api")
        )

    @patch("providers.youtube_data.requests.get")
    def test_no_transcript(self, mock_get):
        mock_get.return_value = _response(ok=False, status_code=404)
        self.assertEqual(youtube_data.fetch_transcript("abc"), ("", "none"))


if __name__ == "__main__":
    unittest.main()
