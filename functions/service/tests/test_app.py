import unittest

from service.db import InMemoryDbClient
from service.tests.support import make_client


class AppTests(unittest.TestCase):
    def setUp(self):
        self.db = InMemoryDbClient()
        self.client = make_client(self.db)

    def test_cors_preflight(self):
        response = self.client.options(
            "/functions/v1/process-image-ocr",
            headers={
                "Origin": "https://app.mindgains.example",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "authorization, content-type",
            },
        )
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["access-control-allow-origin"], "*")
        self.assertIn("POST", response.headers["access-control-allow-methods"])

    def test_unknown_action_is_rejected(self):
        for path in ("/functions/v1/india-challenge", "/functions/v1/ai-battle-content"):
            with self.subTest(path=path):
                response = self.client.post(path, json={"action": "drop_tables"})
                self.assertEqual(response.status_code, 400)
                self.assertEqual(response.json(), {"error": "Invalid action"})

    def test_missing_action_is_rejected(self):
        response = self.client.post("/functions/v1/india-challenge", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid action"})

    def test_malformed_json_body(self):
        response = self.client.post(
            "/functions/v1/india-challenge",
            content=b"{not json",
            headers={"content-type": "application/json"},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid request body"})

    def test_ocr_without_image_data(self):
        response = self.client.post("/functions/v1/process-image-ocr", json={})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["error"], "Image data is required")
        self.assertFalse(response.json()["success"])

    def test_unknown_route(self):
        response = self.client.get("/functions/v1/nope")
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.json())

    def test_user_scoped_action_requires_caller(self):
        response = self.client.post(
            "/functions/v1/ai-battle-content", json={"action": "check_subscription"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"error": "Unauthorized"})


if __name__ == "__main__":
    unittest.main()
