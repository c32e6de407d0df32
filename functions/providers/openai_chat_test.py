import unittest
from types import SimpleNamespace
from unittest.mock import patch

import httpx
import openai

from providers.exceptions import ProviderError, ProviderInvalidResponseError
from providers.openai_chat import call_chat

COMPLETIONS_URL = "https://api.openai.com/v1/chat/completions"
MESSAGES = [{"role": "user", "content": "Name a river in Kerala"}]


def _completion(*contents):
    return SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=c)) for c in contents]
    )


class CallChatTest(unittest.TestCase):

    @patch("providers.openai_chat.OpenAI")
    def test_returns_first_choice(self, mock_client_cls):
        create = mock_client_cls.return_value.chat.completions.create
        create.return_value = _completion('{"river": "Periyar"}', "ignored")

        reply = call_chat(MESSAGES, api_key="o-key", max_tokens=100, json_mode=True)

        self.assertEqual(reply, '{"river": "Periyar"}')
        self.assertEqual(create.call_args.kwargs["response_format"], {"type": "json_object"})
        self.assertEqual(create.call_args.kwargs["max_tokens"], 100)

    @patch("providers.openai_chat.OpenAI")
    def test_base_url_is_passed_through(self, mock_client_cls):
        mock_client_cls.return_value.chat.completions.create.return_value = _completion("Hi")

        call_chat(MESSAGES, api_key="g-key", model="grok-beta", base_url="https://api.x.ai/v1")

        self.assertEqual(mock_client_cls.call_args.kwargs["base_url"], "https://api.x.ai/v1")
        create_kwargs = mock_client_cls.return_value.chat.completions.create.call_args.kwargs
        self.assertNotIn("response_format", create_kwargs)
        self.assertNotIn("max_tokens", create_kwargs)

    @patch("providers.openai_chat.OpenAI")
    def test_status_error(self, mock_client_cls):
        response = httpx.Response(429, request=httpx.Request("POST", COMPLETIONS_URL))
        mock_client_cls.return_value.chat.completions.create.side_effect = (
            openai.APIStatusError("rate limited", response=response, body=None)
        )
        with self.assertRaisesRegex(ProviderError, "gpt-4o-mini API error: 429"):
            call_chat(MESSAGES, api_key="o-key")

    @patch("providers.openai_chat.OpenAI")
    def test_connection_error(self, mock_client_cls):
        mock_client_cls.return_value.chat.completions.create.side_effect = (
            openai.APIConnectionError(request=httpx.Request("POST", COMPLETIONS_URL))
        )
        with self.assertRaises(ProviderError) as ctx:
            call_chat(MESSAGES, api_key="o-key")
        self.assertNotIsInstance(ctx.exception, ProviderInvalidResponseError)

    @patch("providers.openai_chat.OpenAI")
    def test_empty_choices(self, mock_client_cls):
        mock_client_cls.return_value.chat.completions.create.return_value = _completion()
        with self.assertRaises(ProviderInvalidResponseError):
            call_chat(MESSAGES, api_key="o-key")

    @patch("providers.openai_chat.OpenAI")
    def test_empty_content(self, mock_client_cls):
        mock_client_cls.return_value.chat.completions.create.return_value = _completion(None)
        with self.assertRaises(ProviderInvalidResponseError):
            call_chat(MESSAGES, api_key="o-key")


if __name__ == "__main__":
    unittest.main()
