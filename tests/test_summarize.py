"""Tests for brief generation through the OpenAI client."""
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from daily_brief.config.settings import Settings
from daily_brief.core.constants import BRIEF_FALLBACK
from daily_brief.core.errors import ConfigurationError, SummarizationError
from daily_brief.llm.summarize import summarize_brief
from daily_brief.llm.utils import strip_code_fences


def completion(content):
    message = SimpleNamespace(content=content)
    return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def make_client(content=None, error=None):
    client = MagicMock()
    if error is not None:
        client.chat.completions.create.side_effect = error
    else:
        client.chat.completions.create.return_value = completion(content)
    return client


class TestSummarizeBrief(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(openai_api_key="sk-test")

    def test_returns_generated_document(self):
        client = make_client("<h2>AI</h2><ul><li>News</li></ul>")
        self.assertEqual(summarize_brief("prompt", self.settings, client=client), "<h2>AI</h2><ul><li>News</li></ul>")

    def test_sends_single_user_message_with_fixed_parameters(self):
        client = make_client("<p>ok</p>")

        summarize_brief("the prompt", self.settings, client=client)

        client.chat.completions.create.assert_called_once_with(
            model="gpt-4o-mini",
            messages=[{"role": "user", "content": "the prompt"}],
            temperature=0.7,
            max_tokens=1500
        )

    def test_empty_content_uses_fallback(self):
        for content in ("", None, "   \n"):
            with self.subTest(content=content):
                self.assertEqual(summarize_brief("prompt", self.settings, client=make_client(content)), BRIEF_FALLBACK)

    def test_no_choices_uses_fallback(self):
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(choices=[])
        self.assertEqual(summarize_brief("prompt", self.settings, client=client), BRIEF_FALLBACK)

    def test_api_error_raises(self):
        client = make_client(error=RuntimeError("insufficient_quota"))

        with self.assertRaises(SummarizationError) as ctx:
            summarize_brief("prompt", self.settings, client=client)

        self.assertIn("insufficient_quota", str(ctx.exception))
        self.assertIsInstance(ctx.exception.__cause__, RuntimeError)

    def test_missing_api_key_raises_configuration_error(self):
        with self.assertRaises(ConfigurationError):
            summarize_brief("prompt", Settings())

    @patch('daily_brief.llm.summarize.create_client')
    def test_builds_client_from_settings(self, mock_create_client):
        mock_create_client.return_value = make_client("<p>ok</p>")

        summarize_brief("prompt", self.settings)

        mock_create_client.assert_called_once_with(self.settings)

    def test_code_fences_are_stripped(self):
        client = make_client("```html\n<h2>AI</h2>\n```")
        self.assertEqual(summarize_brief("prompt", self.settings, client=client), "<h2>AI</h2>")


class TestStripCodeFences(unittest.TestCase):
    def test_unfenced_text_is_unchanged(self):
        self.assertEqual(strip_code_fences("<p>Hello</p>"), "<p>Hello</p>")

    def test_plain_fence(self):
        self.assertEqual(strip_code_fences("```\n<p>Hello</p>\n```"), "<p>Hello</p>")


if __name__ == '__main__':
    unittest.main()
