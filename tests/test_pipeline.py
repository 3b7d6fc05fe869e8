"""Tests for a single brief invocation."""
import os
import shutil
import tempfile
import unittest
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

from daily_brief.config.settings import Settings
from daily_brief.core.constants import BRIEF_FALLBACK
from daily_brief.core.errors import EmailDeliveryError, SummarizationError
from daily_brief.core.types import RunState
from daily_brief.pipeline import run_daily_brief

DOCUMENT = "<h2>AI Research</h2><ul><li>New model released.</li></ul>"


class TestRunDailyBrief(unittest.TestCase):
    def setUp(self):
        self.settings = Settings(openai_api_key="sk-test", resend_api_key="re_test",
                                 email_recipients=("reader@example.com",))

    @patch('daily_brief.pipeline.configure_logging')
    @patch('daily_brief.pipeline.deliver_brief', return_value="msg-1")
    @patch('daily_brief.pipeline.summarize_brief', return_value=DOCUMENT)
    @patch('daily_brief.pipeline.build_prompt', return_value="prompt")
    def test_logging_follows_settings(self, mock_prompt, mock_summarize, mock_deliver, mock_configure):
        settings = Settings.from_env({'OPENAI_API_KEY': 'sk-test', 'LOG_LEVEL': 'WARNING', 'LOG_DIR': 'custom_logs'})

        run_daily_brief(settings)

        mock_configure.assert_called_once_with('WARNING', 'custom_logs')

    @patch('daily_brief.pipeline.deliver_brief', return_value="msg-1")
    @patch('daily_brief.pipeline.summarize_brief', return_value=DOCUMENT)
    @patch('daily_brief.pipeline.build_prompt', return_value="prompt")
    def test_successful_run(self, mock_prompt, mock_summarize, mock_deliver):
        run = run_daily_brief(self.settings)

        self.assertEqual(run.state, RunState.SUCCEEDED)
        self.assertTrue(run.succeeded)
        self.assertEqual(run.message_id, "msg-1")
        self.assertEqual(run.document, DOCUMENT)
        self.assertIsNotNone(run.finished_at)
        mock_summarize.assert_called_once_with("prompt", self.settings)
        mock_deliver.assert_called_once_with(DOCUMENT, self.settings)

    @patch('daily_brief.pipeline.deliver_brief')
    @patch('daily_brief.pipeline.summarize_brief', side_effect=SummarizationError("quota exceeded"))
    @patch('daily_brief.pipeline.build_prompt', return_value="prompt")
    def test_generation_failure_sends_nothing(self, mock_prompt, mock_summarize, mock_deliver):
        run = run_daily_brief(self.settings)

        self.assertEqual(run.state, RunState.FAILED)
        self.assertIsInstance(run.error, SummarizationError)
        mock_deliver.assert_not_called()

    @patch('daily_brief.pipeline.deliver_brief', side_effect=EmailDeliveryError("rejected"))
    @patch('daily_brief.pipeline.summarize_brief', return_value=DOCUMENT)
    @patch('daily_brief.pipeline.build_prompt', return_value="prompt")
    def test_delivery_failure_fails_run(self, mock_prompt, mock_summarize, mock_deliver):
        run = run_daily_brief(self.settings)

        self.assertFalse(run.succeeded)
        self.assertIn("rejected", str(run.error))

    @patch('daily_brief.pipeline.deliver_brief', return_value="msg-2")
    @patch('daily_brief.llm.summarize.create_client')
    @patch('daily_brief.pipeline.build_prompt', return_value="prompt")
    def test_empty_generation_delivers_fallback(self, mock_prompt, mock_create_client, mock_deliver):
        client = MagicMock()
        client.chat.completions.create.return_value = SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=""))])
        mock_create_client.return_value = client

        run = run_daily_brief(self.settings)

        self.assertTrue(run.succeeded)
        mock_deliver.assert_called_once_with(BRIEF_FALLBACK, self.settings)


class TestDryRun(unittest.TestCase):
    def setUp(self):
        self.output_dir = tempfile.mkdtemp()
        self.settings = Settings(openai_api_key="sk-test", output_dir=self.output_dir)

    def tearDown(self):
        shutil.rmtree(self.output_dir, ignore_errors=True)

    @patch('daily_brief.pipeline.deliver_brief')
    @patch('daily_brief.pipeline.summarize_brief', return_value=DOCUMENT)
    @patch('daily_brief.pipeline.build_prompt', return_value="prompt")
    def test_writes_html_without_sending(self, mock_prompt, mock_summarize, mock_deliver):
        run = run_daily_brief(self.settings, dry_run=True)

        self.assertTrue(run.succeeded)
        mock_deliver.assert_not_called()
        self.assertTrue(os.path.exists(run.output_path))
        self.assertEqual(os.path.dirname(run.output_path), self.output_dir)
        with open(run.output_path, encoding='utf-8') as f:
            html = f.read()
        self.assertIn(DOCUMENT, html)
        self.assertIn("Your Daily Brief", html)


if __name__ == '__main__':
    unittest.main()
