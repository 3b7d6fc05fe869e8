"""Utility functions for LLM operations."""
import re

from openai import OpenAI

_FENCE_RE = re.compile(r'^\s*```[a-zA-Z]*\s*\n(.*?)\n?\s*```\s*$', re.DOTALL)


def create_client(settings) -> OpenAI:
    """Build an OpenAI client from settings.

    Raises:
        ConfigurationError: OPENAI_API_KEY is not set
    """
    return OpenAI(api_key=settings.require('openai_api_key'))


def strip_code_fences(text: str) -> str:
    """Remove a Markdown code fence wrapping the whole response, if present."""
    if not text:
        return text
    match = _FENCE_RE.match(text)
    if match:
        return match.group(1).strip()
    return text.strip()
