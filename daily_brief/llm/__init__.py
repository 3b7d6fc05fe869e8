"""LLM package exports."""
from daily_brief.llm.summarize import summarize_brief
from daily_brief.llm.prompts import BRIEF_PROMPT_TEMPLATE, MAX_BULLET_SENTENCES
from daily_brief.llm.utils import create_client, strip_code_fences

__all__ = [
    'summarize_brief',
    'BRIEF_PROMPT_TEMPLATE',
    'MAX_BULLET_SENTENCES',
    'create_client',
    'strip_code_fences'
]
