"""Formatting package exports."""
from daily_brief.formatting.date_utils import brief_now, format_brief_date
from daily_brief.formatting.layout import get_template_environment, wrap_document
from daily_brief.formatting.text_utils import clean_text, strip_html

__all__ = [
    'brief_now',
    'format_brief_date',
    'get_template_environment',
    'wrap_document',
    'clean_text',
    'strip_html'
]
