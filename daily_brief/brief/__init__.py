"""Brief assembly package exports."""
from daily_brief.brief.aggregator import build_prompt, collect_sections, render_prompt

__all__ = [
    'build_prompt',
    'collect_sections',
    'render_prompt'
]
