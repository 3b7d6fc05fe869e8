"""Configuration package exports."""
from daily_brief.config.settings import Settings, parse_sections

__all__ = [
    'Settings',
    'parse_sections'
]
