"""Web integration package exports."""
from daily_brief.web.app import BRIEF_PATH, create_app

__all__ = [
    'BRIEF_PATH',
    'create_app'
]
