"""Email delivery package exports."""
from daily_brief.email.sender import build_message, build_subject, deliver_brief

__all__ = [
    'build_message',
    'build_subject',
    'deliver_brief'
]
