"""Date handling utilities."""
from datetime import datetime

from dateutil import tz as dateutil_tz


def brief_now(timezone_name: str) -> datetime:
    """Current time in the brief's timezone (UTC if the name is unknown)."""
    return datetime.now(dateutil_tz.gettz(timezone_name) or dateutil_tz.UTC)


def format_brief_date(moment: datetime) -> str:
    """Calendar date used in the subject line and header, e.g. 'October 18, 2026'."""
    return moment.strftime('%B %d, %Y')
