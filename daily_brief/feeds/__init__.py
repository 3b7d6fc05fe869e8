"""Feed package exports."""
from daily_brief.feeds.fetcher import fetch_feed, parse_feed, render_item, render_items

__all__ = [
    'fetch_feed',
    'parse_feed',
    'render_item',
    'render_items'
]
