"""Root package exports."""
from daily_brief.core.types import BriefRun, FeedItem, Listing, MarketSnapshot, RunState, Section
from daily_brief.config.settings import Settings
from daily_brief.feeds import fetch_feed
from daily_brief.markets import fetch_market_snapshot
from daily_brief.listings import fetch_listings
from daily_brief.brief import build_prompt
from daily_brief.llm import summarize_brief
from daily_brief.email.sender import deliver_brief
from daily_brief.pipeline import run_daily_brief

__all__ = [
    'BriefRun',
    'FeedItem',
    'Listing',
    'MarketSnapshot',
    'RunState',
    'Section',
    'Settings',
    'fetch_feed',
    'fetch_market_snapshot',
    'fetch_listings',
    'build_prompt',
    'summarize_brief',
    'deliver_brief',
    'run_daily_brief'
]
