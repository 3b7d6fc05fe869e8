"""Core package exports."""
from daily_brief.core.types import (
    BriefRun,
    FeedItem,
    Listing,
    MarketQuote,
    MarketSnapshot,
    RunState,
    Section
)
from daily_brief.core.errors import (
    BriefError,
    ConfigurationError,
    EmailDeliveryError,
    MarketDataError,
    SourceUnavailable,
    SummarizationError
)
from daily_brief.core.constants import SECTION_ORDER, FEED_SECTIONS, MAX_FEED_ITEMS

__all__ = [
    'BriefRun',
    'FeedItem',
    'Listing',
    'MarketQuote',
    'MarketSnapshot',
    'RunState',
    'Section',
    'BriefError',
    'ConfigurationError',
    'EmailDeliveryError',
    'MarketDataError',
    'SourceUnavailable',
    'SummarizationError',
    'SECTION_ORDER',
    'FEED_SECTIONS',
    'MAX_FEED_ITEMS'
]
