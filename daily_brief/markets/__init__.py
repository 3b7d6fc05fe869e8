"""Market data package exports."""
from daily_brief.markets.providers import DailySeries, ProviderError, parse_daily_series
from daily_brief.markets.snapshot import (
    collect_market_snapshot,
    compute_change,
    fetch_market_snapshot,
    fetch_quote
)

__all__ = [
    'DailySeries',
    'ProviderError',
    'parse_daily_series',
    'collect_market_snapshot',
    'compute_change',
    'fetch_market_snapshot',
    'fetch_quote'
]
